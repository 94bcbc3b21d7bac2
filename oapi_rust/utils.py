"""Utility functions for loading OpenAPI documents.

This module provides functions for loading JSON documents from files and
URLs with proper error handling and validation.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)


class DocumentLoaderError(Exception):
    """Custom exception for document loading errors."""

    pass


def _check_openapi(source: str, data: Any) -> None:
    """Reject non-objects, warn about documents without a version marker."""
    if not isinstance(data, dict):
        raise DocumentLoaderError(f"{source} does not contain a JSON object")

    if "openapi" not in data and "swagger" not in data:
        logger.warning(f"{source} has no 'openapi' or 'swagger' version field")


def load_document_from_file(file_path: str | Path) -> tuple[str, dict[str, Any]]:
    """Load an OpenAPI document from a local JSON file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Tuple of (source description, parsed document).

    Raises:
        FileNotFoundError: If file doesn't exist.
        DocumentLoaderError: If file cannot be read or JSON is invalid.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load document from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning(f"File does not have .json extension: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}")
        raise DocumentLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}", exc_info=True)
        raise DocumentLoaderError(f"Error reading file {file_path}: {e}") from e

    _check_openapi(str(file_path), data)
    logger.info(f"Successfully loaded document from {file_path}")
    return f"📄 {file_path}", data


def load_document_from_url(url: str, timeout: int = 30) -> tuple[str, dict[str, Any]]:
    """Load an OpenAPI document from a URL.

    Args:
        url: URL to fetch the document from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, parsed document).

    Raises:
        DocumentLoaderError: If URL is invalid, request fails, or response isn't valid JSON.
    """
    logger.debug(f"Attempting to load document from URL: {url}")

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error(f"Invalid URL format: {url}")
        raise DocumentLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()

        content_type = response.headers.get("content-type", "").lower()
        if "json" not in content_type and not url.endswith(".json"):
            logger.warning(f"URL {url} does not have JSON content type: {content_type}")

        data = response.json()

    except requests.exceptions.Timeout as e:
        logger.error(f"Request timeout for URL: {url}")
        raise DocumentLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error for URL {url}: {e}")
        raise DocumentLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error(f"HTTP error {e.response.status_code} for URL: {url}")
        raise DocumentLoaderError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error for URL {url}: {e}", exc_info=True)
        raise DocumentLoaderError(f"Request error for URL {url}: {e}") from e
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON response from URL {url}: {e}")
        raise DocumentLoaderError(f"Invalid JSON response from URL {url}: {e}") from e

    _check_openapi(url, data)
    logger.info(f"Successfully loaded document from {url}")
    return f"🌐 {url}", data


def is_url(source: str) -> bool:
    """Check whether a source string is an http(s) URL."""
    return urlparse(source).scheme in ("http", "https")


def load_document(source: str | Path, timeout: int = 30) -> tuple[str, dict[str, Any]]:
    """Load an OpenAPI document from either a file path or a URL.

    Args:
        source: Local path or http(s) URL.
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, parsed document).

    Raises:
        DocumentLoaderError: If loading fails.
        FileNotFoundError: If file doesn't exist.
    """
    if not source:
        logger.error("No document source provided")
        raise DocumentLoaderError("A file path or URL must be provided")

    if isinstance(source, str) and is_url(source):
        return load_document_from_url(source, timeout)
    return load_document_from_file(source)
