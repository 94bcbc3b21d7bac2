"""
oapi-rust Code Generation Module

Resolves OpenAPI documents to target-language names and types.
"""

from typing import Any, Dict, Optional, Union
from pathlib import Path

from .registry import (
    RegistryError,
    ResolverRegistry,
    get_registry,
    get_resolver,
    list_supported_languages,
)
from .core.generator import (
    GeneratorError,
    ModelResolver,
    ResolutionResult,
    resolve_models,
)
from .core.schema import (
    OpenAPIDocument,
    SchemaDescriptor,
    SchemaKind,
    convert_openapi_document,
)
from .core.config import ConfigManager, GeneratorContext, load_context
from .languages.rust import RustModelResolver

# Auto-register available resolvers
get_registry().register("rust", RustModelResolver, aliases=["rs"])


def resolve_document(
    document: Dict[str, Any],
    language: str = "rust",
    context: Optional[Union[GeneratorContext, Dict[str, Any], str, Path]] = None,
) -> ResolutionResult:
    """
    Resolve a parsed OpenAPI document.

    Args:
        document: OpenAPI document as loaded from JSON
        language: Target language name
        context: GeneratorContext, override dict, or config file path

    Returns:
        ResolutionResult with resolved models and operations

    Raises:
        SchemaConversionError: If the document is structurally invalid
        RegistryError: If the language or configuration is invalid
    """
    openapi = convert_openapi_document(document)
    resolver = get_resolver(language, context)
    return resolve_models(resolver, openapi)


# Export main interfaces
__all__ = [
    "ConfigManager",
    "GeneratorContext",
    "GeneratorError",
    "ModelResolver",
    "OpenAPIDocument",
    "RegistryError",
    "ResolutionResult",
    "ResolverRegistry",
    "RustModelResolver",
    "SchemaDescriptor",
    "SchemaKind",
    "convert_openapi_document",
    "get_registry",
    "get_resolver",
    "list_supported_languages",
    "load_context",
    "resolve_document",
    "resolve_models",
]
