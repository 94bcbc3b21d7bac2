"""
Rust-specific configuration.

Registers the Rust defaults with the global configuration manager.
"""

from typing import Any, Dict, List, Optional, Union
from pathlib import Path

from ...core.config import (
    GeneratorContext,
    IntegerWidthPolicy,
    get_config_manager,
    validate_context,
)
from .naming import RUST_RESERVED_WORDS

RUST_DEFAULTS: Dict[str, Any] = {
    "package_name": "openapi",
    "package_version": "1.0.0",
    "models_path": "crate::models",
    "model_name_prefix": "",
    "model_name_suffix": "",
    "enum_name_suffix": "",
    "reserved_words": RUST_RESERVED_WORDS,
    "reserved_word_mappings": {},
    "int_width_policy": IntegerWidthPolicy.COMPATIBLE,
}

get_config_manager().register_language("rust", RUST_DEFAULTS)


def create_rust_context(
    config_file: Optional[Union[str, Path]] = None, **overrides: Any
) -> GeneratorContext:
    """
    Create a generator context with the Rust defaults.

    Args:
        config_file: Optional JSON configuration file
        **overrides: Settings taking precedence over defaults and file

    Returns:
        Merged, immutable context
    """
    return get_config_manager().get_context("rust", overrides, config_file)


def validate_rust_context(context: GeneratorContext) -> List[str]:
    """``validate_context`` with the Rust keywords always treated as reserved."""
    return validate_context(context, RUST_RESERVED_WORDS)
