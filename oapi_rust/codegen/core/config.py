"""
Configuration management for code generation.

Generator-wide settings live in one immutable ``GeneratorContext`` that is
handed to every resolver. Contexts are built by merging language defaults,
an optional JSON configuration file and explicit overrides.
"""

import json
import re
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Union

from ...logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


_CRATE_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")
_IDENTIFIER_FRAGMENT = re.compile(r"^\w*$", re.ASCII)


class IntegerWidthPolicy(Enum):
    """How a non-standard integer format influences the chosen width."""

    COMPATIBLE = "compatible"  # format never contributes a width
    EXPLICIT = "explicit"  # uint8/int16/... supply their own width


@dataclass(frozen=True)
class GeneratorContext:
    """
    Immutable generator-wide settings.

    Shared read-only by every resolver during a run, which makes resolving
    models in parallel safe.
    """

    # Output settings
    package_name: str = "openapi"
    package_version: str = "1.0.0"
    models_path: str = "crate::models"

    # Naming settings
    model_name_prefix: str = ""
    model_name_suffix: str = ""
    enum_name_suffix: str = ""
    reserved_words: FrozenSet[str] = frozenset()
    reserved_word_mappings: Mapping[str, str] = field(default_factory=dict, hash=False)

    # Type handling
    int_width_policy: IntegerWidthPolicy = IntegerWidthPolicy.COMPATIBLE

    # Custom settings (unrecognised keys from config files)
    custom: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        """Freeze collection fields and coerce loosely typed values."""
        object.__setattr__(self, "reserved_words", frozenset(self.reserved_words))
        object.__setattr__(
            self,
            "reserved_word_mappings",
            MappingProxyType(dict(self.reserved_word_mappings)),
        )
        object.__setattr__(self, "custom", MappingProxyType(dict(self.custom)))

        if not isinstance(self.int_width_policy, IntegerWidthPolicy):
            try:
                policy = IntegerWidthPolicy(self.int_width_policy)
            except ValueError:
                raise ConfigError(
                    f"Invalid int_width_policy: {self.int_width_policy}"
                ) from None
            object.__setattr__(self, "int_width_policy", policy)

        if not _CRATE_NAME.match(self.package_name):
            raise ConfigError(f"Invalid package name: {self.package_name!r}")

    def with_overrides(self, **changes: Any) -> "GeneratorContext":
        """Return a copy of this context with some settings replaced."""
        return replace(self, **changes)


_CONTEXT_FIELDS = frozenset(f.name for f in fields(GeneratorContext))


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}

    def register_language(self, language: str, defaults: Dict[str, Any]):
        """Register the default settings of a target language."""
        self._configs[language.lower()] = dict(defaults)

    def get_context(
        self,
        language: str,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorContext:
        """
        Build the complete context for a language.

        Args:
            language: Target language name
            custom_config: Explicit overrides (highest precedence)
            config_file: Path to JSON configuration file

        Returns:
            Merged, immutable generator context

        Raises:
            ConfigError: If the language is unknown or a source is invalid
        """
        language_key = language.lower()
        if language_key not in self._configs:
            raise ConfigError(f"Unsupported language: {language}")

        # Start with defaults
        base_config = dict(self._configs[language_key])

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update(
                {key: value for key, value in custom_config.items() if value is not None}
            )

        return self._dict_to_context(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration file %s (%d keys)", path, len(config))
        return config

    def _dict_to_context(self, config_dict: Dict[str, Any]) -> GeneratorContext:
        """Convert dictionary to GeneratorContext instance."""
        context_args: Dict[str, Any] = {}
        custom_args: Dict[str, Any] = {}

        for key, value in config_dict.items():
            if key in _CONTEXT_FIELDS:
                context_args[key] = value
            else:
                custom_args[key] = value

        # Add custom fields to the custom dict
        if custom_args:
            existing_custom = dict(context_args.get("custom", {}))
            existing_custom.update(custom_args)
            context_args["custom"] = existing_custom

        if not isinstance(context_args.get("reserved_word_mappings", {}), dict):
            raise ConfigError("reserved_word_mappings must be a JSON object")

        return GeneratorContext(**context_args)

    def save_context(self, context: GeneratorContext, output_path: Union[str, Path]):
        """Save a context to a JSON file."""
        path = Path(output_path)

        config_dict = {
            "package_name": context.package_name,
            "package_version": context.package_version,
            "models_path": context.models_path,
            "model_name_prefix": context.model_name_prefix,
            "model_name_suffix": context.model_name_suffix,
            "enum_name_suffix": context.enum_name_suffix,
            "reserved_words": sorted(context.reserved_words),
            "reserved_word_mappings": dict(context.reserved_word_mappings),
            "int_width_policy": context.int_width_policy.value,
        }

        # Add custom settings
        config_dict.update(context.custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def list_languages(self) -> List[str]:
        """Get list of supported languages."""
        return list(self._configs.keys())


def validate_context(
    context: GeneratorContext, language_reserved_words: FrozenSet[str] = frozenset()
) -> List[str]:
    """
    Validate a context for settings that will produce surprising output.

    Args:
        context: Context to check
        language_reserved_words: Keywords the target language always reserves,
            in addition to ``context.reserved_words``

    Returns:
        List of validation warnings (empty if no issues)
    """
    warnings = []
    reserved = context.reserved_words | frozenset(language_reserved_words)

    for label, affix in (
        ("model_name_prefix", context.model_name_prefix),
        ("model_name_suffix", context.model_name_suffix),
        ("enum_name_suffix", context.enum_name_suffix),
    ):
        if not _IDENTIFIER_FRAGMENT.match(affix):
            warnings.append(f"{label} contains characters that will be stripped: {affix!r}")

    for word, replacement in context.reserved_word_mappings.items():
        if replacement in reserved:
            warnings.append(
                f"Mapping for reserved word '{word}' is itself reserved: {replacement}"
            )
        elif not replacement.isidentifier():
            warnings.append(
                f"Mapping for reserved word '{word}' is not an identifier: {replacement}"
            )

    return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_context(
    language: str = "rust",
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorContext:
    """
    Convenience function to load a generator context.

    Args:
        language: Target language name
        custom_config: Explicit overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged context for the language
    """
    manager = get_config_manager()
    return manager.get_context(language, custom_config, config_file)
