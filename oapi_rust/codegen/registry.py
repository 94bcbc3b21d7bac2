"""
Resolver registry for managing available target languages.

Provides registration and instantiation of language resolvers.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from .core.config import ConfigError, GeneratorContext, load_context
from .core.generator import ModelResolver


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class ResolverRegistry:
    """Registry for managing available model resolvers."""

    def __init__(self):
        """Initialize empty registry."""
        self._resolvers: Dict[str, Type[ModelResolver]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        resolver_class: Type[ModelResolver],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a resolver for a language.

        Args:
            language: Primary language name (e.g., 'rust')
            resolver_class: Class implementing ModelResolver
            aliases: Alternative names for this language
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If the class is invalid or an alias conflicts
        """
        if not issubclass(resolver_class, ModelResolver):
            raise RegistryError("Resolver class must inherit from ModelResolver")

        language_key = language.lower()

        if language_key in self._resolvers and not replace:
            return

        self._resolvers[language_key] = resolver_class

        for alias in aliases or []:
            alias_key = alias.lower()
            if alias_key == language_key:
                continue

            if not replace and self._aliases.get(alias_key, language_key) != language_key:
                raise RegistryError(
                    f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                )

            self._aliases[alias_key] = language_key

    def _primary_name(self, language: str) -> str:
        language_key = language.lower()
        return self._aliases.get(language_key, language_key)

    def get_resolver_class(self, language: str) -> Type[ModelResolver]:
        """
        Get resolver class for language.

        Raises:
            RegistryError: If language not found
        """
        language_key = self._primary_name(language)

        if language_key in self._resolvers:
            return self._resolvers[language_key]

        raise RegistryError(
            f"No resolver registered for language: {language}. "
            f"Available: {', '.join(self.list_languages())}"
        )

    def create_resolver(
        self,
        language: str,
        context: Optional[Union[GeneratorContext, Dict[str, Any], str, Path]] = None,
    ) -> ModelResolver:
        """
        Create resolver instance for language.

        Args:
            language: Language name or alias
            context: GeneratorContext, override dict, or config file path

        Returns:
            Configured resolver instance

        Raises:
            RegistryError: If the language or configuration is invalid
        """
        resolver_class = self.get_resolver_class(language)
        language_key = self._primary_name(language)

        try:
            if isinstance(context, GeneratorContext):
                final_context = context
            elif isinstance(context, (str, Path)):
                final_context = load_context(language_key, config_file=context)
            elif isinstance(context, dict):
                final_context = load_context(language_key, custom_config=context)
            elif context is None:
                final_context = load_context(language_key)
            else:
                raise RegistryError(f"Invalid context type: {type(context)}")
        except ConfigError as e:
            raise RegistryError(f"Failed to create {language} resolver: {e}") from e

        return resolver_class(final_context)

    def list_languages(self) -> List[str]:
        """Get list of registered primary language names."""
        return sorted(self._resolvers.keys())

    def is_supported(self, language: str) -> bool:
        """Check if language (or alias) is supported."""
        return self._primary_name(language) in self._resolvers


# Global registry instance
_registry = ResolverRegistry()


def get_registry() -> ResolverRegistry:
    """Get the global resolver registry."""
    return _registry


def get_resolver(
    language: str = "rust",
    context: Optional[Union[GeneratorContext, Dict[str, Any], str, Path]] = None,
) -> ModelResolver:
    """Create a resolver from the global registry."""
    return _registry.create_resolver(language, context)


def list_supported_languages() -> List[str]:
    """Get list of supported languages."""
    return _registry.list_languages()
