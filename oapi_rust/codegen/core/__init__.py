"""
Core code generation components.

Provides base classes and utilities used by all language resolvers.
"""

from .generator import (
    GeneratorError,
    ModelResolver,
    ResolutionResult,
    SchemaResolutionError,
    resolve_models,
)
from .schema import (
    DiscriminatorDescriptor,
    ModelDescriptor,
    OpenAPIDocument,
    OperationDescriptor,
    ParameterDescriptor,
    PropertyDescriptor,
    SchemaConversionError,
    SchemaDescriptor,
    SchemaKind,
    convert_openapi_document,
    schema_from_openapi,
)
from .naming import (
    Identifier,
    IdentifierRole,
    camelize,
    sanitize_name,
    underscore,
)
from .config import (
    ConfigError,
    ConfigManager,
    GeneratorContext,
    IntegerWidthPolicy,
    get_config_manager,
    load_context,
    validate_context,
)

__all__ = [
    # Base resolver interface
    "GeneratorError",
    "ModelResolver",
    "ResolutionResult",
    "SchemaResolutionError",
    "resolve_models",
    # Schema system - core data structures
    "DiscriminatorDescriptor",
    "ModelDescriptor",
    "OpenAPIDocument",
    "OperationDescriptor",
    "ParameterDescriptor",
    "PropertyDescriptor",
    "SchemaConversionError",
    "SchemaDescriptor",
    "SchemaKind",
    "convert_openapi_document",
    "schema_from_openapi",
    # Naming utilities - language-agnostic
    "Identifier",
    "IdentifierRole",
    "camelize",
    "sanitize_name",
    "underscore",
    # Configuration system
    "ConfigError",
    "ConfigManager",
    "GeneratorContext",
    "IntegerWidthPolicy",
    "get_config_manager",
    "load_context",
    "validate_context",
]
