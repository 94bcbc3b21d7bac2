"""
Rust target.

Resolves OpenAPI schemas to Rust type expressions and identifiers:
integer widths from numeric bounds, container and model types, reserved
word safe names, and discriminated unions.
"""

from .config import RUST_DEFAULTS, create_rust_context, validate_rust_context
from .discriminator import DiscriminatorError, DiscriminatorResolver
from .generator import RustModelResolver
from .integers import (
    IntegerConstraintError,
    IntegerWidthResolver,
    required_bits,
    resolve_integer_type,
)
from .models import (
    EnumMember,
    ResolvedEnum,
    ResolvedField,
    ResolvedModel,
    ResolvedOperation,
    TaggedUnion,
    VariantDescriptor,
)
from .naming import RUST_RESERVED_WORDS, IdentifierSanitizer, create_rust_sanitizer
from .types import TYPE_MAPPING, RustType, RustTypeMapper, schema_type_name

__all__ = [
    "RustModelResolver",
    "RUST_DEFAULTS",
    "create_rust_context",
    "validate_rust_context",
    # Integer widths
    "IntegerConstraintError",
    "IntegerWidthResolver",
    "required_bits",
    "resolve_integer_type",
    # Type system
    "RustType",
    "RustTypeMapper",
    "TYPE_MAPPING",
    "schema_type_name",
    # Naming
    "IdentifierSanitizer",
    "RUST_RESERVED_WORDS",
    "create_rust_sanitizer",
    # Discriminators
    "DiscriminatorError",
    "DiscriminatorResolver",
    # Resolved data
    "EnumMember",
    "ResolvedEnum",
    "ResolvedField",
    "ResolvedModel",
    "ResolvedOperation",
    "TaggedUnion",
    "VariantDescriptor",
    # Factory functions
    "create_resolver",
    "create_explicit_width_resolver",
]


def create_resolver(**overrides):
    """
    Create a Rust resolver with the default context.

    Args:
        **overrides: Context settings (package_name, model_name_prefix, ...)

    Returns:
        Configured RustModelResolver instance
    """
    return RustModelResolver(create_rust_context(**overrides))


def create_explicit_width_resolver(**overrides):
    """
    Create a resolver where ``uint8``/``int16``/... formats choose the width.

    Features:
    - Unbounded ``uint8`` becomes ``u8`` instead of ``isize``
    - Unbounded ``int16`` becomes ``i16``
    - Standard ``int32``/``int64`` formats behave as usual
    """
    overrides.setdefault("int_width_policy", "explicit")
    return RustModelResolver(create_rust_context(**overrides))
