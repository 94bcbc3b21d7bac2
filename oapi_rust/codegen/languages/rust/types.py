"""
Rust-specific type system for code generation.

Maps schema descriptors to Rust type expressions in two stages: the schema
is first named the way OpenAPI tooling names types (``integer``, ``UUID``,
``DateTime``, ...), and that name is then looked up in a fixed table of
Rust types.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import FrozenSet, Optional, Tuple

from ....logging_config import get_logger
from ...core.config import GeneratorContext
from ...core.generator import SchemaResolutionError
from ...core.schema import SchemaDescriptor, SchemaKind
from .integers import IntegerWidthResolver
from .naming import IdentifierSanitizer

logger = get_logger(__name__)


# Schema type name -> Rust type
TYPE_MAPPING = MappingProxyType(
    {
        "integer": "i32",
        "long": "i64",
        "number": "f32",
        "float": "f32",
        "double": "f64",
        "boolean": "bool",
        "string": "String",
        "UUID": "uuid::Uuid",
        "URI": "url::Url",
        "date": "string",  # no chrono dependency; resolved again to String
        "DateTime": "String",
        "password": "String",
        "file": "std::path::PathBuf",
        "binary": "crate::models::File",
        "ByteArray": "String",
        "object": "serde_json::Value",
        "AnyType": "serde_json::Value",
    }
)

RUST_PRIMITIVES = frozenset(
    {
        "i8",
        "i16",
        "i32",
        "i64",
        "u8",
        "u16",
        "u32",
        "u64",
        "f32",
        "f64",
        "isize",
        "usize",
        "char",
        "bool",
        "str",
        "String",
    }
)

# String formats with a dedicated schema type name
STRING_FORMATS = MappingProxyType(
    {
        "byte": "ByteArray",
        "binary": "binary",
        "date": "date",
        "date-time": "DateTime",
        "uuid": "UUID",
        "uri": "URI",
        "number": "decimal",
    }
)

INTEGER_TYPE_NAMES = frozenset({"integer", "long"})

_EXTERNAL_CRATES = ("uuid", "url", "serde_json")

VEC = "Vec"
HASH_MAP = "::std::collections::HashMap"


@dataclass(frozen=True)
class RustType:
    """
    Immutable representation of a resolved Rust type expression.

    Carries the crates the expression depends on and any warnings raised
    while resolving it (including those of nested item/value types).
    """

    name: str  # The full type expression (e.g. "Vec<crate::models::Pet>")
    is_primitive: bool = False
    is_container: bool = False
    model_name: Optional[str] = None  # Referenced model type, if any
    nullable: bool = False
    crates_needed: FrozenSet[str] = field(default_factory=frozenset)
    warnings: Tuple[str, ...] = ()

    def __post_init__(self):
        """Derive external crates from the expression when not given."""
        if not self.crates_needed:
            crates = frozenset(
                crate for crate in _EXTERNAL_CRATES if f"{crate}::" in self.name
            )
            object.__setattr__(self, "crates_needed", crates)
        object.__setattr__(self, "warnings", tuple(self.warnings))

    def __str__(self) -> str:
        return self.name

    def with_warning(self, warning: str) -> "RustType":
        """Return a copy with a warning appended."""
        return replace(self, warnings=self.warnings + (warning,))

    def as_option(self) -> "RustType":
        """Wrap in ``Option<...>``."""
        if self.name.startswith("Option<"):
            return self
        return replace(self, name=f"Option<{self.name}>", nullable=True)


def schema_type_name(schema: SchemaDescriptor) -> str:
    """
    Name a schema the way the type table expects.

    Unknown kinds are returned unchanged so that they can be resolved as
    model names later.
    """
    kind = schema.kind
    fmt = schema.format

    if kind == SchemaKind.STRING:
        if fmt in STRING_FORMATS:
            return STRING_FORMATS[fmt]
        if fmt in TYPE_MAPPING:
            return fmt
        return "string"

    if kind == SchemaKind.INTEGER:
        return "long" if fmt == "int64" else "integer"

    if kind == SchemaKind.NUMBER:
        if fmt in ("float", "double"):
            return fmt
        return "number"

    if kind == SchemaKind.BOOLEAN:
        return "boolean"
    if kind == SchemaKind.FILE:
        return "file"
    if kind == SchemaKind.OBJECT:
        return "object"
    if kind == SchemaKind.ANY:
        return "AnyType"

    return kind.value if isinstance(kind, SchemaKind) else str(kind)


class RustTypeMapper:
    """
    Central engine for mapping schema descriptors to Rust types.

    Holds nothing but the context and the helpers built from it, so one
    mapper can resolve any number of schemas, concurrently if needed.
    """

    def __init__(self, context: Optional[GeneratorContext] = None):
        """Initialize with the generator context."""
        self.context = context or GeneratorContext()
        self.integers = IntegerWidthResolver(self.context.int_width_policy)
        self.sanitizer = IdentifierSanitizer(self.context)

    def resolve_type(self, schema: SchemaDescriptor) -> str:
        """Resolve a schema to its Rust type expression."""
        return self.map_schema(schema).name

    def map_schema(self, schema: SchemaDescriptor) -> RustType:
        """
        Map a schema descriptor to a Rust type.

        Args:
            schema: The schema to map

        Returns:
            Complete RustType with crates and warnings

        Raises:
            IntegerConstraintError: If integer bounds contradict each other
            SchemaResolutionError: If a reference has no name
        """
        rust_type = self._map_base_type(schema)
        return self._check_nullable(rust_type, schema)

    def _map_base_type(self, schema: SchemaDescriptor) -> RustType:
        """Map the base type without considering nullability."""
        if schema.kind == SchemaKind.ARRAY:
            return self._map_array_type(schema)

        if schema.kind == SchemaKind.MAP:
            return self._map_map_type(schema)

        if schema.kind == SchemaKind.REFERENCE:
            return self._map_reference(schema)

        type_name = schema_type_name(schema)

        if type_name in INTEGER_TYPE_NAMES:
            type_name = self.integers.resolve(
                minimum=schema.minimum,
                exclusive_minimum=schema.exclusive_minimum,
                maximum=schema.maximum,
                exclusive_maximum=schema.exclusive_maximum,
                format=schema.format,
            )

        return self._declare(TYPE_MAPPING.get(type_name, type_name))

    def _declare(self, type_name: str) -> RustType:
        """Turn a table result into a type expression; anything unknown is a model."""
        type_name = TYPE_MAPPING.get(type_name, type_name)

        if type_name in RUST_PRIMITIVES:
            return RustType(name=type_name, is_primitive=True)

        if type_name in TYPE_MAPPING.values():
            return RustType(name=type_name)

        model_name = self.sanitizer.to_type_name(type_name).value
        return RustType(
            name=f"{self.context.models_path}::{model_name}", model_name=model_name
        )

    def _map_reference(self, schema: SchemaDescriptor) -> RustType:
        if not schema.reference_name:
            raise SchemaResolutionError(
                f"Reference schema '{schema.name}' has no reference name"
            )

        model_name = self.sanitizer.to_type_name(schema.reference_name).value
        return RustType(
            name=f"{self.context.models_path}::{model_name}", model_name=model_name
        )

    def _map_array_type(self, schema: SchemaDescriptor) -> RustType:
        """Map arrays to ``Vec<T>``."""
        item_type, warnings = self._map_inner(schema.item_type, schema, "items")
        return RustType(
            name=f"{VEC}<{item_type.name}>",
            is_container=True,
            model_name=item_type.model_name,
            crates_needed=item_type.crates_needed,
            warnings=warnings,
        )

    def _map_map_type(self, schema: SchemaDescriptor) -> RustType:
        """Map string-keyed maps to ``HashMap<String, T>``."""
        value_type, warnings = self._map_inner(
            schema.value_type, schema, "additionalProperties"
        )
        return RustType(
            name=f"{HASH_MAP}<String, {value_type.name}>",
            is_container=True,
            model_name=value_type.model_name,
            crates_needed=value_type.crates_needed,
            warnings=warnings,
        )

    def _map_inner(
        self, inner: Optional[SchemaDescriptor], outer: SchemaDescriptor, label: str
    ) -> Tuple[RustType, Tuple[str, ...]]:
        """Map an item/value schema, defaulting to string when it is missing."""
        if inner is None:
            warning = (
                f"Schema '{outer.name}' is {outer.kind.value} without {label}, "
                f"defaulting to string"
            )
            logger.warning(warning)
            return self._declare("string"), (warning,)

        inner_type = self.map_schema(inner)
        return inner_type, inner_type.warnings

    def _check_nullable(self, rust_type: RustType, schema: SchemaDescriptor) -> RustType:
        """Any-type schemas always admit null."""
        if schema.kind == SchemaKind.ANY:
            if schema.nullable is False:
                warning = (
                    f"Schema '{schema.name}' is any type, which includes the 'null' "
                    f"value. 'nullable' cannot be set to 'false'"
                )
                logger.warning(warning)
                rust_type = rust_type.with_warning(warning)
            return replace(rust_type, nullable=True)

        if schema.nullable:
            return replace(rust_type, nullable=True)

        return rust_type
