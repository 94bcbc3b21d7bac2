"""
Resolved Rust models.

Plain immutable data handed to whatever renders the Rust sources: every
name is a legal identifier and every type a complete type expression.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

from ...core.naming import Identifier
from .types import RustType


@dataclass(frozen=True)
class ResolvedField:
    """A struct field (or operation parameter)."""

    name: Identifier
    base_name: str  # name on the wire
    data_type: RustType
    required: bool = False
    enum_type: Optional[Identifier] = None  # inline enum declared by this field
    description: Optional[str] = None

    @property
    def declaration(self) -> str:
        """Field type as declared: optional and nullable fields become ``Option<T>``."""
        rust_type = self.data_type
        if self.enum_type is not None:
            rust_type = replace(rust_type, name=self.enum_type.value)
        if not self.required or self.data_type.nullable:
            rust_type = rust_type.as_option()
        return rust_type.name

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name.value,
            "base_name": self.base_name,
            "type": self.declaration,
            "required": self.required,
        }


@dataclass(frozen=True)
class EnumMember:
    name: Identifier
    value: Any


@dataclass(frozen=True)
class ResolvedEnum:
    """A Rust enum generated from an OpenAPI ``enum``."""

    name: Identifier
    members: Tuple[EnumMember, ...]
    value_type: RustType


@dataclass(frozen=True)
class VariantDescriptor:
    """One concrete model of a discriminated union."""

    model_name: Identifier
    mapping_tag: str  # discriminator value on the wire
    fields: Tuple[ResolvedField, ...]


@dataclass(frozen=True)
class TaggedUnion:
    """
    A polymorphic model as a tagged enum.

    ``tag_name`` is the serde tag attribute value, ``property_name`` the
    discriminator property as written in the document.
    """

    model_name: Identifier
    property_name: str
    tag_name: str
    variants: Tuple[VariantDescriptor, ...]


@dataclass(frozen=True)
class ResolvedModel:
    """A component schema resolved to a Rust struct, enum or type alias."""

    source_name: str
    type_name: Identifier
    module_name: Identifier
    data_type: Optional[RustType] = None  # aliases and plain schemas
    fields: Tuple[ResolvedField, ...] = ()
    enums: Tuple[ResolvedEnum, ...] = ()
    tagged_union: Optional[TaggedUnion] = None
    warnings: Tuple[str, ...] = ()

    @property
    def is_enum(self) -> bool:
        return bool(self.enums) and not self.fields and self.data_type is None

    def with_tagged_union(self, tagged_union: TaggedUnion) -> "ResolvedModel":
        return replace(self, tagged_union=tagged_union)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.type_name.value,
            "module": self.module_name.value,
            "fields": [f.to_dict() for f in self.fields],
            "enums": [
                {
                    "name": e.name.value,
                    "members": [m.name.value for m in e.members],
                }
                for e in self.enums
            ],
        }
        if self.data_type is not None:
            data["type"] = self.data_type.name
        if self.tagged_union is not None:
            data["tagged_union"] = {
                "tag": self.tagged_union.tag_name,
                "variants": [
                    {
                        "model": v.model_name.value,
                        "tag": v.mapping_tag,
                        "fields": [f.name.value for f in v.fields],
                    }
                    for v in self.tagged_union.variants
                ],
            }
        if self.warnings:
            data["warnings"] = list(self.warnings)
        return data


@dataclass(frozen=True)
class ResolvedOperation:
    """An API operation resolved to a Rust function."""

    operation_id: str
    function_name: Identifier
    api_module: Identifier
    method: str
    path: str
    parameters: Tuple[ResolvedField, ...] = ()
    warnings: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "operation_id": self.operation_id,
            "function": self.function_name.value,
            "module": self.api_module.value,
            "method": self.method.upper(),
            "path": self.path,
            "parameters": [p.to_dict() for p in self.parameters],
        }
        if self.warnings:
            data["warnings"] = list(self.warnings)
        return data
