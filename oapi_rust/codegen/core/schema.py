"""
Core schema representation for code generation.

Converts OpenAPI documents into immutable descriptors that the language
resolvers work with consistently, independent of OpenAPI version quirks.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from ...logging_config import get_logger

logger = get_logger(__name__)


class SchemaConversionError(Exception):
    """Exception raised when a document cannot be read into descriptors."""

    pass


class SchemaKind(str, Enum):
    """Schema kinds understood by every target language."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    FILE = "file"
    ARRAY = "array"
    MAP = "map"
    OBJECT = "object"  # free-form object without a named model
    ANY = "any"
    REFERENCE = "reference"


_KIND_VALUES = {kind.value: kind for kind in SchemaKind}

_HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


@dataclass(frozen=True)
class SchemaDescriptor:
    """
    Normalized description of one schema node.

    ``kind`` holds a SchemaKind for everything OpenAPI defines; any other
    string is kept verbatim and treated by resolvers as a type name.
    """

    kind: Union[SchemaKind, str]
    format: Optional[str] = None
    minimum: Optional[Union[int, float]] = None
    maximum: Optional[Union[int, float]] = None
    exclusive_minimum: bool = False
    exclusive_maximum: bool = False
    nullable: Optional[bool] = None

    # Containers
    item_type: Optional["SchemaDescriptor"] = None
    value_type: Optional["SchemaDescriptor"] = None

    # Named model reference
    reference_name: Optional[str] = None

    # Informational
    name: Optional[str] = None
    description: Optional[str] = None
    enum_values: Tuple[Any, ...] = ()

    def __post_init__(self):
        """Coerce known kind strings to SchemaKind."""
        if not isinstance(self.kind, SchemaKind) and self.kind in _KIND_VALUES:
            object.__setattr__(self, "kind", _KIND_VALUES[self.kind])
        object.__setattr__(self, "enum_values", tuple(self.enum_values))

    @property
    def is_enum(self) -> bool:
        return bool(self.enum_values)


@dataclass(frozen=True)
class PropertyDescriptor:
    """A named property of a model (or an operation parameter)."""

    name: str
    schema: SchemaDescriptor
    required: bool = False
    description: Optional[str] = None


@dataclass(frozen=True)
class DiscriminatorDescriptor:
    """Discriminator of a polymorphic model: property plus ordered tag mapping."""

    property_name: str
    mapping: Tuple[Tuple[str, str], ...] = ()  # (wire tag, model name) pairs


@dataclass(frozen=True)
class ModelDescriptor:
    """A named component schema."""

    name: str
    schema: SchemaDescriptor
    properties: Tuple[PropertyDescriptor, ...] = ()
    discriminator: Optional[DiscriminatorDescriptor] = None
    description: Optional[str] = None

    @property
    def is_enum(self) -> bool:
        return self.schema.is_enum and not self.properties


@dataclass(frozen=True)
class ParameterDescriptor:
    """A single operation parameter."""

    name: str
    location: str  # path, query, header, cookie, body
    schema: SchemaDescriptor
    required: bool = False


@dataclass(frozen=True)
class OperationDescriptor:
    """A single HTTP operation."""

    operation_id: str
    method: str
    path: str
    tag: str = "default"
    parameters: Tuple[ParameterDescriptor, ...] = ()


@dataclass
class OpenAPIDocument:
    """All descriptors extracted from one document, in document order."""

    title: str = ""
    version: str = ""
    models: Dict[str, ModelDescriptor] = field(default_factory=dict)
    operations: List[OperationDescriptor] = field(default_factory=list)


def _ref_name(ref: str) -> str:
    """``#/components/schemas/Pet`` -> ``Pet``."""
    return ref.rsplit("/", 1)[-1]


def resolve_ref(document: Dict[str, Any], ref: str) -> Dict[str, Any]:
    """Resolve a local ``$ref`` pointer in the document."""
    if not ref.startswith("#/"):
        raise SchemaConversionError(f"Only local references are supported: {ref}")

    node: Any = document
    for part in ref[2:].split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        if not isinstance(node, dict) or part not in node:
            raise SchemaConversionError(f"Unresolvable reference: {ref}")
        node = node[part]

    if not isinstance(node, dict):
        raise SchemaConversionError(f"Reference does not point to a schema: {ref}")
    return node


def _bound(node: Dict[str, Any], key: str, exclusive_key: str) -> Tuple[Any, bool]:
    """
    Read a numeric bound and its exclusivity.

    OpenAPI 3.0 uses a boolean ``exclusiveMinimum`` next to ``minimum``;
    3.1 puts the bound itself into ``exclusiveMinimum``.
    """
    value = node.get(key)
    exclusive = node.get(exclusive_key, False)

    if isinstance(exclusive, bool):
        return value, exclusive and value is not None
    if isinstance(exclusive, (int, float)):
        return exclusive, True
    return value, False


def _single_ref(node: Dict[str, Any]) -> Optional[str]:
    """Return the ref of an ``allOf/oneOf/anyOf`` wrapping exactly one ref."""
    for key in ("allOf", "oneOf", "anyOf"):
        members = node.get(key)
        if isinstance(members, list) and len(members) == 1 and "$ref" in members[0]:
            return members[0]["$ref"]
    return None


def schema_from_openapi(
    node: Optional[Dict[str, Any]], name: Optional[str] = None
) -> SchemaDescriptor:
    """
    Convert one OpenAPI schema node to a SchemaDescriptor.

    Args:
        node: Schema object (may be None or empty for "any type")
        name: Name used in diagnostics

    Returns:
        Descriptor for the node; nested items/values are converted recursively
    """
    if not node:
        return SchemaDescriptor(kind=SchemaKind.ANY, name=name)

    if not isinstance(node, dict):
        raise SchemaConversionError(f"Schema '{name}' must be an object, got {node!r}")

    nullable = node.get("nullable", node.get("x-nullable"))

    ref = node.get("$ref") or _single_ref(node)
    if ref:
        return SchemaDescriptor(
            kind=SchemaKind.REFERENCE,
            reference_name=_ref_name(ref),
            nullable=nullable,
            name=name,
            description=node.get("description"),
        )

    schema_type = node.get("type")

    # OpenAPI 3.1: type: [string, "null"]
    if isinstance(schema_type, list):
        non_null = [t for t in schema_type if t != "null"]
        if len(non_null) != len(schema_type):
            nullable = True
        schema_type = non_null[0] if len(non_null) == 1 else None

    minimum, exclusive_minimum = _bound(node, "minimum", "exclusiveMinimum")
    maximum, exclusive_maximum = _bound(node, "maximum", "exclusiveMaximum")

    common = dict(
        format=node.get("format"),
        nullable=nullable,
        name=name,
        description=node.get("description"),
        enum_values=tuple(node.get("enum", ())),
    )

    if schema_type == "array":
        items = node.get("items")
        return SchemaDescriptor(
            kind=SchemaKind.ARRAY,
            item_type=schema_from_openapi(items, name) if items is not None else None,
            **common,
        )

    additional = node.get("additionalProperties")
    if schema_type in (None, "object") and additional not in (None, False):
        value_type = schema_from_openapi(additional if isinstance(additional, dict) else None, name)
        return SchemaDescriptor(kind=SchemaKind.MAP, value_type=value_type, **common)

    if schema_type in ("string", "integer", "number", "boolean", "file"):
        return SchemaDescriptor(
            kind=schema_type,
            minimum=minimum,
            maximum=maximum,
            exclusive_minimum=exclusive_minimum,
            exclusive_maximum=exclusive_maximum,
            **common,
        )

    if schema_type == "object" or "properties" in node:
        return SchemaDescriptor(kind=SchemaKind.OBJECT, **common)

    if schema_type is None:
        return SchemaDescriptor(kind=SchemaKind.ANY, **common)

    # Vendor or future types are passed through by name
    logger.debug("Schema '%s' has non-standard type '%s'", name, schema_type)
    return SchemaDescriptor(kind=schema_type, **common)


def _collect_properties(
    document: Dict[str, Any],
    node: Dict[str, Any],
    seen: Optional[set] = None,
) -> Tuple[Dict[str, Dict[str, Any]], List[str]]:
    """Gather properties and required names, following ``allOf`` parents."""
    seen = seen if seen is not None else set()
    properties: Dict[str, Dict[str, Any]] = {}
    required: List[str] = []

    for member in node.get("allOf", []):
        if "$ref" in member:
            ref = member["$ref"]
            if ref in seen:
                continue
            seen.add(ref)
            member = resolve_ref(document, ref)
        member_props, member_required = _collect_properties(document, member, seen)
        properties.update(member_props)
        required.extend(member_required)

    properties.update(node.get("properties", {}))
    required.extend(node.get("required", []))
    return properties, required


def _discriminator_from_openapi(node: Dict[str, Any]) -> Optional[DiscriminatorDescriptor]:
    """
    Read a discriminator, keeping the mapping in document order.

    Without an explicit mapping the ``oneOf``/``anyOf`` members define the
    variants, each tagged with its own model name.
    """
    discriminator = node.get("discriminator")
    if not discriminator:
        return None

    if isinstance(discriminator, str):  # Swagger 2.0
        discriminator = {"propertyName": discriminator}

    property_name = discriminator.get("propertyName")
    if not property_name:
        raise SchemaConversionError("Discriminator without propertyName")

    mapping = discriminator.get("mapping") or {}
    if mapping:
        pairs = tuple((tag, _ref_name(target)) for tag, target in mapping.items())
    else:
        members = node.get("oneOf") or node.get("anyOf") or []
        pairs = tuple(
            (_ref_name(member["$ref"]), _ref_name(member["$ref"]))
            for member in members
            if "$ref" in member
        )

    return DiscriminatorDescriptor(property_name=property_name, mapping=pairs)


def model_from_openapi(
    document: Dict[str, Any], name: str, node: Dict[str, Any]
) -> ModelDescriptor:
    """Convert one entry of ``components/schemas`` to a ModelDescriptor."""
    if not isinstance(node, dict):
        raise SchemaConversionError(f"Component schema '{name}' must be an object")

    raw_properties, required = _collect_properties(document, node)
    required_names = set(required)

    properties = tuple(
        PropertyDescriptor(
            name=prop_name,
            schema=schema_from_openapi(prop_node, prop_name),
            required=prop_name in required_names,
            description=(prop_node or {}).get("description"),
        )
        for prop_name, prop_node in raw_properties.items()
    )

    # allOf composition is flattened into the property list above
    schema_node = {k: v for k, v in node.items() if k != "allOf"}
    if raw_properties and "type" not in schema_node:
        schema_node["type"] = "object"

    return ModelDescriptor(
        name=name,
        schema=schema_from_openapi(schema_node, name),
        properties=properties,
        discriminator=_discriminator_from_openapi(node),
        description=node.get("description"),
    )


def _parameter_from_openapi(document: Dict[str, Any], node: Dict[str, Any]) -> ParameterDescriptor:
    if "$ref" in node:
        node = resolve_ref(document, node["$ref"])

    return ParameterDescriptor(
        name=node["name"],
        location=node.get("in", "query"),
        schema=schema_from_openapi(node.get("schema") or {"type": node.get("type")}, node["name"]),
        required=node.get("required", False),
    )


def _body_parameter(operation: Dict[str, Any]) -> Optional[ParameterDescriptor]:
    """The JSON request body as a single ``body`` parameter."""
    content = operation.get("requestBody", {}).get("content", {})
    for content_type in ("application/json", "text/json", "*/*"):
        if content_type in content:
            body_schema = content[content_type].get("schema")
            return ParameterDescriptor(
                name="body",
                location="body",
                schema=schema_from_openapi(body_schema, "body"),
                required=operation["requestBody"].get("required", False),
            )
    return None


def _operations_from_openapi(document: Dict[str, Any]) -> List[OperationDescriptor]:
    operations = []

    for path, path_item in document.get("paths", {}).items():
        shared = path_item.get("parameters", [])

        for method in _HTTP_METHODS:
            operation = path_item.get(method)
            if operation is None:
                continue

            parameters = [
                _parameter_from_openapi(document, p)
                for p in list(shared) + list(operation.get("parameters", []))
            ]
            body = _body_parameter(operation)
            if body is not None:
                parameters.append(body)

            operation_id = operation.get("operationId") or f"{method}_{path}"
            tags = operation.get("tags") or ["default"]

            operations.append(
                OperationDescriptor(
                    operation_id=operation_id,
                    method=method,
                    path=path,
                    tag=tags[0],
                    parameters=tuple(parameters),
                )
            )

    return operations


def convert_openapi_document(document: Dict[str, Any]) -> OpenAPIDocument:
    """
    Convert a parsed OpenAPI (3.x, or Swagger 2.0 definitions) document.

    Args:
        document: The document as loaded from JSON

    Returns:
        OpenAPIDocument with models and operations in document order

    Raises:
        SchemaConversionError: If the document is structurally invalid
    """
    if not isinstance(document, dict):
        raise SchemaConversionError("OpenAPI document must be a JSON object")

    info = document.get("info", {})
    schemas = document.get("components", {}).get("schemas")
    if schemas is None:
        schemas = document.get("definitions", {})

    result = OpenAPIDocument(
        title=info.get("title", ""),
        version=str(info.get("version", "")),
    )

    for name, node in schemas.items():
        result.models[name] = model_from_openapi(document, name, node)

    result.operations = _operations_from_openapi(document)

    logger.info(
        "Read %d models and %d operations from '%s'",
        len(result.models),
        len(result.operations),
        result.title,
    )
    return result
