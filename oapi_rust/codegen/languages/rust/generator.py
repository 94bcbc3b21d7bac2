"""
Rust model resolver implementation.

Resolves every model and operation of an OpenAPI document to Rust names
and types, ready for rendering.
"""

from collections import defaultdict
from typing import List, Optional

from ....logging_config import get_logger
from ...core.config import GeneratorContext
from ...core.generator import ModelResolver, ResolutionResult
from ...core.naming import Identifier
from ...core.schema import (
    ModelDescriptor,
    OpenAPIDocument,
    OperationDescriptor,
    PropertyDescriptor,
    SchemaDescriptor,
    SchemaKind,
)
from .config import create_rust_context
from .discriminator import DiscriminatorError, DiscriminatorResolver
from .models import (
    EnumMember,
    ResolvedEnum,
    ResolvedField,
    ResolvedModel,
    ResolvedOperation,
)
from .types import RustType, RustTypeMapper, schema_type_name

logger = get_logger(__name__)


class RustModelResolver(ModelResolver):
    """Model resolver for Rust structs, enums and API functions."""

    def __init__(self, context: Optional[GeneratorContext] = None):
        """Initialize Rust resolver with a generator context."""
        super().__init__(context or create_rust_context())

        self.type_mapper = RustTypeMapper(self.context)
        self.sanitizer = self.type_mapper.sanitizer
        self.discriminators = DiscriminatorResolver(self.context)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "rust"

    def resolve_model(self, model: ModelDescriptor) -> ResolvedModel:
        """Resolve a component schema to a struct, enum or alias."""
        warnings: List[str] = []

        rename_warning = self.sanitizer.check_model_name(model.name)
        if rename_warning:
            logger.warning(rename_warning)
            warnings.append(rename_warning)

        type_name = self.sanitizer.to_type_name(model.name)
        module_name = self.sanitizer.to_module_name(model.name)

        fields = []
        enums = []
        for prop in model.properties:
            field, enum = self._resolve_property(prop)
            fields.append(field)
            warnings.extend(field.data_type.warnings)
            if enum is not None:
                enums.append(enum)

        data_type = None
        if model.is_enum:
            value_type = self.type_mapper.map_schema(model.schema)
            warnings.extend(value_type.warnings)
            enums.append(self._resolve_enum(type_name, model.schema, value_type))
        elif not model.properties and model.schema.kind != SchemaKind.OBJECT:
            data_type = self.type_mapper.map_schema(model.schema)
            warnings.extend(data_type.warnings)

        return ResolvedModel(
            source_name=model.name,
            type_name=type_name,
            module_name=module_name,
            data_type=data_type,
            fields=tuple(fields),
            enums=tuple(enums),
            warnings=tuple(warnings),
        )

    def _resolve_property(self, prop: PropertyDescriptor):
        """Resolve one property, with the inline enum it declares (if any)."""
        data_type = self.type_mapper.map_schema(prop.schema)

        enum = None
        enum_type = None
        if prop.schema.is_enum and prop.schema.kind != SchemaKind.REFERENCE:
            enum_type = self.sanitizer.to_enum_type_name(prop.name)
            enum = self._resolve_enum(enum_type, prop.schema, data_type)

        field = ResolvedField(
            name=self.sanitizer.to_field_name(prop.name),
            base_name=prop.name,
            data_type=data_type,
            required=prop.required,
            enum_type=enum_type,
            description=prop.description,
        )
        return field, enum

    def _resolve_enum(
        self, name: Identifier, schema: SchemaDescriptor, value_type: RustType
    ) -> ResolvedEnum:
        kind = schema_type_name(schema)
        members = tuple(
            EnumMember(name=self.sanitizer.to_enum_member_name(value, kind), value=value)
            for value in schema.enum_values
            if value is not None  # null is expressed through Option
        )
        return ResolvedEnum(
            name=name,
            members=members,
            value_type=value_type,
        )

    def resolve_operation(self, operation: OperationDescriptor) -> ResolvedOperation:
        """Resolve an operation to an API function and its parameters."""
        warnings: List[str] = []

        rename_warning = self.sanitizer.check_operation_name(operation.operation_id)
        if rename_warning:
            warnings.append(rename_warning)

        parameters = []
        for param in operation.parameters:
            data_type = self.type_mapper.map_schema(param.schema)
            warnings.extend(data_type.warnings)
            parameters.append(
                ResolvedField(
                    name=self.sanitizer.to_param_name(param.name),
                    base_name=param.name,
                    data_type=data_type,
                    required=param.required,
                )
            )

        return ResolvedOperation(
            operation_id=operation.operation_id,
            function_name=self.sanitizer.to_operation_name(operation.operation_id),
            api_module=self.sanitizer.to_api_module_name(operation.tag),
            method=operation.method,
            path=operation.path,
            parameters=tuple(parameters),
            warnings=tuple(warnings),
        )

    def post_process(self, result: ResolutionResult, document: OpenAPIDocument):
        """Resolve discriminated unions once all models have their fields."""
        model_fields = {name: model.fields for name, model in result.models.items()}

        for name, descriptor in document.models.items():
            discriminator = descriptor.discriminator
            if discriminator is None or not discriminator.mapping:
                continue
            if name not in result.models:
                continue  # already failed

            try:
                union = self.discriminators.resolve(
                    name,
                    discriminator.property_name,
                    discriminator.mapping,
                    model_fields,
                )
            except DiscriminatorError as e:
                logger.error("Model '%s' could not be resolved: %s", name, e)
                result.errors.append(f"{name}: {e}")
                continue

            result.models[name] = result.models[name].with_tagged_union(union)

    def validate_document(self, document: OpenAPIDocument) -> List[str]:
        """Add Rust-specific validation: names that collide once sanitized."""
        warnings = super().validate_document(document)

        type_names = defaultdict(list)
        for name in document.models:
            type_names[self.sanitizer.to_type_name(name).value].append(name)

        for type_name, sources in type_names.items():
            if len(sources) > 1:
                warnings.append(
                    f"Models {sources} all resolve to the Rust type '{type_name}'"
                )

        for model in document.models.values():
            field_names = defaultdict(list)
            for prop in model.properties:
                field_names[self.sanitizer.to_field_name(prop.name).value].append(prop.name)

            for field_name, sources in field_names.items():
                if len(sources) > 1:
                    warnings.append(
                        f"Properties {sources} of '{model.name}' all resolve to "
                        f"the field '{field_name}'"
                    )

        return warnings
