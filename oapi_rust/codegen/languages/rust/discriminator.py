"""
Discriminated union resolution.

Builds the variants of a polymorphic model: one per mapped model, each
carrying that model's fields minus the discriminator property.
"""

from typing import Iterable, Mapping, Optional, Sequence, Tuple, Union

from ....logging_config import get_logger
from ...core.config import GeneratorContext
from ...core.generator import GeneratorError
from .models import ResolvedField, TaggedUnion, VariantDescriptor
from .naming import IdentifierSanitizer

logger = get_logger(__name__)

MappedModels = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


class DiscriminatorError(GeneratorError):
    """A discriminator maps to a model that does not exist."""

    pass


def _mapping_pairs(mapped_models: MappedModels) -> Tuple[Tuple[str, str], ...]:
    if isinstance(mapped_models, Mapping):
        return tuple(mapped_models.items())
    return tuple(mapped_models)


class DiscriminatorResolver:
    """Resolves discriminator mappings into ordered variant descriptors."""

    def __init__(self, context: Optional[GeneratorContext] = None):
        self.context = context or GeneratorContext()
        self.sanitizer = IdentifierSanitizer(self.context)

    def resolve_variants(
        self,
        property_name: str,
        mapped_models: MappedModels,
        model_fields: Mapping[str, Sequence[ResolvedField]],
    ) -> Tuple[VariantDescriptor, ...]:
        """
        Build one variant per mapped model, in mapping order.

        Args:
            property_name: Discriminator property as written in the document
            mapped_models: Wire tag -> model name, ordered
            model_fields: Already resolved fields per model name

        Returns:
            Variants in the same order as ``mapped_models``

        Raises:
            DiscriminatorError: If a mapped model has no resolved fields entry
        """
        fields_by_type = {
            self.sanitizer.to_type_name(name).value: fields
            for name, fields in model_fields.items()
        }

        variants = []
        for tag, model in _mapping_pairs(mapped_models):
            model_name = self.sanitizer.to_type_name(model)

            if model_name.value not in fields_by_type:
                raise DiscriminatorError(
                    f"Discriminator '{property_name}' maps '{tag}' to unknown model '{model}'"
                )

            fields = tuple(
                f for f in fields_by_type[model_name.value] if f.base_name != property_name
            )
            variants.append(
                VariantDescriptor(model_name=model_name, mapping_tag=tag, fields=fields)
            )

        logger.debug(
            "Discriminator '%s' resolved to %d variants", property_name, len(variants)
        )
        return tuple(variants)

    def resolve(
        self,
        model_name: str,
        property_name: str,
        mapped_models: MappedModels,
        model_fields: Mapping[str, Sequence[ResolvedField]],
    ) -> TaggedUnion:
        """Resolve a polymorphic model into a tagged union."""
        return TaggedUnion(
            model_name=self.sanitizer.to_type_name(model_name),
            property_name=property_name,
            tag_name=property_name.replace("_", ""),
            variants=self.resolve_variants(property_name, mapped_models, model_fields),
        )
