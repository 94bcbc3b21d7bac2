"""
Base resolver interface for all code generation targets.

Defines the contract that all language resolvers must implement.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ...logging_config import get_logger
from .config import GeneratorContext
from .schema import ModelDescriptor, OpenAPIDocument, OperationDescriptor, SchemaKind

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class SchemaResolutionError(GeneratorError):
    """A schema cannot be resolved to a target-language type."""

    pass


class ModelResolver(ABC):
    """Abstract base class for all model resolvers."""

    def __init__(self, context: Optional[GeneratorContext] = None):
        """Initialize resolver with an immutable generator context."""
        self.context = context or GeneratorContext()

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'rust')."""
        pass

    @abstractmethod
    def resolve_model(self, model: ModelDescriptor) -> Any:
        """
        Resolve names and types of a single model.

        Args:
            model: Model to resolve

        Returns:
            Language-specific resolved model; a ``warnings`` attribute on it
            is collected into the ResolutionResult

        Raises:
            GeneratorError: If the model cannot be represented
        """
        pass

    @abstractmethod
    def resolve_operation(self, operation: OperationDescriptor) -> Any:
        """
        Resolve names and types of a single operation.

        Args:
            operation: Operation to resolve

        Returns:
            Language-specific resolved operation
        """
        pass

    def post_process(self, result: "ResolutionResult", document: OpenAPIDocument):
        """
        Hook run after every model and operation has been resolved.

        Language resolvers override this for work that needs all models,
        such as discriminator variants.
        """
        return None

    def validate_document(self, document: OpenAPIDocument) -> List[str]:
        """
        Validate a document for basic structural issues.

        Language resolvers should override this to add language-specific validation.
        Conditions the type mapping already reports (arrays without items, maps
        without values) are left to it.

        Args:
            document: Document to validate

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        for model in document.models.values():
            if model.schema.kind == SchemaKind.OBJECT and not model.properties:
                warnings.append(f"Model '{model.name}' has no properties")

            for prop in model.properties:
                schema = prop.schema
                if schema.kind == SchemaKind.REFERENCE and (
                    schema.reference_name not in document.models
                ):
                    warnings.append(
                        f"Property {model.name}.{prop.name} references unknown "
                        f"model '{schema.reference_name}'"
                    )

        return warnings


class ResolutionResult:
    """Container for resolution results and metadata."""

    def __init__(
        self,
        models: Dict[str, Any] = None,
        operations: List[Any] = None,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize resolution result.

        Args:
            models: Resolved models keyed by their source name
            operations: Resolved operations in document order
            warnings: Any warnings from resolution
            metadata: Additional metadata about resolution
        """
        self.models = models or {}
        self.operations = operations or []
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.errors: List[str] = []
        self.exception: Optional[Exception] = None

    @property
    def success(self) -> bool:
        return not self.errors

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "ResolutionResult":
        """Create a failed resolution result."""
        result = cls()
        result.errors.append(message)
        result.exception = exception
        return result


def resolve_models(resolver: ModelResolver, document: OpenAPIDocument) -> ResolutionResult:
    """
    Resolve a whole document with the specified resolver.

    A GeneratorError aborts only the model or operation that raised it and
    is recorded in ``errors``; anything else fails the whole run.

    Args:
        resolver: Language resolver instance
        document: Document read by ``convert_openapi_document``

    Returns:
        ResolutionResult with models, operations, warnings, errors and metadata
    """
    try:
        result = ResolutionResult(warnings=resolver.validate_document(document))

        for name, model in document.models.items():
            try:
                resolved = resolver.resolve_model(model)
            except GeneratorError as e:
                logger.error("Model '%s' could not be resolved: %s", name, e)
                result.errors.append(f"{name}: {e}")
                continue

            result.models[name] = resolved
            result.warnings.extend(getattr(resolved, "warnings", ()))

        for operation in document.operations:
            try:
                resolved = resolver.resolve_operation(operation)
            except GeneratorError as e:
                logger.error(
                    "Operation '%s' could not be resolved: %s", operation.operation_id, e
                )
                result.errors.append(f"{operation.operation_id}: {e}")
                continue

            result.operations.append(resolved)
            result.warnings.extend(getattr(resolved, "warnings", ()))

        resolver.post_process(result, document)

        result.metadata.update(
            {
                "language": resolver.language_name,
                "title": document.title,
                "version": document.version,
                "model_count": len(result.models),
                "operation_count": len(result.operations),
                "package_name": resolver.context.package_name,
            }
        )

        return result

    except Exception as e:
        logger.exception("Resolution failed")
        return ResolutionResult.error(f"Resolution failed: {str(e)}", exception=e)
