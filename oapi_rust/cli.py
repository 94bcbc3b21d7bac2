"""Command-line interface for resolving OpenAPI documents to Rust names and types.

Usage::

    oapi-rust resolve petstore.json --package-name petstore
    oapi-rust resolve https://example.com/openapi.json --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from .codegen import get_resolver, list_supported_languages, resolve_models
from .codegen.core.config import ConfigError, load_context
from .codegen.languages.rust import validate_rust_context
from .codegen.core.generator import ResolutionResult
from .codegen.core.schema import SchemaConversionError, convert_openapi_document
from .codegen.registry import RegistryError
from .logging_config import configure_logging, get_logger
from .utils import DocumentLoaderError, load_document

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="oapi-rust",
        description="Resolve OpenAPI schemas to Rust types and identifiers",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve = subparsers.add_parser("resolve", help="Resolve a document")
    resolve.add_argument("source", help="Path or URL of an OpenAPI JSON document")
    resolve.add_argument(
        "--config", metavar="FILE", help="JSON configuration file"
    )
    resolve.add_argument("--package-name", metavar="NAME", help="Crate name")
    resolve.add_argument(
        "--model-prefix", metavar="PREFIX", help="Prefix for model names"
    )
    resolve.add_argument(
        "--model-suffix", metavar="SUFFIX", help="Suffix for model names"
    )
    resolve.add_argument(
        "--enum-suffix", metavar="SUFFIX", help="Suffix for inline enum names"
    )
    resolve.add_argument(
        "--int-width-policy",
        choices=["compatible", "explicit"],
        help="How uint8/int16/... formats choose integer widths",
    )
    resolve.add_argument(
        "--json", action="store_true", help="Print the result as JSON"
    )
    resolve.add_argument(
        "--verbose", "-v", action="store_true", help="Show debug logging"
    )

    subparsers.add_parser("languages", help="List supported target languages")

    return parser


class CLIHandler:
    """Handle command-line operations for document resolution."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize CLI handler with a console."""
        self.console = console or Console()

    def run(self, args: argparse.Namespace) -> int:
        """Run the selected command.

        Args:
            args: Parsed CLI arguments.

        Returns:
            Exit code (0 for success, 1 for failure).
        """
        try:
            if args.command == "languages":
                return self._list_languages()
            return self._resolve(args)
        except CLIError as e:
            self.console.print(f"[red]✗ Error:[/red] {e}")
            logger.error("%s", e)
            return 1

    def _list_languages(self) -> int:
        for language in list_supported_languages():
            self.console.print(f"• {language}")
        return 0

    def _overrides(self, args: argparse.Namespace) -> dict[str, Any]:
        return {
            "package_name": args.package_name,
            "model_name_prefix": args.model_prefix,
            "model_name_suffix": args.model_suffix,
            "enum_name_suffix": args.enum_suffix,
            "int_width_policy": args.int_width_policy,
        }

    def _resolve(self, args: argparse.Namespace) -> int:
        try:
            source, data = load_document(args.source)
        except (DocumentLoaderError, FileNotFoundError) as e:
            raise CLIError(str(e)) from e

        overrides = {k: v for k, v in self._overrides(args).items() if v is not None}

        try:
            context = load_context("rust", overrides, args.config)
            resolver = get_resolver("rust", context)
        except (ConfigError, RegistryError) as e:
            raise CLIError(str(e)) from e

        for warning in validate_rust_context(resolver.context):
            logger.warning(warning)

        try:
            document = convert_openapi_document(data)
        except SchemaConversionError as e:
            raise CLIError(f"Invalid document {source}: {e}") from e

        result = resolve_models(resolver, document)

        if args.json:
            sys.stdout.write(json.dumps(self._result_to_dict(result), indent=2) + "\n")
        else:
            self.console.print(f"Loaded: {source}")
            self._print_result(result)

        return 0 if result.success else 1

    def _result_to_dict(self, result: ResolutionResult) -> dict[str, Any]:
        return {
            "metadata": result.metadata,
            "models": {name: model.to_dict() for name, model in result.models.items()},
            "operations": [operation.to_dict() for operation in result.operations],
            "warnings": result.warnings,
            "errors": result.errors,
            "success": result.success,
        }

    def _print_result(self, result: ResolutionResult) -> None:
        """Render models, fields, variants, operations and diagnostics as tables."""
        if result.models:
            models = Table(title="Models", box=box.ROUNDED)
            models.add_column("Schema", style="cyan")
            models.add_column("Rust type", style="green")
            models.add_column("Module")
            models.add_column("Kind")

            fields = Table(title="Fields", box=box.SIMPLE)
            fields.add_column("Model", style="green")
            fields.add_column("Field", style="cyan")
            fields.add_column("Wire name")
            fields.add_column("Type", style="magenta")

            for name, model in result.models.items():
                if model.tagged_union is not None:
                    kind = "tagged union"
                elif model.data_type is not None:
                    kind = f"alias of {model.data_type.name}"
                elif model.is_enum:
                    kind = "enum"
                else:
                    kind = "struct"
                models.add_row(name, model.type_name.value, model.module_name.value, kind)

                for field in model.fields:
                    fields.add_row(
                        model.type_name.value,
                        field.name.value,
                        field.base_name,
                        field.declaration,
                    )

            self.console.print(models)
            if fields.row_count:
                self.console.print(fields)

            self._print_variants(result)

        if result.operations:
            operations = Table(title="Operations", box=box.ROUNDED)
            operations.add_column("Operation", style="cyan")
            operations.add_column("Function", style="green")
            operations.add_column("Module")
            operations.add_column("Method")
            operations.add_column("Path")
            for operation in result.operations:
                operations.add_row(
                    operation.operation_id,
                    operation.function_name.value,
                    operation.api_module.value,
                    operation.method.upper(),
                    operation.path,
                )
            self.console.print(operations)

        for warning in result.warnings:
            self.console.print(f"[yellow]⚠ {warning}[/yellow]")
        for error in result.errors:
            self.console.print(f"[red]✗ {error}[/red]")

        if result.success:
            self.console.print(
                f"[green]✓ Resolved {len(result.models)} models and "
                f"{len(result.operations)} operations[/green]"
            )

    def _print_variants(self, result: ResolutionResult) -> None:
        unions = [m.tagged_union for m in result.models.values() if m.tagged_union]
        if not unions:
            return

        variants = Table(title="Discriminated unions", box=box.SIMPLE)
        variants.add_column("Union", style="green")
        variants.add_column("Tag")
        variants.add_column("Variant", style="cyan")
        variants.add_column("Fields")
        for union in unions:
            for variant in union.variants:
                variants.add_row(
                    union.model_name.value,
                    variant.mapping_tag,
                    variant.model_name.value,
                    ", ".join(f.name.value for f in variant.fields),
                )
        self.console.print(variants)


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``oapi-rust`` command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING)

    return CLIHandler().run(args)


if __name__ == "__main__":
    sys.exit(main())
