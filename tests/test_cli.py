"""Tests for the oapi-rust command line."""

import io
import json
import logging

import pytest
from rich.console import Console

from oapi_rust.cli import CLIHandler, build_parser, main
from oapi_rust.logging_config import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def restore_logging():
    """main() configures the package logger; undo it for later tests."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    level = logger.level
    handlers = list(logger.handlers)
    yield
    logger.setLevel(level)
    logger.handlers[:] = handlers


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200)


def run(console, *argv):
    args = build_parser().parse_args(list(argv))
    return CLIHandler(console).run(args)


class TestJsonOutput:
    """``resolve --json`` prints the whole result."""

    def test_resolve(self, petstore_file, capsys):
        assert main(["resolve", str(petstore_file), "--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["success"] is True
        assert data["metadata"]["model_count"] == 8
        assert data["models"]["Cat"]["name"] == "Cat"
        assert data["models"]["PetId"]["type"] == "uuid::Uuid"
        assert data["models"]["Pet"]["tagged_union"]["variants"][0] == {
            "model": "Dog",
            "tag": "dog",
            "fields": ["name", "bark"],
        }
        assert [o["function"] for o in data["operations"]] == [
            "list_pets",
            "create_pet",
            "get_pet_by_id",
            "call_type",
        ]

    def test_overrides(self, petstore_file, capsys):
        code = main(
            [
                "resolve",
                str(petstore_file),
                "--json",
                "--model-prefix",
                "api",
                "--package-name",
                "petstore",
            ]
        )
        assert code == 0

        data = json.loads(capsys.readouterr().out)
        assert data["models"]["Pet"]["name"] == "ApiPet"
        assert data["models"]["Pet"]["module"] == "api_pet"
        assert data["metadata"]["package_name"] == "petstore"

    def test_config_file(self, petstore_file, tmp_path, capsys):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"model_name_suffix": "dto"}), encoding="utf-8")

        assert main(["resolve", str(petstore_file), "--json", "--config", str(config)]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["models"]["Tag"]["name"] == "TagDto"

    def test_explicit_policy(self, tmp_path, capsys):
        path = tmp_path / "pixel.json"
        path.write_text(
            json.dumps(
                {
                    "openapi": "3.0.3",
                    "components": {
                        "schemas": {
                            "Pixel": {
                                "type": "object",
                                "properties": {"red": {"type": "integer", "format": "uint8"}},
                            }
                        }
                    },
                }
            ),
            encoding="utf-8",
        )

        assert main(["resolve", str(path), "--json", "--int-width-policy", "explicit"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["models"]["Pixel"]["fields"][0]["type"] == "Option<u8>"


class TestTableOutput:
    """Human-readable output goes through rich."""

    def test_tables(self, console, petstore_file):
        assert run(console, "resolve", str(petstore_file)) == 0

        output = console.file.getvalue()
        assert "Models" in output
        assert "Model200response" in output
        assert "Discriminated unions" in output
        assert "get_pet_by_id" in output
        assert "Resolved 8 models and 4 operations" in output

    def test_warnings_are_listed(self, console, petstore_file):
        run(console, "resolve", str(petstore_file))
        assert "model_200response" in console.file.getvalue()

    def test_languages(self, console):
        assert run(console, "languages") == 0
        assert "rust" in console.file.getvalue()


class TestFailures:
    """Problems are reported and turned into exit code 1."""

    def test_missing_file(self, console, tmp_path):
        assert run(console, "resolve", str(tmp_path / "missing.json")) == 1
        assert "File not found" in console.file.getvalue()

    def test_invalid_package_name(self, console, petstore_file):
        assert run(console, "resolve", str(petstore_file), "--package-name", "9bad") == 1
        assert "Invalid package name" in console.file.getvalue()

    def test_missing_config_file(self, console, petstore_file, tmp_path):
        code = run(
            console, "resolve", str(petstore_file), "--config", str(tmp_path / "nope.json")
        )
        assert code == 1

    def test_document_not_an_object(self, console, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert run(console, "resolve", str(path)) == 1

    def test_resolution_errors(self, console, petstore, tmp_path):
        del petstore["components"]["schemas"]["Cat"]
        path = tmp_path / "broken.json"
        path.write_text(json.dumps(petstore), encoding="utf-8")

        assert run(console, "resolve", str(path)) == 1
        output = console.file.getvalue()
        assert "unknown model 'Cat'" in output
        assert "Resolved" not in output

    def test_invalid_policy_choice(self, petstore_file):
        with pytest.raises(SystemExit):
            build_parser().parse_args(
                ["resolve", str(petstore_file), "--int-width-policy", "widest"]
            )
