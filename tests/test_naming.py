"""Tests for the language-agnostic naming primitives."""

import pytest

from oapi_rust.codegen.core.naming import (
    Identifier,
    IdentifierRole,
    camelize,
    is_all_upper_snake,
    sanitize_name,
    starts_with_digit,
    underscore,
)


class TestSanitizeName:
    """Stripping characters that cannot appear in identifiers."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("created-at", "created_at"),
            ("input[a][b]", "input_a_b"),
            ("tags[]", "tags"),
            ("func(x)", "func_x"),
            ("a.b c/d", "a_b_c_d"),
            ("a|b\\c", "a_b_c"),
            ("hello!world", "helloworld"),
            ("$", "value"),
            ("$ref", "ref"),
            ("plain", "plain"),
        ],
    )
    def test_sanitize(self, raw, expected):
        assert sanitize_name(raw) == expected

    def test_non_ascii_is_dropped(self):
        assert sanitize_name("café") == "caf"

    def test_none(self, caplog):
        assert sanitize_name(None) == "ERROR_UNKNOWN"
        assert "None" in caplog.text


class TestUnderscore:
    """Conversion to snake_case."""

    @pytest.mark.parametrize(
        "word, expected",
        [
            ("PetId", "pet_id"),
            ("petId", "pet_id"),
            ("HTTPServer", "http_server"),
            ("already_snake", "already_snake"),
            ("some-name", "some_name"),
            ("two words", "two_words"),
            ("Pet200Response", "pet200_response"),
        ],
    )
    def test_underscore(self, word, expected):
        assert underscore(word) == expected


class TestCamelize:
    """Conversion to CamelCase."""

    @pytest.mark.parametrize(
        "word, expected",
        [
            ("phone_number", "PhoneNumber"),
            ("model_200_response", "Model200Response"),
            ("pet", "Pet"),
            ("_leading", "Leading"),
            ("trailing_", "Trailing"),
            ("double__underscore", "DoubleUnderscore"),
            ("kebab-case", "KebabCase"),
            ("AlreadyCamel", "AlreadyCamel"),
            ("", ""),
        ],
    )
    def test_camelize(self, word, expected):
        assert camelize(word) == expected

    def test_round_trip_with_underscore(self):
        assert camelize(underscore("PetOwner")) == "PetOwner"


class TestPredicates:
    def test_starts_with_digit(self):
        assert starts_with_digit("200response")
        assert not starts_with_digit("response200")
        assert not starts_with_digit("")

    def test_is_all_upper_snake(self):
        assert is_all_upper_snake("API_KEY")
        assert not is_all_upper_snake("Api_Key")
        assert not is_all_upper_snake("API_KEY2")


class TestIdentifier:
    def test_str(self):
        identifier = Identifier("pet_id", IdentifierRole.VARIABLE)
        assert str(identifier) == "pet_id"
        assert identifier.role is IdentifierRole.VARIABLE

    def test_equality_includes_role(self):
        assert Identifier("pet", IdentifierRole.MODULE) != Identifier(
            "pet", IdentifierRole.VARIABLE
        )
