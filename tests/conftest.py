"""Shared fixtures for oapi-rust tests."""

from __future__ import annotations

import copy
import json

import pytest

from oapi_rust.codegen.languages.rust import (
    IdentifierSanitizer,
    RustTypeMapper,
    create_rust_context,
)

PETSTORE = {
    "openapi": "3.0.3",
    "info": {"title": "Petstore", "version": "1.0.0"},
    "paths": {
        "/pets": {
            "get": {
                "operationId": "listPets",
                "tags": ["pets"],
                "parameters": [
                    {
                        "name": "limit",
                        "in": "query",
                        "schema": {"type": "integer", "format": "int32", "minimum": 0},
                    }
                ],
            },
            "post": {
                "operationId": "createPet",
                "tags": ["pets"],
                "requestBody": {
                    "required": True,
                    "content": {
                        "application/json": {
                            "schema": {"$ref": "#/components/schemas/Pet"}
                        }
                    },
                },
            },
        },
        "/pets/{petId}": {
            "parameters": [
                {
                    "name": "petId",
                    "in": "path",
                    "required": True,
                    "schema": {"type": "string", "format": "uuid"},
                }
            ],
            "get": {"operationId": "getPetById", "tags": ["pets"]},
            "delete": {"operationId": "type", "tags": ["pet-admin"]},
        },
    },
    "components": {
        "schemas": {
            "Pet": {
                "type": "object",
                "required": ["petType"],
                "properties": {
                    "petType": {"type": "string"},
                    "name": {"type": "string"},
                },
                "discriminator": {
                    "propertyName": "petType",
                    "mapping": {
                        "dog": "#/components/schemas/Dog",
                        "cat": "#/components/schemas/Cat",
                    },
                },
            },
            "Dog": {
                "allOf": [
                    {"$ref": "#/components/schemas/Pet"},
                    {"type": "object", "properties": {"bark": {"type": "boolean"}}},
                ]
            },
            "Cat": {
                "allOf": [
                    {"$ref": "#/components/schemas/Pet"},
                    {
                        "type": "object",
                        "required": ["lives"],
                        "properties": {
                            "lives": {"type": "integer", "minimum": 0, "maximum": 9}
                        },
                    },
                ]
            },
            "Status": {"type": "string", "enum": ["available", "pending", "sold"]},
            "Tag": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer", "format": "int64"},
                    "label": {"type": "string"},
                    "self": {"type": "string", "format": "uri"},
                },
            },
            "Owner": {
                "type": "object",
                "properties": {
                    "tags": {
                        "type": "array",
                        "items": {"$ref": "#/components/schemas/Tag"},
                    },
                    "metadata": {
                        "type": "object",
                        "additionalProperties": {"type": "string"},
                    },
                    "status": {"type": "string", "enum": ["active", "inactive"]},
                    "extra": {"nullable": False},
                },
            },
            "200response": {
                "type": "object",
                "properties": {"ok": {"type": "boolean"}},
            },
            "PetId": {"type": "string", "format": "uuid"},
        }
    },
}


@pytest.fixture
def petstore():
    """A fresh copy of the petstore document."""
    return copy.deepcopy(PETSTORE)


@pytest.fixture
def petstore_file(tmp_path, petstore):
    """The petstore document written to a JSON file."""
    path = tmp_path / "petstore.json"
    path.write_text(json.dumps(petstore), encoding="utf-8")
    return path


@pytest.fixture
def context():
    return create_rust_context()


@pytest.fixture
def sanitizer(context):
    return IdentifierSanitizer(context)


@pytest.fixture
def mapper(context):
    return RustTypeMapper(context)
