"""End-to-end tests for resolving whole documents."""

import logging

import pytest

from oapi_rust.codegen import (
    RegistryError,
    ResolverRegistry,
    get_registry,
    get_resolver,
    list_supported_languages,
    resolve_document,
)
from oapi_rust.codegen.core.config import GeneratorContext, IntegerWidthPolicy
from oapi_rust.codegen.core.generator import ModelResolver, ResolutionResult, resolve_models
from oapi_rust.codegen.core.schema import convert_openapi_document
from oapi_rust.codegen.languages.rust import (
    RustModelResolver,
    create_explicit_width_resolver,
    create_resolver,
)


@pytest.fixture
def result(petstore):
    resolver = RustModelResolver()
    return resolve_models(resolver, convert_openapi_document(petstore))


def fields_by_wire_name(model):
    return {f.base_name: f for f in model.fields}


class TestModels:
    """Structs, enums and aliases."""

    def test_success(self, result):
        assert result.success
        assert result.errors == []
        assert list(result.models) == [
            "Pet",
            "Dog",
            "Cat",
            "Status",
            "Tag",
            "Owner",
            "200response",
            "PetId",
        ]

    def test_metadata(self, result):
        assert result.metadata == {
            "language": "rust",
            "title": "Petstore",
            "version": "1.0.0",
            "model_count": 8,
            "operation_count": 4,
            "package_name": "openapi",
        }

    def test_struct_fields(self, result):
        pet = result.models["Pet"]
        assert pet.type_name.value == "Pet"
        assert pet.module_name.value == "pet"
        assert [f.name.value for f in pet.fields] == ["pet_type", "name"]
        assert [f.declaration for f in pet.fields] == ["String", "Option<String>"]

    def test_bounded_integer(self, result):
        lives = fields_by_wire_name(result.models["Cat"])["lives"]
        assert lives.data_type.name == "u8"
        assert lives.declaration == "u8"

    def test_formats_and_reserved_fields(self, result):
        tag = fields_by_wire_name(result.models["Tag"])
        assert tag["id"].declaration == "Option<i64>"
        assert tag["self"].name.value == "_self"
        assert tag["self"].data_type.name == "url::Url"
        assert tag["self"].data_type.crates_needed == frozenset({"url"})

    def test_containers(self, result):
        owner = fields_by_wire_name(result.models["Owner"])
        assert owner["tags"].data_type.name == "Vec<crate::models::Tag>"
        assert owner["tags"].data_type.model_name == "Tag"
        assert (
            owner["metadata"].data_type.name
            == "::std::collections::HashMap<String, String>"
        )

    def test_inline_enum(self, result):
        owner = result.models["Owner"]
        status = fields_by_wire_name(owner)["status"]
        assert status.enum_type.value == "Status"
        assert status.declaration == "Option<Status>"

        (enum,) = owner.enums
        assert [m.name.value for m in enum.members] == ["Active", "Inactive"]
        assert [m.value for m in enum.members] == ["active", "inactive"]

    def test_any_type_warning(self, result):
        owner = result.models["Owner"]
        extra = fields_by_wire_name(owner)["extra"]
        assert extra.data_type.name == "serde_json::Value"
        assert extra.data_type.nullable
        assert extra.declaration == "Option<serde_json::Value>"
        assert len(owner.warnings) == 1
        assert owner.warnings[0] in result.warnings

    def test_renamed_model(self, result):
        model = result.models["200response"]
        assert model.type_name.value == "Model200response"
        assert model.module_name.value == "model_200response"
        assert "model_200response" in model.warnings[0]
        assert model.warnings[0] in result.warnings

    def test_alias(self, result):
        pet_id = result.models["PetId"]
        assert pet_id.data_type.name == "uuid::Uuid"
        assert pet_id.fields == ()
        assert not pet_id.is_enum

    def test_enum_model(self, result):
        status = result.models["Status"]
        assert status.is_enum
        (enum,) = status.enums
        assert enum.name.value == "Status"
        assert [m.name.value for m in enum.members] == ["Available", "Pending", "Sold"]
        assert enum.value_type.name == "String"

    def test_to_dict(self, result):
        data = result.models["Cat"].to_dict()
        assert data["name"] == "Cat"
        assert data["module"] == "cat"
        assert {"name": "lives", "base_name": "lives", "type": "u8", "required": True} in data[
            "fields"
        ]


class TestTaggedUnions:
    """Discriminated unions are resolved after all models."""

    def test_pet_union(self, result):
        union = result.models["Pet"].tagged_union
        assert union.property_name == "petType"
        assert union.tag_name == "petType"
        assert [v.model_name.value for v in union.variants] == ["Dog", "Cat"]
        assert [v.mapping_tag for v in union.variants] == ["dog", "cat"]

    def test_variant_fields_drop_discriminator(self, result):
        dog, cat = result.models["Pet"].tagged_union.variants
        assert [f.base_name for f in dog.fields] == ["name", "bark"]
        assert [f.base_name for f in cat.fields] == ["name", "lives"]

    def test_variant_models_keep_their_fields(self, result):
        assert [f.base_name for f in result.models["Dog"].fields] == [
            "petType",
            "name",
            "bark",
        ]
        assert result.models["Dog"].tagged_union is None

    def test_missing_variant_is_an_error(self, petstore):
        schemas = petstore["components"]["schemas"]
        del schemas["Dog"]

        result = resolve_document(petstore)

        assert not result.success
        assert result.errors[0].startswith("Pet: ")
        assert "Dog" in result.errors[0]
        assert result.models["Pet"].tagged_union is None


class TestOperations:
    """API functions and their parameters."""

    @pytest.fixture
    def operations(self, result):
        return {o.operation_id: o for o in result.operations}

    def test_names(self, result):
        assert [(o.function_name.value, o.api_module.value) for o in result.operations] == [
            ("list_pets", "pets_api"),
            ("create_pet", "pets_api"),
            ("get_pet_by_id", "pets_api"),
            ("call_type", "pet_admin_api"),
        ]

    def test_query_parameter(self, operations):
        (limit,) = operations["listPets"].parameters
        assert limit.name.value == "limit"
        assert limit.declaration == "Option<u32>"

    def test_body_parameter(self, operations):
        (body,) = operations["createPet"].parameters
        assert body.declaration == "crate::models::Pet"

    def test_path_parameter(self, operations):
        (pet_id,) = operations["getPetById"].parameters
        assert pet_id.name.value == "pet_id"
        assert pet_id.base_name == "petId"
        assert pet_id.declaration == "uuid::Uuid"

    def test_reserved_operation_warns(self, operations, result):
        operation = operations["type"]
        assert operation.method == "delete"
        assert len(operation.warnings) == 1
        assert operation.warnings[0] in result.warnings

    def test_to_dict(self, operations):
        data = operations["getPetById"].to_dict()
        assert data["method"] == "GET"
        assert data["function"] == "get_pet_by_id"
        assert data["parameters"][0]["type"] == "uuid::Uuid"


class TestFailures:
    """Errors abort one model, never the whole run."""

    def test_contradicting_bounds(self, petstore):
        petstore["components"]["schemas"]["Broken"] = {
            "type": "object",
            "properties": {"n": {"type": "integer", "minimum": 0, "maximum": -1}},
        }

        result = resolve_document(petstore)

        assert not result.success
        assert len(result.errors) == 1
        assert result.errors[0].startswith("Broken: ")
        assert "Broken" not in result.models
        assert "Pet" in result.models
        assert result.metadata["model_count"] == 8

    def test_unexpected_exception(self, petstore):
        class ExplodingResolver(ModelResolver):
            @property
            def language_name(self):
                return "exploding"

            def resolve_model(self, model):
                raise RuntimeError("boom")

            def resolve_operation(self, operation):
                return None

        result = resolve_models(ExplodingResolver(), convert_openapi_document(petstore))

        assert not result.success
        assert result.errors == ["Resolution failed: boom"]
        assert isinstance(result.exception, RuntimeError)
        assert result.models == {}

    def test_error_result(self):
        result = ResolutionResult.error("nope")
        assert not result.success
        assert result.exception is None


class TestValidation:
    def test_type_name_collisions(self):
        document = convert_openapi_document(
            {
                "components": {
                    "schemas": {
                        "pet_owner": {"type": "string"},
                        "PetOwner": {"type": "string"},
                    }
                }
            }
        )
        warnings = RustModelResolver().validate_document(document)
        assert any("PetOwner" in w and "pet_owner" in w for w in warnings)

    def test_field_name_collisions(self):
        document = convert_openapi_document(
            {
                "components": {
                    "schemas": {
                        "Pet": {
                            "type": "object",
                            "properties": {
                                "petId": {"type": "string"},
                                "pet_id": {"type": "string"},
                            },
                        }
                    }
                }
            }
        )
        warnings = RustModelResolver().validate_document(document)
        assert any("pet_id" in w and "petId" in w for w in warnings)

    def test_structural_warnings(self):
        document = convert_openapi_document(
            {
                "components": {
                    "schemas": {
                        "Empty": {"type": "object"},
                        "Holder": {
                            "type": "object",
                            "properties": {
                                "ghost": {"$ref": "#/components/schemas/Ghost"},
                                "list": {"type": "array"},
                            },
                        },
                    }
                }
            }
        )
        warnings = RustModelResolver().validate_document(document)
        assert "Model 'Empty' has no properties" in warnings
        assert any("unknown model 'Ghost'" in w for w in warnings)

    def test_untyped_array_reported_once(self):
        document = convert_openapi_document(
            {
                "components": {
                    "schemas": {
                        "Holder": {
                            "type": "object",
                            "properties": {"list": {"type": "array"}},
                        }
                    }
                }
            }
        )
        result = resolve_models(RustModelResolver(), document)
        assert result.success
        assert len([w for w in result.warnings if "without items" in w]) == 1

    def test_model_rename_logged_once(self, caplog):
        document = convert_openapi_document(
            {
                "components": {
                    "schemas": {
                        "self": {"type": "string"},
                        "Holder": {
                            "type": "object",
                            "properties": {
                                "first": {"$ref": "#/components/schemas/self"},
                                "second": {"$ref": "#/components/schemas/self"},
                            },
                        },
                    }
                }
            }
        )
        with caplog.at_level(logging.WARNING):
            result = resolve_models(RustModelResolver(), document)

        renames = [
            r for r in caplog.records if "cannot be used as model name" in r.getMessage()
        ]
        assert len(renames) == 1
        assert result.models["Holder"].fields[0].data_type.model_name == "ModelSelf"


class TestFactories:
    def test_create_resolver(self):
        resolver = create_resolver(model_name_prefix="api")
        assert resolver.context.model_name_prefix == "api"
        assert resolver.language_name == "rust"

    def test_create_explicit_width_resolver(self):
        resolver = create_explicit_width_resolver()
        assert resolver.context.int_width_policy is IntegerWidthPolicy.EXPLICIT

        document = convert_openapi_document(
            {
                "components": {
                    "schemas": {
                        "Pixel": {
                            "type": "object",
                            "properties": {
                                "red": {"type": "integer", "format": "uint8"},
                                "depth": {"type": "integer", "format": "int16"},
                            },
                        }
                    }
                }
            }
        )
        pixel = resolve_models(resolver, document).models["Pixel"]
        assert [f.data_type.name for f in pixel.fields] == ["u8", "i16"]

    def test_compatible_policy_ignores_formats(self):
        document = convert_openapi_document(
            {
                "components": {
                    "schemas": {
                        "Pixel": {
                            "type": "object",
                            "properties": {"red": {"type": "integer", "format": "uint8"}},
                        }
                    }
                }
            }
        )
        pixel = resolve_models(create_resolver(), document).models["Pixel"]
        assert pixel.fields[0].data_type.name == "isize"


class TestRegistry:
    """Language lookup by name or alias."""

    def test_rust_registered(self):
        assert "rust" in list_supported_languages()
        assert get_registry().is_supported("rs")
        assert get_registry().is_supported("RUST")

    def test_alias(self):
        assert isinstance(get_resolver("rs"), RustModelResolver)

    def test_unknown_language(self):
        with pytest.raises(RegistryError, match="cobol"):
            get_resolver("cobol")

    def test_context_sources(self, tmp_path):
        context = GeneratorContext(package_name="pets")
        assert get_resolver("rust", context).context is context
        assert get_resolver("rust", {"package_name": "dict"}).context.package_name == "dict"

        path = tmp_path / "config.json"
        path.write_text('{"package_name": "file"}', encoding="utf-8")
        assert get_resolver("rust", str(path)).context.package_name == "file"

    def test_bad_configuration(self):
        with pytest.raises(RegistryError, match="Failed to create"):
            get_resolver("rust", {"package_name": "9lives"})

    def test_invalid_context_type(self):
        with pytest.raises(RegistryError, match="Invalid context type"):
            get_resolver("rust", 42)

    def test_register_requires_resolver(self):
        with pytest.raises(RegistryError):
            ResolverRegistry().register("text", str)

    def test_alias_conflict(self):
        registry = ResolverRegistry()
        registry.register("rust", RustModelResolver, aliases=["rs"])
        with pytest.raises(RegistryError, match="already points"):
            registry.register("other", RustModelResolver, aliases=["rs"])

    def test_resolve_document_with_overrides(self, petstore):
        result = resolve_document(petstore, "rs", {"model_name_prefix": "api"})
        assert result.models["Pet"].type_name.value == "ApiPet"
