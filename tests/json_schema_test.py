"""Unit tests for the JSON profile to JSON Schema converter."""

import pytest
from jsonschema import Draft7Validator, Draft202012Validator

from converter.dom import parse_document
from converter.errors import ProfileStructureError
from converter.json_schema import JsonSchemaTransformer, find_root_object


def test_named_root_object_is_referenced_from_definitions(json_profile) -> None:
    schema = JsonSchemaTransformer().convert(json_profile)
    assert schema["$schema"] == "http://json-schema.org/draft-07/schema#"
    assert schema["$ref"] == "#/definitions/Customer"
    customer = schema["definitions"]["Customer"]
    assert customer["type"] == "object"
    assert customer["required"] == ["name"]
    assert customer["properties"]["name"] == {"type": "string"}
    assert customer["properties"]["age"] == {"type": "number"}
    assert customer["properties"]["active"] == {"type": "boolean"}


def test_nested_objects_and_arrays(json_profile) -> None:
    properties = JsonSchemaTransformer().convert(json_profile)["definitions"]["Customer"]["properties"]
    assert properties["address"] == {
        "type": "object",
        "properties": {"city": {"type": "string"}},
        "required": ["city"],
    }
    assert properties["tags"] == {"type": "array", "items": {"type": "string"}}
    assert properties["orders"] == {
        "type": "array",
        "items": {"type": "object", "properties": {"total": {"type": "number"}}},
    }


def test_newer_drafts_use_defs(json_profile) -> None:
    schema = JsonSchemaTransformer("draft-2020-12").convert(json_profile)
    assert schema["$schema"] == "https://json-schema.org/draft/2020-12/schema"
    assert schema["$ref"] == "#/$defs/Customer"
    assert "Customer" in schema["$defs"]
    Draft202012Validator.check_schema(schema)


def test_generated_schema_validates_documents(json_profile) -> None:
    schema = JsonSchemaTransformer().convert(json_profile)
    Draft7Validator.check_schema(schema)
    validator = Draft7Validator(schema)
    assert validator.is_valid({"name": "Ada", "age": 36, "tags": ["a"], "orders": [{"total": 1.5}]})
    assert not validator.is_valid({"age": 36})
    assert not validator.is_valid({"name": "Ada", "active": "yes"})


def test_unnamed_root_object_is_inlined() -> None:
    profile = parse_document(
        '<JSONProfile><JSONObject><JSONObjectEntry name="id" type="integer"/></JSONObject></JSONProfile>'
    )
    schema = JsonSchemaTransformer().convert(profile)
    assert schema == {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "properties": {"id": {"type": "number"}},
    }


def test_array_element_describes_items() -> None:
    profile = parse_document(
        '<JSONProfile><JSONObject>'
        '<JSONObjectEntry name="scores"><JSONArray><JSONArrayElement dataType="number"/></JSONArray></JSONObjectEntry>'
        '</JSONObject></JSONProfile>'
    )
    properties = JsonSchemaTransformer().convert(profile)["properties"]
    assert properties["scores"] == {"type": "array", "items": {"type": "number"}}


def test_profile_without_object() -> None:
    schema = JsonSchemaTransformer().convert(parse_document("<JSONProfile><DataElements/></JSONProfile>"))
    assert schema == {"$schema": "http://json-schema.org/draft-07/schema#"}


def test_find_root_object_ignores_deeper_objects() -> None:
    profile = parse_document("<JSONProfile><Other><JSONObject/></Other></JSONProfile>")
    assert find_root_object(profile) is None


def test_missing_json_profile_is_fatal() -> None:
    with pytest.raises(ProfileStructureError, match="<JSONProfile> not found"):
        JsonSchemaTransformer().convert(parse_document("<XMLProfile/>"))


def test_unknown_version() -> None:
    with pytest.raises(ValueError, match="Unknown JSON schema version"):
        JsonSchemaTransformer("draft-03")
