from pg_jsonapi_schema.core.schemas import ValidationResult
from pg_jsonapi_schema.validation.schema_validator import SchemaValidator


def test_valid_schema():
    schema = {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "$id": "people.json",
        "title": "people",
        "type": "object",
        "required": ["id"],
        "properties": {
            "id": {"type": "number"},
            "tags": {"type": "array", "items": {"type": ["string", "null"]}},
        },
    }
    validator = SchemaValidator()
    result: ValidationResult = validator.validate_schema(schema)
    assert result.is_valid
    assert not result.errors
    assert not result.warnings


def test_missing_properties():
    schema = {"type": "object"}
    validator = SchemaValidator()
    result: ValidationResult = validator.validate_schema(schema)
    assert not result.is_valid
    assert "Missing 'properties' field" in result.errors[0]


def test_required_property_must_be_declared():
    schema = {
        "type": "object",
        "properties": {
            "data": {
                "type": "array",
                "items": [
                    {"type": "object", "required": ["id"], "properties": {}},
                ],
            }
        },
    }
    result = SchemaValidator().validate_schema(schema)
    assert not result.is_valid
    assert result.errors == [
        "Required property 'id' is not declared at data.items[0]"
    ]


def test_invalid_json_schema():
    result = SchemaValidator().validate_schema({"type": "object", "properties": 5})
    assert not result.is_valid
    assert result.errors[0].startswith("JSON Schema validation failed")


def test_missing_metadata_warnings():
    result = SchemaValidator().validate_schema({"type": "object", "properties": {}})
    assert result.is_valid
    assert len(result.warnings) == 3
