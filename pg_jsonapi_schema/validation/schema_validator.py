"""Schema validation against JSON Schema standards."""

from __future__ import annotations

from typing import Any

import jsonschema
from jsonschema import Draft7Validator

from pg_jsonapi_schema.core.config import config
from pg_jsonapi_schema.core.schemas import ValidationResult


class SchemaValidator:
    """Validates generated schemas against JSON Schema standards.

    This validator checks that generated schemas conform to JSON Schema Draft 7
    and that every object schema only requires properties it declares.
    """

    def validate_schema(self, schema: dict[str, Any]) -> ValidationResult:
        """Validate a schema against JSON Schema Draft 7 standard.

        Args:
            schema: Schema to validate

        Returns:
            ValidationResult with validation status and any errors/warnings
        """
        result = ValidationResult(is_valid=True)

        try:
            Draft7Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            result.add_error(f"JSON Schema validation failed: {e.message}")

        self._validate_required_fields(schema, result, "")
        self._validate_schema_structure(schema, result)

        return result

    def _validate_required_fields(
        self, schema: Any, result: ValidationResult, path: str
    ) -> None:
        """Recursively check that required names are declared properties.

        Args:
            schema: Schema (or sub-schema) to check
            result: Result to record errors on
            path: Current path in the schema tree for error reporting
        """
        if isinstance(schema, list):
            for i, item in enumerate(schema):
                self._validate_required_fields(item, result, f"{path}[{i}]")
            return
        if not isinstance(schema, dict):
            return

        if schema.get("type") == "object" and "properties" not in schema:
            result.add_error(
                f"Missing 'properties' field at {path or 'root'} - "
                "object type schemas should have properties"
            )

        properties = schema.get("properties")
        if isinstance(properties, dict):
            for name in schema.get("required", []):
                if name not in properties:
                    result.add_error(
                        f"Required property '{name}' is not declared at {path or 'root'}"
                    )
            for name, sub_schema in properties.items():
                self._validate_required_fields(
                    sub_schema, result, f"{path}.{name}" if path else name
                )

        for key in ("items", "oneOf"):
            if key in schema:
                self._validate_required_fields(
                    schema[key], result, f"{path}.{key}" if path else key
                )

    def _validate_schema_structure(
        self, schema: dict[str, Any], result: ValidationResult
    ) -> None:
        """Check for recommended top-level fields."""
        if config.json_schema_fields.schema_field not in schema:
            result.add_warning(
                "Missing '$schema' field - recommended for schema validation"
            )

        if config.json_schema_fields.id_field not in schema:
            result.add_warning(
                "Missing '$id' field - recommended for schema identification"
            )

        if config.json_schema_fields.title_field not in schema:
            result.add_warning("Missing 'title' field - recommended for documentation")
