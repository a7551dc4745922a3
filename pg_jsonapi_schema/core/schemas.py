"""Pydantic models for type-safe data validation and parsing."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ColumnDescriptor(BaseModel):
    """A single column as reported by the introspection collaborator."""

    name: str = Field(..., min_length=1, description="Column name")
    native_type: str = Field(..., min_length=1, description="Database type name")
    length: int | None = Field(None, ge=0, description="Length or precision")
    array_dimension: int = Field(0, ge=0, description="Number of array dimensions")
    not_null: bool = Field(False, description="Whether NULL is rejected")
    default_value: Any = Field(None, description="Parsed column default")

    @property
    def is_array(self) -> bool:
        return self.array_dimension > 0

    @property
    def is_nullable_without_default(self) -> bool:
        """True when the column may be NULL and nothing fills it in."""
        return not self.not_null and self.default_value is None


class EntityDescriptor(BaseModel):
    """A table, view or materialized view with its ordered columns."""

    name: str = Field(..., min_length=1, description="Entity name")
    schema_name: str = Field(..., min_length=1, description="Owning schema")
    columns: list[ColumnDescriptor] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_columns(self) -> EntityDescriptor:
        """Reject entities that report the same column twice."""
        seen: set[str] = set()
        for column in self.columns:
            if column.name in seen:
                raise ValueError(
                    f"Duplicate column '{column.name}' in entity '{self.name}'"
                )
            seen.add(column.name)
        return self


class SchemaDescriptor(BaseModel):
    """All entities exposed by one database schema (namespace)."""

    name: str = Field(..., min_length=1, description="Schema name")
    tables: list[EntityDescriptor] = Field(default_factory=list)
    views: list[EntityDescriptor] = Field(default_factory=list)
    materialized_views: list[EntityDescriptor] = Field(default_factory=list)


class SchemaFragment(BaseModel):
    """JSON Schema constraints describing one column.

    Only explicitly assigned fields are serialized, so ``default=None`` is
    emitted as ``null`` while untouched fields are left out entirely.
    """

    model_config = ConfigDict(populate_by_name=True)

    type: str | list[str] | None = None
    description: str | None = None
    format: str | None = None
    max_length: int | None = Field(None, alias="maxLength")
    properties: dict[str, SchemaFragment] | None = None
    items: SchemaFragment | None = None
    one_of: list[SchemaFragment] | None = Field(None, alias="oneOf")
    default: Any = None

    def to_schema(self) -> dict[str, Any]:
        """Return the JSON Schema dictionary for this fragment."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class DefaultOverlay(BaseModel):
    """Default value (and companion constraints) layered over a fragment."""

    model_config = ConfigDict(populate_by_name=True)

    default: Any = None
    max_length: int | None = Field(None, alias="maxLength")

    def to_schema(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)


class EntityArtifacts(BaseModel):
    """Everything generated for a single entity."""

    entity_name: str
    schema_name: str
    entity_schema: dict[str, Any]
    api_schema: dict[str, Any]
    list_api_schema: dict[str, Any]
    api_hash_literal: str
    list_hash_literal: str


class ValidationResult(BaseModel):
    """Result of schema validation with type safety."""

    is_valid: bool = Field(..., description="Whether the schema passed validation")
    errors: list[str] = Field(
        default_factory=list, description="Validation error messages"
    )
    warnings: list[str] = Field(
        default_factory=list, description="Validation warning messages"
    )

    def add_error(self, message: str) -> None:
        """Add an error message to the validation result."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        """Add a warning message to the validation result."""
        self.warnings.append(message)


class ResourceEnvelopes(BaseModel):
    """Single-resource and collection JSON:API envelopes of one entity."""

    single: dict[str, Any]
    collection: dict[str, Any]
