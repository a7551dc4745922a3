"""Shared test fixtures."""

# Keep connection settings from a developer shell out of the tests
import os  # noqa: E402

for _name in (
    "PG_HOST",
    "PG_DATABASE",
    "PG_USER",
    "PG_PASSWORD",
    "OUTPUT_DIR",
    "LOGGER_NAME",
    "LOG_LEVEL",
):
    os.environ.pop(_name, None)

from typing import Any

import pytest

from pg_jsonapi_schema.core.config import Config
from pg_jsonapi_schema.core.schemas import (
    ColumnDescriptor,
    EntityDescriptor,
    SchemaDescriptor,
)


def make_column(name: str = "value", native_type: str = "text", **kwargs: Any):
    """Build a column descriptor with permissive defaults."""
    return ColumnDescriptor(name=name, native_type=native_type, **kwargs)


class FakeEntitySource:
    """In-memory stand-in for the database introspection collaborator."""

    def __init__(self, *schemas: SchemaDescriptor) -> None:
        self.schemas = {schema.name: schema for schema in schemas}
        self.requested: list[str] = []

    def get_schema(self, schema_name: str) -> SchemaDescriptor:
        self.requested.append(schema_name)
        return self.schemas[schema_name]


@pytest.fixture
def projections_entity() -> EntityDescriptor:
    """A trimmed-down projections table."""
    return EntityDescriptor(
        name="public_projections",
        schema_name="public",
        columns=[
            make_column("id", "integer", not_null=True),
            make_column("description", "text"),
            make_column("created_at", "timestamp without time zone", not_null=True),
            make_column("is_promo", "boolean", default_value=True),
            make_column("status", "integer", default_value=0),
        ],
    )


@pytest.fixture
def public_schema(projections_entity) -> SchemaDescriptor:
    """A schema with a table, a view and a materialized view."""
    return SchemaDescriptor(
        name="public",
        tables=[
            projections_entity,
            EntityDescriptor(
                name="children",
                schema_name="public",
                columns=[
                    make_column("id", "uuid", not_null=True),
                    make_column("name", "character varying", length=80),
                ],
            ),
        ],
        views=[
            EntityDescriptor(
                name="active_leagues",
                schema_name="public",
                columns=[
                    make_column("id", "bigint"),
                    make_column("tags", "text", array_dimension=1),
                ],
            )
        ],
        materialized_views=[
            EntityDescriptor(
                name="league_stats",
                schema_name="public",
                columns=[make_column("search", "tsvector")],
            )
        ],
    )


@pytest.fixture
def entity_source(public_schema) -> FakeEntitySource:
    return FakeEntitySource(public_schema)


@pytest.fixture
def settings() -> Config:
    """Settings that never touch the environment file or the disk."""
    return Config(
        _env_file=None,
        input_schemas=["public"],
        default_description="Generated for tests",
        base_url="https://test.example.com/schemas/",
    )
