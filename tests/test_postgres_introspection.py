"""Tests for PostgreSQL catalog introspection."""

from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from pg_jsonapi_schema.core.config import Config
from pg_jsonapi_schema.core.exceptions import IntrospectionError
from pg_jsonapi_schema.introspection.postgres import (
    PostgresEntitySource,
    parse_default_expression,
)


def catalog_row(entity_name, column_name, type_name, kind="r", **overrides):
    row = {
        "entity_name": entity_name,
        "entity_kind": kind,
        "column_name": column_name,
        "type_name": type_name,
        "array_dimension": 0,
        "length": None,
        "not_null": False,
        "default_expression": None,
    }
    row.update(overrides)
    return row


@pytest.fixture
def rows():
    return [
        catalog_row("public_projections", "id", "integer", not_null=True),
        catalog_row(
            "public_projections",
            "code",
            "character varying",
            length=12,
            default_expression="'abc'::character varying",
        ),
        catalog_row("public_projections", "status", "integer", default_expression="0"),
        catalog_row("active_projections", "id", "integer", kind="v"),
        catalog_row("projection_totals", "tags", "text", kind="m", array_dimension=1),
    ]


def mock_engine(rows, schema_exists=True):
    engine = MagicMock()
    connection = engine.connect.return_value.__enter__.return_value
    exists = MagicMock()
    exists.first.return_value = (1,) if schema_exists else None
    columns = MagicMock()
    columns.mappings.return_value.all.return_value = rows
    connection.execute.side_effect = [exists, columns]
    return engine


@pytest.mark.parametrize(
    "expression,expected",
    [
        (None, None),
        ("NULL::character varying", None),
        ("true", True),
        ("false", False),
        ("0", 0),
        ("'1.5'::numeric", 1.5),
        ("'42'::bigint", 42),
        ("(-1)", -1),
        ("2.5", 2.5),
        ("'abc'::character varying", "abc"),
        ("'it''s'::text", "it's"),
        ("'{}'::jsonb", "{}"),
        ("'1 day'::interval", "1 day"),
        ("now()", "now()"),
        (
            "nextval('projections_id_seq'::regclass)",
            "nextval('projections_id_seq'::regclass)",
        ),
        ("'{a,b}'::text[]", "{a,b}"),
    ],
)
def test_parse_default_expression(expression, expected):
    assert parse_default_expression(expression) == expected


class TestPostgresEntitySource:
    """Test suite for PostgresEntitySource class."""

    def test_build_schema_groups_entities_by_kind(self, rows):
        schema = PostgresEntitySource(MagicMock()).build_schema("public", rows)

        assert [e.name for e in schema.tables] == ["public_projections"]
        assert [e.name for e in schema.views] == ["active_projections"]
        assert [e.name for e in schema.materialized_views] == ["projection_totals"]

    def test_build_schema_keeps_column_order_and_metadata(self, rows):
        schema = PostgresEntitySource(MagicMock()).build_schema("public", rows)

        table = schema.tables[0]
        assert table.schema_name == "public"
        assert [c.name for c in table.columns] == ["id", "code", "status"]
        id_column, code, status = table.columns
        assert id_column.not_null is True
        assert code.length == 12
        assert code.default_value == "abc"
        assert status.default_value == 0
        assert schema.materialized_views[0].columns[0].array_dimension == 1

    def test_get_schema_queries_the_catalog(self, rows):
        engine = mock_engine(rows)

        schema = PostgresEntitySource(engine).get_schema("public")

        assert schema.name == "public"
        assert len(schema.tables) == 1
        connection = engine.connect.return_value.__enter__.return_value
        for call in connection.execute.call_args_list:
            assert call.args[1] == {"schema_name": "public"}

    def test_missing_schema_raises(self):
        engine = mock_engine([], schema_exists=False)

        with pytest.raises(IntrospectionError, match="schema does not exist"):
            PostgresEntitySource(engine).get_schema("nope")

    def test_driver_errors_propagate_unchanged(self):
        engine = MagicMock()
        error = OperationalError("SELECT 1", {}, Exception("connection refused"))
        engine.connect.side_effect = error

        with pytest.raises(OperationalError) as exc_info:
            PostgresEntitySource(engine).get_schema("public")

        assert exc_info.value is error

    def test_from_config_builds_psycopg2_url(self):
        settings = Config(
            _env_file=None,
            pg_host="db",
            pg_port=5433,
            pg_database="app",
            pg_user="reader",
            pg_password="secret",
        )

        with patch(
            "pg_jsonapi_schema.introspection.postgres.create_engine"
        ) as create_engine:
            source = PostgresEntitySource.from_config(settings)

        url = create_engine.call_args.args[0]
        assert url.drivername == "postgresql+psycopg2"
        assert (url.host, url.port, url.database) == ("db", 5433, "app")
        assert url.username == "reader"
        assert url.password == "secret"
        assert source.engine is create_engine.return_value
