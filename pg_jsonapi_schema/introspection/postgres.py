"""PostgreSQL catalog introspection."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import URL, Engine, create_engine, text

from pg_jsonapi_schema.core.config import Config, config
from pg_jsonapi_schema.core.exceptions import IntrospectionError
from pg_jsonapi_schema.core.schemas import (
    ColumnDescriptor,
    EntityDescriptor,
    SchemaDescriptor,
)
from pg_jsonapi_schema.logger import logger

SCHEMA_EXISTS_QUERY = """
    SELECT 1
    FROM pg_catalog.pg_namespace
    WHERE nspname = :schema_name
"""

# typmod -1 makes format_type return SQL standard names ("character", not "bpchar")
COLUMNS_QUERY = """
    WITH cols AS (
        SELECT
            c.relname AS entity_name,
            c.relkind AS entity_kind,
            a.attnum,
            a.attname AS column_name,
            CASE WHEN t.typcategory = 'A' THEN t.typelem ELSE a.atttypid END
                AS base_type_oid,
            CASE WHEN t.typcategory = 'A' THEN GREATEST(a.attndims, 1) ELSE 0 END
                AS array_dimension,
            a.atttypmod,
            a.attnotnull AS not_null,
            pg_catalog.pg_get_expr(d.adbin, d.adrelid) AS default_expression
        FROM pg_catalog.pg_class c
        JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace
        JOIN pg_catalog.pg_attribute a
            ON a.attrelid = c.oid AND a.attnum > 0 AND NOT a.attisdropped
        JOIN pg_catalog.pg_type t ON t.oid = a.atttypid
        LEFT JOIN pg_catalog.pg_attrdef d
            ON d.adrelid = c.oid AND d.adnum = a.attnum
        WHERE n.nspname = :schema_name
            AND c.relkind IN ('r', 'p', 'v', 'm')
    )
    SELECT
        entity_name,
        entity_kind,
        column_name,
        pg_catalog.format_type(base_type_oid, -1) AS type_name,
        array_dimension,
        CASE
            WHEN atttypmod < 0 THEN NULL
            WHEN base_type_oid IN (1042, 1043) THEN atttypmod - 4
            WHEN base_type_oid IN (1560, 1562) THEN atttypmod
            WHEN base_type_oid = 1700 THEN ((atttypmod - 4) >> 16) & 65535
        END AS length,
        not_null,
        default_expression
    FROM cols
    ORDER BY entity_name, attnum
"""

TABLE_KINDS = frozenset({"r", "p"})
VIEW_KINDS = frozenset({"v"})
MATERIALIZED_VIEW_KINDS = frozenset({"m"})

TRAILING_CAST = re.compile(r"::[\w\s\".\[\]]+(\([\d,\s]+\))?(\[\])*$")
NUMBER_LITERAL = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
PARENTHESIZED_NUMBER = re.compile(r"^\(\s*([^()]+?)\s*\)$")
STRING_LITERAL = re.compile(r"^'((?:[^']|'')*)'$")


def parse_default_expression(expression: str | None) -> Any:
    """Turn a ``pg_get_expr`` default into a plain value.

    Literals lose their casts and become ``None``, booleans, numbers or
    strings; quoted numeric literals such as ``'1.5'::numeric`` become
    numbers. Anything else, such as ``now()`` or ``nextval(...)``, is
    returned as the raw expression text.

    Args:
        expression: Default expression, or ``None`` when the column has none

    Returns:
        Parsed default value
    """
    if expression is None:
        return None

    raw = expression.strip()
    value = raw
    while True:
        stripped = TRAILING_CAST.sub("", value).strip()
        if stripped == value:
            break
        value = stripped

    parenthesized = PARENTHESIZED_NUMBER.match(value)
    if parenthesized and NUMBER_LITERAL.match(parenthesized.group(1)):
        value = parenthesized.group(1)

    if value.upper() == "NULL":
        return None
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if NUMBER_LITERAL.match(value):
        return _parse_number(value)

    literal = STRING_LITERAL.match(value)
    if literal:
        text_value = literal.group(1).replace("''", "'")
        if NUMBER_LITERAL.match(text_value):
            return _parse_number(text_value)
        return text_value

    return raw


def _parse_number(value: str) -> int | float:
    try:
        return int(value)
    except ValueError:
        return float(value)


class PostgresEntitySource:
    """Reads tables, views and materialized views from the PostgreSQL catalog.

    Errors raised by SQLAlchemy or the driver are propagated unchanged.
    """

    def __init__(self, engine: Engine) -> None:
        """Initialize the entity source.

        Args:
            engine: SQLAlchemy engine connected to the database
        """
        self.engine = engine

    @classmethod
    def from_config(cls, settings: Config = config) -> PostgresEntitySource:
        """Create an entity source from connection settings."""
        url = URL.create(
            "postgresql+psycopg2",
            username=settings.pg_user,
            password=settings.pg_password,
            host=settings.pg_host,
            port=settings.pg_port,
            database=settings.pg_database,
        )
        return cls(create_engine(url))

    def get_schema(self, schema_name: str) -> SchemaDescriptor:
        """Introspect every entity in a schema.

        Args:
            schema_name: Name of the database schema

        Returns:
            Entities grouped by kind, each with ordered columns

        Raises:
            IntrospectionError: If the schema does not exist
        """
        params = {"schema_name": schema_name}
        with self.engine.connect() as connection:
            if connection.execute(text(SCHEMA_EXISTS_QUERY), params).first() is None:
                raise IntrospectionError(schema_name, "schema does not exist")
            rows = connection.execute(text(COLUMNS_QUERY), params).mappings().all()

        logger.debug("Read %d column(s) from schema %s", len(rows), schema_name)
        return self.build_schema(schema_name, rows)

    def build_schema(
        self, schema_name: str, rows: Iterable[Mapping[str, Any]]
    ) -> SchemaDescriptor:
        """Group catalog rows into a schema descriptor."""
        columns: dict[str, list[ColumnDescriptor]] = {}
        kinds: dict[str, str] = {}

        for row in rows:
            entity_name = row["entity_name"]
            kinds[entity_name] = row["entity_kind"]
            columns.setdefault(entity_name, []).append(
                ColumnDescriptor(
                    name=row["column_name"],
                    native_type=row["type_name"],
                    length=row["length"],
                    array_dimension=row["array_dimension"],
                    not_null=row["not_null"],
                    default_value=parse_default_expression(row["default_expression"]),
                )
            )

        schema = SchemaDescriptor(name=schema_name)
        for entity_name, entity_columns in columns.items():
            entity = EntityDescriptor(
                name=entity_name, schema_name=schema_name, columns=entity_columns
            )
            kind = kinds[entity_name]
            if kind in TABLE_KINDS:
                schema.tables.append(entity)
            elif kind in VIEW_KINDS:
                schema.views.append(entity)
            elif kind in MATERIALIZED_VIEW_KINDS:
                schema.materialized_views.append(entity)

        return schema
