"""Tests for native type to JSON Schema fragment mapping."""

import logging
from unittest.mock import Mock

import pytest

from pg_jsonapi_schema.conversion.type_mapper import (
    NATIVE_TYPE_CLASSES,
    TypeClass,
    TypeMapper,
    classify,
)
from conftest import make_column


@pytest.fixture
def mapper():
    return TypeMapper()


class TestTypeMapper:
    """Test suite for TypeMapper class."""

    def test_nullable_integer_without_default_is_null_union(self, mapper):
        column = make_column("age", "integer")

        fragment = mapper.map_column_type(column).to_schema()

        assert fragment == {"type": ["number", "null"]}

    def test_numeric_length_becomes_max_length(self, mapper):
        column = make_column("price", "numeric", length=10, not_null=True)

        assert mapper.map_column_type(column).to_schema() == {
            "type": "number",
            "maxLength": 10,
        }

    def test_column_with_default_is_not_null_union(self, mapper):
        column = make_column("active", "boolean", default_value=True)

        assert mapper.map_column_type(column).to_schema() == {"type": "boolean"}

    @pytest.mark.parametrize("native_type", sorted(NATIVE_TYPE_CLASSES))
    def test_not_null_never_produces_null_union(self, mapper, native_type):
        column = make_column("value", native_type, not_null=True)

        fragment = mapper.map_column_type(column).to_schema()

        assert not isinstance(fragment.get("type"), list)

    @pytest.mark.parametrize(
        "native_type,expected",
        [
            ("text", {"type": "string", "maxLength": 40}),
            ("character varying", {"type": "string", "maxLength": 40}),
            ("uuid", {"type": "string", "format": "uuid", "maxLength": 40}),
            ("date", {"type": "string", "format": "date"}),
            ("time with time zone", {"type": "string", "format": "time"}),
            ("timestamp", {"type": "string", "format": "date-time"}),
            ("boolean", {"type": "boolean"}),
            ("double precision", {"type": "number", "maxLength": 40}),
            ("jsonb", {"type": "object", "properties": {}}),
        ],
    )
    def test_classification_table(self, mapper, native_type, expected):
        column = make_column("value", native_type, length=40, not_null=True)

        assert mapper.map_column_type(column).to_schema() == expected

    def test_interval_emits_three_way_one_of(self, mapper):
        column = make_column("duration", "interval")

        fragment = mapper.map_column_type(column).to_schema()

        assert "type" not in fragment
        seconds, descriptive, structured = fragment["oneOf"]
        assert seconds["type"] == "number"
        assert descriptive["type"] == "string"
        assert structured["type"] == "object"
        assert list(structured["properties"]) == [
            "years",
            "months",
            "days",
            "hours",
            "minutes",
            "seconds",
            "milliseconds",
        ]
        assert all(p == {"type": "integer"} for p in structured["properties"].values())

    def test_array_wraps_nullable_inner_fragment(self, mapper):
        column = make_column("tags", "text", array_dimension=1)

        fragment = mapper.map_column_type(column).to_schema()

        assert fragment == {"type": "array", "items": {"type": ["string", "null"]}}

    @pytest.mark.parametrize("native_type", ["integer", "uuid", "interval", "tsvector"])
    def test_array_items_match_scalar_fragment(self, mapper, native_type):
        scalar = make_column("value", native_type, length=16)
        array = make_column("value", native_type, length=16, array_dimension=2)

        assert mapper.map_column_type(array).to_schema() == {
            "type": "array",
            "items": mapper.map_column_type(scalar).to_schema(),
        }

    def test_unknown_type_maps_to_null_and_warns(self):
        diagnostics = Mock(spec=logging.Logger)
        mapper = TypeMapper(diagnostics)

        fragment = mapper.map_column_type(make_column("search", "tsvector"))

        assert fragment.to_schema() == {"type": "null"}
        diagnostics.warning.assert_called_once()
        assert "tsvector" in diagnostics.warning.call_args.args

    def test_unknown_type_warning_reaches_logger(self, mapper, caplog):
        with caplog.at_level(logging.WARNING, logger="SchemaConverter"):
            mapper.map_column_type(make_column("geom", "geometry"))

        assert "Unsupported column type: geometry" in caplog.text


def test_classify_unknown_type():
    assert classify("money") is TypeClass.UNKNOWN
    assert classify("float8") is TypeClass.NUMERIC
