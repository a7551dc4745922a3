"""Translation of native column types into JSON Schema fragments."""

from __future__ import annotations

import logging
from enum import Enum

from pg_jsonapi_schema.core.schemas import ColumnDescriptor, SchemaFragment
from pg_jsonapi_schema.logger import logger


class TypeClass(Enum):
    """Families of native types that share one JSON Schema shape."""

    STRING = "string"
    UUID = "uuid"
    DATE = "date"
    TIME = "time"
    TIMESTAMP = "timestamp"
    BOOLEAN = "boolean"
    NUMERIC = "numeric"
    JSON = "json"
    INTERVAL = "interval"
    UNKNOWN = "unknown"


NATIVE_TYPE_CLASSES: dict[str, TypeClass] = {
    "bit": TypeClass.STRING,
    "bit varying": TypeClass.STRING,
    "varbit": TypeClass.STRING,
    "character": TypeClass.STRING,
    "character varying": TypeClass.STRING,
    "text": TypeClass.STRING,
    "uuid": TypeClass.UUID,
    "date": TypeClass.DATE,
    "time": TypeClass.TIME,
    "time with time zone": TypeClass.TIME,
    "time without time zone": TypeClass.TIME,
    "timestamp": TypeClass.TIMESTAMP,
    "timestamp with time zone": TypeClass.TIMESTAMP,
    "timestamp without time zone": TypeClass.TIMESTAMP,
    "boolean": TypeClass.BOOLEAN,
    "bigint": TypeClass.NUMERIC,
    "decimal": TypeClass.NUMERIC,
    "double precision": TypeClass.NUMERIC,
    "float8": TypeClass.NUMERIC,
    "int": TypeClass.NUMERIC,
    "integer": TypeClass.NUMERIC,
    "numeric": TypeClass.NUMERIC,
    "real": TypeClass.NUMERIC,
    "smallint": TypeClass.NUMERIC,
    "json": TypeClass.JSON,
    "jsonb": TypeClass.JSON,
    "interval": TypeClass.INTERVAL,
}

DURATION_FIELDS = (
    "years",
    "months",
    "days",
    "hours",
    "minutes",
    "seconds",
    "milliseconds",
)


def classify(native_type: str) -> TypeClass:
    """Look up the type family of a native type name."""
    return NATIVE_TYPE_CLASSES.get(native_type, TypeClass.UNKNOWN)


class TypeMapper:
    """Maps a column descriptor to the JSON Schema fragment for its values.

    Unknown native types degrade to ``{"type": "null"}`` and are reported
    through the injected logger instead of failing the conversion.
    """

    def __init__(self, diagnostics: logging.Logger = logger) -> None:
        """Initialize the type mapper.

        Args:
            diagnostics: Logger receiving unsupported type warnings
        """
        self.diagnostics = diagnostics

    def map_column_type(self, column: ColumnDescriptor) -> SchemaFragment:
        """Compute the schema fragment for a column.

        Nullability is applied to the base fragment first; arrays then wrap
        the result, so ``NULL`` elements are allowed rather than ``NULL``
        arrays.

        Args:
            column: Column to convert

        Returns:
            Fragment describing the column values
        """
        type_class = classify(column.native_type)
        if type_class is TypeClass.UNKNOWN:
            self.diagnostics.warning(
                "Unsupported column type: %s. Defaulting to null",
                column.native_type,
            )
            fragment = SchemaFragment(type="null")
        else:
            fragment = self._apply_nullability(
                self.base_fragment(type_class, column), column
            )

        if column.is_array:
            return SchemaFragment(type="array", items=fragment)
        return fragment

    def base_fragment(
        self, type_class: TypeClass, column: ColumnDescriptor
    ) -> SchemaFragment:
        """Build the fragment for a type family, ignoring nullability and arrays."""
        length = {} if column.length is None else {"max_length": column.length}

        match type_class:
            case TypeClass.STRING:
                return SchemaFragment(type="string", **length)
            case TypeClass.UUID:
                return SchemaFragment(type="string", format="uuid", **length)
            case TypeClass.DATE:
                return SchemaFragment(type="string", format="date")
            case TypeClass.TIME:
                return SchemaFragment(type="string", format="time")
            case TypeClass.TIMESTAMP:
                return SchemaFragment(type="string", format="date-time")
            case TypeClass.BOOLEAN:
                return SchemaFragment(type="boolean")
            case TypeClass.NUMERIC:
                # maxLength carries the numeric precision here
                return SchemaFragment(type="number", **length)
            case TypeClass.JSON:
                return SchemaFragment(type="object", properties={})
            case TypeClass.INTERVAL:
                return self._interval_fragment()
            case TypeClass.UNKNOWN:
                return SchemaFragment(type="null")

    def _interval_fragment(self) -> SchemaFragment:
        duration = SchemaFragment(
            type="object",
            description="Duration object",
            properties={
                field: SchemaFragment(type="integer") for field in DURATION_FIELDS
            },
        )
        return SchemaFragment(
            one_of=[
                SchemaFragment(type="number", description="Duration in seconds"),
                SchemaFragment(
                    type="string", description="Descriptive duration i.e. 8 hours"
                ),
                duration,
            ]
        )

    def _apply_nullability(
        self, fragment: SchemaFragment, column: ColumnDescriptor
    ) -> SchemaFragment:
        # oneOf fragments carry no single type to widen
        if not isinstance(fragment.type, str) or fragment.type == "null":
            return fragment
        if column.is_nullable_without_default:
            return fragment.model_copy(update={"type": [fragment.type, "null"]})
        return fragment
