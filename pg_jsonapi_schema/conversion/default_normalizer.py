"""Normalization of database column defaults into schema defaults."""

from __future__ import annotations

import math
from typing import Any

from pg_jsonapi_schema.conversion.type_mapper import TypeClass, classify
from pg_jsonapi_schema.core.schemas import ColumnDescriptor, DefaultOverlay

TRUE_LITERALS = frozenset({"true", "t", "yes", "y", "on", "1"})
FALSE_LITERALS = frozenset({"false", "f", "no", "n", "off", "0", ""})


def coerce_boolean(value: Any) -> bool:
    """Interpret a default as a strict boolean."""
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_LITERALS:
            return True
        if text in FALSE_LITERALS:
            return False
    return bool(value)


def coerce_number(value: Any) -> int | float | None:
    """Interpret a default as a number, or ``None`` when it is not one."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        try:
            return int(value)
        except ValueError:
            pass
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class DefaultNormalizer:
    """Derives the schema ``default`` of a column from its database default.

    Only booleans and numbers are coerced. Other default expressions are not
    portable across clients and are reported as ``null``.
    """

    def normalize_default(self, column: ColumnDescriptor) -> DefaultOverlay:
        """Compute the default overlay for a column.

        Args:
            column: Column whose default to normalize

        Returns:
            Overlay with ``default`` and, for opaque defaults, ``maxLength``
        """
        # required columns never carry a schema default
        if column.not_null:
            return DefaultOverlay()

        value = column.default_value
        if value is None:
            return DefaultOverlay(default=None)

        match classify(column.native_type):
            case TypeClass.JSON | TypeClass.INTERVAL:
                if column.length is None:
                    return DefaultOverlay(default=value)
                return DefaultOverlay(default=value, max_length=column.length)
            case TypeClass.BOOLEAN:
                return DefaultOverlay(default=coerce_boolean(value))
            case TypeClass.NUMERIC:
                return DefaultOverlay(default=coerce_number(value))
            case _:
                return DefaultOverlay(default=None)
