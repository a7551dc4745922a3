"""Rendering of JSON-like values as Ruby hash literals.

The output is consumed by request-spec tooling that expects symbol keys,
symbol values and ``%w[]`` word lists.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from typing import Any, TypeAlias

from pg_jsonapi_schema.core.config import config

JSONLike: TypeAlias = (
    "None | bool | int | float | str | list[JSONLike] | dict[str, JSONLike]"
)

DOUBLE_QUOTED = re.compile(r'"([^"]+)"')

# Strings rendered as quoted literals instead of symbols
QUOTED_STRINGS = frozenset({"date-time"})


class HashLiteralSerializer:
    """Serializes resource envelopes into hash-literal text."""

    def __init__(
        self,
        indent_size: int = config.indent_spaces,
        excluded_keys: Iterable[str] = config.hash_literal_excluded_keys,
    ) -> None:
        """Initialize the serializer.

        Args:
            indent_size: Spaces per indentation level
            excluded_keys: Keys never rendered (schema metadata)
        """
        self.indent_size = indent_size
        self.excluded_keys = frozenset(excluded_keys)

    def to_hash_literal(self, value: JSONLike, indent_level: int = 1) -> str:
        """Render a value, typically a single-resource envelope.

        Args:
            value: JSON-like value to render
            indent_level: Nesting level of the value's own members

        Returns:
            Hash-literal text
        """
        match value:
            case dict():
                return self._render_map(value, indent_level)
            case _:
                return self._format_value(value, indent_level)

    def to_hash_literal_list(
        self, envelope: dict[str, Any], indent_level: int = 1
    ) -> str:
        """Render a collection envelope from its ``data.items`` template.

        Args:
            envelope: Collection envelope as built by ResourceEnvelopeBuilder
            indent_level: Nesting level of the envelope's own members

        Returns:
            Hash-literal text of the collection schema
        """
        items = envelope["properties"]["data"]["items"]
        template = items[0] if isinstance(items, list) else items
        rendered = self._render_map(template, indent_level + 3)

        def pad(depth: int) -> str:
            return self._indent(indent_level - 1 + depth)

        lines = [
            "{",
            f"{pad(1)}type: :object,",
            f"{pad(1)}required: %w[data],",
            f"{pad(1)}properties: {{",
            f"{pad(2)}data: {{",
            f"{pad(3)}type: :array,",
            f"{pad(3)}items: [ {rendered} ]",
            f"{pad(2)}}}",
            f"{pad(1)}}}",
            f"{pad(0)}}}",
        ]
        return "\n".join(lines)

    def _indent(self, level: int) -> str:
        return " " * (self.indent_size * level)

    def _render_map(self, mapping: dict[str, Any], indent_level: int) -> str:
        indent = self._indent(indent_level)
        pairs = [
            f"{indent}{key}: {self._format_value(item, indent_level)}"
            for key, item in mapping.items()
            if key not in self.excluded_keys
        ]
        if not pairs:
            return "{}"
        return "{\n" + ",\n".join(pairs) + "\n" + self._indent(indent_level - 1) + "}"

    def _render_sequence(self, items: list[Any], indent_level: int) -> str:
        indent = self._indent(indent_level + 1)
        rendered = [
            f"{indent}{self._format_value(item, indent_level + 1)}" for item in items
        ]
        return "[\n" + ",\n".join(rendered) + "\n" + self._indent(indent_level) + "]"

    def _format_value(self, value: JSONLike, indent_level: int) -> str:
        """Format a member value placed at ``indent_level``."""
        match value:
            case list() | tuple() if all(isinstance(item, str) for item in value):
                return f"%w[{' '.join(value)}]"
            case list() | tuple():
                return self._render_sequence(list(value), indent_level)
            case dict():
                return self._render_map(value, indent_level + 1).rstrip()
            case str() if value not in QUOTED_STRINGS:
                return f":{value}"
            case None:
                return "nil"
            case _:
                return self._format_scalar(value)

    def _format_scalar(self, value: Any) -> str:
        return DOUBLE_QUOTED.sub(r"'\1'", json.dumps(value, default=str))
