"""Assembly of flat object schemas from entity columns."""

from __future__ import annotations

from typing import Any

from pg_jsonapi_schema.conversion.default_normalizer import DefaultNormalizer
from pg_jsonapi_schema.conversion.type_mapper import TypeMapper
from pg_jsonapi_schema.core.schemas import ColumnDescriptor, EntityDescriptor


class EntitySchemaBuilder:
    """Builds the object schema describing one row of an entity."""

    def __init__(
        self,
        type_mapper: TypeMapper | None = None,
        default_normalizer: DefaultNormalizer | None = None,
    ) -> None:
        self.type_mapper = type_mapper or TypeMapper()
        self.default_normalizer = default_normalizer or DefaultNormalizer()

    def build_entity_schema(self, entity: EntityDescriptor) -> dict[str, Any]:
        """Build the object schema for an entity.

        Args:
            entity: Entity with its ordered columns

        Returns:
            Object schema with ``required`` and ``properties`` in column order
        """
        required: list[str] = []
        properties: dict[str, Any] = {}

        for column in entity.columns:
            properties[column.name] = self.build_property(column)
            if column.not_null and column.name not in required:
                required.append(column.name)

        return {"type": "object", "required": required, "properties": properties}

    def build_property(self, column: ColumnDescriptor) -> dict[str, Any]:
        """Merge type, default and length constraints for one column."""
        merged = self.type_mapper.map_column_type(column).to_schema()
        merged.update(self.default_normalizer.normalize_default(column).to_schema())

        # the raw column length always has the last word
        if column.length is None:
            merged.pop("maxLength", None)
        else:
            merged["maxLength"] = column.length

        return merged
