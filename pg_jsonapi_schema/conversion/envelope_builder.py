"""JSON:API envelopes around entity schemas."""

from __future__ import annotations

import copy
from typing import Any

from pg_jsonapi_schema.conversion.inflection import singularize
from pg_jsonapi_schema.core.schemas import ResourceEnvelopes


def strip_schema_prefix(entity_name: str, schema_name_prefix: str) -> str:
    """Remove a leading ``<schema>_`` from an entity name, if present."""
    prefix = f"{schema_name_prefix}_"
    if entity_name.startswith(prefix):
        return entity_name[len(prefix) :]
    return entity_name


class ResourceEnvelopeBuilder:
    """Wraps entity schemas into JSON:API resource documents.

    The collection form uses the resource object as an ``items`` template,
    so arrays of any length validate against it.
    """

    def build_resource_object(
        self, entity_name: str, schema_name_prefix: str, entity_schema: dict[str, Any]
    ) -> dict[str, Any]:
        """Build the JSON:API resource object schema for an entity.

        Args:
            entity_name: Full entity name
            schema_name_prefix: Schema name stripped from the entity name
            entity_schema: Flat object schema of the entity

        Returns:
            Resource object schema with ``id``, ``type`` and ``attributes``
        """
        base_name = strip_schema_prefix(entity_name, schema_name_prefix)
        return {
            "type": "object",
            "required": ["id", "type", "attributes"],
            "properties": {
                "id": {"type": "string", "format": "number"},
                "type": {"type": "string", "enum": [singularize(base_name)]},
                "attributes": {
                    "type": "object",
                    "required": list(entity_schema["required"]),
                    "properties": copy.deepcopy(entity_schema["properties"]),
                },
            },
        }

    def build_resource_envelopes(
        self, entity_name: str, schema_name_prefix: str, entity_schema: dict[str, Any]
    ) -> ResourceEnvelopes:
        """Build the single-resource and collection envelopes.

        Args:
            entity_name: Full entity name
            schema_name_prefix: Schema name stripped from the entity name
            entity_schema: Flat object schema of the entity

        Returns:
            Both envelopes, each with a ``data`` member
        """
        resource = self.build_resource_object(
            entity_name, schema_name_prefix, entity_schema
        )
        single = {
            "type": "object",
            "required": ["data"],
            "properties": {"data": resource},
        }
        collection = {
            "type": "object",
            "required": ["data"],
            "properties": {
                "data": {"type": "array", "items": [copy.deepcopy(resource)]},
            },
        }
        return ResourceEnvelopes(single=single, collection=collection)
