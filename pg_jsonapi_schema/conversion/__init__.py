"""Column type mapping and schema assembly components."""

from pg_jsonapi_schema.conversion.default_normalizer import DefaultNormalizer
from pg_jsonapi_schema.conversion.entity_builder import EntitySchemaBuilder
from pg_jsonapi_schema.conversion.envelope_builder import ResourceEnvelopeBuilder
from pg_jsonapi_schema.conversion.inflection import singularize
from pg_jsonapi_schema.conversion.type_mapper import TypeMapper

__all__ = [
    "DefaultNormalizer",
    "EntitySchemaBuilder",
    "ResourceEnvelopeBuilder",
    "TypeMapper",
    "singularize",
]
