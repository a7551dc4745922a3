"""Database metadata sources."""

from pg_jsonapi_schema.introspection.interfaces import IEntitySource
from pg_jsonapi_schema.introspection.postgres import PostgresEntitySource

__all__ = ["IEntitySource", "PostgresEntitySource"]
