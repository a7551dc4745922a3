from typing import Protocol

from pg_jsonapi_schema.core.schemas import SchemaDescriptor


class IEntitySource(Protocol):
    def get_schema(self, schema_name: str) -> SchemaDescriptor: ...
