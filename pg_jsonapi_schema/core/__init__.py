"""Core data models and shared types."""

from pg_jsonapi_schema.core.config import config
from pg_jsonapi_schema.core.exceptions import (
    ConfigurationError,
    IntrospectionError,
    SchemaConversionError,
)
from pg_jsonapi_schema.core.schemas import (
    ColumnDescriptor,
    DefaultOverlay,
    EntityArtifacts,
    EntityDescriptor,
    ResourceEnvelopes,
    SchemaDescriptor,
    SchemaFragment,
    ValidationResult,
)

__all__ = [
    "ColumnDescriptor",
    "DefaultOverlay",
    "EntityArtifacts",
    "EntityDescriptor",
    "ResourceEnvelopes",
    "SchemaDescriptor",
    "SchemaFragment",
    "ValidationResult",
    "SchemaConversionError",
    "ConfigurationError",
    "IntrospectionError",
    "config",
]
