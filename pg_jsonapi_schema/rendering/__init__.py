"""Alternate textual renderings of generated schemas."""

from pg_jsonapi_schema.rendering.hash_literal import HashLiteralSerializer

__all__ = ["HashLiteralSerializer"]
