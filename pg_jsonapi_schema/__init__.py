"""
PostgreSQL JSON:API Schema Converter

A Python package for converting PostgreSQL table and view metadata into JSON
Schemas, JSON:API resource schemas and Ruby hash-literal renderings of them.
"""

from pg_jsonapi_schema.cli.converter import SchemaConverter

__all__ = ["SchemaConverter"]
