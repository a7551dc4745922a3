"""
PostgreSQL JSON:API Schema Converter

Entry point for the schema converter script.
"""

from pg_jsonapi_schema import SchemaConverter


def main() -> None:
    """
    Entry point for the schema converter script.

    Creates SchemaConverter instance and runs the conversion process.
    """
    converter = SchemaConverter()
    converter.run()


if __name__ == "__main__":
    main()
