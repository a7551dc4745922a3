"""Main class that orchestrates the schema conversion process."""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from pg_jsonapi_schema.conversion.entity_builder import EntitySchemaBuilder
from pg_jsonapi_schema.conversion.envelope_builder import (
    ResourceEnvelopeBuilder,
    strip_schema_prefix,
)
from pg_jsonapi_schema.conversion.type_mapper import TypeMapper
from pg_jsonapi_schema.core.config import Config, config
from pg_jsonapi_schema.core.exceptions import (
    ConfigurationError,
    IntrospectionError,
)
from pg_jsonapi_schema.core.schemas import EntityArtifacts, EntityDescriptor
from pg_jsonapi_schema.introspection.interfaces import IEntitySource
from pg_jsonapi_schema.introspection.postgres import PostgresEntitySource
from pg_jsonapi_schema.io.output_manager import OutputManager
from pg_jsonapi_schema.logger import logger, setup_logger
from pg_jsonapi_schema.rendering.hash_literal import HashLiteralSerializer
from pg_jsonapi_schema.validation.schema_validator import SchemaValidator


class SchemaConverter:
    """Main class that orchestrates the schema conversion process.

    This class reads entities from the configured schemas, builds the entity
    schema, both JSON:API envelopes and their hash-literal renderings, and
    writes them when an output directory is configured.
    """

    def __init__(
        self,
        settings: Config = config,
        entity_source: IEntitySource | None = None,
        diagnostics: logging.Logger = logger,
    ) -> None:
        """Initialize the schema converter.

        Args:
            settings: Connection, selection and output settings
            entity_source: Metadata source; PostgreSQL from settings when omitted
            diagnostics: Logger receiving per-column warnings
        """
        self.settings = settings
        self.entity_source = entity_source
        self.entity_builder = EntitySchemaBuilder(TypeMapper(diagnostics))
        self.envelope_builder = ResourceEnvelopeBuilder()
        self.serializer = HashLiteralSerializer(
            settings.indent_spaces, settings.hash_literal_excluded_keys
        )
        self.validator = SchemaValidator()
        self.output_manager = (
            OutputManager(
                settings.output_dir, settings.indent_spaces, settings.file_names
            )
            if settings.output_dir is not None
            else None
        )

    def run(self) -> None:
        """Run the complete conversion process.

        Exit codes come from ``settings.exit_codes``: configuration errors,
        database errors (driver errors and missing schemas) and file system
        errors each have their own code. Any other exception is reported
        with the file system code.

        Raises:
            SystemExit: If any critical error occurs during conversion
        """
        exit_codes = self.settings.exit_codes
        try:
            setup_logger(self.settings)
            artifacts = self.convert()
            logger.info(
                "Conversion completed successfully! Converted %d entities.",
                len(artifacts),
            )
        except ConfigurationError as e:
            logger.error("Configuration error: %s", e)
            sys.exit(exit_codes.error_configuration)
        except (IntrospectionError, SQLAlchemyError) as e:
            logger.error("Database error: %s", e, exc_info=True)
            sys.exit(exit_codes.error_database)
        except OSError as e:
            logger.error("File system error: %s", e, exc_info=True)
            sys.exit(exit_codes.error_file_system)
        except Exception:
            logger.exception("Unexpected error occurred")
            sys.exit(exit_codes.error_file_system)

    def run_for_testing(self) -> list[EntityArtifacts]:
        """Run the complete conversion process for testing.

        Unlike run(), this method raises exceptions instead of calling sys.exit(),
        making it suitable for unit tests.

        Returns:
            Artifacts of every converted entity
        """
        return self.convert()

    def check_configuration(self) -> None:
        """Check that the configuration is usable before touching the database.

        Raises:
            ConfigurationError: If connection settings are missing or the
                output directory is not writable
        """
        if self.entity_source is None:
            missing = self.settings.missing_connection_settings()
            if missing:
                raise ConfigurationError(missing[0])

        if self.output_manager is not None:
            self.output_manager.create_output_structure()

    def convert(self) -> list[EntityArtifacts]:
        """Convert every included entity of every configured schema.

        Returns:
            Artifacts in processing order: per schema, tables, then views,
            then materialized views
        """
        self.check_configuration()

        if self.entity_source is None:
            logger.info("Connecting to database...")
            self.entity_source = PostgresEntitySource.from_config(self.settings)

        description = (
            self.settings.default_description or datetime.now().astimezone().isoformat()
        )

        converted: list[EntityArtifacts] = []
        for schema_name in self.settings.input_schemas:
            logger.info("Processing schema %s", schema_name)
            schema = self.entity_source.get_schema(schema_name)

            groups = (
                ("table", schema.tables),
                ("view", schema.views),
                ("materialized view", schema.materialized_views),
            )
            for kind, entities in groups:
                for entity in entities:
                    if not self.is_included(entity.name):
                        logger.info("Skipping excluded %s %s", kind, entity.name)
                        continue

                    logger.info("Processing %s %s", kind, entity.name)
                    artifacts = self.convert_entity(entity, description)
                    if self.output_manager is not None:
                        self.output_manager.write_artifacts(artifacts)
                    converted.append(artifacts)

        return converted

    def is_included(self, entity_name: str) -> bool:
        """Apply the include and exclude lists; exclusion wins."""
        if entity_name in self.settings.input_exclude:
            return False
        include = self.settings.input_include
        return not include or entity_name in include

    def convert_entity(
        self, entity: EntityDescriptor, description: str
    ) -> EntityArtifacts:
        """Build all artifacts of a single entity.

        Args:
            entity: Entity to convert
            description: Description stamped on the entity schema

        Returns:
            The entity schema, both envelopes and their hash literals
        """
        names = self.settings.file_names
        base_name = strip_schema_prefix(entity.name, entity.schema_name)
        body = self.entity_builder.build_entity_schema(entity)

        entity_schema = {
            **self._meta_header(entity, names.entity_schema, base_name),
            "description": description,
            "type": body["type"],
            "additionalProperties": self.settings.additional_properties,
            "required": body["required"],
            "properties": body["properties"],
        }

        envelopes = self.envelope_builder.build_resource_envelopes(
            entity.name, entity.schema_name, body
        )
        api_schema = {
            **self._meta_header(entity, names.api_schema, base_name),
            **envelopes.single,
        }
        list_api_schema = {
            **self._meta_header(entity, names.list_api_schema, base_name),
            **envelopes.collection,
        }

        for document in (entity_schema, api_schema, list_api_schema):
            self._report_validation(entity.name, document)

        return EntityArtifacts(
            entity_name=entity.name,
            schema_name=entity.schema_name,
            entity_schema=entity_schema,
            api_schema=api_schema,
            list_api_schema=list_api_schema,
            api_hash_literal=self.serializer.to_hash_literal(api_schema),
            list_hash_literal=self.serializer.to_hash_literal_list(list_api_schema),
        )

    def _meta_header(
        self, entity: EntityDescriptor, pattern: str, title: str
    ) -> dict[str, Any]:
        fields = self.settings.json_schema_fields
        return {
            fields.schema_field: fields.dialect,
            fields.id_field: self._get_schema_url(entity, pattern),
            fields.title_field: title,
        }

    def _get_schema_url(self, entity: EntityDescriptor, pattern: str) -> str:
        """Get the ``$id`` of an artifact, relative when no base URL is set."""
        file_name = pattern.format(entity=entity.name)
        if self.settings.base_url:
            return f"{self.settings.base_url}/{entity.schema_name}/{file_name}"
        return file_name

    def _report_validation(self, entity_name: str, document: dict[str, Any]) -> None:
        result = self.validator.validate_schema(document)
        for error in result.errors:
            logger.warning("Generated schema for %s is invalid: %s", entity_name, error)
        for warning in result.warnings:
            logger.debug("Generated schema for %s: %s", entity_name, warning)


def main() -> None:
    """Console entry point."""
    SchemaConverter().run()
