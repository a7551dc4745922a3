"""File system operations for output generation."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from pg_jsonapi_schema.core.config import FileNamesConfig, config
from pg_jsonapi_schema.core.exceptions import ConfigurationError
from pg_jsonapi_schema.core.schemas import EntityArtifacts


class OutputManager:
    """Manages file system operations for output generation.

    Artifacts of an entity are written to ``<output_dir>/<schema>/`` using
    the configured file name patterns.
    """

    def __init__(
        self,
        output_dir: Path,
        indent_spaces: int = config.indent_spaces,
        file_names: FileNamesConfig = config.file_names,
    ) -> None:
        """Initialize the output manager.

        Args:
            output_dir: Base directory for output files
            indent_spaces: Indentation of written JSON files
            file_names: File name patterns of the five artifacts
        """
        self.output_dir = output_dir
        self.indent_spaces = indent_spaces
        self.file_names = file_names

    def create_output_structure(self) -> None:
        """Create the base output directory and check it is writable.

        Raises:
            ConfigurationError: If the directory cannot be created or written to
        """
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except Exception as e:
            raise ConfigurationError(
                "OUTPUT_DIR",
                f"Failed to create output directory {self.output_dir}: {e}",
            ) from e

        if not os.access(self.output_dir, os.W_OK):
            raise ConfigurationError("OUTPUT_DIR", f"Cannot write to {self.output_dir}")

    def write_artifacts(self, artifacts: EntityArtifacts) -> list[Path]:
        """Write all artifacts of one entity.

        Args:
            artifacts: Generated schemas and hash literals of the entity

        Returns:
            Paths of the written files

        Raises:
            PermissionError: If unable to write a file
        """
        names = self.file_names
        entity = artifacts.entity_name
        schema = artifacts.schema_name
        return [
            self.write_json(
                artifacts.entity_schema,
                self._get_output_path(schema, names.entity_schema, entity),
            ),
            self.write_json(
                artifacts.api_schema,
                self._get_output_path(schema, names.api_schema, entity),
            ),
            self.write_text(
                artifacts.api_hash_literal,
                self._get_output_path(schema, names.api_hash_literal, entity),
            ),
            self.write_json(
                artifacts.list_api_schema,
                self._get_output_path(schema, names.list_api_schema, entity),
            ),
            self.write_text(
                artifacts.list_hash_literal,
                self._get_output_path(schema, names.list_hash_literal, entity),
            ),
        ]

    def write_json(self, document: dict[str, Any], output_path: Path) -> Path:
        """Write a JSON document with the configured indentation.

        Raises:
            PermissionError: If unable to write file
        """
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=self.indent_spaces, ensure_ascii=False)
                f.write("\n")
            return output_path
        except Exception as e:
            raise PermissionError(
                f"Failed to write schema to {output_path}: {e}"
            ) from e

    def write_text(self, content: str, output_path: Path) -> Path:
        """Write text content terminated by a newline.

        Raises:
            PermissionError: If unable to write file
        """
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(content.rstrip("\n") + "\n")
            return output_path
        except Exception as e:
            raise PermissionError(
                f"Failed to write hash literal to {output_path}: {e}"
            ) from e

    def _get_output_path(self, schema_name: str, pattern: str, entity: str) -> Path:
        """Get the output path of one artifact.

        Args:
            schema_name: Database schema owning the entity
            pattern: File name pattern with an ``{entity}`` placeholder
            entity: Entity name

        Returns:
            Path where the artifact should be written
        """
        return self.output_dir / schema_name / pattern.format(entity=entity)
