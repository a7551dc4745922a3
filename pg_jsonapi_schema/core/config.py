"""Configuration for the JSON:API schema converter."""

from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class FileNamesConfig(BaseModel):
    """Output file name patterns, relative to ``<output_dir>/<schema>``."""

    entity_schema: str = "{entity}.json"
    api_schema: str = "{entity}-api.json"
    api_hash_literal: str = "{entity}-swag.rb"
    list_api_schema: str = "{entity}-list-api.json"
    list_hash_literal: str = "{entity}-list-swag.rb"


class JSONSchemaFieldsConfig(BaseModel):
    """Configuration for JSON Schema field names."""

    schema_field: str = "$schema"
    id_field: str = "$id"
    title_field: str = "title"
    dialect: str = "http://json-schema.org/draft-07/schema#"


class ExitCodesConfig(BaseModel):
    """Configuration for exit codes."""

    success: int = 0
    error_configuration: int = 1
    error_database: int = 3
    error_file_system: int = 5


class Config(BaseSettings):
    """Main configuration class for the JSON:API schema converter."""

    # Database connection
    pg_host: str | None = Field(default=None, description="PostgreSQL host")
    pg_port: int = Field(default=5432, description="PostgreSQL port")
    pg_database: str | None = Field(default=None, description="Database name")
    pg_user: str | None = Field(default=None, description="Database user")
    pg_password: str | None = Field(default=None, description="Database password")

    # Input selection
    input_schemas: list[str] = Field(
        default_factory=lambda: ["public"], description="Schemas to convert"
    )
    input_include: list[str] = Field(
        default_factory=list, description="Entities to convert (empty means all)"
    )
    input_exclude: list[str] = Field(
        default_factory=list, description="Entities to skip, wins over include"
    )

    # Output settings
    output_dir: Path | None = Field(
        default=None, description="Directory for generated files"
    )
    indent_spaces: int = Field(default=2, ge=0, description="Indentation size")
    default_description: str | None = Field(
        default=None, description="Description stamped on every entity schema"
    )
    additional_properties: bool = Field(
        default=False, description="additionalProperties of entity schemas"
    )
    base_url: str = Field(default="", description="Base URL for schema $id values")

    # Logging
    logger_name: str = Field(
        default="SchemaConverter", description="Name of the converter logger"
    )
    log_level: str = Field(default="INFO", description="Level shown on stderr")

    # Nested configurations
    file_names: FileNamesConfig = Field(default_factory=FileNamesConfig)
    json_schema_fields: JSONSchemaFieldsConfig = Field(
        default_factory=JSONSchemaFieldsConfig
    )
    hash_literal_excluded_keys: tuple[str, ...] = ("$schema", "$id", "title")
    exit_codes: ExitCodesConfig = Field(default_factory=ExitCodesConfig)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Drop a single trailing slash so ids join cleanly."""
        return v[:-1] if v.endswith("/") else v

    def missing_connection_settings(self) -> list[str]:
        """Return the environment names of unset required connection settings."""
        required = {
            "PG_HOST": self.pg_host,
            "PG_DATABASE": self.pg_database,
            "PG_USER": self.pg_user,
        }
        return [name for name, value in required.items() if not value]


# At application import time, populate os.environ from .env (if present).
load_dotenv()
config = Config()
