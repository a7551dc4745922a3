"""Custom exception classes for the JSON:API schema converter."""

from __future__ import annotations


class SchemaConversionError(Exception):
    """Base exception for schema conversion errors.

    All custom exceptions in the converter inherit from this class.
    """

    pass


class ConfigurationError(SchemaConversionError):
    """Error in application configuration.

    Raised before any entity is processed when required configuration values
    are missing, or when the output directory cannot be written to.

    Args:
        variable_name: The name of the configuration variable that caused the error
        message: Optional custom error message
    """

    def __init__(self, variable_name: str, message: str | None = None) -> None:
        self.variable_name = variable_name
        if message is None:
            message = f"Required configuration variable '{variable_name}' is not set"
        super().__init__(message)


class IntrospectionError(SchemaConversionError):
    """Error in the metadata reported by the database.

    Raised when a configured schema does not exist. Driver and connection
    errors are not wrapped and propagate as raised by the driver.

    Args:
        schema_name: The database schema being introspected
        message: Description of the problem
    """

    def __init__(self, schema_name: str, message: str) -> None:
        self.schema_name = schema_name
        super().__init__(f"Cannot introspect schema '{schema_name}': {message}")

