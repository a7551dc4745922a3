"""Centralized logging configuration for the JSON:API schema converter.

This module provides a configured logger instance that can be imported and used
throughout the application. The logger is configured with a queued stderr
handler using settings from logging_config.json.

Usage:
    from pg_jsonapi_schema.logger import logger

    logger.info("This is an info message")
    logger.warning("This is a warning message")
"""

from .logger import build_logging_config, logger, setup_logger

__all__ = ["build_logging_config", "logger", "setup_logger"]
