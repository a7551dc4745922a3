import atexit
import json
import logging
import logging.config
from pathlib import Path
from typing import Any

from pg_jsonapi_schema.core.config import Config, config

# Configure logging
logger = logging.getLogger(config.logger_name)


def build_logging_config(settings: Config = config) -> dict[str, Any]:
    """Load logging_config.json and apply the converter's logging settings.

    The ``converter`` entry of the file is registered under the configured
    logger name, and the stderr handler uses the configured level.
    """
    config_file = Path(__file__).parent / "logging_config.json"
    with open(config_file) as f:
        logging_config: dict[str, Any] = json.load(f)

    converter_logger = logging_config["loggers"].pop("converter")
    logging_config["loggers"][settings.logger_name] = converter_logger
    logging_config["handlers"]["stderr"]["level"] = settings.log_level.upper()
    return logging_config


def setup_logger(settings: Config = config) -> None:
    logging.config.dictConfig(build_logging_config(settings))
    queue_handler = logging.getHandlerByName("queue_handler")
    if queue_handler is not None and hasattr(queue_handler, "listener"):
        # Type checker doesn't understand hasattr, so we access listener safely
        listener = getattr(queue_handler, "listener", None)
        if listener is not None:
            listener.start()
            atexit.register(listener.stop)
