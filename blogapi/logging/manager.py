"""
Basic logging configuration for the blog API.

Loggers are plain ``logging.Logger`` instances writing to stdout. Level
and output format come from application settings when they are given.
"""

import logging
import sys
from typing import Optional

from blogapi.config.base import BaseAppSettings
from blogapi.logging.formatters import JsonFormatter

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(
    name: str,
    level: str = "INFO",
    format: str = DEFAULT_FORMAT,
    debug: bool = False,
    json_format: bool = False,
) -> logging.Logger:
    """
    Create and configure a logger instance.

    Args:
        name: Logger name (usually __name__)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Log message format (ignored if json_format=True)
        debug: If True, sets level to DEBUG regardless of level parameter
        json_format: If True, outputs logs in JSON format

    Returns:
        Configured logger instance
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    if debug:
        log_level = logging.DEBUG

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    logger.handlers.clear()

    formatter = JsonFormatter() if json_format else logging.Formatter(format)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def get_logger(
    name: str, settings: Optional[BaseAppSettings] = None, json_format: bool = False
) -> logging.Logger:
    """
    Get a configured logger instance.

    Without settings the logger is returned as-is so records propagate to
    the package logger configured by ``configure_logging``.

    Args:
        name: Logger name (usually __name__)
        settings: Optional application settings
        json_format: If True, outputs logs in JSON format

    Returns:
        Configured logger instance
    """
    if settings is None:
        return logging.getLogger(name)

    return setup_logger(
        name,
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        debug=bool(getattr(settings, "DEBUG", False)),
        json_format=json_format or bool(getattr(settings, "LOG_JSON", False)),
    )


def ensure_logger(
    logger: Optional[logging.Logger] = None,
    name: Optional[str] = None,
    settings: Optional[BaseAppSettings] = None,
    json_format: bool = False,
) -> logging.Logger:
    """
    Ensure a logger instance is available by either using the provided one or creating a new one.

    Args:
        logger: An existing logger instance to use if provided
        name: Module name (usually __name__) for creating a new logger if needed
        settings: Optional application settings
        json_format: If True, outputs logs in JSON format when creating a new logger

    Returns:
        Either the provided logger or a newly created one
    """
    if logger:
        return logger

    if not name:
        raise ValueError("Module name must be provided when logger is not specified")

    return get_logger(name, settings, json_format)


def configure_logging(settings: BaseAppSettings) -> logging.Logger:
    """
    Configure the ``blogapi`` package logger from settings.

    Called once while the application is built. Module loggers obtained
    with ``get_logger(__name__)`` propagate to it.
    """
    return setup_logger(
        "blogapi",
        level=settings.LOG_LEVEL,
        json_format=settings.LOG_JSON,
    )
