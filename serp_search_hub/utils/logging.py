"""Logging configuration."""

import logging
import sys

ROOT_LOGGER_NAME = "serp_search_hub"


def configure_logging(log_level: str = "INFO", stream=None) -> logging.Logger:
    """
    Configure logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        stream: Output stream for log records (defaults to stdout)

    Returns:
        Configured logger instance
    """
    # Convert string log level to logging constant
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Reconfiguring only adjusts levels; one handler per process
    for handler in logger.handlers:
        if getattr(handler, "_serp_search_hub", False):
            handler.setLevel(numeric_level)
            return logger

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(numeric_level)
    handler._serp_search_hub = True

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the package logger.

    Module names inside the package already start with the package name, so
    they map onto the configured hierarchy unchanged.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
