"""Centralized logging configuration for the Tinify SDK."""

import logging
import sys

from .config import LOG_LEVEL

SDK_LOGGER_NAME = "tinify_sdk"

_configured = False


def get_logger(module_name: str) -> logging.Logger:
    """Get a logger for the specified module.

    Attaches a stderr handler to the SDK logger on first use if the
    application has not configured one. The level comes from the
    TINIFY_API_DEBUG environment variable (default: WARNING).

    Args:
        module_name: Name of the module requesting the logger.

    Returns:
        logging.Logger: Logger named ``tinify_sdk.<module_name>``.
    """
    global _configured

    sdk_logger = logging.getLogger(SDK_LOGGER_NAME)

    if not _configured and not sdk_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s [%(name)s] %(message)s"))
        sdk_logger.addHandler(handler)
        level = logging.getLevelName(LOG_LEVEL)
        sdk_logger.setLevel(level if isinstance(level, int) else logging.WARNING)
        sdk_logger.propagate = False
        _configured = True

    return logging.getLogger(f"{SDK_LOGGER_NAME}.{module_name}")
