"""Global logger configuration for the collectkit package.

Library modules obtain their logger through :func:`get_logger` so every record
flows through the single ``collectkit`` handler configured here.
"""

import logging
import sys

from collectkit.config import settings

__all__ = ["logger", "setup_logger", "get_logger"]

ROOT_LOGGER_NAME = "collectkit"


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        name: Logger name (the package name for the root logger)
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to
            the LOG_LEVEL from the loaded settings.
        format_string: Custom format string

    Returns:
        Configured logger instance
    """
    level = level or settings.LOG_LEVEL
    format_string = format_string or (
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    configured = logging.getLogger(name)

    # Only configure if not already configured
    if not configured.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(fmt=format_string, datefmt="%Y-%m-%d %H:%M:%S")
        )
        configured.addHandler(handler)
        configured.setLevel(getattr(logging, level.upper()))
        configured.propagate = False

    return configured


def get_logger(module_name: str) -> logging.Logger:
    """Return a child of the package logger for ``module_name``.

    Names outside the package are nested under it, so records from any caller
    still reach the configured handler.
    """
    if module_name == ROOT_LOGGER_NAME or module_name.startswith(
        ROOT_LOGGER_NAME + "."
    ):
        return logging.getLogger(module_name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{module_name}")


# Create default logger instance for the package
logger = setup_logger()
