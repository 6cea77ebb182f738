"""Logging setup for collectkit."""

from collectkit.logger.logger import get_logger, logger, setup_logger

__all__ = ["logger", "setup_logger", "get_logger"]
