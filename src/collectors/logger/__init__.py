"""Logging for the collectors package."""

from collectors.logger.logger import logger, setup_logger

__all__ = ["logger", "setup_logger"]
