"""Logging module."""

from src.core.logger.logger import echo_command, get_console, get_logger, setup_logging

__all__ = ["get_logger", "get_console", "setup_logging", "echo_command"]
