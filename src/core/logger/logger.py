"""Logging system with Rich support."""

import logging
from collections.abc import Sequence

from rich.console import Console
from rich.logging import RichHandler

from src.core.config.settings import LoggingSettings

# Shared by log records, command echoes and the CLI's panels
_console: Console | None = None
_loggers: dict[str, logging.Logger] = {}


def setup_logging(settings: LoggingSettings) -> None:
    """Configure the root logger from logging settings.

    Called once per run, after settings are loaded, so that an invalid
    logging configuration is reported like any other configuration error.

    Args:
        settings: Logging settings.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.level))
    root_logger.handlers.clear()

    handler: RichHandler | logging.StreamHandler
    if settings.use_rich:
        handler = RichHandler(
            console=get_console(),
            show_path=False,
            show_time=False,
            markup=False,
        )
    else:
        handler = logging.StreamHandler(get_console().file)
        handler.setFormatter(logging.Formatter(settings.format))
    root_logger.addHandler(handler)

    if settings.file:
        settings.file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, settings.level))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Get or create a logger by name.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance.
    """
    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)
    return _loggers[name]


def get_console() -> Console:
    """Get the shared Rich console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def echo_command(command: Sequence[str]) -> None:
    """Print the exact invocation of an external program.

    The echo goes straight to the console, so no log level hides it.

    Args:
        command: Program followed by its arguments.
    """
    line = f"Running: {' '.join(command)}"
    get_console().print(line, markup=False, highlight=False, soft_wrap=True)
