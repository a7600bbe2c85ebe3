"""Logging utilities with rich output for the extension and its CLI.

This module provides a centralized logging configuration that combines
Python's standard logging with rich's console output.

Usage:
    from common.logger import get_logger

    logger = get_logger(__name__)
    logger.debug("GET https://api.mangadex.org/manga")
    logger.warning("Rate limited, cooling down")
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .env import env

# Global console instance for consistent output
console = Console()
error_console = Console(stderr=True)


def _rich_handler(show_time: bool = False, show_path: bool = False) -> RichHandler:
    handler = RichHandler(
        console=error_console,
        show_time=show_time,
        show_path=show_path,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    return handler


def get_logger(
    name: str,
    level: str | None = None,
    show_time: bool = False,
    show_path: bool = False,
) -> logging.Logger:
    """Get a configured logger with rich output.

    Args:
        name: Logger name (typically __name__ of the module)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If None, uses environment variable LOG_LEVEL or defaults to INFO.
        show_time: Show timestamp in log output
        show_path: Show file path in log output

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid adding multiple handlers if logger already configured
    if logger.handlers:
        return logger

    logger.setLevel((level or env.log_level()).upper())
    logger.addHandler(_rich_handler(show_time=show_time, show_path=show_path))

    # Allow propagation so pytest caplog can capture records
    logger.propagate = True

    return logger


def setup_logging(level: str | None = None, log_file: str | None = None) -> None:
    """Setup logging configuration for the entire application.

    This should be called once at the application entry point (CLI).

    Args:
        level: Default logging level for all modules (LOG_LEVEL when None)
        log_file: Optional file path to also log to a file
    """
    level = (level or env.log_level()).upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(_rich_handler())

    # Module loggers hand their output over to the root handler
    for logger in logging.Logger.manager.loggerDict.values():
        if isinstance(logger, logging.Logger) and logger.handlers:
            logger.handlers.clear()
            logger.setLevel(logging.NOTSET)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)


def print_json(data: Any) -> None:
    """Pretty-print a JSON-serializable value on stdout."""
    console.print_json(data=data)


def error(message: str) -> None:
    """Print an error message with red X icon on stderr."""
    error_console.print(f"[red]✗[/red] {escape(message)}", highlight=False)


def warning(message: str) -> None:
    """Print a warning message with yellow warning icon."""
    error_console.print(f"[yellow]⚠[/yellow] {escape(message)}")
