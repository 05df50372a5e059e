"""Logging setup shared by the library and the command line tool.

Library modules only call ``get_logger(__name__)``; handlers are installed
by ``configure_logging`` when the CLI starts.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "umlgen"


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the package logger."""
    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: int = logging.WARNING, console: Console | None = None
) -> logging.Logger:
    """Attach a rich handler to the package logger.

    Args:
        level: Logging level for the package logger.
        console: Console to log to (defaults to stderr).

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
