"""Logging setup with rich console output."""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "structai"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the package logger with a single rich handler."""
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level.upper())

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger of the package logger."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
