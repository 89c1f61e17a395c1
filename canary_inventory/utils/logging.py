"""Logging utilities for canary-inventory."""

import logging
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

LOGGER_NAMESPACE = "canary_inventory"

_THEME = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "red",
    "critical": "red bold",
    "debug": "dim",
})


class CanaryLogger:
    """Thin wrapper around a standard logger that renders through rich."""

    def __init__(self, name: str, level: Optional[int] = None) -> None:
        self.logger = logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")
        if level is not None:
            self.logger.setLevel(level)

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log info message."""
        self.logger.info(msg, extra=kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log warning message."""
        self.logger.warning(msg, extra=kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        """Log error message."""
        self.logger.error(msg, extra=kwargs)

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log debug message."""
        self.logger.debug(msg, extra=kwargs)


def _build_handler(console: Optional[Console] = None) -> RichHandler:
    """Create the rich console handler with the project theme."""
    handler = RichHandler(
        console=console or Console(theme=_THEME, stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(fmt="%(name)s: %(message)s", datefmt="[%X]"))
    return handler


def setup_logging(
    level: int = logging.INFO,
    verbose: bool = False,
    console: Optional[Console] = None,
) -> None:
    """Setup logging configuration for canary-inventory.

    Args:
        level: Logging level
        verbose: Enable debug logging
        console: Rich console to render to (stderr by default)
    """
    if verbose:
        level = logging.DEBUG

    root = logging.getLogger(LOGGER_NAMESPACE)
    root.setLevel(level)

    # Remove existing handlers to avoid duplicates
    root.handlers.clear()
    root.addHandler(_build_handler(console))
    root.propagate = False

    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def get_logger(name: str) -> CanaryLogger:
    """Get a canary-inventory logger instance.

    Args:
        name: Logger name

    Returns:
        Logger under the ``canary_inventory`` namespace
    """
    return CanaryLogger(name)
