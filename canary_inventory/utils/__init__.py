"""Utility functions and helpers for canary-inventory."""

from .logging import get_logger, setup_logging
from .path_utils import find_lockfiles

__all__ = [
    "setup_logging",
    "get_logger",
    "find_lockfiles",
]
