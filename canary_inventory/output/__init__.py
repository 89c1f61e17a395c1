"""Output helpers for canary-inventory."""

from .github import annotate, write_outputs

__all__ = ["annotate", "write_outputs"]
