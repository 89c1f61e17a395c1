"""Inventory submission for canary-inventory."""

from .client import IngestClient, SubmissionResult

__all__ = ["IngestClient", "SubmissionResult"]
