"""Exception types raised by canary-inventory."""


class CanaryError(Exception):
    """Base class for all canary-inventory errors."""


class LockfileEntryError(CanaryError, ValueError):
    """Raised when a ``kind:path`` lockfile entry cannot be interpreted."""


class SubmissionError(CanaryError):
    """Raised when the inventory could not be delivered to the ingest endpoint."""
