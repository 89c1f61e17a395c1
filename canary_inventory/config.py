"""Run configuration for canary-inventory."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .exceptions import LockfileEntryError

INVENTORY_FILENAME = ".canary-inventory.json"
DEFAULT_PROJECT_ID = "unknown"


def parse_include_dev(value: Optional[str]) -> bool:
    """Interpret the dev-inclusion flag.

    Only the literal string ``"false"`` disables dev dependencies; anything
    else, including an unset value, keeps them.
    """
    return value != "false"


def parse_fail_on_error(value: Optional[str]) -> bool:
    """Interpret the fail-on-error flag.

    Only the literal string ``"true"`` makes submission failures fatal. An
    unset value falls back to ``True``.
    """
    if value is None:
        return True
    return value == "true"


@dataclass(frozen=True)
class ParseConfig:
    """Options every lockfile parser receives."""

    include_dev: bool = True


@dataclass(frozen=True)
class LockfileEntry:
    """A single ``kind:path`` pair handed to the dispatcher."""

    kind: str
    path: str

    @classmethod
    def from_string(cls, entry: str) -> "LockfileEntry":
        """Split an entry on its first colon.

        Args:
            entry: Text of the form ``kind:path``. Colons inside the path
                are kept.

        Returns:
            Parsed entry

        Raises:
            LockfileEntryError: If the entry has no colon separator
        """
        kind, sep, path = entry.partition(":")
        if not sep:
            raise LockfileEntryError(f"Lockfile entry has no kind prefix: {entry!r}")
        return cls(kind=kind.strip(), path=path.strip())

    def __str__(self) -> str:
        return f"{self.kind}:{self.path}"


def parse_lockfile_entries(value: Optional[str]) -> List[LockfileEntry]:
    """Parse a comma-separated list of ``kind:path`` entries.

    Blank entries, entries without a colon and entries with an empty path
    are skipped.

    Args:
        value: Raw configuration value

    Returns:
        Entries in their original order
    """
    entries: List[LockfileEntry] = []
    if not value:
        return entries

    for raw in value.split(","):
        raw = raw.strip()
        if not raw:
            continue
        try:
            entry = LockfileEntry.from_string(raw)
        except LockfileEntryError:
            continue
        if entry.path:
            entries.append(entry)

    return entries


def format_lockfile_entries(entries: List[LockfileEntry]) -> str:
    """Join entries back into the comma-separated configuration form."""
    return ",".join(str(entry) for entry in entries)


@dataclass(frozen=True)
class InventoryConfig:
    """Explicit configuration threaded through a single inventory run."""

    project_id: str = DEFAULT_PROJECT_ID
    include_dev: bool = True
    working_dir: Path = Path(".")
    github_output: Optional[Path] = None

    @property
    def parse_config(self) -> ParseConfig:
        """Parser options derived from this configuration."""
        return ParseConfig(include_dev=self.include_dev)

    @property
    def inventory_path(self) -> Path:
        """Location the inventory document is written to."""
        return self.working_dir / INVENTORY_FILENAME

