"""Path utilities for finding lockfiles and filtering paths."""

import fnmatch
import os
from pathlib import Path
from typing import Iterator, List, Optional

from ..config import LockfileEntry
from ..core.parsers import ParserRegistry
from ..core.parsers import registry as default_registry

DEFAULT_IGNORED_DIRS = (
    "node_modules",
    ".git",
    ".venv",
    "venv",
    "__pycache__",
    "vendor",
    "target",
)


class PathFilter:
    """Filters directories based on name patterns."""

    def __init__(self, ignore_patterns: Optional[List[str]] = None) -> None:
        """Initialize path filter.

        Args:
            ignore_patterns: Additional directory name patterns to ignore
        """
        self.ignore_patterns = list(DEFAULT_IGNORED_DIRS) + list(ignore_patterns or [])

    def is_ignored(self, dir_name: str) -> bool:
        """Check if a directory should be skipped.

        Args:
            dir_name: Base name of the directory

        Returns:
            True if the directory matches an ignore pattern
        """
        return any(fnmatch.fnmatch(dir_name, pattern) for pattern in self.ignore_patterns)


class LockfileFinder:
    """Finds lockfiles in a project directory."""

    def __init__(
        self,
        ignore_patterns: Optional[List[str]] = None,
        registry: Optional[ParserRegistry] = None,
    ) -> None:
        """Initialize lockfile finder.

        Args:
            ignore_patterns: Additional ignore patterns
            registry: Registry whose parsers decide which files are lockfiles
        """
        self.path_filter = PathFilter(ignore_patterns)
        self.registry = registry or default_registry

    def find_lockfiles(self, root_path: Path) -> List[LockfileEntry]:
        """Find all lockfiles in a directory tree.

        Args:
            root_path: Root directory to search

        Returns:
            Lockfile entries sorted by path

        Raises:
            ValueError: If the root path does not exist
        """
        if not root_path.exists():
            raise ValueError(f"Root path does not exist: {root_path}")

        entries = []
        for file_path in self._walk_files(root_path):
            kind = self.registry.find_kind_for_file(str(file_path))
            if kind is not None:
                entries.append(LockfileEntry(kind=kind, path=str(file_path)))

        return sorted(entries, key=lambda entry: entry.path)

    def _walk_files(self, root_path: Path) -> Iterator[Path]:
        """Walk through files in directory tree, pruning ignored directories.

        Args:
            root_path: Root directory to walk

        Yields:
            File paths below non-ignored directories
        """
        for dirpath, dirnames, filenames in os.walk(root_path):
            dirnames[:] = [d for d in dirnames if not self.path_filter.is_ignored(d)]
            for filename in filenames:
                yield Path(dirpath) / filename


def find_lockfiles(
    root_path: Path,
    ignore_patterns: Optional[List[str]] = None
) -> List[LockfileEntry]:
    """Convenience function to find lockfiles.

    Args:
        root_path: Root directory to search
        ignore_patterns: Additional ignore patterns

    Returns:
        List of found lockfile entries
    """
    finder = LockfileFinder(ignore_patterns)
    return finder.find_lockfiles(root_path)
