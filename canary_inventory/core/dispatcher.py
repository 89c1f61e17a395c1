"""Routing of lockfile entries to their parsers."""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Optional

from ..config import LockfileEntry, ParseConfig
from ..utils.logging import get_logger
from .parsers import Dependency, ParserRegistry
from .parsers import registry as default_registry

logger = get_logger("Dispatcher")


class LockfileDispatcher:
    """Runs the matching parser for every ``kind:path`` entry.

    Failures are contained per entry: an unknown kind is skipped with a
    warning and a file that cannot be read or parsed contributes no
    dependencies. Results are always concatenated in entry order, also
    when files are parsed on a thread pool.
    """

    def __init__(
        self,
        config: Optional[ParseConfig] = None,
        registry: Optional[ParserRegistry] = None,
        max_workers: int = 1,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            config: Parser options
            registry: Parser registry (uses the built-in registry if None)
            max_workers: Number of files parsed concurrently
        """
        self.config = config or ParseConfig()
        self.registry = registry or default_registry
        self.max_workers = max(1, max_workers)

    def dispatch(self, entries: Iterable[LockfileEntry]) -> List[Dependency]:
        """Parse every entry and concatenate the results.

        Args:
            entries: Lockfile entries in discovery order

        Returns:
            Flat list of dependencies, in entry order
        """
        entries = list(entries)

        if self.max_workers > 1 and len(entries) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                # map() yields in submission order
                results = list(executor.map(self.parse_entry, entries))
        else:
            results = [self.parse_entry(entry) for entry in entries]

        dependencies: List[Dependency] = []
        for parsed in results:
            dependencies.extend(parsed)
        return dependencies

    def parse_entry(self, entry: LockfileEntry) -> List[Dependency]:
        """Parse a single entry, never raising.

        Args:
            entry: Lockfile entry

        Returns:
            Dependencies from the file, or an empty list on any failure
        """
        parser = self.registry.get_parser(entry.kind, entry.path)
        if parser is None:
            logger.warning(f"Unknown lockfile type: {entry.kind} ({entry.path})")
            return []

        if not parser.can_parse(entry.path):
            logger.warning(
                f"{entry.path} does not look like a {entry.kind} lockfile, parsing it anyway"
            )

        logger.debug(f"Parsing {entry.path} with {type(parser).__name__}")

        try:
            content = Path(entry.path).read_bytes()
            dependencies = parser.parse(content, entry.path, self.config)
        except Exception as e:
            logger.error(f"Error parsing {entry.path}: {e}")
            return []

        logger.info(f"Parsed {len(dependencies)} packages from {entry.path}")
        return dependencies
