"""Merging of parsed dependencies into one deduplicated list."""

from typing import Iterable, List, Optional, Set, Tuple

from ..config import ParseConfig
from .parsers import Dependency


def deduplicate(dependencies: Iterable[Dependency]) -> List[Dependency]:
    """Collapse dependencies sharing ecosystem, name and version.

    Matching is exact string equality. The first occurrence is kept with
    its ``dev`` and ``source`` values; later duplicates are dropped.

    Args:
        dependencies: Dependencies in input order

    Returns:
        Deduplicated dependencies in first-seen order
    """
    seen: Set[Tuple[str, str, str]] = set()
    unique = []

    for dep in dependencies:
        if dep.key in seen:
            continue
        seen.add(dep.key)
        unique.append(dep)

    return unique


def normalize(
    dependencies: Iterable[Dependency],
    config: Optional[ParseConfig] = None,
) -> List[Dependency]:
    """Apply the dev inclusion policy, then deduplicate.

    Args:
        dependencies: Concatenated parser output
        config: Parser options carrying the dev inclusion flag

    Returns:
        Dependencies ready for the inventory
    """
    config = config or ParseConfig()
    if not config.include_dev:
        dependencies = (dep for dep in dependencies if not dep.dev)
    return deduplicate(dependencies)
