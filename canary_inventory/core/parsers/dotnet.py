""".NET lockfile parsers."""

import json
from typing import List

from ...config import ParseConfig
from .base import BaseParser, Dependency, Ecosystem

# Fields holding a version, in order of preference.
VERSION_FIELDS = ("resolved", "version", "requested")


class NuGetLockParser(BaseParser):
    """Parser for NuGet packages.lock.json files."""

    kind = "nuget"
    ecosystem = Ecosystem.NUGET
    file_names = ("packages.lock.json",)

    def parse(self, content: bytes, path: str, config: ParseConfig) -> List[Dependency]:
        """Parse a packages.lock.json file.

        The ``dependencies`` map is keyed by target framework; each value maps
        package names to their lock information.

        Args:
            content: Raw file bytes
            path: Path of the lockfile
            config: Parser options

        Returns:
            Parsed dependencies
        """
        lock = json.loads(self._decode(content))
        if not isinstance(lock, dict):
            return []

        targets = lock.get("dependencies")
        if not isinstance(targets, dict):
            return []

        dependencies = []
        for target in targets.values():
            if not isinstance(target, dict):
                continue

            for name, info in target.items():
                if not isinstance(info, dict):
                    continue

                version = next((info[f] for f in VERSION_FIELDS if info.get(f)), None)
                dependency = self._create_dependency(name, version, path, config)
                if dependency:
                    dependencies.append(dependency)

        return dependencies
