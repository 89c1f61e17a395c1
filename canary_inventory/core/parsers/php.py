"""PHP lockfile parsers."""

import json
from typing import Any, List

from ...config import ParseConfig
from .base import BaseParser, Dependency, Ecosystem


class ComposerLockParser(BaseParser):
    """Parser for Composer composer.lock files."""

    kind = "composer"
    ecosystem = Ecosystem.COMPOSER
    file_names = ("composer.lock",)

    def parse(self, content: bytes, path: str, config: ParseConfig) -> List[Dependency]:
        """Parse a composer.lock file.

        Entries of ``packages-dev`` are dev dependencies.

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

        dependencies = self._parse_section(lock.get("packages"), path, config, False)
        dependencies.extend(self._parse_section(lock.get("packages-dev"), path, config, True))
        return dependencies

    def _parse_section(
        self,
        packages: Any,
        path: str,
        config: ParseConfig,
        is_dev: bool,
    ) -> List[Dependency]:
        if not isinstance(packages, list):
            return []

        dependencies = []
        for pkg in packages:
            if not isinstance(pkg, dict):
                continue
            dependency = self._create_dependency(
                name=pkg.get("name"),
                version=pkg.get("version"),
                path=path,
                config=config,
                dev=is_dev,
            )
            if dependency:
                dependencies.append(dependency)

        return dependencies
