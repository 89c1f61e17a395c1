"""Python lockfile parsers."""

import re
from typing import List, Optional

from ...config import ParseConfig
from .base import (
    BaseParser,
    Dependency,
    Ecosystem,
    find_toml_string,
    split_package_tables,
)

# Pattern: package[extras]==version
REQUIREMENT_PATTERN = re.compile(
    r"^([a-zA-Z0-9._-]+)(?:\[[^\]]+\])?\s*(?:([=<>!~]+)\s*([^\s;#]+))?"
)
UNPINNED_VERSION = "*"
URL_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


class PythonRequirementsParser(BaseParser):
    """Parser for pip requirements.txt files."""

    kind = "requirements"
    ecosystem = Ecosystem.PYPI
    file_names = ("requirements.txt",)

    def can_parse(self, path: str) -> bool:
        """Accept requirements.txt as well as variants like requirements-dev.txt."""
        filename = path.replace("\\", "/").rsplit("/", 1)[-1].lower()
        return filename.startswith("requirements") and filename.endswith(".txt")

    def parse(self, content: bytes, path: str, config: ParseConfig) -> List[Dependency]:
        """Parse a requirements.txt file.

        Args:
            content: Raw file bytes
            path: Path of the requirements file
            config: Parser options

        Returns:
            Parsed dependencies
        """
        is_dev = self.is_dev_path(path)
        dependencies = []

        for line in self._decode(content).splitlines():
            line = line.strip()

            # Skip comments, empty lines and pip options (-r, -e, --index-url)
            if not line or line.startswith(("#", "-")):
                continue

            # Direct URL requirements carry no version
            if URL_PATTERN.match(line):
                continue

            dependency = self._parse_requirement_line(line, path, config, is_dev)
            if dependency:
                dependencies.append(dependency)

        return dependencies

    @staticmethod
    def is_dev_path(path: str) -> bool:
        """Guess whether a requirements file holds dev-only packages.

        requirements.txt has no notion of dev dependencies, so the file path
        is used instead: anything mentioning ``dev`` or ``test`` counts.
        """
        return "dev" in path or "test" in path

    def _parse_requirement_line(
        self,
        line: str,
        path: str,
        config: ParseConfig,
        is_dev: bool,
    ) -> Optional[Dependency]:
        """Parse a single requirement line.

        Args:
            line: Stripped requirement line
            path: Path of the requirements file
            config: Parser options
            is_dev: Whether the file is considered a dev requirements file

        Returns:
            Parsed dependency or None if the line is not a requirement
        """
        match = REQUIREMENT_PATTERN.match(line)
        if not match:
            return None

        name = match.group(1)
        version = match.group(3) or UNPINNED_VERSION

        # Only the first clause of ">=1.0,<2.0" is kept
        version = re.sub(r"[,;].*$", "", version).strip() or UNPINNED_VERSION

        return self._create_dependency(
            name=name.lower(),
            version=version,
            path=path,
            config=config,
            dev=is_dev,
        )


class PoetryLockParser(BaseParser):
    """Parser for poetry.lock files."""

    kind = "poetry"
    ecosystem = Ecosystem.PYPI
    file_names = ("poetry.lock",)

    def parse(self, content: bytes, path: str, config: ParseConfig) -> List[Dependency]:
        """Parse a poetry.lock file.

        Args:
            content: Raw file bytes
            path: Path of the lockfile
            config: Parser options

        Returns:
            Parsed dependencies
        """
        dependencies = []

        for block in split_package_tables(self._decode(content)):
            name = find_toml_string(block, "name")
            version = find_toml_string(block, "version")
            if not name or not version:
                continue

            dependency = self._create_dependency(
                name=name.lower(),
                version=version,
                path=path,
                config=config,
                dev=find_toml_string(block, "category") == "dev",
            )
            if dependency:
                dependencies.append(dependency)

        return dependencies
