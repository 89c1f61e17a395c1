"""Ruby lockfile parsers."""

import re
from typing import List

from ...config import ParseConfig
from .base import BaseParser, Dependency, Ecosystem

# Four-space indent marks a top-level gem; six spaces are its requirements.
SPEC_PATTERN = re.compile(r"^\s{4}([A-Za-z0-9_.-]+)\s+\(([^)]+)\)")


class GemfileLockParser(BaseParser):
    """Parser for Bundler Gemfile.lock files."""

    kind = "rubygems"
    ecosystem = Ecosystem.RUBYGEMS
    file_names = ("Gemfile.lock", "gems.locked")

    def parse(self, content: bytes, path: str, config: ParseConfig) -> List[Dependency]:
        """Parse the ``specs:`` sections of a Gemfile.lock.

        A section ends at the next unindented uppercase section header such
        as ``PLATFORMS`` or ``DEPENDENCIES``.

        Args:
            content: Raw file bytes
            path: Path of the lockfile
            config: Parser options

        Returns:
            Parsed dependencies
        """
        dependencies = []
        in_specs = False

        for line in self._decode(content).splitlines():
            stripped = line.strip()

            if stripped == "specs:":
                in_specs = True
                continue
            if not in_specs or not stripped:
                continue
            if line[:1].isupper():
                in_specs = False
                continue

            match = SPEC_PATTERN.match(line)
            if not match:
                continue

            # "nokogiri (1.15.4-x86_64-linux)" or "rack (>= 2.0, < 4)"
            version = match.group(2).split(",")[0].strip()
            dependency = self._create_dependency(match.group(1), version, path, config)
            if dependency:
                dependencies.append(dependency)

        return dependencies
