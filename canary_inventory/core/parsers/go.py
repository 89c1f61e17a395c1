"""Go module parsers."""

from typing import List

from ...config import ParseConfig
from .base import BaseParser, Dependency, Ecosystem

GO_MOD_SUFFIX = "/go.mod"


class GoSumParser(BaseParser):
    """Parser for go.sum checksum files."""

    kind = "go"
    ecosystem = Ecosystem.GO
    file_names = ("go.sum",)

    def can_parse(self, path: str) -> bool:
        return path.endswith("go.sum")

    def parse(self, content: bytes, path: str, config: ParseConfig) -> List[Dependency]:
        """Parse a go.sum file.

        Each line reads ``module version hash``. The ``/go.mod`` hash lines
        are folded into the plain module version.

        Args:
            content: Raw file bytes
            path: Path of the go.sum file
            config: Parser options

        Returns:
            Parsed dependencies
        """
        dependencies = []

        for line in self._decode(content).splitlines():
            parts = line.split()
            if len(parts) < 2:
                continue

            name, version = parts[0], parts[1]
            if version.endswith(GO_MOD_SUFFIX):
                version = version[: -len(GO_MOD_SUFFIX)]

            dependency = self._create_dependency(name, version, path, config)
            if dependency:
                dependencies.append(dependency)

        return dependencies


class GoModParser(BaseParser):
    """Parser for go.mod module files."""

    kind = "go"
    ecosystem = Ecosystem.GO
    file_names = ("go.mod",)

    def parse(self, content: bytes, path: str, config: ParseConfig) -> List[Dependency]:
        """Parse the require directives of a go.mod file.

        Both the ``require ( ... )`` block form and single-line
        ``require module version`` directives are read.

        Args:
            content: Raw file bytes
            path: Path of the go.mod file
            config: Parser options

        Returns:
            Parsed dependencies
        """
        dependencies = []
        in_require_block = False

        for raw_line in self._decode(content).splitlines():
            line = raw_line.strip()
            if not line or line.startswith("//"):
                continue

            if line.startswith("require ("):
                in_require_block = True
                continue
            if in_require_block and line.startswith(")"):
                in_require_block = False
                continue

            if in_require_block:
                candidate = line
            elif line.startswith("require "):
                candidate = line[len("require "):]
            else:
                continue

            parts = candidate.split("//", 1)[0].split()
            if len(parts) < 2:
                continue

            dependency = self._create_dependency(parts[0], parts[1], path, config)
            if dependency:
                dependencies.append(dependency)

        return dependencies
