"""Java build file parsers."""

import re
from typing import List, Optional

from ...config import ParseConfig
from .base import BaseParser, Dependency, Ecosystem

DEPENDENCY_MANAGEMENT_PATTERN = re.compile(
    r"<dependencyManagement>.*?</dependencyManagement>", re.DOTALL
)
DEPENDENCY_PATTERN = re.compile(r"<dependency>.*?</dependency>", re.DOTALL)
PROPERTY_PLACEHOLDER = "${"


def _tag_text(block: str, tag: str) -> Optional[str]:
    match = re.search(rf"<{tag}>([^<]+)</{tag}>", block)
    return match.group(1).strip() if match else None


class MavenPomParser(BaseParser):
    """Parser for Maven pom.xml files.

    The POM is scanned textually rather than loaded as XML so that a
    document with unrelated syntax errors still yields its dependencies.
    """

    kind = "maven"
    ecosystem = Ecosystem.MAVEN
    file_names = ("pom.xml",)

    def parse(self, content: bytes, path: str, config: ParseConfig) -> List[Dependency]:
        """Parse the ``<dependency>`` declarations of a pom.xml.

        ``<dependencyManagement>`` sections are removed first: they only pin
        versions (often through imported BOMs) and do not add dependencies.
        Declarations whose version still contains a ``${property}``
        placeholder are skipped.

        Args:
            content: Raw file bytes
            path: Path of the POM
            config: Parser options

        Returns:
            Parsed dependencies
        """
        text = DEPENDENCY_MANAGEMENT_PATTERN.sub("", self._decode(content))
        dependencies = []

        for block in DEPENDENCY_PATTERN.findall(text):
            group_id = _tag_text(block, "groupId")
            artifact_id = _tag_text(block, "artifactId")
            version = _tag_text(block, "version")

            if not group_id or not artifact_id or not version:
                continue
            if PROPERTY_PLACEHOLDER in version:
                continue

            dependency = self._create_dependency(
                name=f"{group_id}:{artifact_id}",
                version=version,
                path=path,
                config=config,
                dev=_tag_text(block, "scope") == "test",
            )
            if dependency:
                dependencies.append(dependency)

        return dependencies
