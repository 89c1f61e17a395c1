"""Base parser class and data models for lockfile parsing."""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath
from typing import Any, Dict, List, Optional, Tuple

from ...config import ParseConfig


class Ecosystem(str, Enum):
    """Package-manager identity domains an inventory can contain."""

    NPM = "npm"
    PYPI = "pypi"
    GO = "go"
    RUBYGEMS = "rubygems"
    CARGO = "cargo"
    COMPOSER = "composer"
    NUGET = "nuget"
    MAVEN = "maven"


@dataclass
class Dependency:
    """A single resolved dependency taken from a lockfile.

    Two records are equal when their ecosystem, name and version match;
    ``dev`` and ``source`` do not take part in identity.
    """

    ecosystem: Ecosystem
    name: str
    version: str
    dev: Optional[bool] = False
    source: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate and normalize the dependency."""
        if not self.ecosystem:
            raise ValueError("Dependency ecosystem cannot be empty")
        self.ecosystem = Ecosystem(self.ecosystem)

        self.name = (self.name or "").strip()
        self.version = (self.version or "").strip()

        if not self.name:
            raise ValueError("Dependency name cannot be empty")
        if not self.version:
            raise ValueError("Dependency version cannot be empty")

    @property
    def key(self) -> Tuple[str, str, str]:
        """Identity triple used for deduplication."""
        return (self.ecosystem.value, self.name, self.version)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the record into its inventory form.

        ``dev`` and ``lockfile_source`` are left out when undefined.

        Returns:
            Dictionary representation of the record
        """
        data: Dict[str, Any] = {
            "ecosystem": self.ecosystem.value,
            "name": self.name,
            "version": self.version,
        }
        if self.dev is not None:
            data["dev"] = self.dev
        if self.source:
            data["lockfile_source"] = self.source
        return data

    def __hash__(self) -> int:
        """Hash based on ecosystem, name and version."""
        return hash(self.key)

    def __eq__(self, other: Any) -> bool:
        """Equality based on ecosystem, name and version."""
        if not isinstance(other, Dependency):
            return False
        return self.key == other.key


class BaseParser(ABC):
    """Abstract base class for lockfile parsers.

    Parsers are pure: they receive the raw file content and never touch
    the filesystem themselves.
    """

    #: Lockfile kind this parser is registered under.
    kind: str = ""
    #: Ecosystem every record produced by this parser belongs to.
    ecosystem: Ecosystem
    #: File names this parser recognises.
    file_names: Tuple[str, ...] = ()

    def can_parse(self, path: str) -> bool:
        """Check if the file name looks like one this parser handles.

        Args:
            path: Path of the lockfile

        Returns:
            True if the base name matches one of ``file_names``
        """
        return PurePath(path).name in self.file_names

    @abstractmethod
    def parse(self, content: bytes, path: str, config: ParseConfig) -> List[Dependency]:
        """Parse lockfile content.

        Args:
            content: Raw file bytes
            path: Originating path, recorded on every dependency
            config: Parser options

        Returns:
            Dependencies in file order
        """

    def _decode(self, content: bytes) -> str:
        """Decode lockfile bytes as UTF-8, dropping a leading BOM."""
        text = content.decode("utf-8")
        if text.startswith("\ufeff"):
            text = text[1:]
        return text

    def _create_dependency(
        self,
        name: Any,
        version: Any,
        path: str,
        config: ParseConfig,
        dev: bool = False,
    ) -> Optional[Dependency]:
        """Create a Dependency, or None if it must not be emitted.

        Returns None when the name or version is missing or not a string,
        and when the record is a dev dependency that the configuration
        excludes.
        """
        if dev and not config.include_dev:
            return None
        if not isinstance(name, str) or not isinstance(version, str):
            return None

        try:
            return Dependency(
                ecosystem=self.ecosystem,
                name=name,
                version=version,
                dev=dev,
                source=path,
            )
        except ValueError:
            return None


# Shared by the TOML-like lockfiles (poetry.lock, Cargo.lock).
PACKAGE_TABLE_MARKER = "[[package]]"


def split_package_tables(text: str) -> List[str]:
    """Split a TOML-like lockfile into its ``[[package]]`` blocks.

    Anything before the first marker is discarded.
    """
    return text.split(PACKAGE_TABLE_MARKER)[1:]


def find_toml_string(block: str, key: str) -> Optional[str]:
    """Return the double-quoted value of ``key`` at the start of a line in ``block``."""
    match = re.search(rf'^{re.escape(key)}\s*=\s*"([^"]+)"', block, re.MULTILINE)
    return match.group(1) if match else None
