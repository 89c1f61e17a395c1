"""Rust lockfile parsers."""

from typing import List

from ...config import ParseConfig
from .base import (
    BaseParser,
    Dependency,
    Ecosystem,
    find_toml_string,
    split_package_tables,
)


class CargoLockParser(BaseParser):
    """Parser for Cargo.lock files."""

    kind = "cargo"
    ecosystem = Ecosystem.CARGO
    file_names = ("Cargo.lock",)

    def parse(self, content: bytes, path: str, config: ParseConfig) -> List[Dependency]:
        dependencies = []

        for block in split_package_tables(self._decode(content)):
            dependency = self._create_dependency(
                name=find_toml_string(block, "name"),
                version=find_toml_string(block, "version"),
                path=path,
                config=config,
            )
            if dependency:
                dependencies.append(dependency)

        return dependencies
