"""Node.js lockfile parsers."""

import json
from typing import Any, Dict, List

from ...config import ParseConfig
from .base import BaseParser, Dependency, Ecosystem

NODE_MODULES = "node_modules/"


class NpmLockParser(BaseParser):
    """Parser for npm package-lock.json files (lockfile versions 1 to 3)."""

    kind = "npm"
    ecosystem = Ecosystem.NPM
    file_names = ("package-lock.json", "npm-shrinkwrap.json")

    def parse(self, content: bytes, path: str, config: ParseConfig) -> List[Dependency]:
        """Parse a package-lock.json file.

        Lockfiles that carry a ``packages`` map (v2/v3) are read from it;
        the legacy ``dependencies`` tree (v1) is used only when that map
        is absent.

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

        packages = lock.get("packages")
        if isinstance(packages, dict) and packages:
            return self._parse_packages(packages, path, config)

        dependencies: List[Dependency] = []
        legacy = lock.get("dependencies")
        if isinstance(legacy, dict):
            self._walk_legacy(legacy, path, config, False, dependencies)

        dev_legacy = lock.get("devDependencies")
        if isinstance(dev_legacy, dict):
            self._walk_legacy(dev_legacy, path, config, True, dependencies)

        return dependencies

    def _parse_packages(
        self,
        packages: Dict[str, Any],
        path: str,
        config: ParseConfig,
    ) -> List[Dependency]:
        """Extract dependencies from a v2/v3 ``packages`` map.

        Args:
            packages: Map of install path to package metadata
            path: Path of the lockfile
            config: Parser options

        Returns:
            Parsed dependencies
        """
        dependencies = []

        for pkg_path, pkg in packages.items():
            # Root project
            if pkg_path == "" or not isinstance(pkg, dict):
                continue

            dependency = self._create_dependency(
                name=self._package_name(pkg_path),
                version=pkg.get("version"),
                path=path,
                config=config,
                dev=bool(pkg.get("dev", False)),
            )
            if dependency:
                dependencies.append(dependency)

        return dependencies

    def _walk_legacy(
        self,
        deps: Dict[str, Any],
        path: str,
        config: ParseConfig,
        is_dev: bool,
        out: List[Dependency],
    ) -> None:
        """Recursively collect a v1 ``dependencies`` tree.

        Nested entries inherit the dev flag of the tree they were found in.
        """
        for name, info in deps.items():
            if not isinstance(info, dict) or not info.get("version"):
                continue

            dependency = self._create_dependency(
                name=name,
                version=info.get("version"),
                path=path,
                config=config,
                dev=is_dev,
            )
            if dependency is None:
                continue
            out.append(dependency)

            nested = info.get("dependencies")
            if isinstance(nested, dict):
                self._walk_legacy(nested, path, config, is_dev, out)

    @staticmethod
    def _package_name(pkg_path: str) -> str:
        """Reduce an install path to the package name.

        ``node_modules/a/node_modules/@scope/b`` becomes ``@scope/b``.
        """
        return pkg_path.split(NODE_MODULES)[-1]
