"""Lockfile parsers for the supported package ecosystems."""

from .base import BaseParser, Dependency, Ecosystem
from .dotnet import NuGetLockParser
from .go import GoModParser, GoSumParser
from .java import MavenPomParser
from .nodejs import NpmLockParser
from .php import ComposerLockParser
from .python import PoetryLockParser, PythonRequirementsParser
from .registry import ParserRegistry
from .ruby import GemfileLockParser
from .rust import CargoLockParser

# Register built-in parsers
registry = ParserRegistry()

registry.register(NpmLockParser())
registry.register(PythonRequirementsParser())
registry.register(PoetryLockParser())

# go.sum is only picked when the path names one
registry.register(GoModParser(), default=True)
registry.register(GoSumParser())

registry.register(GemfileLockParser())
registry.register(CargoLockParser())
registry.register(ComposerLockParser())
registry.register(NuGetLockParser())
registry.register(MavenPomParser())

__all__ = [
    "BaseParser",
    "Dependency",
    "Ecosystem",
    "ParserRegistry",
    "registry",
]
