"""canary-inventory - build a normalized dependency inventory from lockfiles."""

__version__ = "0.1.0"

from .config import InventoryConfig, LockfileEntry, ParseConfig, parse_lockfile_entries
from .core.dispatcher import LockfileDispatcher
from .core.inventory import Inventory, InventoryAssembler
from .core.normalizer import deduplicate, normalize
from .core.parsers import Dependency, Ecosystem, registry

__all__ = [
    "InventoryConfig",
    "LockfileEntry",
    "ParseConfig",
    "parse_lockfile_entries",
    "LockfileDispatcher",
    "Inventory",
    "InventoryAssembler",
    "deduplicate",
    "normalize",
    "Dependency",
    "Ecosystem",
    "registry",
]
