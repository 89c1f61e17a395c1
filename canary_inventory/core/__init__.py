"""Lockfile parsing and inventory assembly for canary-inventory."""

from .dispatcher import LockfileDispatcher
from .inventory import Inventory, InventoryAssembler
from .normalizer import deduplicate, normalize
from .parsers import Dependency, Ecosystem

__all__ = [
    "LockfileDispatcher",
    "Inventory",
    "InventoryAssembler",
    "deduplicate",
    "normalize",
    "Dependency",
    "Ecosystem",
]
