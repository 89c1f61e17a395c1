"""Inventory document model and assembly."""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..config import InventoryConfig
from ..output.github import write_outputs
from ..utils.logging import get_logger
from .parsers import Dependency

INVENTORY_SOURCE = "github-action"

logger = get_logger("InventoryAssembler")


def format_timestamp(moment: datetime) -> str:
    """Render a timestamp as UTC ISO-8601 with milliseconds, e.g. ``2024-05-01T12:00:00.000Z``."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Inventory:
    """The normalized dependency inventory of one project."""

    project_id: str
    generated_at: datetime
    dependencies: List[Dependency] = field(default_factory=list)
    source: str = INVENTORY_SOURCE

    @property
    def package_count(self) -> int:
        return len(self.dependencies)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the inventory to its JSON document shape.

        Returns:
            Dictionary with ``project_id``, ``generated_at``, ``source`` and
            ``dependencies`` keys
        """
        return {
            "project_id": self.project_id,
            "generated_at": format_timestamp(self.generated_at),
            "source": self.source,
            "dependencies": [dep.to_dict() for dep in self.dependencies],
        }

    def to_json(self) -> str:
        """Serialize the inventory as two-space indented JSON."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)


class InventoryAssembler:
    """Builds, writes and announces the inventory document."""

    def __init__(
        self,
        config: InventoryConfig,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the assembler.

        Args:
            config: Run configuration
            clock: Source of the ``generated_at`` timestamp
        """
        self.config = config
        self.clock = clock

    def assemble(self, dependencies: Iterable[Dependency]) -> Inventory:
        """Wrap deduplicated dependencies with run metadata.

        An empty input is valid and produces an inventory without
        dependencies.

        Args:
            dependencies: Normalized dependencies

        Returns:
            Inventory for the configured project
        """
        return Inventory(
            project_id=self.config.project_id,
            generated_at=self.clock(),
            dependencies=list(dependencies),
        )

    def write(self, inventory: Inventory, output_path: Optional[Path] = None) -> Path:
        """Save the inventory document.

        Args:
            inventory: Inventory to save
            output_path: Destination (defaults to the configured inventory path)

        Returns:
            Path the inventory was written to
        """
        path = Path(output_path or self.config.inventory_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        try:
            path.write_text(inventory.to_json(), encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to write inventory to {path}: {e}")
            raise

        logger.info(f"Wrote inventory to {path}")
        return path

    def emit_outputs(self, inventory: Inventory, path: Path) -> bool:
        """Report the package count and inventory path to the calling workflow.

        Args:
            inventory: Written inventory
            path: Location it was written to

        Returns:
            True if a results file was configured and written
        """
        return write_outputs(
            self.config.github_output,
            packages_count=inventory.package_count,
            inventory_path=path,
        )
