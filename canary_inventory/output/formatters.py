"""Console formatters for canary-inventory results."""

from collections import Counter
from pathlib import Path
from typing import List, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config import LockfileEntry
from ..core.inventory import Inventory


class ConsoleFormatter:
    """Rich console formatter for canary-inventory output."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the console formatter.

        Args:
            console: Rich console instance
        """
        self.console = console or Console()

    def format_lockfiles(self, entries: Sequence[LockfileEntry], root: Path) -> None:
        """Display discovered lockfiles.

        Args:
            entries: Discovered lockfile entries
            root: Directory that was searched
        """
        if not entries:
            self.console.print(f"[yellow]No lockfiles found in {root}[/yellow]")
            return

        table = Table(title=f"Lockfiles in {root}")
        table.add_column("Kind", style="cyan")
        table.add_column("Path", style="white")

        for entry in entries:
            table.add_row(entry.kind, entry.path)

        self.console.print(table)
        self.console.print(f"Found {len(entries)} lockfile(s)")

    def format_inventory_summary(self, inventory: Inventory, path: Path) -> None:
        """Display a per-ecosystem summary of the inventory.

        Args:
            inventory: Assembled inventory
            path: Where the inventory was written
        """
        if not inventory.dependencies:
            self.console.print(Panel(
                f"No dependencies found. Empty inventory written to {path}",
                style="yellow",
            ))
            return

        totals = Counter(dep.ecosystem.value for dep in inventory.dependencies)
        dev_totals = Counter(dep.ecosystem.value for dep in inventory.dependencies if dep.dev)

        table = Table(title=f"Inventory for {inventory.project_id}")
        table.add_column("Ecosystem", style="cyan")
        table.add_column("Packages", justify="right", style="green")
        table.add_column("Dev", justify="right", style="dim")

        for ecosystem in sorted(totals):
            table.add_row(ecosystem, str(totals[ecosystem]), str(dev_totals[ecosystem]))

        table.add_row("total", str(inventory.package_count), str(sum(dev_totals.values())), style="bold")

        self.console.print(table)
        self.console.print(f"Wrote inventory to {path}")

    def format_supported_kinds(self, kinds: List[str], file_names: List[List[str]]) -> None:
        """Display the supported lockfile kinds and their file names."""
        table = Table(title="Supported lockfiles")
        table.add_column("Kind", style="cyan")
        table.add_column("Files", style="white")

        for kind, names in zip(kinds, file_names):
            table.add_row(kind, ", ".join(names))

        self.console.print(table)

    def format_error(self, error: str, details: Optional[str] = None) -> None:
        """Format and display error message.

        Args:
            error: Error message
            details: Optional error details
        """
        content = f"[bold red]Error:[/bold red] {error}"
        if details:
            content += f"\n\n[dim]{details}[/dim]"

        self.console.print(Panel(content, style="red"))
