"""Main CLI interface for canary-inventory."""

import asyncio
import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from ..config import (
    DEFAULT_PROJECT_ID,
    INVENTORY_FILENAME,
    InventoryConfig,
    LockfileEntry,
    format_lockfile_entries,
    parse_fail_on_error,
    parse_include_dev,
    parse_lockfile_entries,
)
from ..core.dispatcher import LockfileDispatcher
from ..core.inventory import Inventory, InventoryAssembler
from ..core.normalizer import normalize
from ..core.parsers import registry
from ..exceptions import SubmissionError
from ..output.formatters import ConsoleFormatter
from ..output.github import annotate, write_outputs
from ..submit.client import IngestClient, SubmissionResult
from ..utils.logging import get_logger, setup_logging
from ..utils.path_utils import find_lockfiles

app = typer.Typer(
    name="canary-inventory",
    help="Build a dependency inventory from lockfiles and submit it for scanning",
    add_completion=False
)

console = Console()
logger = get_logger("CLI")


def build_inventory(
    entries: List[LockfileEntry],
    config: InventoryConfig,
    max_workers: int = 1,
) -> Inventory:
    """Parse, normalize and assemble the inventory for a set of lockfiles.

    Args:
        entries: Lockfile entries in discovery order
        config: Run configuration
        max_workers: Number of files parsed concurrently

    Returns:
        Assembled inventory (possibly without dependencies)
    """
    dispatcher = LockfileDispatcher(config.parse_config, max_workers=max_workers)
    dependencies = dispatcher.dispatch(entries)
    unique = normalize(dependencies, config.parse_config)
    logger.info(f"Total unique packages: {len(unique)}")
    return InventoryAssembler(config).assemble(unique)


@app.command()
def discover(
    root: Path = typer.Argument(
        Path("."),
        envvar="WORKING_DIR",
        help="Directory to search for lockfiles"
    ),
    github_output: Optional[Path] = typer.Option(
        None,
        "--github-output",
        envvar="GITHUB_OUTPUT",
        help="File receiving the 'lockfiles' and 'count' outputs"
    ),
    ignore_patterns: Optional[List[str]] = typer.Option(
        None,
        "--ignore",
        help="Additional directory name patterns to skip"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Find lockfiles below a directory."""
    setup_logging(verbose=verbose)

    if not root.exists():
        console.print(f"[red]Error: Path does not exist: {root}[/red]")
        raise typer.Exit(1)

    console.print(f"Searching for lockfiles in: {root}")
    entries = find_lockfiles(root, ignore_patterns)
    ConsoleFormatter(console).format_lockfiles(entries, root)

    if not entries:
        annotate("warning", f"No lockfiles found in {root}", console)

    write_outputs(
        github_output,
        lockfiles=format_lockfile_entries(entries),
        count=len(entries),
    )


@app.command()
def parse(
    lockfiles: str = typer.Option(
        "",
        "--lockfiles",
        "-l",
        envvar="LOCKFILES",
        help="Comma-separated kind:path entries, e.g. npm:package-lock.json"
    ),
    project_id: str = typer.Option(
        DEFAULT_PROJECT_ID,
        "--project-id",
        envvar="PROJECT_ID",
        help="Project identifier recorded in the inventory"
    ),
    include_dev: str = typer.Option(
        "true",
        "--include-dev",
        envvar="INCLUDE_DEV",
        help="Set to 'false' to leave out dev dependencies"
    ),
    working_dir: Path = typer.Option(
        Path("."),
        "--working-dir",
        "-w",
        envvar="WORKING_DIR",
        help="Directory the inventory is written to"
    ),
    github_output: Optional[Path] = typer.Option(
        None,
        "--github-output",
        envvar="GITHUB_OUTPUT",
        help="File receiving the 'packages_count' and 'inventory_path' outputs"
    ),
    workers: int = typer.Option(1, "--workers", min=1, help="Parse files on a thread pool"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Parse lockfiles and write the dependency inventory."""
    setup_logging(verbose=verbose)

    config = InventoryConfig(
        project_id=project_id,
        include_dev=parse_include_dev(include_dev),
        working_dir=working_dir,
        github_output=github_output,
    )
    entries = parse_lockfile_entries(lockfiles)
    if not entries:
        console.print("No lockfiles to parse")

    inventory = build_inventory(entries, config, max_workers=workers)
    assembler = InventoryAssembler(config)

    try:
        path = assembler.write(inventory)
    except OSError as e:
        ConsoleFormatter(console).format_error("Failed to write inventory", str(e))
        raise typer.Exit(1)

    assembler.emit_outputs(inventory, path)
    ConsoleFormatter(console).format_inventory_summary(inventory, path)


async def _submit(
    worker_url: str,
    auth_token: str,
    inventory_path: Path,
    max_retries: int,
) -> SubmissionResult:
    async with IngestClient(worker_url, auth_token, max_retries=max_retries) as client:
        return await client.submit(inventory_path)


@app.command()
def submit(
    worker_url: str = typer.Option(
        ...,
        "--worker-url",
        envvar="WORKER_URL",
        help="Base URL of the ingest worker"
    ),
    auth_token: str = typer.Option(
        ...,
        "--auth-token",
        envvar="AUTH_TOKEN",
        help="Bearer token for the ingest worker"
    ),
    inventory_path: Path = typer.Option(
        Path(INVENTORY_FILENAME),
        "--inventory-path",
        envvar="INVENTORY_PATH",
        help="Inventory document to submit"
    ),
    fail_on_error: str = typer.Option(
        "true",
        "--fail-on-error",
        envvar="FAIL_ON_ERROR",
        help="Set to anything other than 'true' to continue after a failed submission"
    ),
    github_output: Optional[Path] = typer.Option(
        None,
        "--github-output",
        envvar="GITHUB_OUTPUT",
        help="File receiving the 'packages_count' and 'status' outputs"
    ),
    retries: int = typer.Option(2, "--retries", min=0, help="Retries for network errors and 5xx responses"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Submit the inventory to the ingest endpoint."""
    setup_logging(verbose=verbose)

    if not inventory_path.is_file():
        annotate("error", f"Inventory file not found: {inventory_path}", console)
        raise typer.Exit(1)

    try:
        document = json.loads(inventory_path.read_text(encoding="utf-8"))
        packages_count = len(document["dependencies"])
    except (ValueError, KeyError, TypeError) as e:
        annotate("error", f"Inventory file is not valid: {inventory_path} ({e})", console)
        raise typer.Exit(1)

    console.print(
        f"Submitting inventory with {packages_count} packages to {worker_url.rstrip('/')}/ingest"
    )

    result: Optional[SubmissionResult] = None
    try:
        result = asyncio.run(_submit(worker_url, auth_token, inventory_path, retries))
    except SubmissionError as e:
        logger.error(str(e))

    if result is not None:
        console.print(f"Response code: {result.status_code}", highlight=False)
        console.print(
            f"Response: {result.body or 'No response body'}",
            markup=False,
            emoji=False,
            highlight=False,
        )

    if result is not None and result.ok:
        write_outputs(github_output, packages_count=packages_count, status="success")
        console.print("[green]Successfully submitted inventory[/green]")
        return

    write_outputs(github_output, packages_count=packages_count, status="failed")
    if result is not None:
        annotate("error", f"Failed to submit inventory: HTTP {result.status_code} - {result.body}", console)
    else:
        annotate("error", "Failed to submit inventory: no response from ingest endpoint", console)

    if parse_fail_on_error(fail_on_error):
        raise typer.Exit(1)

    annotate("warning", "Submission failed but fail_on_error is false, continuing", console)


@app.command()
def info() -> None:
    """Show supported lockfile kinds."""
    kinds = registry.get_supported_kinds()
    ConsoleFormatter(console).format_supported_kinds(
        kinds, [registry.get_file_names(kind) for kind in kinds]
    )


def main() -> None:
    """Main entry point for the canary-inventory CLI."""
    app()


if __name__ == "__main__":
    main()
