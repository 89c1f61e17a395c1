"""Signals for the GitHub Actions runner."""

from pathlib import Path
from typing import Optional, Union

from rich.console import Console

# Annotation levels understood by the runner
ANNOTATION_LEVELS = ("notice", "warning", "error")


def write_outputs(output_file: Optional[Union[str, Path]], **values: object) -> bool:
    """Append ``key=value`` lines to the step's output file.

    Args:
        output_file: Path from ``GITHUB_OUTPUT``; nothing is written if unset
        **values: Output names and values, written in the given order

    Returns:
        True if the outputs were written
    """
    if not output_file:
        return False

    with open(output_file, "a", encoding="utf-8") as f:
        for key, value in values.items():
            f.write(f"{key}={value}\n")

    return True


def annotate(level: str, message: str, console: Optional[Console] = None) -> None:
    """Print a workflow command such as ``::warning::message``.

    Args:
        level: One of ``notice``, ``warning`` or ``error``
        message: Annotation text
        console: Console to print to
    """
    if level not in ANNOTATION_LEVELS:
        raise ValueError(f"Unknown annotation level: {level}")

    console = console or Console()
    # Workflow commands must reach stdout verbatim
    console.print(
        f"::{level}::{message}",
        markup=False,
        emoji=False,
        highlight=False,
        soft_wrap=True,
    )
