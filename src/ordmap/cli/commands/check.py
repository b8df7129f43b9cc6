"""Check command implementation."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console

from ordmap.archive import read_archive
from ordmap.errors import ArchiveFormatError, InvariantViolationError

console = Console()
err_console = Console(stderr=True)


def run_check(*, path: Path) -> None:
    """Execute check command."""
    console.print(f"[blue]i[/blue] Checking {path}...")

    try:
        ordered = read_archive(path)
    except (ArchiveFormatError, OSError) as err:
        err_console.print(f"[red]✗[/red] Archive invalid: {err}")
        raise SystemExit(1) from None

    try:
        ordered.check_invariants()
    except InvariantViolationError as err:
        err_console.print(f"\n[red]✗[/red] Found {len(err.problems)} consistency errors:")
        for problem in err.problems:
            err_console.print(f"  • {problem}")
        raise SystemExit(1) from None

    console.print(f"[green]✓[/green] {len(ordered)} pairs, order and index consistent")
