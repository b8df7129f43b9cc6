"""Show command implementation."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.table import Table

from ordmap.archive import dumps, read_archive
from ordmap.errors import ArchiveFormatError

console = Console()
err_console = Console(stderr=True)


def run_show(*, path: Path, json_output: bool) -> None:
    """Execute show command.

    Args:
        path: Archive file to read.
        json_output: Print the compact archive JSON instead of a table.
    """
    try:
        ordered = read_archive(path)
    except (ArchiveFormatError, OSError) as err:
        err_console.print(f"[red]✗[/red] Could not read {path}: {err}")
        raise SystemExit(1) from None

    if json_output:
        console.print_json(dumps(ordered))
        return

    if not ordered:
        console.print("[yellow]![/yellow] Archive is empty.")
        return

    table = Table(title=f"{path.name} ({len(ordered)} pairs)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for position, (key, value) in enumerate(ordered.items()):
        table.add_row(str(position), repr(key), repr(value))
    console.print(table)
