"""Sort command implementation."""

from __future__ import annotations

from pathlib import Path

import structlog
from rich.console import Console

from ordmap.archive import dumps, read_archive, write_archive
from ordmap.errors import ArchiveFormatError

logger = structlog.get_logger()

console = Console()
err_console = Console(stderr=True)


def run_sort(*, path: Path, reverse: bool, output: Path | None) -> None:
    """Execute sort command.

    Args:
        path: Archive file to read.
        reverse: Sort in descending key order.
        output: Destination file. Prints to stdout when omitted.
    """
    try:
        ordered = read_archive(path, mutable=True)
    except (ArchiveFormatError, OSError) as err:
        err_console.print(f"[red]✗[/red] Could not read {path}: {err}")
        raise SystemExit(1) from None

    try:
        ordered.sort(reverse=reverse)
    except TypeError as err:
        err_console.print(f"[red]✗[/red] Keys cannot be compared: {err}")
        raise SystemExit(1) from None

    logger.debug("archive_sorted", path=str(path), count=len(ordered), reverse=reverse)

    if output is None:
        console.print(dumps(ordered), markup=False, emoji=False, highlight=False, soft_wrap=True)
        return

    write_archive(ordered, output)
    console.print(f"[green]✓[/green] Wrote {len(ordered)} sorted pairs to {output}")
