"""Main CLI entry point using Typer.

This module defines the top-level CLI commands:
- ordmap show: Print the pairs of an archived ordered map
- ordmap sort: Sort an archived ordered map by key
- ordmap check: Verify an archived ordered map decodes consistently
"""

from __future__ import annotations

import logging
from pathlib import Path  # noqa: TC003 - Typer requires runtime access
from typing import Annotated

import typer
from rich.console import Console

from ordmap import __version__

app = typer.Typer(
    name="ordmap",
    help="ordmap - inspect and reorder archived ordered maps",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"ordmap {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output."),
    ] = False,
) -> None:
    """ordmap - inspect and reorder archived ordered maps.

    Use 'ordmap COMMAND --help' for information on specific commands.
    """
    import structlog  # noqa: PLC0415

    from ordmap.config import get_settings  # noqa: PLC0415

    level = logging.DEBUG if verbose else logging.getLevelName(get_settings().log_level)
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


@app.command()
def show(
    path: Annotated[Path, typer.Argument(help="Archive file (JSON keys/objects).")],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output raw JSON."),
    ] = False,
) -> None:
    """Show the pairs of an archived map in order.

    Examples:
        ordmap show settings.json

        ordmap show settings.json --json
    """
    from ordmap.cli.commands.show import run_show  # noqa: PLC0415

    run_show(path=path, json_output=json_output)


@app.command()
def sort(
    path: Annotated[Path, typer.Argument(help="Archive file (JSON keys/objects).")],
    reverse: Annotated[
        bool,
        typer.Option("--reverse", "-r", help="Sort in descending key order."),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the sorted archive to a file."),
    ] = None,
) -> None:
    """Sort an archived map by key.

    Keys are compared as-is; the sort is stable.

    Examples:
        ordmap sort settings.json

        ordmap sort settings.json --reverse --output sorted.json
    """
    from ordmap.cli.commands.sort import run_sort  # noqa: PLC0415

    run_sort(path=path, reverse=reverse, output=output)


@app.command()
def check(
    path: Annotated[Path, typer.Argument(help="Archive file (JSON keys/objects).")],
) -> None:
    """Check that an archive decodes into a consistent map.

    Verifies:
    - keys and objects have the same length
    - no key is repeated
    - positions and key index agree

    Examples:
        ordmap check settings.json
    """
    from ordmap.cli.commands.check import run_check  # noqa: PLC0415

    run_check(path=path)


if __name__ == "__main__":
    app()
