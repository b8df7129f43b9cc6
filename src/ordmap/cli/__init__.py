"""CLI module."""

from __future__ import annotations

from ordmap.cli.main import app

__all__ = ["app"]
