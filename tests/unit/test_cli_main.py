"""Tests for CLI main entry point."""
from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

import pytest

runner = CliRunner()


@pytest.fixture
def archive_file(tmp_path: Path) -> Path:
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps({"keys": ["zeta", "alpha", "mid"], "objects": [26, 1, 13]}),
        encoding="utf-8",
    )
    return path


class TestCLIMain:
    """Tests for CLI main commands."""

    def test_version_flag(self) -> None:
        """--version shows version and exits."""
        from ordmap.cli.main import app

        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "ordmap" in result.stdout.lower()

    def test_help_flag(self) -> None:
        """--help lists the commands."""
        from ordmap.cli.main import app

        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "show" in result.stdout
        assert "sort" in result.stdout
        assert "check" in result.stdout

    def test_sort_help(self) -> None:
        from ordmap.cli.main import app

        result = runner.invoke(app, ["sort", "--help"])

        assert result.exit_code == 0
        assert "--reverse" in result.stdout


class TestShowCommand:
    """Tests for ordmap show."""

    def test_show_table(self, archive_file: Path) -> None:
        from ordmap.cli.main import app

        result = runner.invoke(app, ["show", str(archive_file)])

        assert result.exit_code == 0
        assert result.stdout.index("zeta") < result.stdout.index("alpha") < result.stdout.index("mid")

    def test_show_json(self, archive_file: Path) -> None:
        from ordmap.cli.main import app

        result = runner.invoke(app, ["show", str(archive_file), "--json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["keys"] == ["zeta", "alpha", "mid"]

    def test_show_missing_file(self, tmp_path: Path) -> None:
        from ordmap.cli.main import app

        result = runner.invoke(app, ["show", str(tmp_path / "nope.json")])

        assert result.exit_code == 1


class TestSortCommand:
    """Tests for ordmap sort."""

    def test_sort_to_stdout(self, archive_file: Path) -> None:
        from ordmap.cli.main import app

        result = runner.invoke(app, ["sort", str(archive_file)])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data == {"keys": ["alpha", "mid", "zeta"], "objects": [1, 13, 26]}

    def test_sort_reverse_to_file(self, archive_file: Path, tmp_path: Path) -> None:
        from ordmap.cli.main import app

        output = tmp_path / "sorted.json"
        result = runner.invoke(app, ["sort", str(archive_file), "--reverse", "-o", str(output)])

        assert result.exit_code == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["keys"] == ["zeta", "mid", "alpha"]

    def test_sort_incomparable_keys(self, tmp_path: Path) -> None:
        from ordmap.cli.main import app

        path = tmp_path / "mixed.json"
        path.write_text(json.dumps({"keys": ["a", 1], "objects": [1, 2]}), encoding="utf-8")

        result = runner.invoke(app, ["sort", str(path)])

        assert result.exit_code == 1


class TestCheckCommand:
    """Tests for ordmap check."""

    def test_check_valid(self, archive_file: Path) -> None:
        from ordmap.cli.main import app

        result = runner.invoke(app, ["check", str(archive_file)])

        assert result.exit_code == 0
        assert "3 pairs" in result.stdout

    def test_check_duplicate_keys(self, tmp_path: Path) -> None:
        from ordmap.cli.main import app

        path = tmp_path / "dupes.json"
        path.write_text(json.dumps({"keys": ["a", "a"], "objects": [1, 2]}), encoding="utf-8")

        result = runner.invoke(app, ["check", str(path)])

        assert result.exit_code == 1
