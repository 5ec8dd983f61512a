"""Tests for the command-line interface."""

import json
import sys
from pathlib import Path

import pytest

from mealpace.cli import main


def run_cli(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    monkeypatch.setattr(sys, "argv", ["mealpace", *args])
    return main()


class TestCli:
    """Tests for the mealpace command."""

    def test_no_arguments_prints_help(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test running without actions shows help."""
        assert run_cli(monkeypatch) == 1
        assert "usage" in capsys.readouterr().out

    def test_merge_and_status(
        self,
        tmp_path: Path,
        fixtures_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test merging statements then showing pacing."""
        storage = tmp_path / "store.json"

        code = run_cli(
            monkeypatch,
            str(fixtures_dir / "statement_blocks.html"),
            str(fixtures_dir / "statement_flex.html"),
            "--storage", str(storage),
            "--status",
            "--now", "2024-09-01",
        )

        out = capsys.readouterr().out
        assert code == 0
        assert storage.exists()
        assert "Current meal option: Green" in out
        assert "Current day: 8" in out
        assert "Meal blocks remaining: 283" in out
        assert "Flex dollars remaining: $240.00" in out
        assert "Ahead by" in out

    def test_no_data_statement(
        self, tmp_path: Path, fixtures_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test a statement without plans fails."""
        code = run_cli(
            monkeypatch,
            str(fixtures_dir / "statement_empty.html"),
            "--storage", str(tmp_path / "store.json"),
        )
        assert code == 1

    def test_export_and_import(
        self,
        tmp_path: Path,
        fixtures_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test exporting from one store and importing into another."""
        export_path = tmp_path / "backup.json"
        run_cli(
            monkeypatch,
            str(fixtures_dir / "statement_blocks.html"),
            "--storage", str(tmp_path / "a.json"),
            "--export", str(export_path),
        )

        code = run_cli(
            monkeypatch,
            "--storage", str(tmp_path / "b.json"),
            "--import-json", str(export_path),
        )

        assert code == 0
        data = json.loads(export_path.read_text())
        assert data["currentMealOption"] == "Green"
        stored = json.loads((tmp_path / "b.json").read_text())
        assert len(stored["state"]["mealPlans"]) == 3

    def test_clear_requires_confirmation(
        self, tmp_path: Path, fixtures_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test --clear does nothing without --yes."""
        storage = tmp_path / "store.json"
        run_cli(monkeypatch, str(fixtures_dir / "statement_blocks.html"), "--storage", str(storage))

        assert run_cli(monkeypatch, "--clear", "--storage", str(storage)) == 1
        assert len(json.loads(storage.read_text())["state"]["mealPlans"]) == 3

        assert run_cli(monkeypatch, "--clear", "--yes", "--storage", str(storage)) == 0
        assert json.loads(storage.read_text())["state"]["mealPlans"] == []

    def test_series(
        self,
        tmp_path: Path,
        fixtures_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test usage series output is JSON."""
        storage = tmp_path / "store.json"
        run_cli(monkeypatch, str(fixtures_dir / "statement_blocks.html"), "--storage", str(storage))
        capsys.readouterr()

        code = run_cli(
            monkeypatch, "--series", "blocks", "--storage", str(storage), "--now", "2024-09-01"
        )

        series = json.loads(capsys.readouterr().out)
        assert code == 0
        assert series["ideal"][0] == [0, 286.0]
        assert series["actual"][-1] == [8, 283.0]

    def test_invalid_now(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a bad --now date is rejected."""
        code = run_cli(
            monkeypatch, "--status", "--now", "someday", "--storage", str(tmp_path / "s.json")
        )
        assert code == 1
