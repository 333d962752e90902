"""Tests for the command line entrypoint."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from savejobs.app import main, parse_indices
from savejobs.config.settings import Settings


class TestParseIndices:
    """Tests for parse_indices."""

    def test_range(self) -> None:
        assert parse_indices("1-3") == [1, 2, 3]

    def test_list(self) -> None:
        assert parse_indices("1;2;4") == [1, 2, 4]

    def test_single(self) -> None:
        assert parse_indices("2") == [2]

    def test_mixed(self) -> None:
        assert parse_indices("1-2;5") == [1, 2, 5]

    def test_ignores_garbage(self) -> None:
        assert parse_indices("a;3;x-2;") == [3]

    def test_reversed_range_is_empty(self) -> None:
        assert parse_indices("3-1") == []


class TestMain:
    """Tests for main."""

    def test_no_args_prints_usage(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_create_list_execute(
        self,
        settings: Settings,
        source_tree: Path,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        target = tmp_path / "target"
        assert main(["create", "docs", str(source_tree), str(target), "full"], settings) == 0
        assert main(["list"], settings) == 0
        assert "1. docs [Full]" in capsys.readouterr().out

        assert main(["execute", "1"], settings) == 0
        assert "docs: 2/2 files copied, 0 failed" in capsys.readouterr().out
        assert (target / "sub" / "b.txt").read_bytes() == b"b" * 20

    def test_bare_indices(
        self, settings: Settings, source_tree: Path, tmp_path: Path
    ) -> None:
        main(["create", "docs", str(source_tree), str(tmp_path / "target"), "Full"], settings)
        assert main(["1-1"], settings) == 0
        assert (tmp_path / "target" / "a.txt").exists()

    def test_execute_nothing_selected(
        self, settings: Settings, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["execute", "7"], settings) == 1
        assert "No backup job" in capsys.readouterr().out

    def test_create_invalid_type(
        self, settings: Settings, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["create", "docs", "/a", "/b", "weekly"], settings) == 1
        assert "Unknown backup type" in capsys.readouterr().out

    def test_update_with_rename(
        self, settings: Settings, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["create", "docs", "/a", "/b", "Full"], settings)
        assert main(["update", "docs", "/c", "/d", "Differential", "documents"], settings) == 0
        main(["list"], settings)
        assert "documents [Differential] : /c -> /d" in capsys.readouterr().out

    def test_delete_unknown_suggests(
        self, settings: Settings, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["create", "Documents", "/a", "/b", "Full"], settings)
        assert main(["delete", "documnets"], settings) == 1
        out = capsys.readouterr().out
        assert "not found" in out
        assert "Did you mean 'Documents'?" in out

    def test_delete(self, settings: Settings, capsys: pytest.CaptureFixture[str]) -> None:
        main(["create", "docs", "/a", "/b", "Full"], settings)
        assert main(["delete", "docs"], settings) == 0
        assert "deleted successfully" in capsys.readouterr().out

    def test_logs_and_state(
        self, settings: Settings, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["create", "docs", "/a", "/b", "Full"], settings)
        capsys.readouterr()

        assert main(["logs"], settings) == 0
        logs = json.loads(capsys.readouterr().out)
        assert logs[0]["actionType"] == "JOB_CREATED"

        assert main(["state"], settings) == 0
        states = json.loads(capsys.readouterr().out)
        assert states["docs"]["status"] == "Pending"

    def test_logs_with_unknown_log_type(
        self, settings: Settings, capsys: pytest.CaptureFixture[str]
    ) -> None:
        settings.ensure_dirs()
        settings.log_file_for().write_text('[{"logType": "WARN"}]')

        assert main(["logs"], settings) == 1
        assert "Error:" in capsys.readouterr().out

    def test_non_utf8_jobs_file(
        self, settings: Settings, capsys: pytest.CaptureFixture[str]
    ) -> None:
        settings.ensure_dirs()
        settings.jobs_file.write_bytes(b"\xff\xfe")

        assert main(["list"], settings) == 0

    def test_unknown_command(
        self, settings: Settings, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["frobnicate"], settings) == 2
        assert "Unknown or incomplete command" in capsys.readouterr().out
