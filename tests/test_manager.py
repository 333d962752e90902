"""Tests for the backup manager."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from savejobs.config.settings import Settings
from savejobs.core.logger import RunLogger
from savejobs.core.manager import BackupManager
from savejobs.core.models import (
    ActionType,
    BackupJob,
    JobNotFoundError,
    JobStatus,
    MaxJobsReachedError,
)


@pytest.fixture
def manager(settings: Settings) -> Iterator[BackupManager]:
    mgr = BackupManager(settings, run_logger=RunLogger(name="savejobs.test.manager", console=False))
    yield mgr
    mgr.close()


def _actions(manager: BackupManager, job_name: str) -> list[ActionType]:
    return [r.action_type for r in manager.read_logs() if r.job_name == job_name]


class TestBackupManager:
    """Tests for BackupManager."""

    def test_creates_files(self, manager: BackupManager, settings: Settings) -> None:
        assert settings.state_file.exists()
        assert settings.log_file_for().exists()

    def test_add_job(self, manager: BackupManager, backup_job: BackupJob) -> None:
        manager.add_job(backup_job)

        assert manager.get_job("docs") == backup_job
        assert manager.states()["docs"].status == JobStatus.PENDING
        assert _actions(manager, "docs") == [ActionType.JOB_CREATED]

    def test_add_job_at_capacity(self, tmp_path: Path) -> None:
        settings = Settings(base_dir=tmp_path / "data", max_jobs=1)
        mgr = BackupManager(settings, run_logger=RunLogger(name="savejobs.test.cap", console=False))
        mgr.add_job(BackupJob("one", "/a", "/b"))
        with pytest.raises(MaxJobsReachedError):
            mgr.add_job(BackupJob("two", "/a", "/b"))
        assert "two" not in mgr.states()
        mgr.close()

    def test_update_renames_state(self, manager: BackupManager, backup_job: BackupJob) -> None:
        manager.add_job(backup_job)
        manager.execute([1])

        renamed = BackupJob("documents", backup_job.source_path, backup_job.target_path)
        manager.update_job("docs", renamed)

        states = manager.states()
        assert "docs" not in states
        assert states["documents"].total_files == 2
        assert _actions(manager, "documents") == [ActionType.JOB_UPDATED]

    def test_remove_job(self, manager: BackupManager, backup_job: BackupJob) -> None:
        manager.add_job(backup_job)
        manager.remove_job("docs")

        assert manager.get_job("docs") is None
        assert "docs" not in manager.states()
        assert _actions(manager, "docs")[-1] == ActionType.JOB_DELETED

    def test_remove_unknown(self, manager: BackupManager) -> None:
        with pytest.raises(JobNotFoundError):
            manager.remove_job("ghost")

    def test_readded_job_starts_fresh(
        self, manager: BackupManager, backup_job: BackupJob
    ) -> None:
        manager.add_job(backup_job)
        manager.execute([1])
        assert manager.states()["docs"].status == JobStatus.INACTIVE

        manager.remove_job("docs")
        manager.add_job(backup_job)

        state = manager.states()["docs"]
        assert state.status == JobStatus.PENDING
        assert state.total_files == 0

    def test_execute(self, manager: BackupManager, backup_job: BackupJob) -> None:
        manager.add_job(backup_job)
        reports = manager.execute([1])

        assert reports[0].copied == 2
        assert (Path(backup_job.target_path) / "sub" / "b.txt").exists()

    def test_state_survives_restart(
        self, settings: Settings, manager: BackupManager, backup_job: BackupJob
    ) -> None:
        manager.add_job(backup_job)
        manager.execute([1])

        restarted = BackupManager(
            settings, run_logger=RunLogger(name="savejobs.test.restart", console=False)
        )
        state = restarted.states()["docs"]
        assert state.status == JobStatus.INACTIVE
        assert state.total_bytes == 30
        restarted.close()

    def test_suggest_job(self, manager: BackupManager, backup_job: BackupJob) -> None:
        manager.add_job(backup_job)
        assert manager.suggest_job("doc") == "docs"

    def test_run_log_file(self, tmp_path: Path, backup_job: BackupJob) -> None:
        run_log = tmp_path / "run" / "savejobs.log"
        settings = Settings(base_dir=tmp_path / "data", run_log_file=run_log)
        manager = BackupManager(settings)
        manager.add_job(backup_job)
        manager.execute([1])
        manager.close()

        text = run_log.read_text(encoding="utf-8")
        assert "[INFO] === JOB START: docs (2 files, 30 bytes) ===" in text
        assert "Summary: COPIED=2, FAILED=0, BYTES=30" in text
