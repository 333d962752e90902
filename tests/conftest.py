"""Shared fixtures for SaveJobs tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from savejobs.config.settings import Settings
from savejobs.core.executor import BackupExecutor
from savejobs.core.logger import RunLogger
from savejobs.core.models import BackupJob
from savejobs.core.transfer_log import TransferLog
from savejobs.persistence.job_storage import JobStore
from savejobs.persistence.state_store import JobStateStore


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep SAVEJOBS_* variables from the outer environment out of tests."""
    for var in (
        "SAVEJOBS_CONFIG_DIR",
        "SAVEJOBS_LOG_DIR",
        "SAVEJOBS_STATE_DIR",
        "SAVEJOBS_MAX_JOBS",
        "SAVEJOBS_LOG_LEVEL",
        "SAVEJOBS_RUN_LOG",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """Source with a.txt (10 bytes) and sub/b.txt (20 bytes)."""
    source = tmp_path / "source"
    (source / "sub").mkdir(parents=True)
    (source / "a.txt").write_bytes(b"a" * 10)
    (source / "sub" / "b.txt").write_bytes(b"b" * 20)
    return source


@pytest.fixture
def backup_job(source_tree: Path, tmp_path: Path) -> BackupJob:
    return BackupJob("docs", str(source_tree), str(tmp_path / "target"))


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(base_dir=tmp_path / "data")


@pytest.fixture
def transfer_log(tmp_path: Path) -> TransferLog:
    return TransferLog(tmp_path / "logs" / "transfers.json")


@pytest.fixture
def state_store(tmp_path: Path) -> JobStateStore:
    store = JobStateStore(tmp_path / "state" / "state.json")
    store.load([])
    return store


@pytest.fixture
def job_store(tmp_path: Path) -> JobStore:
    return JobStore(tmp_path / "config" / "config.json")


@pytest.fixture
def run_logger() -> Iterator[RunLogger]:
    logger = RunLogger(name="savejobs.test", console=False)
    yield logger
    logger.close()


@pytest.fixture
def executor(
    transfer_log: TransferLog,
    state_store: JobStateStore,
    job_store: JobStore,
    run_logger: RunLogger,
) -> BackupExecutor:
    return BackupExecutor(transfer_log, state_store, job_store=job_store, run_logger=run_logger)
