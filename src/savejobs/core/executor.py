"""Backup executor for SaveJobs.

This module runs backup jobs one at a time:
- Enumerating the source tree and sizing it
- Copying each file with shutil.copy2, overwriting the destination
- Writing one transfer record and one state update per file
- Absorbing per-file failures so the rest of the job still runs
"""

from __future__ import annotations

import shutil
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING

from savejobs.core.enumerator import collect_source_files
from savejobs.core.logger import FileStatus, RunLogger
from savejobs.core.models import (
    ActionType,
    BackupJob,
    FileCopyError,
    JobStatus,
    Severity,
    SourceNotFoundError,
)
from savejobs.core.transfer_log import TransferLog
from savejobs.persistence.state_store import JobStateStore

if TYPE_CHECKING:
    from savejobs.persistence.job_storage import JobStore


def _copy_file(source: Path, target: Path) -> int:
    """Copy one file, overwriting the target, and return the copied size.

    Raises:
        FileCopyError: If any filesystem step fails.
    """
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, target)
        return target.stat().st_size
    except OSError as e:
        raise FileCopyError(f"{e.strerror or e}: {source}") from e


@dataclass
class ExecutionReport:
    """Outcome of one job run."""

    job_name: str
    total_files: int = 0
    total_bytes: int = 0
    copied: int = 0
    failed: int = 0
    bytes_copied: int = 0
    aborted: bool = False
    errors: list[tuple[str, str]] = field(default_factory=list)


class BackupExecutor:
    """Runs backup jobs synchronously and records their progress.

    The transfer log, state store and run logger are injected; the executor
    holds no global state of its own.
    """

    def __init__(
        self,
        transfer_log: TransferLog,
        state_store: JobStateStore,
        job_store: JobStore | None = None,
        run_logger: RunLogger | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            transfer_log: Log receiving one record per copy attempt.
            state_store: Store receiving one update per step.
            job_store: Job definitions, needed only by run_many.
            run_logger: Optional human-readable run log.
        """
        self._transfer_log = transfer_log
        self._state_store = state_store
        self._job_store = job_store
        self._run_logger = run_logger or RunLogger(console=False)

    def run_many(self, indices: Iterable[int]) -> list[ExecutionReport]:
        """Run jobs by 1-based position in the job list, in the given order.

        Indices outside the list are skipped.

        Raises:
            RuntimeError: If the executor was built without a job store.
        """
        if self._job_store is None:
            raise RuntimeError("run_many requires a job store")
        jobs = self._job_store.list()
        reports = []
        for index in indices:
            if 1 <= index <= len(jobs):
                reports.append(self.run(jobs[index - 1]))
            else:
                self._run_logger.debug(f"Ignoring job index {index}")
        return reports

    def run(self, job: BackupJob) -> ExecutionReport:
        """Copy every file of a job's source tree to its target.

        Per-file errors are recorded and skipped. A source that cannot be
        enumerated aborts this job only. The job always ends Inactive.

        Args:
            job: Job definition to run.

        Returns:
            Report of the run.
        """
        report = ExecutionReport(job_name=job.name)
        self._transfer_log.record_admin_action(
            job.name,
            ActionType.EXECUTION_STARTED,
            f"Execution started: {job.source_path} -> {job.target_path}",
        )

        try:
            files = collect_source_files(job.source_path)
        except SourceNotFoundError as e:
            report.aborted = True
            report.errors.append((job.source_path, str(e)))
            self._run_logger.error(f"Job {job.name} aborted: {e}")
            self._transfer_log.record_admin_action(
                job.name, ActionType.CRITICAL_ERROR, str(e), Severity.ERROR
            )
            self._finish(job.name)
            return report

        report.total_files = len(files)
        report.total_bytes = sum(size for _, size in files)
        self._run_logger.log_job_start(job.name, report.total_files, report.total_bytes)

        try:
            self._copy_files(job, files, report)
        finally:
            self._finish(job.name)

        self._run_logger.log_job_end(job.name, report.copied, report.failed, report.bytes_copied)
        self._transfer_log.record_admin_action(
            job.name,
            ActionType.EXECUTION_COMPLETED,
            f"Execution complete: {report.copied} copied, {report.failed} failed",
        )
        return report

    def _copy_files(
        self,
        job: BackupJob,
        files: list[tuple[Path, int]],
        report: ExecutionReport,
    ) -> None:
        files_remaining = report.total_files
        bytes_remaining = report.total_bytes
        self._state_store.update(
            job.name,
            status=JobStatus.ACTIVE,
            total_files=report.total_files,
            total_bytes=report.total_bytes,
            files_remaining=files_remaining,
            bytes_remaining=bytes_remaining,
            current_source_file="",
            current_target_file="",
        )

        source_root = Path(job.source_path).absolute()
        target_root = Path(job.target_path).absolute()

        for source, size in files:
            target = target_root / source.relative_to(source_root)
            self._state_store.update(
                job.name,
                current_source_file=str(source),
                current_target_file=str(target),
            )

            start = time.perf_counter()
            try:
                copied_size = _copy_file(source, target)
            except FileCopyError as e:
                elapsed = timedelta(seconds=time.perf_counter() - start)
                report.failed += 1
                report.errors.append((str(source), str(e)))
                self._run_logger.log_file_status(FileStatus.FAILED, source, target, str(e))
                self._transfer_log.record_transfer(
                    job.name, elapsed, 0, datetime.now(), source, target, Severity.ERROR
                )
                self._transfer_log.record_admin_action(
                    job.name,
                    ActionType.TRANSFER_ERROR,
                    f"Copy failed: {e}",
                    Severity.ERROR,
                )
                continue

            elapsed = timedelta(seconds=time.perf_counter() - start)
            report.copied += 1
            report.bytes_copied += copied_size
            self._run_logger.log_file_status(FileStatus.COPIED, source, target)
            self._transfer_log.record_transfer(
                job.name, elapsed, copied_size, datetime.now(), source, target, Severity.INFO
            )

            files_remaining = max(0, files_remaining - 1)
            bytes_remaining = max(0, bytes_remaining - size)
            self._state_store.update(
                job.name,
                files_remaining=files_remaining,
                bytes_remaining=bytes_remaining,
            )

    def _finish(self, job_name: str) -> None:
        self._state_store.update(
            job_name,
            status=JobStatus.INACTIVE,
            files_remaining=0,
            bytes_remaining=0,
            current_source_file="",
            current_target_file="",
        )
