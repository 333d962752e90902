"""Backup manager: job definitions, state, log and execution wired together."""

from __future__ import annotations

from collections.abc import Iterable

from savejobs.config.settings import Settings
from savejobs.core.executor import BackupExecutor, ExecutionReport
from savejobs.core.logger import RunLogger
from savejobs.core.models import ActionType, BackupJob, JobState, TransferRecord
from savejobs.core.transfer_log import TransferLog
from savejobs.persistence.job_storage import JobStore
from savejobs.persistence.state_store import JobStateStore


class BackupManager:
    """High-level interface used by the command line.

    CRUD actions go to the job store first; on success the matching
    administrative entry is logged and the state store is kept in step.
    """

    def __init__(
        self,
        settings: Settings,
        run_logger: RunLogger | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            settings: Directory and capacity configuration.
            run_logger: Optional run logger; a console one is created if None.
        """
        settings.ensure_dirs()
        self.settings = settings
        self.job_store = JobStore(settings.jobs_file, max_jobs=settings.max_jobs)
        self.state_store = JobStateStore(settings.state_file)
        self.state_store.load(job.name for job in self.job_store.list())
        self.transfer_log = TransferLog(settings.log_file_for())
        self.run_logger = run_logger or RunLogger(
            level=settings.log_level, log_file=settings.run_log_file
        )
        self.executor = BackupExecutor(
            self.transfer_log,
            self.state_store,
            job_store=self.job_store,
            run_logger=self.run_logger,
        )

    @property
    def jobs(self) -> list[BackupJob]:
        return self.job_store.list()

    def get_job(self, name: str) -> BackupJob | None:
        return self.job_store.find(name)

    def suggest_job(self, name: str) -> str | None:
        return self.job_store.suggest(name)

    def add_job(self, job: BackupJob) -> None:
        """Define a new job, starting from a fresh Pending state.

        Raises:
            ValidationError: If the job is invalid or its name is taken.
            MaxJobsReachedError: If the store is full.
        """
        self.job_store.add(job)
        self.state_store.reset(job.name)
        self.transfer_log.record_admin_action(
            job.name, ActionType.JOB_CREATED, f"Job created: {job}"
        )

    def update_job(self, name: str, job: BackupJob) -> None:
        """Replace a job definition, carrying its state over on rename.

        Raises:
            JobNotFoundError: If ``name`` is unknown.
            ValidationError: If the job is invalid or the new name is taken.
        """
        self.job_store.update(name, job)
        self.state_store.rename(name, job.name)
        self.transfer_log.record_admin_action(
            job.name, ActionType.JOB_UPDATED, f"Job updated: {job}"
        )

    def remove_job(self, name: str) -> None:
        """Delete a job definition and its state.

        Raises:
            JobNotFoundError: If ``name`` is unknown.
        """
        job = self.job_store.remove(name)
        self.state_store.remove(name)
        self.transfer_log.record_admin_action(
            name, ActionType.JOB_DELETED, f"Job deleted: {job}"
        )

    def execute(self, indices: Iterable[int]) -> list[ExecutionReport]:
        """Run jobs by 1-based position, sequentially."""
        return self.executor.run_many(indices)

    def read_logs(self) -> list[TransferRecord]:
        return self.transfer_log.read_all()

    def states(self) -> dict[str, JobState]:
        return self.state_store.snapshot()

    def close(self) -> None:
        self.run_logger.close()
