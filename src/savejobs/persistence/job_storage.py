"""Job definition storage for SaveJobs."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from rapidfuzz import fuzz, process

from savejobs.core.models import (
    BackupJob,
    DuplicateJobError,
    JobNotFoundError,
    MaxJobsReachedError,
    ValidationError,
)
from savejobs.persistence.files import read_json, write_json_atomic

logger = logging.getLogger(__name__)

DEFAULT_MAX_JOBS = 5

# Minimum similarity (0-100) for a name to be offered as a suggestion
SUGGESTION_THRESHOLD = 60.0


class JobStore:
    """Persistencia de definiciones de jobs en disco."""

    def __init__(self, jobs_file: str | Path, max_jobs: int = DEFAULT_MAX_JOBS) -> None:
        """Initialize job storage.

        Args:
            jobs_file: Path of the JSON file holding job definitions.
            max_jobs: Maximum number of jobs that can be defined.
        """
        self.jobs_file = Path(jobs_file)
        self.max_jobs = max_jobs
        self._lock = threading.Lock()
        self._jobs = self._load()

    def _load(self) -> list[BackupJob]:
        try:
            data = read_json(self.jobs_file, [])
            return [BackupJob.from_dict(d) for d in data]
        except (AttributeError, OSError, KeyError, TypeError, ValueError, ValidationError) as e:
            logger.error(f"Error loading jobs from {self.jobs_file}: {e}")
            return []

    def _save(self) -> None:
        write_json_atomic(self.jobs_file, [job.to_dict() for job in self._jobs])

    def _index_of(self, name: str) -> int:
        for i, job in enumerate(self._jobs):
            if job.name == name:
                return i
        return -1

    def list(self) -> list[BackupJob]:
        """Get a snapshot of the defined jobs, in display order."""
        with self._lock:
            return list(self._jobs)

    def find(self, name: str) -> BackupJob | None:
        """Find a job by exact name."""
        with self._lock:
            i = self._index_of(name)
            return self._jobs[i] if i >= 0 else None

    def add(self, job: BackupJob) -> None:
        """Add a job definition.

        Raises:
            ValidationError: If the job is invalid.
            DuplicateJobError: If the name is already taken.
            MaxJobsReachedError: If the store is full.
        """
        job.validate()
        with self._lock:
            if len(self._jobs) >= self.max_jobs:
                raise MaxJobsReachedError(f"Maximum number of jobs reached ({self.max_jobs})")
            if self._index_of(job.name) >= 0:
                raise DuplicateJobError(f"Job already exists: {job.name}")
            self._jobs.append(job)
            self._save()

    def update(self, name: str, job: BackupJob) -> None:
        """Replace the definition stored under ``name``.

        The new definition may carry a different name.

        Raises:
            ValidationError: If the job is invalid.
            JobNotFoundError: If ``name`` is unknown.
            DuplicateJobError: If the new name belongs to another job.
        """
        job.validate()
        with self._lock:
            i = self._index_of(name)
            if i < 0:
                raise JobNotFoundError(name)
            if job.name != name and self._index_of(job.name) >= 0:
                raise DuplicateJobError(f"Job already exists: {job.name}")
            self._jobs[i] = job
            self._save()

    def remove(self, name: str) -> BackupJob:
        """Remove a job definition.

        Returns:
            The removed job.

        Raises:
            JobNotFoundError: If ``name`` is unknown.
        """
        with self._lock:
            i = self._index_of(name)
            if i < 0:
                raise JobNotFoundError(name)
            job = self._jobs.pop(i)
            self._save()
            return job

    def suggest(self, name: str) -> str | None:
        """Get the closest existing job name, if any is close enough."""
        with self._lock:
            names = [job.name for job in self._jobs]
        if not names or not name:
            return None
        match = process.extractOne(
            name,
            names,
            scorer=fuzz.WRatio,
            processor=str.lower,
            score_cutoff=SUGGESTION_THRESHOLD,
        )
        return match[0] if match else None
