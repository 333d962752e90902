"""Job state persistence for SaveJobs."""

from __future__ import annotations

import dataclasses
import json
import logging
import threading
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from typing import Any

from savejobs.core.models import JobState, StateLoadError
from savejobs.persistence.files import read_json, write_json_atomic

logger = logging.getLogger(__name__)

_MUTABLE_FIELDS = frozenset(
    f.name for f in dataclasses.fields(JobState) if f.name not in ("name", "last_action_time")
)


class JobStateStore:
    """Current progress snapshot of every known job.

    The whole mapping is rewritten after each mutation, so the file on disk
    always matches memory once a call returns.
    """

    def __init__(self, state_file: str | Path) -> None:
        """Initialize the state store.

        Args:
            state_file: Path of the JSON state file.
        """
        self.state_file = Path(state_file)
        self._states: dict[str, JobState] = {}
        self._lock = threading.Lock()

    def load(self, job_names: Iterable[str]) -> dict[str, JobState]:
        """Build the states for the given jobs and merge persisted ones.

        Every job starts Pending; a persisted state with a matching name
        replaces the default. Persisted names with no job are dropped. The
        merged mapping is written back immediately.

        Returns:
            Copy of the merged states.
        """
        with self._lock:
            self._states = {name: JobState(name=name) for name in job_names}
            try:
                persisted = self._read_persisted()
            except StateLoadError as e:
                logger.error(f"{e}; starting from default states")
                persisted = {}
            for name, state in persisted.items():
                if name in self._states:
                    self._states[name] = state
            self._persist()
            return self._copy_all()

    def _read_persisted(self) -> dict[str, JobState]:
        try:
            data = read_json(self.state_file, {})
            if not isinstance(data, dict):
                raise ValueError("expected a mapping of job name to state")
            return {name: JobState.from_dict({**d, "name": name}) for name, d in data.items()}
        except (json.JSONDecodeError, OSError, KeyError, TypeError, ValueError) as e:
            raise StateLoadError(f"Cannot read job states from {self.state_file}: {e}") from e

    def get(self, job_name: str) -> JobState | None:
        """Get a copy of a job's state, or None if unknown."""
        with self._lock:
            state = self._states.get(job_name)
            return dataclasses.replace(state) if state else None

    def snapshot(self) -> dict[str, JobState]:
        """Get a copy of every state."""
        with self._lock:
            return self._copy_all()

    def update(self, job_name: str, **changes: Any) -> JobState:
        """Apply field changes to a job's state and persist.

        A Pending state is created first if the job has none.

        Args:
            job_name: Job to update.
            **changes: JobState fields to set.

        Returns:
            Copy of the updated state.

        Raises:
            AttributeError: If a change names an unknown or read-only field.
        """
        unknown = set(changes) - _MUTABLE_FIELDS
        if unknown:
            raise AttributeError(f"Unknown job state fields: {sorted(unknown)}")
        with self._lock:
            state = self._states.setdefault(job_name, JobState(name=job_name))
            for key, value in changes.items():
                setattr(state, key, value)
            state.last_action_time = datetime.now()
            self._persist()
            return dataclasses.replace(state)

    def reset(self, job_name: str) -> JobState:
        """Replace a job's state with a fresh Pending one and persist."""
        with self._lock:
            state = JobState(name=job_name)
            self._states[job_name] = state
            self._persist()
            return dataclasses.replace(state)

    def rename(self, old_name: str, new_name: str) -> None:
        """Carry a job's state over to a new name."""
        if old_name == new_name:
            return
        with self._lock:
            state = self._states.pop(old_name, None) or JobState(name=new_name)
            state.name = new_name
            self._states[new_name] = state
            self._persist()

    def remove(self, job_name: str) -> bool:
        """Delete a job's state.

        Returns:
            True if a state was removed.
        """
        with self._lock:
            if self._states.pop(job_name, None) is None:
                return False
            self._persist()
            return True

    def _copy_all(self) -> dict[str, JobState]:
        return {name: dataclasses.replace(state) for name, state in self._states.items()}

    def _persist(self) -> None:
        write_json_atomic(
            self.state_file,
            {name: state.to_dict() for name, state in self._states.items()},
        )
