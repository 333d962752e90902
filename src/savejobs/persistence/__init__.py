"""Persistence layer for SaveJobs."""

from savejobs.persistence.job_storage import JobStore
from savejobs.persistence.state_store import JobStateStore

__all__ = ["JobStateStore", "JobStore"]
