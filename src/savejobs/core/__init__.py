"""Core logic for SaveJobs."""

from savejobs.core.enumerator import collect_source_files, iter_source_files
from savejobs.core.executor import BackupExecutor, ExecutionReport
from savejobs.core.transfer_log import TransferLog

__all__ = [
    "BackupExecutor",
    "ExecutionReport",
    "TransferLog",
    "collect_source_files",
    "iter_source_files",
]
