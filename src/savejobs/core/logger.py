"""Run logging for SaveJobs with timestamps and levels.

This module provides:
- Timestamped console logging with configurable levels
- Optional mirroring to a text file
- File status lines (COPIED, FAILED) and job start/end summaries

It is the human-readable side of a run; the structured audit trail is the
transfer log.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path


class FileStatus(Enum):
    """Outcome of a single file during a run."""

    COPIED = "COPIED"
    FAILED = "FAILED"


class LogLevel(Enum):
    """Log levels for SaveJobs."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR

    @classmethod
    def from_name(cls, name: str, default: LogLevel | None = None) -> LogLevel:
        """Look up a level by name, case-insensitively."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            return default or cls.INFO


class RunLogger:
    """Logger for backup runs.

    Each instance owns its handlers; build one per run (or per CLI
    invocation) and pass it to the executor.
    """

    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

    LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

    def __init__(
        self,
        name: str = "savejobs.run",
        level: LogLevel = LogLevel.INFO,
        log_file: str | Path | None = None,
        console: bool = True,
    ) -> None:
        """Initialize the logger.

        Args:
            name: Logger name identifier.
            level: Minimum log level to capture.
            log_file: Optional path to mirror log lines to.
            console: Whether to log to stderr.
        """
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level.value)
        self._logger.propagate = False
        self._logger.handlers.clear()
        self._formatter = logging.Formatter(self.LOG_FORMAT, datefmt=self.TIMESTAMP_FORMAT)

        if console:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(self._formatter)
            self._logger.addHandler(console_handler)

        self._file_handler: logging.FileHandler | None = None
        if log_file:
            path = Path(log_file)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
            self._file_handler.setFormatter(self._formatter)
            self._logger.addHandler(self._file_handler)

    def _log(self, level: LogLevel, message: str) -> None:
        self._logger.log(level.value, message)

    def debug(self, message: str) -> None:
        self._log(LogLevel.DEBUG, message)

    def info(self, message: str) -> None:
        self._log(LogLevel.INFO, message)

    def warning(self, message: str) -> None:
        self._log(LogLevel.WARNING, message)

    def error(self, message: str) -> None:
        self._log(LogLevel.ERROR, message)

    def log_file_status(
        self,
        status: FileStatus,
        source_path: str | Path,
        dest_path: str | Path | None = None,
        reason: str = "",
    ) -> None:
        """Log the outcome of one file.

        Args:
            status: File outcome.
            source_path: Source file path.
            dest_path: Destination file path (optional).
            reason: Failure reason, if any.
        """
        dest_info = f" -> {dest_path}" if dest_path else ""
        reason_info = f" ({reason})" if reason else ""
        message = f"[{status.value}] {source_path}{dest_info}{reason_info}"
        if status == FileStatus.FAILED:
            self.error(message)
        else:
            self.debug(message)

    def log_job_start(self, job_name: str, total_files: int, total_bytes: int) -> None:
        """Log the start of a backup run."""
        self.info(f"=== JOB START: {job_name} ({total_files} files, {total_bytes} bytes) ===")

    def log_job_end(self, job_name: str, copied: int, failed: int, bytes_copied: int) -> None:
        """Log the end of a backup run with its summary."""
        self.info(f"=== JOB END: {job_name} ===")
        self.info(f"Summary: COPIED={copied}, FAILED={failed}, BYTES={bytes_copied}")

    def close(self) -> None:
        """Close the logger and release resources."""
        if self._file_handler:
            self._logger.removeHandler(self._file_handler)
            self._file_handler.close()
            self._file_handler = None
