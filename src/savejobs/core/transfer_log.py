"""Append-only transfer log for SaveJobs.

Every file copy attempt and every administrative action (job created,
execution started, critical error, ...) produces exactly one
:class:`TransferRecord`. Records are kept as a JSON list; each append reads
the whole list, adds one record and rewrites the file atomically, under a
single lock so appends from several threads never interleave.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta
from pathlib import Path

from savejobs.core.models import ActionType, LogReadError, Severity, TransferRecord
from savejobs.persistence.files import read_json, write_json_atomic

logger = logging.getLogger(__name__)

TRANSFER_OK_MESSAGE = "File transferred"
TRANSFER_ERROR_MESSAGE = "Error during transfer"


class TransferLog:
    """Persistent, append-only record of transfer attempts."""

    def __init__(self, log_file: str | Path) -> None:
        """Initialize the transfer log.

        The file and its directory are created if missing.

        Args:
            log_file: Path of the JSON log file.
        """
        self.log_file = Path(log_file)
        self._lock = threading.Lock()
        with self._lock:
            if not self.log_file.exists():
                write_json_atomic(self.log_file, [])

    def record_transfer(
        self,
        job_name: str,
        duration: timedelta,
        size_bytes: int,
        timestamp: datetime,
        source: str | Path,
        target: str | Path,
        severity: Severity = Severity.INFO,
    ) -> TransferRecord:
        """Append the outcome of one file copy.

        An ERROR record always has a size of 0 and a negated transfer time.

        Returns:
            The record that was written.
        """
        failed = severity == Severity.ERROR
        elapsed_ms = abs(duration) // timedelta(milliseconds=1)
        record = TransferRecord(
            timestamp=timestamp,
            job_name=job_name,
            source_path=str(source),
            target_path=str(target),
            file_size=0 if failed else size_bytes,
            transfer_time_ms=-elapsed_ms if failed else elapsed_ms,
            message=TRANSFER_ERROR_MESSAGE if failed else TRANSFER_OK_MESSAGE,
            severity=severity,
            action_type=ActionType.FILE_TRANSFER,
            success=not failed,
        )
        self._append(record)
        return record

    def record_admin_action(
        self,
        job_name: str,
        action_type: ActionType,
        message: str,
        severity: Severity = Severity.INFO,
    ) -> TransferRecord:
        """Append an administrative entry.

        Returns:
            The record that was written.
        """
        record = TransferRecord(
            timestamp=datetime.now(),
            job_name=job_name or "",
            message=message,
            severity=severity,
            action_type=action_type,
            success=severity == Severity.INFO,
        )
        self._append(record)
        return record

    def read_all(self) -> list[TransferRecord]:
        """Return every record in append order.

        Raises:
            LogReadError: If the log file is unreadable or corrupt.
        """
        with self._lock:
            entries = self._load()
            try:
                return [TransferRecord.from_dict(d) for d in entries]
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                raise LogReadError(f"Corrupt entry in transfer log {self.log_file}: {e}") from e

    def _load(self) -> list[dict]:
        try:
            data = read_json(self.log_file, [])
        except (OSError, ValueError) as e:
            raise LogReadError(f"Cannot read transfer log {self.log_file}: {e}") from e
        if not isinstance(data, list) or not all(isinstance(d, dict) for d in data):
            raise LogReadError(f"Transfer log {self.log_file} is not a list of records")
        return data

    def _append(self, record: TransferRecord) -> None:
        with self._lock:
            try:
                entries = self._load()
            except LogReadError as e:
                stamp = datetime.now().strftime("%Y%m%dT%H%M%S%f")
                backup = self.log_file.with_name(f"{self.log_file.stem}.{stamp}.corrupt")
                logger.error(f"{e}; moving it to {backup.name}")
                self.log_file.replace(backup)
                entries = []
            entries.append(record.to_dict())
            write_json_atomic(self.log_file, entries)
