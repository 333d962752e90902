"""Core data models for SaveJobs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class BackupType(Enum):
    """Kind of backup job. Stored for display only, every run is a full copy."""

    FULL = "Full"
    DIFFERENTIAL = "Differential"

    @classmethod
    def parse(cls, value: str) -> BackupType:
        """Parse a kind name, case-insensitively.

        Raises:
            ValidationError: If the name is not a known kind.
        """
        for kind in cls:
            if kind.value.lower() == value.strip().lower():
                return kind
        raise ValidationError(f"Unknown backup type: {value}")


class JobStatus(Enum):
    """Execution status of a job."""

    PENDING = "Pending"
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class Severity(Enum):
    """Severity of a transfer record."""

    INFO = "INFO"
    ERROR = "ERROR"


class ActionType(Enum):
    """What a transfer record describes."""

    FILE_TRANSFER = "FILE_TRANSFER"
    JOB_CREATED = "JOB_CREATED"
    JOB_UPDATED = "JOB_UPDATED"
    JOB_DELETED = "JOB_DELETED"
    EXECUTION_STARTED = "EXECUTION_STARTED"
    EXECUTION_COMPLETED = "EXECUTION_COMPLETED"
    TRANSFER_ERROR = "TRANSFER_ERROR"
    CRITICAL_ERROR = "CRITICAL_ERROR"


class SaveJobsError(Exception):
    """Base class for SaveJobs errors."""


class ValidationError(SaveJobsError):
    """Raised when a job definition is invalid."""


class SourceNotFoundError(SaveJobsError):
    """Raised when a job's source root cannot be enumerated."""


class FileCopyError(SaveJobsError):
    """Raised when a single file cannot be copied."""


class StateLoadError(SaveJobsError):
    """Raised when the persisted job states cannot be read."""


class LogReadError(SaveJobsError):
    """Raised when the transfer log cannot be read."""


class MaxJobsReachedError(SaveJobsError):
    """Raised when adding a job beyond the configured capacity."""


class DuplicateJobError(ValidationError):
    """Raised when a job name is already taken."""


class JobNotFoundError(SaveJobsError, KeyError):
    """Raised when a job name is unknown."""


def _parse_time(value: str | None) -> datetime:
    if not value:
        return datetime.now()
    return datetime.fromisoformat(value)


@dataclass
class BackupJob:
    """A named backup task pairing one source directory with one target directory."""

    name: str
    source_path: str
    target_path: str
    kind: BackupType = BackupType.FULL

    def validate(self) -> None:
        """Validate the job definition.

        Raises:
            ValidationError: If a required field is empty.
        """
        if not self.name or not self.name.strip():
            raise ValidationError("Job name cannot be empty")
        if not self.source_path:
            raise ValidationError("Source path cannot be empty")
        if not self.target_path:
            raise ValidationError("Target path cannot be empty")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "sourcePath": self.source_path,
            "targetPath": self.target_path,
            "type": self.kind.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BackupJob:
        """Deserialize from dictionary."""
        return cls(
            name=data["name"],
            source_path=data["sourcePath"],
            target_path=data["targetPath"],
            kind=BackupType.parse(data.get("type", "Full")),
        )

    def __str__(self) -> str:
        return f"{self.name} [{self.kind.value}] : {self.source_path} -> {self.target_path}"


@dataclass
class JobState:
    """Live progress snapshot of a job.

    ``files_remaining`` and ``bytes_remaining`` are only meaningful while
    ``status`` is ACTIVE.
    """

    name: str
    last_action_time: datetime = field(default_factory=datetime.now)
    status: JobStatus = JobStatus.PENDING
    total_files: int = 0
    total_bytes: int = 0
    files_remaining: int = 0
    bytes_remaining: int = 0
    current_source_file: str = ""
    current_target_file: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "lastActionTime": self.last_action_time.isoformat(),
            "status": self.status.value,
            "totalFilesCount": self.total_files,
            "totalFilesSize": self.total_bytes,
            "filesRemaining": self.files_remaining,
            "bytesRemaining": self.bytes_remaining,
            "currentSourceFile": self.current_source_file,
            "currentTargetFile": self.current_target_file,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JobState:
        """Deserialize from dictionary."""
        return cls(
            name=data["name"],
            last_action_time=_parse_time(data.get("lastActionTime")),
            status=JobStatus(data.get("status", "Pending")),
            total_files=data.get("totalFilesCount", 0),
            total_bytes=data.get("totalFilesSize", 0),
            files_remaining=data.get("filesRemaining", 0),
            bytes_remaining=data.get("bytesRemaining", 0),
            current_source_file=data.get("currentSourceFile") or "",
            current_target_file=data.get("currentTargetFile") or "",
        )


@dataclass(frozen=True)
class TransferRecord:
    """One immutable transfer log entry.

    On the wire a failed transfer keeps a negated ``transferTime`` and a zero
    ``fileSize``; ``success`` is the field to rely on.
    """

    timestamp: datetime
    job_name: str
    source_path: str = ""
    target_path: str = ""
    file_size: int = 0
    transfer_time_ms: int = 0
    message: str = ""
    severity: Severity = Severity.INFO
    action_type: ActionType = ActionType.FILE_TRANSFER
    success: bool = True

    @property
    def elapsed_ms(self) -> int:
        """Elapsed time of the attempt, whatever its outcome."""
        return abs(self.transfer_time_ms)

    @property
    def is_file_transfer(self) -> bool:
        return self.action_type == ActionType.FILE_TRANSFER

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "backupName": self.job_name,
            "sourcePath": self.source_path,
            "targetPath": self.target_path,
            "fileSize": self.file_size,
            "transferTime": self.transfer_time_ms,
            "message": self.message,
            "logType": self.severity.value,
            "actionType": self.action_type.value,
            "success": self.success,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TransferRecord:
        """Deserialize from dictionary."""
        severity = Severity(data.get("logType", "INFO"))
        return cls(
            timestamp=_parse_time(data.get("timestamp")),
            job_name=data.get("backupName") or "",
            source_path=data.get("sourcePath") or "",
            target_path=data.get("targetPath") or "",
            file_size=data.get("fileSize", 0),
            transfer_time_ms=data.get("transferTime", 0),
            message=data.get("message") or "",
            severity=severity,
            action_type=ActionType(data.get("actionType", "FILE_TRANSFER")),
            success=data.get("success", severity == Severity.INFO),
        )
