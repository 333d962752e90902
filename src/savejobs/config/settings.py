"""Configuración de SaveJobs."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from savejobs.core.logger import LogLevel
from savejobs.persistence.job_storage import DEFAULT_MAX_JOBS


def default_base_dir() -> Path:
    """Obtener directorio por defecto para almacenamiento."""
    if os.name == "nt":  # Windows
        base = os.environ.get("APPDATA", os.path.expanduser("~"))
    else:
        base = os.path.expanduser("~/.config")
    return Path(base) / "SaveJobs"


@dataclass
class Settings:
    """Configuración principal de SaveJobs.

    Directories left empty fall back to the environment and then to
    subdirectories of the default base directory. The run log is only
    mirrored to a text file when run_log_file (or SAVEJOBS_RUN_LOG) is set.
    """

    config_dir: Path | None = None
    log_dir: Path | None = None
    state_dir: Path | None = None
    run_log_file: Path | None = None
    max_jobs: int = DEFAULT_MAX_JOBS
    log_level: LogLevel = LogLevel.INFO
    base_dir: Path = field(default_factory=default_base_dir)

    def __post_init__(self) -> None:
        """Inicializa valores desde variables de entorno si no se proporcionan."""
        if self.config_dir is None:
            self.config_dir = Path(os.getenv("SAVEJOBS_CONFIG_DIR") or self.base_dir)
        if self.log_dir is None:
            self.log_dir = Path(os.getenv("SAVEJOBS_LOG_DIR") or self.base_dir / "Logs")
        if self.state_dir is None:
            self.state_dir = Path(os.getenv("SAVEJOBS_STATE_DIR") or self.base_dir / "State")
        if self.run_log_file is None and os.getenv("SAVEJOBS_RUN_LOG"):
            self.run_log_file = Path(os.environ["SAVEJOBS_RUN_LOG"])

        max_jobs_env = os.getenv("SAVEJOBS_MAX_JOBS")
        if max_jobs_env:
            try:
                self.max_jobs = max(1, int(max_jobs_env))
            except ValueError:
                pass  # Keep default value if env var is not a valid integer

        level_env = os.getenv("SAVEJOBS_LOG_LEVEL")
        if level_env:
            self.log_level = LogLevel.from_name(level_env, default=self.log_level)

    @property
    def jobs_file(self) -> Path:
        return self.config_dir / "config.json"

    @property
    def state_file(self) -> Path:
        return self.state_dir / "state.json"

    def log_file_for(self, day: date | None = None) -> Path:
        """Transfer log file for a given day (today by default)."""
        day = day or date.today()
        return self.log_dir / f"{day.isoformat()}.json"

    def ensure_dirs(self) -> None:
        """Create the configured directories."""
        for directory in (self.config_dir, self.log_dir, self.state_dir):
            directory.mkdir(parents=True, exist_ok=True)


def get_settings() -> Settings:
    """Obtiene la configuración de la aplicación.

    Returns:
        Instancia de Settings con la configuración actual.
    """
    return Settings()
