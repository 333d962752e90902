"""JSON file helpers shared by the stores."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any


def write_json_atomic(path: Path, data: Any) -> None:
    """Write ``data`` as JSON, replacing ``path`` in a single rename.

    Readers see either the previous content or the new one, never a partial
    file.

    Raises:
        OSError: If the temporary file cannot be written or moved.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.{os.getpid()}.tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise


def read_json(path: Path, default: Any) -> Any:
    """Read JSON from ``path``, returning ``default`` if the file is missing.

    Raises:
        json.JSONDecodeError: If the file is not valid JSON.
        OSError: If the file exists but cannot be read.
    """
    if not path.exists():
        return default
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)
