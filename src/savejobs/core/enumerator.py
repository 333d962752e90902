"""Recursive file enumeration for backup sources."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from savejobs.core.models import SourceNotFoundError


def iter_source_files(root: str | Path) -> Iterator[Path]:
    """Yield every regular file under ``root``, recursively.

    Paths are absolute. Entries are visited in sorted order per directory so
    repeated runs over an unchanged tree copy files in the same order.

    Args:
        root: Source root directory.

    Yields:
        Absolute path of each file.

    Raises:
        SourceNotFoundError: If the root does not exist, is not a directory
            or is not readable.
    """
    root_path = Path(root).absolute()
    if not root_path.is_dir():
        raise SourceNotFoundError(f"Source directory not found: {root_path}")
    if not os.access(root_path, os.R_OK | os.X_OK):
        raise SourceNotFoundError(f"Source directory not readable: {root_path}")

    return _walk(root_path)


def _walk(root_path: Path) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root_path):
        dirnames.sort()
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            if path.is_file():
                yield path


def collect_source_files(root: str | Path) -> list[tuple[Path, int]]:
    """Enumerate ``root`` and pair every file with its size in bytes.

    Raises:
        SourceNotFoundError: If the root cannot be enumerated or a file
            vanishes before its size is read.
    """
    try:
        return [(path, path.stat().st_size) for path in iter_source_files(root)]
    except OSError as e:
        raise SourceNotFoundError(f"Cannot enumerate {root}: {e}") from e
