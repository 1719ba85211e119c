"""
File I/O utilities for exports: safe write with parent creation and backup.

All functions operate on explicit paths, with no implicit directory lookups.
"""

from __future__ import annotations

import os
import shutil
from datetime import datetime

from loguru import logger

from ratesense.core.exceptions import FileIOError


def safe_write(filepath: str, content: str, mode: str = "w", encoding: str = "utf-8") -> None:
    """Write content to a file, creating parent directories as needed."""
    try:
        os.makedirs(os.path.dirname(filepath) or ".", exist_ok=True)
        with open(filepath, mode, encoding=encoding, newline="") as f:
            f.write(content)
    except OSError as e:
        raise FileIOError(f"Could not write {filepath}: {e}") from e
    logger.debug(f"Wrote {len(content)} chars to {filepath}")


def backup_file(file_path: str) -> str | None:
    """Copy an existing file to ``<name>.backup.<timestamp>`` beside it.

    Returns the backup path, or None when there is nothing to back up.

    Raises:
        FileIOError: If the copy fails; the original is left untouched.
    """
    if not os.path.isfile(file_path):
        return None

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    backup_path = f"{file_path}.backup.{timestamp}"
    try:
        shutil.copy2(file_path, backup_path)
    except OSError as e:
        raise FileIOError(f"Could not back up {file_path}: {e}") from e
    return backup_path


def safe_write_with_backup(filepath: str, content: str, encoding: str = "utf-8") -> str | None:
    """Write to file, first backing up whatever is already there."""
    backup_path = backup_file(filepath)
    safe_write(filepath, content, encoding=encoding)
    return backup_path
