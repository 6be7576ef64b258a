"""
Cross-platform atomic file writing utilities.

Result files and rejection logs are written through a temporary file in the
target directory followed by a rename, so a reader never observes a
half-written list.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterable

import structlog

logger = structlog.get_logger(__name__)


def atomic_write_text(target_path: Path, content: str, encoding: str = "utf-8") -> None:
    """
    Atomically write text content to a file.

    Args:
        target_path: Target file path to write to
        content: Text content to write
        encoding: Text encoding to use (default: utf-8)

    Raises:
        OSError: If the temporary file cannot be written or moved into place
    """
    target_path = Path(target_path)
    target_path.parent.mkdir(parents=True, exist_ok=True)

    temp_file_path = None

    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=target_path.parent,
            prefix=f".{target_path.name}.",
            suffix=".tmp",
            delete=False,
            encoding=encoding,
            newline="",
        ) as temp_file:
            temp_file_path = Path(temp_file.name)
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())

        try:
            # os.replace is atomic on both POSIX and Windows when on same filesystem
            os.replace(str(temp_file_path), str(target_path))
        except OSError as rename_error:
            logger.warning("Atomic rename failed, falling back to shutil.move", error=str(rename_error))
            shutil.move(str(temp_file_path), str(target_path))

    except OSError as e:
        if temp_file_path and temp_file_path.exists():
            try:
                temp_file_path.unlink()
            except OSError as cleanup_error:
                logger.warning(
                    "Failed to clean up temporary file", temp_file=str(temp_file_path), error=str(cleanup_error)
                )
        raise OSError(f"Failed to atomically write {target_path}: {e}") from e

    logger.debug("Atomic write completed", target=str(target_path), size=len(content))


def atomic_write_lines(target_path: Path, lines: Iterable[str], encoding: str = "utf-8") -> int:
    """
    Atomically write *lines* to *target_path*, each terminated by ``\\n``.

    Returns the number of lines written.
    """
    items = list(lines)
    atomic_write_text(target_path, "".join(f"{line}\n" for line in items), encoding=encoding)
    return len(items)
