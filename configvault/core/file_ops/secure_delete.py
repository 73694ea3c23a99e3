"""
Secure Deletion Module
======================

Provides file deletion with overwriting.

Overwrite Pattern:
    Pass 1: Random data
    Pass 2: All zeros
    Then the file is unlinked.

Limitations:
    Overwriting in place only defeats naive recovery of the old blocks.
    Filesystem journals, copy-on-write snapshots and SSD wear levelling
    can all keep earlier copies of the data; no claim is made about them.
"""

from __future__ import annotations

import logging
import os
import secrets
from pathlib import Path
from typing import Final, Optional


BLOCK_SIZE: Final[int] = 4096

_log = logging.getLogger("configvault.file_ops")


def _overwrite(handle, size: int, pattern: Optional[bytes]) -> None:
    """Overwrite ``size`` bytes from the start; ``None`` means random data."""
    handle.seek(0)
    written = 0
    while written < size:
        chunk_size = min(BLOCK_SIZE, size - written)
        if pattern is None:
            chunk = secrets.token_bytes(chunk_size)
        else:
            chunk = pattern[:chunk_size]
        handle.write(chunk)
        written += chunk_size
    handle.flush()
    os.fsync(handle.fileno())


def secure_delete(path: Path | str) -> bool:
    """
    Overwrite a file with random bytes, then zero bytes, then remove it.

    A missing file is not an error.

    Args:
        path: Path to file to delete

    Returns:
        True if a file was removed, False if there was nothing to delete

    Raises:
        IsADirectoryError: If path is a directory
        OSError: If any overwrite or removal step fails
    """
    path = Path(path)

    if not path.exists():
        return False

    if path.is_dir():
        raise IsADirectoryError(f"Not a file: {path}")

    file_size = path.stat().st_size
    if file_size > 0:
        with open(path, "r+b") as f:
            _overwrite(f, file_size, None)
            _overwrite(f, file_size, b"\x00" * BLOCK_SIZE)

    path.unlink()
    _log.debug("Securely deleted %s (%d bytes overwritten)", path, file_size)
    return True
