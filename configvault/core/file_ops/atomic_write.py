"""
Atomic File Replacement
=======================

Writes a file so that readers see either the old content or the new
content, never a partial write.

Flow:
    1. Create a private temporary file in the target's directory
    2. Write and fsync the new content
    3. Restrict permissions to the owner
    4. os.replace() over the target
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from configvault.utils.paths import ensure_private_directory, restrict_file_permissions


def atomic_write_text(path: Path | str, text: str, encoding: str = "utf-8") -> None:
    """
    Replace ``path`` with ``text`` atomically, owner read/write only.

    The parent directory is created with owner-only permissions if it
    does not exist.

    Raises:
        OSError: If any step fails; the target is left untouched and the
            temporary file is removed
    """
    path = Path(path)
    ensure_private_directory(path.parent)

    # mkstemp creates the file with mode 0600 on POSIX
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
    )
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        restrict_file_permissions(tmp_path)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

    restrict_file_permissions(path)
