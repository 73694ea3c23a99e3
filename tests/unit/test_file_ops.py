"""Unit tests for atomic writes and secure deletion."""

import importlib
import os
import stat
import sys
from unittest.mock import patch

import pytest

from configvault.core.file_ops import atomic_write_text, secure_delete

# The package re-exports the function under the submodule name
secure_delete_module = importlib.import_module("configvault.core.file_ops.secure_delete")


class TestAtomicWrite:
    """Tests for atomic_write_text()."""

    def test_writes_content(self, tmp_path):
        """Test the target holds exactly the written text."""
        target = tmp_path / "file.json"
        atomic_write_text(target, '{"a": 1}\n')
        assert target.read_bytes() == b'{"a": 1}\n'

    def test_replaces_existing(self, tmp_path):
        """Test an existing file is replaced wholesale."""
        target = tmp_path / "file.json"
        target.write_text("x" * 1000)

        atomic_write_text(target, "short")

        assert target.read_text() == "short"

    def test_creates_parent(self, tmp_path):
        """Test missing parent directories are created."""
        target = tmp_path / "a" / "b" / "file.json"
        atomic_write_text(target, "{}")
        assert target.exists()

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions only")
    def test_permissions(self, tmp_path):
        """Test file is 0600 and a created directory is 0700."""
        target = tmp_path / "private" / "file.json"
        atomic_write_text(target, "{}")

        assert stat.S_IMODE(os.stat(target).st_mode) == 0o600
        assert stat.S_IMODE(os.stat(target.parent).st_mode) == 0o700

    def test_failure_cleans_up_temp_file(self, tmp_path):
        """Test a failed replace removes the temporary file and keeps the old one."""
        target = tmp_path / "file.json"
        target.write_text("old")

        with patch("os.replace", side_effect=OSError(5, "Input/output error")):
            with pytest.raises(OSError):
                atomic_write_text(target, "new")

        assert target.read_text() == "old"
        assert list(tmp_path.iterdir()) == [target]


class TestSecureDelete:
    """Tests for secure_delete()."""

    def test_removes_file(self, tmp_path):
        """Test the file is gone afterwards."""
        target = tmp_path / "secret.bin"
        target.write_bytes(b"ciphertext" * 1000)

        assert secure_delete(target) is True
        assert not target.exists()

    def test_missing_file_is_noop(self, tmp_path):
        """Test deleting a missing file succeeds and reports nothing removed."""
        assert secure_delete(tmp_path / "missing") is False

    def test_empty_file(self, tmp_path):
        """Test an empty file is removed."""
        target = tmp_path / "empty"
        target.touch()
        assert secure_delete(target) is True
        assert not target.exists()

    def test_directory_rejected(self, tmp_path):
        """Test directories are not deleted."""
        with pytest.raises(IsADirectoryError):
            secure_delete(tmp_path)

    def test_overwrite_passes_random_then_zero(self, tmp_path):
        """Test the file is overwritten with random bytes, then zeros, before unlink."""
        target = tmp_path / "secret.bin"
        original = b"S" * (secure_delete_module.BLOCK_SIZE + 100)
        target.write_bytes(original)
        snapshots = []

        real_fsync = os.fsync

        def recording_fsync(fd):
            real_fsync(fd)
            snapshots.append(target.read_bytes())

        with patch.object(secure_delete_module.os, "fsync", side_effect=recording_fsync):
            secure_delete(target)

        assert len(snapshots) == 2
        random_pass, zero_pass = snapshots
        assert len(random_pass) == len(original)
        assert random_pass != original
        assert random_pass != bytes(len(original))
        assert zero_pass == bytes(len(original))
        assert not target.exists()
