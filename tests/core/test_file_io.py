"""Tests for ratesense.core.utils.file_io."""

import os

import pytest

from ratesense.core.exceptions import FileIOError
from ratesense.core.utils.file_io import backup_file, safe_write, safe_write_with_backup


class TestSafeWrite:
    def test_creates_file(self, tmp_dir):
        path = os.path.join(tmp_dir, "sub", "file.txt")
        safe_write(path, "hello")
        with open(path) as f:
            assert f.read() == "hello"

    def test_creates_parent_dirs(self, tmp_dir):
        path = os.path.join(tmp_dir, "a", "b", "c.csv")
        safe_write(path, "Month\n")
        assert os.path.exists(path)

    def test_keeps_newlines_verbatim(self, tmp_dir):
        path = os.path.join(tmp_dir, "rows.csv")
        safe_write(path, "a\nb\n")
        with open(path, "rb") as f:
            assert f.read() == b"a\nb\n"

    def test_unwritable_path_raises(self, tmp_dir):
        blocker = os.path.join(tmp_dir, "blocker")
        safe_write(blocker, "x")
        with pytest.raises(FileIOError, match="Could not write"):
            safe_write(os.path.join(blocker, "child.csv"), "y")


class TestBackup:
    def test_missing_file(self, tmp_dir):
        assert backup_file(os.path.join(tmp_dir, "none.csv")) is None

    def test_backup_copy(self, tmp_dir):
        path = os.path.join(tmp_dir, "schedule.csv")
        safe_write(path, "old")
        backup = backup_file(path)
        assert backup is not None
        assert os.path.dirname(backup) == tmp_dir
        assert os.path.basename(backup).startswith("schedule.csv.backup.")
        with open(backup) as f:
            assert f.read() == "old"

    def test_write_with_backup(self, tmp_dir):
        path = os.path.join(tmp_dir, "schedule.csv")
        assert safe_write_with_backup(path, "first") is None
        backup = safe_write_with_backup(path, "second")
        assert backup is not None
        with open(path) as f:
            assert f.read() == "second"
        with open(backup) as f:
            assert f.read() == "first"
