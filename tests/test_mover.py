"""Tests for moving images into label folders."""

import errno

import pytest

from label_sorter import mover
from label_sorter.mover import move_file


@pytest.fixture
def source(tmp_path):
    path = tmp_path / "cat.png"
    path.write_bytes(b"\x89PNG" + bytes(range(256)) * 64)
    return path


@pytest.fixture
def cross_device(monkeypatch):
    """Make every rename fail the way it does across filesystems."""
    def fail_rename(src, dst):
        raise OSError(errno.EXDEV, "Invalid cross-device link")
    monkeypatch.setattr(mover.os, "rename", fail_rename)


class TestRename:
    """Same-filesystem moves."""

    def test_moves_file(self, tmp_path, source):
        data = source.read_bytes()
        dst = move_file(source, tmp_path / "B", "cat.png")

        assert dst == tmp_path / "B" / "cat.png"
        assert not source.exists()
        assert dst.read_bytes() == data

    def test_creates_missing_parents(self, tmp_path, source):
        dst = move_file(source, tmp_path / "a" / "b" / "c", "cat.png")
        assert dst.exists()

    def test_filename_defaults_to_source_name(self, tmp_path, source):
        assert move_file(source, tmp_path / "B").name == "cat.png"

    def test_missing_source_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            move_file(tmp_path / "ghost.png", tmp_path / "A", "ghost.png")
        assert not (tmp_path / "A" / "ghost.png").exists()


class TestCopyFallback:
    """Moves where rename is not possible."""

    def test_copies_then_removes_source(self, tmp_path, source, cross_device):
        data = source.read_bytes()
        dst = move_file(source, tmp_path / "B", "cat.png")

        assert dst.read_bytes() == data
        assert not source.exists()

    def test_missing_source_raises(self, tmp_path, cross_device):
        with pytest.raises(FileNotFoundError):
            move_file(tmp_path / "ghost.png", tmp_path / "A", "ghost.png")
        assert list((tmp_path / "A").iterdir()) == []

    def test_failed_copy_removes_partial_destination(self, tmp_path, source, cross_device, monkeypatch):
        def broken_copy(fsrc, fdst, length=0):
            fdst.write(fsrc.read(10))
            raise OSError(errno.ENOSPC, "No space left on device")
        monkeypatch.setattr(mover.shutil, "copyfileobj", broken_copy)

        with pytest.raises(OSError):
            move_file(source, tmp_path / "B", "cat.png")

        assert source.exists()
        assert not (tmp_path / "B" / "cat.png").exists()

    def test_failed_source_removal_is_surfaced(self, tmp_path, source, cross_device, monkeypatch):
        def fail_remove(path):
            raise PermissionError(errno.EACCES, "Permission denied")
        monkeypatch.setattr(mover.os, "remove", fail_remove)

        with pytest.raises(PermissionError):
            move_file(source, tmp_path / "B", "cat.png")

        # The copy has landed; the caller has to deal with the duplicate
        assert (tmp_path / "B" / "cat.png").exists()
        assert source.exists()
