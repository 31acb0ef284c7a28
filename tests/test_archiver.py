"""Tests for packing label folders into the result archive."""

import os
import zipfile

import pytest

from label_sorter import archiver
from label_sorter.archiver import create_archive
from label_sorter.errors import ArchiveError


@pytest.fixture
def working_dir(tmp_path):
    root = tmp_path / "images"
    root.mkdir()
    (root / "dog.jpg").write_bytes(b"dog")
    (root / "B").mkdir()
    (root / "B" / "cat.png").write_bytes(b"cat")
    (root / "A").mkdir()
    (root / "A" / "bird.gif").write_bytes(b"bird")
    (root / "A" / "nested" / "deeper").mkdir(parents=True)
    (root / "A" / "nested" / "deeper" / "fish.bmp").write_bytes(b"fish")
    (root / "empty").mkdir()
    return root


def read_names(path):
    with zipfile.ZipFile(path) as zf:
        return sorted(zf.namelist())


class TestCreateArchive:
    """Tests for create_archive."""

    def test_contains_label_files_with_relative_paths(self, tmp_path, working_dir):
        output = tmp_path / "result.zip"
        report = create_archive(working_dir, output)

        expected = ["A/bird.gif", "A/nested/deeper/fish.bmp", "B/cat.png"]
        assert read_names(output) == expected
        assert sorted(report.archived) == expected
        assert report.success

    def test_root_files_are_excluded(self, tmp_path, working_dir):
        output = tmp_path / "result.zip"
        create_archive(working_dir, output)
        assert not any(name.endswith("dog.jpg") for name in read_names(output))

    def test_file_contents_preserved(self, tmp_path, working_dir):
        output = tmp_path / "result.zip"
        create_archive(working_dir, output)
        with zipfile.ZipFile(output) as zf:
            assert zf.read("B/cat.png") == b"cat"

    def test_overwrites_existing_archive(self, tmp_path, working_dir):
        output = tmp_path / "result.zip"
        output.write_bytes(b"stale, not a zip")
        create_archive(working_dir, output)
        assert zipfile.is_zipfile(output)

    def test_no_label_folders_gives_empty_archive(self, tmp_path):
        root = tmp_path / "images"
        root.mkdir()
        (root / "dog.jpg").write_bytes(b"dog")
        output = tmp_path / "result.zip"

        report = create_archive(root, output)

        assert read_names(output) == []
        assert report.archived == []

    def test_unreadable_file_is_skipped(self, tmp_path, working_dir, monkeypatch):
        original_write = zipfile.ZipFile.write

        def flaky_write(self, filename, arcname=None, *args, **kwargs):
            if arcname == "A/bird.gif":
                raise PermissionError(13, "Permission denied", str(filename))
            return original_write(self, filename, arcname, *args, **kwargs)
        monkeypatch.setattr(archiver.zipfile.ZipFile, "write", flaky_write)

        output = tmp_path / "result.zip"
        report = create_archive(working_dir, output)

        assert read_names(output) == ["A/nested/deeper/fish.bmp", "B/cat.png"]
        assert [name for name, _ in report.skipped] == ["A/bird.gif"]
        assert not report.success

    def test_pre_1980_timestamp_does_not_abort_export(self, tmp_path, working_dir):
        old = working_dir / "A" / "bird.gif"
        os.utime(old, (0, 0))
        output = tmp_path / "result.zip"

        report = create_archive(working_dir, output)

        assert read_names(output) == ["A/bird.gif", "A/nested/deeper/fish.bmp", "B/cat.png"]
        assert report.success
        with zipfile.ZipFile(output) as zf:
            assert zf.read("A/bird.gif") == b"bird"

    def test_value_error_while_adding_is_skipped(self, tmp_path, working_dir, monkeypatch):
        original_write = zipfile.ZipFile.write

        def rejecting_write(self, filename, arcname=None, *args, **kwargs):
            if arcname == "B/cat.png":
                raise ValueError("ZIP does not support timestamps before 1980")
            return original_write(self, filename, arcname, *args, **kwargs)
        monkeypatch.setattr(archiver.zipfile.ZipFile, "write", rejecting_write)

        output = tmp_path / "result.zip"
        report = create_archive(working_dir, output)

        assert read_names(output) == ["A/bird.gif", "A/nested/deeper/fish.bmp"]
        assert [name for name, _ in report.skipped] == ["B/cat.png"]

    def test_uncreatable_output_raises(self, tmp_path, working_dir):
        with pytest.raises(ArchiveError):
            create_archive(working_dir, tmp_path / "no" / "such" / "dir" / "result.zip")

    def test_missing_working_directory_raises(self, tmp_path):
        with pytest.raises(ArchiveError):
            create_archive(tmp_path / "missing", tmp_path / "result.zip")
