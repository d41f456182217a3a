"""Tests for the memory filesystem."""

import pytest

from tagstash import FileNotFound, Filesystem, FilesystemError, MemoryFilesystem


class TestMemoryFilesystem:
    """Tests for MemoryFilesystem."""

    def test_is_a_filesystem(self, filesystem: MemoryFilesystem) -> None:
        assert isinstance(filesystem, Filesystem)

    def test_write_and_read(self, filesystem: MemoryFilesystem) -> None:
        filesystem.write("a/b/c", b"data")
        assert filesystem.read("a/b/c") == b"data"
        assert filesystem.read("/a//b/c") == b"data"
        assert filesystem.directory_exists("a/b")

    def test_read_missing(self, filesystem: MemoryFilesystem) -> None:
        with pytest.raises(FileNotFound):
            filesystem.read("missing")

    def test_delete(self, filesystem: MemoryFilesystem) -> None:
        filesystem.write("f", b"x")
        filesystem.delete("f")
        assert not filesystem.file_exists("f")
        with pytest.raises(FileNotFound):
            filesystem.delete("f")

    def test_delete_directory(self, filesystem: MemoryFilesystem) -> None:
        filesystem.write("cache/a", b"1")
        filesystem.write("cache/sub/b", b"2")
        filesystem.write("cached", b"3")
        filesystem.delete_directory("cache")
        assert not filesystem.file_exists("cache/a")
        assert not filesystem.file_exists("cache/sub/b")
        assert not filesystem.directory_exists("cache")
        assert filesystem.file_exists("cached")

    def test_create_directory(self, filesystem: MemoryFilesystem) -> None:
        filesystem.create_directory("x/y")
        assert filesystem.directory_exists("x")
        assert filesystem.directory_exists("x/y")

    def test_failure_injection(self, filesystem: MemoryFilesystem) -> None:
        filesystem.write("f", b"x")
        filesystem.fail_reads = True
        with pytest.raises(FilesystemError):
            filesystem.read("f")
        with pytest.raises(FilesystemError):
            filesystem.file_exists("f")
        filesystem.fail_writes = True
        with pytest.raises(FilesystemError):
            filesystem.write("f", b"y")
        with pytest.raises(FilesystemError):
            filesystem.delete_directory("")
