"""Tests for FileSystemAdapter implementation."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from shaderpack.adapters.file_adapter import FileSystemAdapter, create_file_adapter
from shaderpack.core.errors import FileSystemError, PackagingError
from shaderpack.protocols.file_adapter_protocol import FileAdapterProtocol


class TestFileSystemAdapter:
    """Test FileSystemAdapter against a temporary directory."""

    def setup_method(self):
        self.adapter = FileSystemAdapter()

    def test_create_file_adapter(self):
        """Factory returns an adapter satisfying the protocol."""
        adapter = create_file_adapter()
        assert isinstance(adapter, FileSystemAdapter)
        assert isinstance(adapter, FileAdapterProtocol)

    def test_exists_checks(self, tmp_path: Path):
        file_path = tmp_path / "a.txt"
        file_path.write_text("x")

        assert self.adapter.check_exists(file_path)
        assert self.adapter.is_file(file_path)
        assert not self.adapter.is_dir(file_path)
        assert self.adapter.is_dir(tmp_path)
        assert not self.adapter.check_exists(tmp_path / "missing")

    def test_create_directory_with_parents(self, tmp_path: Path):
        target = tmp_path / "a" / "b" / "c"

        self.adapter.create_directory(target)
        self.adapter.create_directory(target)

        assert target.is_dir()

    def test_create_directory_over_file(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")

        with pytest.raises(FileSystemError) as exc_info:
            self.adapter.create_directory(blocker / "child")

        assert exc_info.value.operation == "create_directory"
        assert isinstance(exc_info.value, PackagingError)

    def test_walk_files_recursive(self, tmp_path: Path):
        (tmp_path / "lib" / "x64").mkdir(parents=True)
        (tmp_path / "lib" / "x64" / "libdxil.so").write_bytes(b"")
        (tmp_path / "top.txt").write_text("")
        (tmp_path / "empty").mkdir()

        files = self.adapter.walk_files(tmp_path)

        assert sorted(f.relative_to(tmp_path).as_posix() for f in files) == [
            "lib/x64/libdxil.so",
            "top.txt",
        ]

    def test_walk_files_not_a_directory(self, tmp_path: Path):
        with pytest.raises(FileSystemError, match="walk_files"):
            self.adapter.walk_files(tmp_path / "missing")

    def test_mode_and_mtime(self, tmp_path: Path):
        target = tmp_path / "libdxcompiler.so"
        target.write_bytes(b"ELF")
        target.chmod(0o750)
        os.utime(target, (1_000_000, 1_000_000))

        assert self.adapter.get_mode(target) == 0o750
        assert self.adapter.get_mtime(target) == 1_000_000

    def test_get_mtime_missing(self, tmp_path: Path):
        with pytest.raises(FileSystemError, match="get_mtime"):
            self.adapter.get_mtime(tmp_path / "missing")

    def test_read_and_write_bytes(self, tmp_path: Path):
        target = tmp_path / "nested" / "data.bin"

        self.adapter.write_bytes(target, b"\x00\x01")

        assert self.adapter.read_bytes(target) == b"\x00\x01"

    def test_read_bytes_missing(self, tmp_path: Path):
        with pytest.raises(FileSystemError) as exc_info:
            self.adapter.read_bytes(tmp_path / "missing.bin")

        assert exc_info.value.context["error_type"] == "FileNotFoundError"

    def test_append_text(self, tmp_path: Path):
        target = tmp_path / "ci" / "output"

        self.adapter.append_text(target, "a=1\n")
        self.adapter.append_text(target, "b=2\n")

        assert target.read_text() == "a=1\nb=2\n"

    def test_copy_file_preserves_metadata(self, tmp_path: Path):
        src = tmp_path / "libdxcompiler.so"
        src.write_bytes(b"ELF")
        src.chmod(0o755)
        os.utime(src, (1_500_000, 1_500_000))
        dst = tmp_path / "package" / "lib" / "libdxcompiler.so"

        self.adapter.copy_file(src, dst)

        assert dst.read_bytes() == b"ELF"
        assert self.adapter.get_mode(dst) == 0o755
        assert self.adapter.get_mtime(dst) == 1_500_000

    def test_copy_file_missing_source(self, tmp_path: Path):
        with pytest.raises(FileSystemError) as exc_info:
            self.adapter.copy_file(tmp_path / "missing", tmp_path / "dst")

        assert exc_info.value.context["destination"] == str(tmp_path / "dst")

    def test_copy_file_permission_error(self, tmp_path: Path):
        src = tmp_path / "src"
        src.write_text("x")

        with (
            patch("shutil.copy2", side_effect=PermissionError(13, "Permission denied")),
            pytest.raises(FileSystemError, match="Permission denied"),
        ):
            self.adapter.copy_file(src, tmp_path / "dst")

    def test_remove_file(self, tmp_path: Path):
        target = tmp_path / "old.tar.gz"
        target.write_bytes(b"x")

        self.adapter.remove_file(target)
        self.adapter.remove_file(target)

        assert not target.exists()

    def test_remove_dir(self, tmp_path: Path):
        target = tmp_path / "artifacts"
        (target / "package" / "lib").mkdir(parents=True)
        (target / "package" / "lib" / "libdxil.so").write_bytes(b"")

        self.adapter.remove_dir(target)
        self.adapter.remove_dir(target)

        assert not target.exists()

    def test_remove_dir_on_file(self, tmp_path: Path):
        target = tmp_path / "file"
        target.write_text("x")

        with pytest.raises(FileSystemError, match="remove_dir"):
            self.adapter.remove_dir(target)
