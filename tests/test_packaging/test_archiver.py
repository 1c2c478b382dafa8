"""Tests for the package archiver."""

import io
import os
import tarfile
import zipfile
from pathlib import Path

import pytest
from conftest import MemoryFileAdapter

from shaderpack.config.models import ArchiveFormat
from shaderpack.core.errors import ArchiveToolError, FileSystemError
from shaderpack.packaging.archiver import PackageArchiver, create_archiver


@pytest.fixture
def package_root(tmp_path: Path) -> Path:
    """A small package directory on disk."""
    root = tmp_path / "package"
    (root / "lib").mkdir(parents=True)
    (root / "include").mkdir()
    lib = root / "lib" / "libdxcompiler.so"
    lib.write_bytes(b"\x7fELF compiler")
    lib.chmod(0o755)
    header = root / "include" / "dxcapi.h"
    header.write_text("#pragma once\n")
    header.chmod(0o644)
    return root


class TestTarGzArchive:
    """Test tar.gz output."""

    def test_round_trip(self, package_root: Path, tmp_path: Path):
        """Extracting the archive gives back the package tree."""
        output = tmp_path / "out" / "dxc-linux-Release.tar.gz"

        result = create_archiver().archive(package_root, output, ArchiveFormat.TAR_GZ)

        assert result == output
        with tarfile.open(output, "r:gz") as tar:
            names = tar.getnames()
            lib = tar.extractfile("lib/libdxcompiler.so")
            assert lib is not None
            assert lib.read() == b"\x7fELF compiler"
        assert names == ["include/dxcapi.h", "lib/libdxcompiler.so"]

    def test_permission_bits_stored(self, package_root: Path, tmp_path: Path):
        """Shared libraries keep their executable bit."""
        output = tmp_path / "pkg.tar.gz"

        PackageArchiver().archive(package_root, output, "tar.gz")

        with tarfile.open(output, "r:gz") as tar:
            assert tar.getmember("lib/libdxcompiler.so").mode == 0o755
            assert tar.getmember("include/dxcapi.h").mode == 0o644

    def test_reproducible_output(self, package_root: Path, tmp_path: Path):
        """Archiving the same tree twice gives identical bytes."""
        first = tmp_path / "first.tar.gz"
        second = tmp_path / "second.tar.gz"
        archiver = PackageArchiver()

        archiver.archive(package_root, first, ArchiveFormat.TAR_GZ)
        archiver.archive(package_root, second, ArchiveFormat.TAR_GZ)

        data = first.read_bytes()
        assert data == second.read_bytes()
        # gzip header MTIME field is zero
        assert data[4:8] == b"\x00\x00\x00\x00"
        with tarfile.open(first, "r:gz") as tar:
            assert {m.uname for m in tar.getmembers()} == {""}

    def test_wrap_dir(self, package_root: Path, tmp_path: Path):
        """Members can be nested under a single top-level folder."""
        output = tmp_path / "wrapped.tar.gz"

        PackageArchiver().archive(
            package_root, output, ArchiveFormat.TAR_GZ, wrap_dir="dxc"
        )

        with tarfile.open(output, "r:gz") as tar:
            assert tar.getnames() == ["dxc/include/dxcapi.h", "dxc/lib/libdxcompiler.so"]

    def test_existing_archive_replaced(self, package_root: Path, tmp_path: Path):
        """A file already at the output path is deleted first."""
        output = tmp_path / "pkg.tar.gz"
        output.write_bytes(b"not an archive")

        PackageArchiver().archive(package_root, output, ArchiveFormat.TAR_GZ)

        with tarfile.open(output, "r:gz") as tar:
            assert len(tar.getnames()) == 2


class TestZipArchive:
    """Test zip output."""

    def test_round_trip(self, package_root: Path, tmp_path: Path):
        output = tmp_path / "dxc-windows-Release.zip"

        PackageArchiver().archive(package_root, output, ArchiveFormat.ZIP)

        with zipfile.ZipFile(output) as zf:
            assert zf.namelist() == ["include/dxcapi.h", "lib/libdxcompiler.so"]
            assert zf.read("lib/libdxcompiler.so") == b"\x7fELF compiler"

    def test_permission_bits_stored(self, package_root: Path, tmp_path: Path):
        """Unix mode bits are kept in the external attributes."""
        output = tmp_path / "pkg.zip"

        PackageArchiver().archive(package_root, output, ArchiveFormat.ZIP)

        with zipfile.ZipFile(output) as zf:
            info = zf.getinfo("lib/libdxcompiler.so")
            assert info.create_system == 3
            assert (info.external_attr >> 16) & 0o777 == 0o755

    def test_old_timestamps_clamped(self, package_root: Path, tmp_path: Path):
        """Files older than 1980 still fit in a zip entry."""
        header = package_root / "include" / "dxcapi.h"
        os.utime(header, (0, 0))
        output = tmp_path / "pkg.zip"

        PackageArchiver().archive(package_root, output, ArchiveFormat.ZIP)

        with zipfile.ZipFile(output) as zf:
            assert zf.getinfo("include/dxcapi.h").date_time == (1980, 1, 1, 0, 0, 0)


class TestArchiveFailures:
    """Test error handling with an in-memory file system."""

    def setup_method(self):
        self.fs = MemoryFileAdapter()
        self.root = Path("/work/package")
        self.output = Path("/work/out/pkg.tar.gz")

    def test_missing_root(self):
        """Archiving a missing directory fails and leaves no output."""
        self.fs.add_file(self.output, b"stale")

        with pytest.raises(ArchiveToolError) as exc_info:
            PackageArchiver(self.fs).archive(self.root, self.output, "tar.gz")

        assert exc_info.value.output_path == self.output
        assert not self.fs.check_exists(self.output)

    def test_read_failure_wrapped(self):
        """A file system error while reading becomes an archive error."""

        class FailingReads(MemoryFileAdapter):
            def read_bytes(self, path: Path) -> bytes:
                raise FileSystemError(path, "read_bytes", "Input/output error")

        fs = FailingReads()
        fs.add_file(self.root / "lib" / "libdxil.so", b"x")

        with pytest.raises(ArchiveToolError, match="Input/output error"):
            PackageArchiver(fs).archive(self.root, self.output, ArchiveFormat.ZIP)

        assert not fs.check_exists(self.output)

    def test_writes_through_adapter(self):
        """The archive is written via the file adapter."""
        self.fs.add_file(self.root / "bin" / "dxcompiler.dll", b"MZ", 0o755)

        PackageArchiver(self.fs).archive(self.root, self.output, ArchiveFormat.ZIP)

        with zipfile.ZipFile(io.BytesIO(self.fs.read_bytes(self.output))) as zf:
            assert zf.namelist() == ["bin/dxcompiler.dll"]
