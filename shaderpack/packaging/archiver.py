"""Compress a package directory into a single distributable archive."""

import gzip
import io
import tarfile
import time
import zipfile
import zlib
from pathlib import Path, PurePosixPath

from shaderpack.adapters import create_file_adapter
from shaderpack.config.models import ArchiveFormat
from shaderpack.core.errors import ArchiveToolError, FileSystemError
from shaderpack.core.structlog_logger import StructlogMixin
from shaderpack.protocols import FileAdapterProtocol


# Earliest timestamp a zip entry can hold
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)


class PackageArchiver(StructlogMixin):
    """Write the files below a package root into a tar.gz or zip archive.

    Member names are relative to the root, sorted, and optionally nested
    under ``wrap_dir``. Permission bits are stored in both formats so that
    shared libraries stay executable after extraction on POSIX systems.
    Archives are reproducible: the gzip header carries no timestamp and
    tar entries carry no owner names.
    """

    def __init__(self, file_adapter: FileAdapterProtocol | None = None) -> None:
        super().__init__()
        self.file_adapter = file_adapter or create_file_adapter()

    def archive(
        self,
        root: Path,
        output_path: Path,
        archive_format: ArchiveFormat | str,
        wrap_dir: str | None = None,
    ) -> Path:
        """Create ``output_path`` from the contents of ``root``.

        Any existing file at ``output_path`` is deleted first, and a partial
        archive is removed if writing fails.

        Returns:
            The archive path

        Raises:
            ArchiveToolError: If the archive cannot be produced
        """
        archive_format = ArchiveFormat(archive_format)
        self.file_adapter.remove_file(output_path)

        if not self.file_adapter.is_dir(root):
            raise ArchiveToolError(
                output_path, archive_format.value, f"package root {root} is not a directory"
            )

        try:
            members = self._collect_members(root, wrap_dir)
            if archive_format is ArchiveFormat.ZIP:
                data = self._build_zip(members)
            else:
                data = self._build_tar_gz(members)
            self.file_adapter.write_bytes(output_path, data)
        except (FileSystemError, tarfile.TarError, zlib.error, OSError, ValueError) as e:
            self.log_error_with_context(
                "archive_failed", e, output=str(output_path), format=archive_format.value
            )
            self.file_adapter.remove_file(output_path)
            raise ArchiveToolError(output_path, archive_format.value, str(e)) from e

        self.logger.info(
            "archive_written",
            output=str(output_path),
            format=archive_format.value,
            members=len(members),
            size=len(data),
        )
        return output_path

    def _collect_members(
        self, root: Path, wrap_dir: str | None
    ) -> list[tuple[str, Path, int, float]]:
        prefix = PurePosixPath(wrap_dir) if wrap_dir else PurePosixPath()
        members = []
        for path in self.file_adapter.walk_files(root):
            relative = PurePosixPath(path.relative_to(root).as_posix())
            members.append(
                (
                    (prefix / relative).as_posix(),
                    path,
                    self.file_adapter.get_mode(path),
                    self.file_adapter.get_mtime(path),
                )
            )
        if not members:
            self.logger.warning("archive_empty", root=str(root))
        return sorted(members, key=lambda m: m[0])

    def _build_tar_gz(self, members: list[tuple[str, Path, int, float]]) -> bytes:
        buffer = io.BytesIO()
        with (
            gzip.GzipFile(fileobj=buffer, mode="wb", mtime=0) as gz,
            tarfile.open(fileobj=gz, mode="w", format=tarfile.PAX_FORMAT) as tar,
        ):
            for name, path, mode, mtime in members:
                content = self.file_adapter.read_bytes(path)
                info = tarfile.TarInfo(name)
                info.size = len(content)
                info.mode = mode
                info.mtime = int(mtime)
                info.uname = info.gname = ""
                tar.addfile(info, io.BytesIO(content))
        return buffer.getvalue()

    def _build_zip(self, members: list[tuple[str, Path, int, float]]) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, mode="w", compression=zipfile.ZIP_DEFLATED) as zf:
            for name, path, mode, mtime in members:
                content = self.file_adapter.read_bytes(path)
                date_time = max(time.localtime(mtime)[:6], ZIP_EPOCH)
                info = zipfile.ZipInfo(name, date_time=date_time)
                info.compress_type = zipfile.ZIP_DEFLATED
                # Unix creator so extractors honour the stored permission bits
                info.create_system = 3
                info.external_attr = (0o100000 | mode) << 16
                zf.writestr(info, content)
        return buffer.getvalue()


def create_archiver(file_adapter: FileAdapterProtocol | None = None) -> PackageArchiver:
    """Create package archiver instance."""
    return PackageArchiver(file_adapter)
