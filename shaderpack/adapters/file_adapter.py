"""File adapter for abstracting file system operations."""

import logging
import os
import shutil
import stat
from pathlib import Path

from shaderpack.core.errors import FileSystemError
from shaderpack.protocols import FileAdapterProtocol
from shaderpack.utils.error_utils import create_file_error


logger = logging.getLogger(__name__)


class FileSystemAdapter:
    """File system adapter implementation."""

    def check_exists(self, path: Path) -> bool:
        """Check if a path exists."""
        return path.exists()

    def is_file(self, path: Path) -> bool:
        """Check if a path is a file."""
        return path.is_file()

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory."""
        return path.is_dir()

    def create_directory(self, path: Path) -> None:
        """Create a directory."""
        try:
            logger.debug("Creating directory: %s", path)
            path.mkdir(parents=True, exist_ok=True)
        except PermissionError as e:
            error = create_file_error(path, "create_directory", e)
            logger.error("Permission denied creating directory: %s", path)
            raise error from e
        except OSError as e:
            error = create_file_error(path, "create_directory", e)
            logger.error("Error creating directory %s: %s", path, e)
            raise error from e

    def walk_files(self, path: Path) -> list[Path]:
        """Recursively list every regular file below a directory."""
        if not self.is_dir(path):
            logger.error("Path is not a directory: %s", path)
            raise create_file_error(
                path, "walk_files", NotADirectoryError("Not a directory")
            )

        def _raise(e: OSError) -> None:
            raise e

        files: list[Path] = []
        try:
            for dirpath, _dirnames, filenames in os.walk(path, onerror=_raise):
                for filename in filenames:
                    candidate = Path(dirpath) / filename
                    if candidate.is_file():
                        files.append(candidate)
        except OSError as e:
            error = create_file_error(path, "walk_files", e)
            logger.error("Error walking directory %s: %s", path, e)
            raise error from e

        logger.debug("Found %d files below %s", len(files), path)
        return files

    def get_mtime(self, path: Path) -> float:
        """Return the last modification time of a file."""
        try:
            return path.stat().st_mtime
        except OSError as e:
            raise create_file_error(path, "get_mtime", e) from e

    def get_mode(self, path: Path) -> int:
        """Return the permission bits of a file."""
        try:
            return stat.S_IMODE(path.stat().st_mode)
        except OSError as e:
            raise create_file_error(path, "get_mode", e) from e

    def read_bytes(self, path: Path) -> bytes:
        """Read binary content from a file."""
        try:
            logger.debug("Reading file: %s", path)
            return path.read_bytes()
        except FileNotFoundError as e:
            error = create_file_error(path, "read_bytes", e)
            logger.error("File not found: %s", path)
            raise error from e
        except OSError as e:
            error = create_file_error(path, "read_bytes", e)
            logger.error("Error reading file %s: %s", path, e)
            raise error from e

    def write_bytes(self, path: Path, data: bytes) -> None:
        """Write binary content to a file."""
        self.create_directory(path.parent)
        try:
            logger.debug("Writing %d bytes to %s", len(data), path)
            path.write_bytes(data)
        except OSError as e:
            error = create_file_error(path, "write_bytes", e, {"size": len(data)})
            logger.error("Error writing file %s: %s", path, e)
            raise error from e

    def append_text(self, path: Path, content: str, encoding: str = "utf-8") -> None:
        """Append text to a file."""
        self.create_directory(path.parent)
        try:
            with path.open(mode="a", encoding=encoding) as f:
                f.write(content)
        except OSError as e:
            error = create_file_error(path, "append_text", e, {"encoding": encoding})
            logger.error("Error appending to file %s: %s", path, e)
            raise error from e

    def copy_file(self, src: Path, dst: Path) -> None:
        """Copy a file from source to destination."""
        try:
            self.create_directory(dst.parent)

            logger.debug("Copying file: %s -> %s", src, dst)
            shutil.copy2(src, dst)
        except FileNotFoundError as e:
            error = create_file_error(
                src, "copy_file", e, {"source": str(src), "destination": str(dst)}
            )
            logger.error("Source file not found: %s", src)
            raise error from e
        except PermissionError as e:
            error = create_file_error(
                src, "copy_file", e, {"source": str(src), "destination": str(dst)}
            )
            logger.error("Permission denied copying file: %s -> %s", src, dst)
            raise error from e
        except FileSystemError:
            # Let FileSystemError from create_directory pass through
            raise
        except OSError as e:
            error = create_file_error(
                src, "copy_file", e, {"source": str(src), "destination": str(dst)}
            )
            logger.error("Error copying file %s to %s: %s", src, dst, e)
            raise error from e

    def remove_file(self, path: Path) -> None:
        """Remove a file. Does not raise error if file not found."""
        try:
            logger.debug("Removing file: %s", path)
            path.unlink(missing_ok=True)
        except OSError as e:
            error = create_file_error(path, "remove_file", e)
            logger.error("Error removing file %s: %s", path, e)
            raise error from e

    def remove_dir(self, path: Path) -> None:
        """Remove a directory and its contents. Does not raise if missing."""
        if not self.check_exists(path):
            logger.debug("Directory does not exist, nothing to remove: %s", path)
            return

        if not self.is_dir(path):
            logger.error("Path is not a directory: %s", path)
            raise create_file_error(
                path, "remove_dir", NotADirectoryError("Not a directory")
            )

        try:
            shutil.rmtree(path)
            logger.debug("Removed directory recursively: %s", path)
        except PermissionError as e:
            error = create_file_error(path, "remove_dir", e)
            logger.error("Permission denied removing directory: %s", path)
            raise error from e
        except OSError as e:
            error = create_file_error(path, "remove_dir", e)
            logger.error("Error removing directory %s: %s", path, e)
            raise error from e


def create_file_adapter() -> FileAdapterProtocol:
    """Create a file adapter with default implementation."""
    return FileSystemAdapter()
