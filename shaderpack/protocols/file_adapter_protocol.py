"""Protocol for file system operations."""

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileAdapterProtocol(Protocol):
    """Protocol for the file system capability used by the packaging pipeline.

    Every stage that touches the disk goes through this interface so the
    locator, layout builder and archiver can run against an in-memory tree.
    """

    def check_exists(self, path: Path) -> bool:
        """Check if a path exists."""
        ...

    def is_file(self, path: Path) -> bool:
        """Check if a path is a regular file."""
        ...

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory."""
        ...

    def create_directory(self, path: Path) -> None:
        """Create a directory and any missing parents.

        Raises:
            FileSystemError: If directory cannot be created
        """
        ...

    def walk_files(self, path: Path) -> list[Path]:
        """Recursively list every regular file below a directory.

        Args:
            path: Root directory of the walk

        Returns:
            Absolute file paths, in no particular order

        Raises:
            FileSystemError: If path is not a readable directory
        """
        ...

    def get_mtime(self, path: Path) -> float:
        """Return the last modification time of a file as a POSIX timestamp.

        Raises:
            FileSystemError: If the file cannot be stat'ed
        """
        ...

    def get_mode(self, path: Path) -> int:
        """Return the permission bits of a file (e.g. 0o755).

        Raises:
            FileSystemError: If the file cannot be stat'ed
        """
        ...

    def read_bytes(self, path: Path) -> bytes:
        """Read the full binary content of a file.

        Raises:
            FileSystemError: If file cannot be read
        """
        ...

    def write_bytes(self, path: Path, data: bytes) -> None:
        """Write binary content to a file, creating parent directories.

        Raises:
            FileSystemError: If file cannot be written
        """
        ...

    def append_text(self, path: Path, content: str, encoding: str = "utf-8") -> None:
        """Append text to a file, creating it if needed.

        Raises:
            FileSystemError: If file cannot be written
        """
        ...

    def copy_file(self, src: Path, dst: Path) -> None:
        """Copy a file, preserving permission bits and modification time.

        Overwrites ``dst`` if present and creates its parent directory.

        Raises:
            FileSystemError: If file cannot be copied
        """
        ...

    def remove_file(self, path: Path) -> None:
        """Remove a file. Does not raise if the file does not exist.

        Raises:
            FileSystemError: If file exists but cannot be removed
        """
        ...

    def remove_dir(self, path: Path) -> None:
        """Recursively remove a directory. Does not raise if it does not exist.

        Raises:
            FileSystemError: If directory exists but cannot be removed
        """
        ...
