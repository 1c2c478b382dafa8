"""Error taxonomy for Shaderpack.

Every failure the packaging pipeline can raise derives from
``PackagingError``. Each error carries the context needed to diagnose the
failure without re-running: the path, the logical artifact name, or the
command that failed.
"""

from pathlib import Path
from typing import Any


class PackagingError(Exception):
    """Base class for all Shaderpack errors."""

    stage = "packaging"

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class ConfigurationError(PackagingError):
    """Invalid settings, directories or profile selection."""

    stage = "configuration"


class FileSystemError(PackagingError):
    """A file adapter operation failed."""

    stage = "filesystem"

    def __init__(
        self,
        path: Path,
        operation: str,
        reason: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.path = path
        self.operation = operation
        super().__init__(
            f"File operation '{operation}' failed on '{path}': {reason}",
            {"path": str(path), "operation": operation, **(context or {})},
        )


class ExternalToolError(PackagingError):
    """The delegated configure/build/install process failed."""

    stage = "build"

    def __init__(self, step: str, command: list[str], returncode: int) -> None:
        self.step = step
        self.command = list(command)
        self.returncode = returncode
        super().__init__(
            f"External {step} step failed with exit code {returncode}: "
            f"{' '.join(self.command)}",
            {"step": step, "command": self.command, "returncode": returncode},
        )


class NotFoundError(PackagingError):
    """A required artifact has no candidate in the build tree."""

    stage = "locate"

    def __init__(
        self, build_tree: Path, name_pattern: str, artifact: str | None = None
    ) -> None:
        self.build_tree = build_tree
        self.name_pattern = name_pattern
        self.artifact = artifact
        label = f"'{artifact}' ({name_pattern})" if artifact else f"'{name_pattern}'"
        super().__init__(
            f"No file matching {label} found under {build_tree}",
            {
                "build_tree": str(build_tree),
                "pattern": name_pattern,
                "artifact": artifact,
            },
        )


class MissingHeaderError(PackagingError):
    """A fixed header file is absent from its source include directory."""

    stage = "layout"

    def __init__(self, source_dir: Path, file_name: str) -> None:
        self.source_dir = source_dir
        self.file_name = file_name
        super().__init__(
            f"Header '{file_name}' not found in {source_dir}",
            {"source_dir": str(source_dir), "file_name": file_name},
        )


class ArchiveToolError(PackagingError):
    """Compressing the package directory failed."""

    stage = "archive"

    def __init__(self, output_path: Path, archive_format: str, reason: str) -> None:
        self.output_path = output_path
        self.archive_format = archive_format
        super().__init__(
            f"Failed to write {archive_format} archive {output_path}: {reason}",
            {"output_path": str(output_path), "format": archive_format},
        )


__all__ = [
    "ArchiveToolError",
    "ConfigurationError",
    "ExternalToolError",
    "FileSystemError",
    "MissingHeaderError",
    "NotFoundError",
    "PackagingError",
]
