"""Standardized error creation helpers."""

from pathlib import Path
from typing import Any

from shaderpack.core.errors import FileSystemError


def create_file_error(
    path: Path,
    operation: str,
    error: Exception,
    details: dict[str, Any] | None = None,
) -> FileSystemError:
    """Create a FileSystemError wrapping a low-level exception.

    Args:
        path: Path the operation was performed on
        operation: Name of the adapter operation (e.g. "copy_file")
        error: The original exception
        details: Extra context stored on the error

    Returns:
        FileSystemError ready to be raised with ``from error``
    """
    reason = getattr(error, "strerror", None) or str(error) or error.__class__.__name__
    context = dict(details or {})
    context["error_type"] = error.__class__.__name__
    return FileSystemError(path, operation, reason, context)
