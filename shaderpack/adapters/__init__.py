"""Adapters for external dependencies."""

from .file_adapter import FileSystemAdapter, create_file_adapter
from .process_adapter import (
    LoggingOutputMiddleware,
    SubprocessRunner,
    create_process_runner,
)


__all__ = [
    "FileSystemAdapter",
    "LoggingOutputMiddleware",
    "SubprocessRunner",
    "create_file_adapter",
    "create_process_runner",
]
