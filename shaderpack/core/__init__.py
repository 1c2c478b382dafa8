from .errors import (
    ArchiveToolError,
    ConfigurationError,
    ExternalToolError,
    FileSystemError,
    MissingHeaderError,
    NotFoundError,
    PackagingError,
)
from .logging import setup_logging


__all__ = [
    "setup_logging",
    "ArchiveToolError",
    "ConfigurationError",
    "ExternalToolError",
    "FileSystemError",
    "MissingHeaderError",
    "NotFoundError",
    "PackagingError",
]
