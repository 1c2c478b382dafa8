"""Value types exchanged between packaging stages."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Candidate:
    """A file found in the build tree that may be the requested artifact."""

    path: Path
    mtime: float


@dataclass
class PackageLayout:
    """A populated package directory ready to be archived."""

    root: Path
    directories: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class HeaderRequest:
    """Headers to copy from an absolute source directory into the package."""

    source_dir: Path
    file_names: tuple[str, ...]
    destination: str = "include"
