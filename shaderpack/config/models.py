"""Configuration models describing what goes into a package."""

from enum import Enum
from pathlib import PurePosixPath

from pydantic import Field, field_validator, model_validator

from shaderpack.models.base import ShaderpackBaseModel


class BuildConfiguration(str, Enum):
    """Build variants understood by the external build system."""

    DEBUG = "Debug"
    RELEASE = "Release"
    REL_WITH_DEB_INFO = "RelWithDebInfo"
    MIN_SIZE_REL = "MinSizeRel"


class ArchiveFormat(str, Enum):
    """Supported archive formats."""

    TAR_GZ = "tar.gz"
    ZIP = "zip"

    @property
    def extension(self) -> str:
        return f".{self.value}"


def _validate_relative(value: str, field: str) -> str:
    path = PurePosixPath(value)
    if path.is_absolute() or ".." in path.parts or not path.parts:
        raise ValueError(f"{field} must be a relative path inside the package")
    return path.as_posix()


class ArtifactSpec(ShaderpackBaseModel):
    """A logical artifact to find in the build tree and place in the package.

    ``pattern`` is matched against file names only (exact name or glob).
    ``destination`` is the package-relative path of the copy; when it ends
    with a slash, or names a directory without a file name, the source file
    name is kept.
    """

    name: str
    pattern: str
    destination: str
    required: bool = True

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        keep_name = v.endswith("/")
        normalized = _validate_relative(v, "destination")
        return normalized + "/" if keep_name else normalized

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        if not v or "/" in v or "\\" in v:
            raise ValueError("pattern must be a bare file name or glob")
        return v

    def destination_for(self, file_name: str) -> str:
        """Return the package-relative destination for a selected file."""
        if self.destination.endswith("/"):
            return f"{self.destination}{file_name}"
        return self.destination


class HeaderSet(ShaderpackBaseModel):
    """Fixed API headers copied verbatim into the package."""

    source_dir: str
    file_names: list[str] = Field(default_factory=list)
    destination: str = "include"

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        return _validate_relative(v, "destination")


class PlatformProfile(ShaderpackBaseModel):
    """Per-target description of the package layout."""

    name: str
    archive_format: ArchiveFormat
    directories: list[str]
    artifacts: list[ArtifactSpec] = Field(default_factory=list)
    headers: HeaderSet | None = None
    use_install_tree: bool = False
    wrap_dir: str | None = None

    @field_validator("directories")
    @classmethod
    def validate_directories(cls, v: list[str]) -> list[str]:
        return [_validate_relative(d, "directory") for d in v]

    @field_validator("wrap_dir")
    @classmethod
    def validate_wrap_dir(cls, v: str | None) -> str | None:
        if v is None or v == "":
            return None
        return _validate_relative(v, "wrap_dir")

    @model_validator(mode="after")
    def validate_unique_artifacts(self) -> "PlatformProfile":
        names = [spec.name for spec in self.artifacts]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"duplicate artifact names: {', '.join(duplicates)}")
        return self

    @property
    def format(self) -> ArchiveFormat:
        # use_enum_values stores the plain string
        return ArchiveFormat(self.archive_format)

    def archive_name(self, package_name: str, configuration: str) -> str:
        """Default archive file name for this profile."""
        return f"{package_name}-{self.name}-{configuration}{self.format.extension}"


__all__ = [
    "ArchiveFormat",
    "ArtifactSpec",
    "BuildConfiguration",
    "HeaderSet",
    "PlatformProfile",
]
