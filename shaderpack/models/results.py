"""Result models returned by pipeline operations."""

from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import Field, model_validator

from shaderpack.core.structlog_logger import get_struct_logger
from shaderpack.models.base import ShaderpackBaseModel


logger = get_struct_logger(__name__)


class BaseResult(ShaderpackBaseModel):
    """Base class for all operation results."""

    success: bool
    timestamp: datetime = Field(default_factory=datetime.now)
    messages: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_success_consistency(self) -> "BaseResult":
        """Ensure success flag is consistent with errors."""
        if self.errors and self.success:
            logger.warning("result_success_mismatch", error_count=len(self.errors))
            # object.__setattr__ avoids re-running validation on assignment
            object.__setattr__(self, "success", False)
        return self

    def add_message(self, message: str) -> None:
        """Add an informational message."""
        self.messages.append(message)
        logger.debug("result_message_added", message=message)

    def add_error(self, error: str) -> None:
        """Add an error message and mark the result as failed."""
        self.errors.append(error)
        self.success = False

    def is_success(self) -> bool:
        """Check if the operation was successful."""
        return self.success and not self.errors


class PackageResult(BaseResult):
    """Outcome of one packaging pipeline run."""

    platform: str | None = None
    configuration: str | None = None
    archive_path: Path | None = None
    package_root: Path | None = None
    selected: dict[str, Path] = Field(default_factory=dict)
    failed_stage: str | None = None

    def get_output_files(self) -> dict[str, Path]:
        """Return the files produced by the run, keyed by role."""
        files: dict[str, Path] = {}
        if self.archive_path is not None:
            files["archive"] = self.archive_path
        if self.package_root is not None:
            files["package"] = self.package_root
        return files

    def get_summary(self) -> dict[str, Any]:
        """Get a summary of the result."""
        return {
            "success": self.success,
            "platform": self.platform,
            "configuration": self.configuration,
            "archive": str(self.archive_path) if self.archive_path else None,
            "failed_stage": self.failed_stage,
            "errors": self.errors or None,
        }


__all__ = ["BaseResult", "PackageResult"]
