"""Tests for result models."""

from pathlib import Path

from shaderpack.models.results import BaseResult, PackageResult


class TestBaseResult:
    def test_errors_force_failure(self):
        result = BaseResult(success=True, errors=["boom"])

        assert result.success is False
        assert not result.is_success()

    def test_add_error_marks_failed(self):
        result = BaseResult(success=True)

        result.add_error("locate: nothing found")

        assert result.success is False
        assert result.errors == ["locate: nothing found"]

    def test_add_message(self):
        result = BaseResult(success=True)

        result.add_message("done")

        assert result.messages == ["done"]
        assert result.is_success()


class TestPackageResult:
    def test_output_files(self):
        result = PackageResult(
            success=True,
            archive_path=Path("/out/dxc-linux-Release.tar.gz"),
            package_root=Path("/out/package"),
        )

        assert result.get_output_files() == {
            "archive": Path("/out/dxc-linux-Release.tar.gz"),
            "package": Path("/out/package"),
        }

    def test_output_files_empty_on_failure(self):
        result = PackageResult(success=False, failed_stage="locate")

        assert result.get_output_files() == {}

    def test_summary(self):
        result = PackageResult(success=False, platform="linux", configuration="Debug")
        result.failed_stage = "layout"
        result.add_error("layout: Header 'dxcapi.h' not found in /src/include/dxc")

        summary = result.get_summary()

        assert summary["success"] is False
        assert summary["failed_stage"] == "layout"
        assert summary["platform"] == "linux"
        assert summary["archive"] is None
        assert len(summary["errors"]) == 1
