"""End-to-end packaging pipeline: build, locate, select, lay out, archive."""

from pathlib import Path

from pydantic import Field

from shaderpack.adapters import create_file_adapter
from shaderpack.build.cmake_driver import (
    CMakeBuildDriver,
    default_build_dir,
    default_jobs,
)
from shaderpack.config.models import BuildConfiguration, PlatformProfile
from shaderpack.core.ci import format_ci_output, log_group
from shaderpack.core.errors import ConfigurationError, NotFoundError, PackagingError
from shaderpack.core.structlog_logger import StructlogMixin
from shaderpack.models.base import ShaderpackBaseModel
from shaderpack.models.results import PackageResult
from shaderpack.packaging.archiver import PackageArchiver
from shaderpack.packaging.layout import PackageLayoutBuilder
from shaderpack.packaging.locator import ArtifactLocator
from shaderpack.packaging.models import HeaderRequest
from shaderpack.packaging.selector import CandidateSelector
from shaderpack.protocols import FileAdapterProtocol


PACKAGE_DIR_NAME = "package"


class PackageRequest(ShaderpackBaseModel):
    """Inputs of one packaging run."""

    project_dir: Path
    artifacts_dir: Path
    profile: PlatformProfile
    configuration: BuildConfiguration = Field(
        default=BuildConfiguration.RELEASE, validate_default=True
    )
    build_dir: Path | None = None
    archive_name: str | None = None
    package_name: str = "dxc"
    jobs: int | None = Field(default=None, ge=1)
    skip_build: bool = False
    ci_output_file: Path | None = None
    wrap_dir: str | None = None

    @property
    def package_root(self) -> Path:
        return self.artifacts_dir / PACKAGE_DIR_NAME

    def resolve_build_dir(self) -> Path:
        return self.build_dir or default_build_dir(self.project_dir)

    def resolve_archive_path(self) -> Path:
        name = self.archive_name or self.profile.archive_name(
            self.package_name, str(self.configuration)
        )
        path = Path(name)
        return path if path.is_absolute() else self.artifacts_dir / path


def _overlaps(a: Path, b: Path) -> bool:
    """True when ``a`` is ``b`` or one of its ancestors."""
    return a == b or a in b.parents


class PackagingPipeline(StructlogMixin):
    """Run every packaging stage in order, stopping at the first failure.

    Stages raise typed ``PackagingError`` subclasses; ``run`` converts the
    first one into a failed ``PackageResult`` naming the stage, and leaves
    the decision of how to exit to the caller.
    """

    def __init__(
        self,
        file_adapter: FileAdapterProtocol | None = None,
        locator: ArtifactLocator | None = None,
        selector: CandidateSelector | None = None,
        layout_builder: PackageLayoutBuilder | None = None,
        archiver: PackageArchiver | None = None,
        build_driver: CMakeBuildDriver | None = None,
    ) -> None:
        super().__init__()
        self.file_adapter = file_adapter or create_file_adapter()
        self.locator = locator or ArtifactLocator(self.file_adapter)
        self.selector = selector or CandidateSelector()
        self.layout_builder = layout_builder or PackageLayoutBuilder(self.file_adapter)
        self.archiver = archiver or PackageArchiver(self.file_adapter)
        self.build_driver = build_driver

    def run(self, request: PackageRequest) -> PackageResult:
        profile = request.profile
        configuration = str(request.configuration)
        result = PackageResult(
            success=False, platform=profile.name, configuration=configuration
        )
        stage = "configuration"

        try:
            build_dir = request.resolve_build_dir()
            archive_path = request.resolve_archive_path()
            package_root = request.package_root
            self._validate(request, build_dir, archive_path)

            stage = "reset"
            self._reset_outputs(request, archive_path)

            if not request.skip_build:
                stage = "build"
                self._run_build(request, build_dir)

            if profile.use_install_tree:
                stage = "install"
                self._run_install(request, build_dir)

            stage = "locate"
            selected = self._select_artifacts(profile, build_dir, configuration)
            result.selected = {name: path for name, (_dest, path) in selected.items()}

            stage = "layout"
            headers = None
            if profile.headers is not None:
                headers = HeaderRequest(
                    source_dir=request.project_dir / profile.headers.source_dir,
                    file_names=tuple(profile.headers.file_names),
                    destination=profile.headers.destination,
                )
            self.layout_builder.build(
                package_root,
                {dest: path for dest, path in selected.values()},
                headers=headers,
                directories=profile.directories,
                reset=not profile.use_install_tree,
            )
            result.package_root = package_root

            stage = "archive"
            self.archiver.archive(
                package_root,
                archive_path,
                profile.format,
                wrap_dir=request.wrap_dir or profile.wrap_dir,
            )
            result.archive_path = archive_path

            if request.ci_output_file is not None:
                stage = "publish"
                self.file_adapter.append_text(
                    request.ci_output_file,
                    format_ci_output("artifact", str(archive_path.absolute())),
                )
                self.logger.info("ci_output_written", path=str(request.ci_output_file))

        except PackagingError as e:
            self.log_error_with_context("pipeline_failed", e, stage=stage)
            result.failed_stage = stage
            result.add_error(f"{stage}: {e}")
            return result

        result.success = True
        result.add_message(f"Packaged {len(result.selected)} artifacts for {profile.name}")
        result.add_message(f"Archive: {archive_path}")
        self.logger.info("pipeline_complete", archive=str(archive_path))
        return result

    def _validate(
        self, request: PackageRequest, build_dir: Path, archive_path: Path
    ) -> None:
        project_dir = request.project_dir
        if not self.file_adapter.is_dir(project_dir):
            raise ConfigurationError(
                f"Project directory does not exist: {project_dir}",
                {"project_dir": str(project_dir)},
            )
        if request.skip_build and not self.file_adapter.is_dir(build_dir):
            raise ConfigurationError(
                f"Build directory does not exist: {build_dir}",
                {"build_dir": str(build_dir)},
            )

        project = project_dir.resolve()
        build = build_dir.resolve()
        artifacts = request.artifacts_dir.resolve()
        if _overlaps(artifacts, project) or _overlaps(artifacts, build):
            raise ConfigurationError(
                f"Artifacts directory {request.artifacts_dir} would delete the "
                "project or build directory when reset",
                {"artifacts_dir": str(request.artifacts_dir)},
            )
        if build in artifacts.parents:
            raise ConfigurationError(
                f"Artifacts directory {request.artifacts_dir} must not be inside "
                f"the build directory {build_dir}",
                {"artifacts_dir": str(request.artifacts_dir)},
            )
        if not request.skip_build and _overlaps(build, project):
            raise ConfigurationError(
                f"Build directory {build_dir} would delete the project when reset",
                {"build_dir": str(build_dir)},
            )
        if (request.profile.use_install_tree or not request.skip_build) and (
            self.build_driver is None
        ):
            raise ConfigurationError(
                "No build driver available to run the external build or install step",
                {"platform": request.profile.name},
            )
        if request.ci_output_file is not None:
            # Fails before any output exists when the path cannot be published
            format_ci_output("artifact", str(archive_path.absolute()))

    def _reset_outputs(self, request: PackageRequest, archive_path: Path) -> None:
        self.file_adapter.remove_file(archive_path)
        self.file_adapter.remove_dir(request.artifacts_dir)
        self.file_adapter.create_directory(request.artifacts_dir)
        self.logger.debug("outputs_reset", artifacts_dir=str(request.artifacts_dir))

    def _run_build(self, request: PackageRequest, build_dir: Path) -> None:
        assert self.build_driver is not None
        configuration = str(request.configuration)
        jobs = request.jobs or default_jobs()

        self.file_adapter.remove_dir(build_dir)
        self.file_adapter.create_directory(build_dir)

        with log_group(f"Configure ({configuration})"):
            self.build_driver.configure(request.project_dir, build_dir, configuration)
        with log_group(f"Build ({configuration}, {jobs} jobs)"):
            self.build_driver.build(build_dir, configuration, jobs)

    def _run_install(self, request: PackageRequest, build_dir: Path) -> None:
        assert self.build_driver is not None
        self.file_adapter.create_directory(request.package_root)
        with log_group("Install"):
            self.build_driver.install(
                build_dir, str(request.configuration), request.package_root
            )

    def _select_artifacts(
        self, profile: PlatformProfile, build_dir: Path, configuration: str
    ) -> dict[str, tuple[str, Path]]:
        """Resolve every artifact before anything is written to the package."""
        selected: dict[str, tuple[str, Path]] = {}
        for spec in profile.artifacts:
            try:
                candidates = self.locator.locate(build_dir, spec.pattern, spec.name)
            except NotFoundError:
                if spec.required:
                    raise
                self.logger.warning(
                    "optional_artifact_missing", artifact=spec.name, pattern=spec.pattern
                )
                continue

            chosen = self.selector.select(candidates, configuration)
            selected[spec.name] = (spec.destination_for(chosen.path.name), chosen.path)
            self.logger.info(
                "artifact_selected",
                artifact=spec.name,
                path=str(chosen.path),
                candidates=len(candidates),
            )
        return selected


def create_packaging_pipeline(
    file_adapter: FileAdapterProtocol | None = None,
    build_driver: CMakeBuildDriver | None = None,
) -> PackagingPipeline:
    """Create a packaging pipeline with default stage implementations."""
    return PackagingPipeline(file_adapter=file_adapter, build_driver=build_driver)
