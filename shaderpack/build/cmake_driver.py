"""Drive the external CMake configure/build/install steps."""

import os
from datetime import datetime, timezone
from pathlib import Path

from shaderpack.adapters import create_process_runner
from shaderpack.core.errors import ExternalToolError
from shaderpack.core.structlog_logger import StructlogMixin
from shaderpack.protocols import ProcessRunnerProtocol


def default_jobs() -> int:
    """Number of parallel build jobs when none is configured."""
    return max(os.cpu_count() or 1, 1)


def default_build_dir(project_dir: Path, now: datetime | None = None) -> Path:
    """Fresh per-run build directory below the project, stamped in UTC."""
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y%m%d-%H%M%S")
    return project_dir / f"build-{stamp}"


class CMakeBuildDriver(StructlogMixin):
    """Run the native build through CMake.

    The driver only assembles command lines and checks exit codes; the
    actual process handling belongs to the injected runner.
    """

    def __init__(
        self,
        runner: ProcessRunnerProtocol | None = None,
        cmake_executable: str = "cmake",
        generator: str | None = None,
        extra_args: list[str] | None = None,
    ) -> None:
        super().__init__()
        self.runner = runner or create_process_runner()
        self.cmake_executable = cmake_executable
        self.generator = generator
        self.extra_args = list(extra_args or [])

    def configure(self, project_dir: Path, build_dir: Path, configuration: str) -> None:
        cmd = [
            self.cmake_executable,
            "-S",
            str(project_dir),
            "-B",
            str(build_dir),
            f"-DCMAKE_BUILD_TYPE={configuration}",
        ]
        if self.generator:
            cmd.extend(["-G", self.generator])
        cmd.extend(self.extra_args)
        self._run("configure", cmd, cwd=project_dir)

    def build(self, build_dir: Path, configuration: str, jobs: int) -> None:
        cmd = [
            self.cmake_executable,
            "--build",
            str(build_dir),
            "--config",
            configuration,
            "--parallel",
            str(jobs),
        ]
        self._run("build", cmd, cwd=build_dir)

    def install(self, build_dir: Path, configuration: str, prefix: Path) -> None:
        cmd = [
            self.cmake_executable,
            "--install",
            str(build_dir),
            "--config",
            configuration,
            "--prefix",
            str(prefix),
        ]
        self._run("install", cmd, cwd=build_dir)

    def _run(self, step: str, cmd: list[str], cwd: Path) -> None:
        self.logger.info("build_step_start", step=step)
        returncode = self.runner.run(cmd, cwd=cwd)
        if returncode != 0:
            self.logger.error("build_step_failed", step=step, returncode=returncode)
            raise ExternalToolError(step, cmd, returncode)
        self.logger.info("build_step_done", step=step)


def create_build_driver(
    runner: ProcessRunnerProtocol | None = None,
    cmake_executable: str = "cmake",
    generator: str | None = None,
    extra_args: list[str] | None = None,
) -> CMakeBuildDriver:
    """Create CMake build driver instance."""
    return CMakeBuildDriver(runner, cmake_executable, generator, extra_args)
