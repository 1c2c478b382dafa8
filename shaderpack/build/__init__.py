"""External build toolchain glue."""

from .cmake_driver import (
    CMakeBuildDriver,
    create_build_driver,
    default_build_dir,
    default_jobs,
)


__all__ = [
    "CMakeBuildDriver",
    "create_build_driver",
    "default_build_dir",
    "default_jobs",
]
