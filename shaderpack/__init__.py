"""Shaderpack - shader compiler artifact packaging tool."""

from importlib.metadata import PackageNotFoundError, version

from .models.results import PackageResult
from .packaging.pipeline import PackageRequest, PackagingPipeline


try:
    __version__ = version(__package__ or "shaderpack")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "PackageRequest",
    "PackageResult",
    "PackagingPipeline",
    "__version__",
]
