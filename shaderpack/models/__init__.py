from .base import ShaderpackBaseModel
from .results import BaseResult, PackageResult


__all__ = ["BaseResult", "PackageResult", "ShaderpackBaseModel"]
