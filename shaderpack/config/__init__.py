"""Configuration models, built-in platform profiles and settings loading."""

from .models import (
    ArchiveFormat,
    ArtifactSpec,
    BuildConfiguration,
    HeaderSet,
    PlatformProfile,
)
from .platforms import (
    BUILTIN_PROFILES,
    available_profiles,
    detect_host_platform,
    resolve_profile,
)
from .settings import ShaderpackSettings, load_settings


__all__ = [
    "ArchiveFormat",
    "ArtifactSpec",
    "BUILTIN_PROFILES",
    "BuildConfiguration",
    "HeaderSet",
    "PlatformProfile",
    "ShaderpackSettings",
    "available_profiles",
    "detect_host_platform",
    "load_settings",
    "resolve_profile",
]
