"""Built-in platform profiles for packaging the DirectX shader compiler."""

import platform as host_platform

from shaderpack.config.models import (
    ArchiveFormat,
    ArtifactSpec,
    HeaderSet,
    PlatformProfile,
)
from shaderpack.core.errors import ConfigurationError


DXC_HEADERS = HeaderSet(
    source_dir="include/dxc",
    file_names=["dxcapi.h", "dxcerrors.h", "dxcisense.h", "WinAdapter.h"],
    destination="include",
)

LINUX_PROFILE = PlatformProfile(
    name="linux",
    archive_format=ArchiveFormat.TAR_GZ,
    directories=["lib", "include"],
    artifacts=[
        ArtifactSpec(
            name="compiler-library",
            pattern="libdxcompiler.so",
            destination="lib/",
        ),
        ArtifactSpec(name="dxil-library", pattern="libdxil.so", destination="lib/"),
    ],
    headers=DXC_HEADERS,
)

MACOS_PROFILE = PlatformProfile(
    name="macos",
    archive_format=ArchiveFormat.TAR_GZ,
    directories=["lib", "include"],
    artifacts=[
        ArtifactSpec(
            name="compiler-library",
            pattern="libdxcompiler.dylib",
            destination="lib/",
        ),
        ArtifactSpec(
            name="dxil-library", pattern="libdxil.dylib", destination="lib/"
        ),
    ],
    headers=DXC_HEADERS,
)

WINDOWS_PROFILE = PlatformProfile(
    name="windows",
    archive_format=ArchiveFormat.ZIP,
    directories=["bin", "lib", "include"],
    artifacts=[
        ArtifactSpec(
            name="compiler-library", pattern="dxcompiler.dll", destination="bin/"
        ),
        ArtifactSpec(
            name="dxil-library",
            pattern="dxil.dll",
            destination="bin/",
            required=False,
        ),
        ArtifactSpec(
            name="compiler-import-library",
            pattern="dxcompiler.lib",
            destination="lib/",
        ),
    ],
    headers=DXC_HEADERS,
)

# The install step lays out bin/, lib/ and include/ itself; dxil.dll is
# shipped prebuilt and never installed, so it is copied on top.
WINDOWS_INSTALL_PROFILE = PlatformProfile(
    name="windows-install",
    archive_format=ArchiveFormat.ZIP,
    directories=["bin", "lib", "include"],
    artifacts=[
        ArtifactSpec(name="dxil-library", pattern="dxil.dll", destination="bin/"),
    ],
    headers=None,
    use_install_tree=True,
)

BUILTIN_PROFILES: dict[str, PlatformProfile] = {
    profile.name: profile
    for profile in (
        LINUX_PROFILE,
        MACOS_PROFILE,
        WINDOWS_PROFILE,
        WINDOWS_INSTALL_PROFILE,
    )
}


def detect_host_platform(system: str | None = None) -> str:
    """Return the profile name matching the running operating system."""
    system = (system or host_platform.system()).lower()
    if system == "linux":
        return "linux"
    if system == "darwin":
        return "macos"
    if system == "windows":
        return "windows"
    raise ConfigurationError(
        f"Unsupported host platform '{system}'; pass --platform explicitly",
        {"system": system},
    )


def resolve_profile(
    name: str, overrides: dict[str, PlatformProfile] | None = None
) -> PlatformProfile:
    """Look up a profile by name, preferring user overrides over built-ins.

    Raises:
        ConfigurationError: If no profile has that name
    """
    profiles = available_profiles(overrides)
    try:
        return profiles[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown platform '{name}' (available: {', '.join(sorted(profiles))})",
            {"platform": name},
        ) from None


def available_profiles(
    overrides: dict[str, PlatformProfile] | None = None,
) -> dict[str, PlatformProfile]:
    """Merge user-defined profiles over the built-in ones."""
    profiles = dict(BUILTIN_PROFILES)
    profiles.update(overrides or {})
    return profiles
