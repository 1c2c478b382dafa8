"""
Settings management for Shaderpack.

Settings are loaded from multiple sources:
1. Environment variables (highest precedence)
2. Command-line provided config file
3. Config file in current directory
4. User's XDG config directory
5. Default values (lowest precedence)
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shaderpack.config.models import PlatformProfile
from shaderpack.core.errors import ConfigurationError
from shaderpack.core.structlog_logger import get_struct_logger


logger = get_struct_logger(__name__)

ENV_PREFIX = "SHADERPACK_"


class ShaderpackSettings(BaseSettings):
    """Settings model with automatic environment variable support.

    Precedence order (highest to lowest):
    1. Environment variables
    2. Constructor arguments (file data)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Environment variables override file configuration."""
        return (env_settings, init_settings)

    log_level: str = "WARNING"
    package_name: str = "dxc"
    cmake_executable: str = "cmake"
    generator: str | None = None
    cmake_args: list[str] = Field(default_factory=list)
    jobs: int | None = Field(default=None, ge=1)
    ci_output_file: Path | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "ci_output_file", f"{ENV_PREFIX}CI_OUTPUT_FILE", "GITHUB_OUTPUT"
        ),
    )
    profiles: dict[str, PlatformProfile] = Field(default_factory=dict)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in logging.getLevelNamesMapping():
            raise ValueError(f"Invalid log level: {v}")
        return upper

    @field_validator("profiles", mode="before")
    @classmethod
    def inject_profile_names(cls, v: Any) -> Any:
        """Allow profiles keyed by name without repeating the name field."""
        if isinstance(v, dict):
            return {
                key: {"name": key, **value} if isinstance(value, dict) else value
                for key, value in v.items()
            }
        return v

    def get_log_level_int(self) -> int:
        return logging.getLevelNamesMapping()[self.log_level]


def generate_config_paths(cli_config_path: str | Path | None = None) -> list[Path]:
    """Generate a list of config paths to search in order of precedence."""
    config_paths = []

    if cli_config_path:
        config_paths.append(Path(cli_config_path).expanduser().resolve())

    config_paths.extend([Path.cwd() / "shaderpack.yaml", Path.cwd() / ".shaderpack.yml"])

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    config_home = Path(xdg_config_home) if xdg_config_home else Path.home() / ".config"
    config_paths.extend(
        [
            config_home / "shaderpack" / "config.yaml",
            config_home / "shaderpack" / "config.yml",
        ]
    )
    return config_paths


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in config file {path}: {e}", {"path": str(path)}
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read config file {path}: {e}", {"path": str(path)}
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {path} must contain a mapping", {"path": str(path)}
        )
    return data


def load_settings(
    cli_config_path: str | Path | None = None,
) -> tuple[ShaderpackSettings, Path | None]:
    """Load settings from the first config file found plus the environment.

    Args:
        cli_config_path: Config file given on the command line; it must exist

    Returns:
        The validated settings and the config file they came from (if any)

    Raises:
        ConfigurationError: If the CLI config file is missing, unreadable
            or holds invalid values
    """
    if cli_config_path and not Path(cli_config_path).expanduser().is_file():
        raise ConfigurationError(
            f"Config file not found: {cli_config_path}",
            {"path": str(cli_config_path)},
        )

    found_path: Path | None = None
    config_data: dict[str, Any] = {}
    for path in generate_config_paths(cli_config_path):
        if path.is_file():
            config_data = _read_config_file(path)
            found_path = path
            break

    if found_path:
        logger.debug("config_loaded", path=str(found_path))
    else:
        logger.debug("config_defaults", searched=len(generate_config_paths()))

    try:
        settings = ShaderpackSettings(**config_data)
    except ValidationError as e:
        source = str(found_path) if found_path else "environment"
        raise ConfigurationError(
            f"Invalid configuration in {source}: {e}", {"source": source}
        ) from e

    return settings, found_path


__all__ = ["ShaderpackSettings", "generate_config_paths", "load_settings"]
