"""CLI command modules."""

import typer

from shaderpack.cli.commands.package import register_commands as register_package_commands
from shaderpack.cli.commands.platforms import (
    register_commands as register_platforms_commands,
)


def register_all_commands(app: typer.Typer) -> None:
    """Register all CLI commands with the main app."""
    register_package_commands(app)
    register_platforms_commands(app)
