"""Command-line interface for Shaderpack using Typer."""

from shaderpack.cli.app import __version__, app, main
from shaderpack.cli.commands import register_all_commands


register_all_commands(app)

__all__ = ["__version__", "app", "main"]
