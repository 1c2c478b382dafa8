"""The ``platforms`` and ``locate`` inspection commands."""

from pathlib import Path
from typing import Annotated

import typer

from shaderpack.cli.app import AppContext
from shaderpack.cli.decorators import handle_errors
from shaderpack.cli.helpers import print_candidates, print_profiles_table
from shaderpack.config.platforms import available_profiles
from shaderpack.packaging.locator import create_artifact_locator
from shaderpack.packaging.selector import select_candidate


@handle_errors
def platforms(ctx: typer.Context) -> None:
    """List the available platform profiles."""
    app_context: AppContext = ctx.obj
    print_profiles_table(available_profiles(app_context.settings.profiles))


@handle_errors
def locate(
    build_tree: Annotated[Path, typer.Argument(help="Build tree to search")],
    pattern: Annotated[str, typer.Argument(help="File name or glob pattern")],
    configuration: Annotated[
        str,
        typer.Option("-C", "--configuration", help="Configuration hint"),
    ] = "Release",
) -> None:
    """Show every candidate for a pattern and the one that would be packaged."""
    candidates = create_artifact_locator().locate(build_tree, pattern)
    print_candidates(candidates, select_candidate(candidates, configuration))


def register_commands(app: typer.Typer) -> None:
    app.command(name="platforms")(platforms)
    app.command(name="locate")(locate)
