"""Main CLI application for Shaderpack."""

import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Annotated

import typer

from shaderpack.cli.decorators.error_handling import print_stack_trace_if_verbose
from shaderpack.config.settings import ShaderpackSettings, load_settings
from shaderpack.core.errors import ConfigurationError
from shaderpack.core.logging import setup_logging


__all__ = ["app", "main", "__version__", "AppContext"]

try:
    __version__ = version("shaderpack")
except PackageNotFoundError:
    __version__ = "0.0.0"

logger = logging.getLogger(__name__)


class AppContext:
    """Application context for storing shared state."""

    def __init__(
        self,
        verbose: int = 0,
        log_file: str | None = None,
        config_file: str | None = None,
    ):
        self.verbose = verbose
        self.log_file = log_file
        self.config_file = config_file
        self._settings: ShaderpackSettings | None = None
        self.config_path: Path | None = None

    @property
    def settings(self) -> ShaderpackSettings:
        """Settings are loaded on first use so that --help never fails on a
        broken config file."""
        if self._settings is None:
            self._settings, self.config_path = load_settings(self.config_file)
        return self._settings


app = typer.Typer(
    name="shaderpack",
    help=f"""Shaderpack v{__version__}

Package shader compiler build outputs into a canonical distribution archive.

Build tree → Locate → Select → Layout → Archive

Common workflows:
  • Build and package:  shaderpack package ./DirectXShaderCompiler -o artifacts
  • Package a build:    shaderpack package ./dxc --build-dir ./dxc/build --skip-build
  • List platforms:     shaderpack platforms""",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity (-v=INFO, -vv=DEBUG)",
        ),
    ] = 0,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging (equivalent to -vv)"),
    ] = False,
    log_file: Annotated[
        str | None, typer.Option("--log-file", help="Log to file")
    ] = None,
    config_file: Annotated[
        str | None,
        typer.Option("-c", "--config", help="Path to configuration file"),
    ] = None,
    show_version: Annotated[
        bool, typer.Option("--version", help="Show version and exit")
    ] = False,
) -> None:
    """Shaderpack shader compiler packaging tool."""
    if show_version:
        print(f"Shaderpack v{__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        print(ctx.get_help())
        raise typer.Exit()

    app_context = AppContext(
        verbose=verbose, log_file=log_file, config_file=config_file
    )
    ctx.obj = app_context

    log_level = logging.WARNING
    if debug or verbose >= 2:
        log_level = logging.DEBUG
    elif verbose == 1:
        log_level = logging.INFO
    elif config_file is None or Path(config_file).is_file():
        # No explicit CLI flags: use the configured level when it loads
        try:
            log_level = app_context.settings.get_log_level_int()
        except ConfigurationError as e:
            logger.debug("Falling back to default log level: %s", e)

    setup_logging(level=log_level, log_file=log_file)


def main() -> int:
    """Main CLI entry point."""
    try:
        app()
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        print_stack_trace_if_verbose()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
