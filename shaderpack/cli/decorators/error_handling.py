"""Error handling decorators for CLI commands."""

import logging
import sys
import traceback
from collections.abc import Callable
from functools import wraps
from typing import Any

import typer

from shaderpack.core.errors import ConfigurationError, PackagingError
from shaderpack.core.structlog_logger import get_struct_logger


__all__ = ["handle_errors", "print_stack_trace_if_verbose"]

logger = get_struct_logger(__name__)


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to handle common exceptions in CLI commands.

    Typed packaging errors are reported with their stage and context and
    turned into exit status 1. Anything else is reported as unexpected.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except ConfigurationError as e:
            logger.error("configuration_error", error=str(e), **e.context)
            _echo_error("configuration", str(e))
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except PackagingError as e:
            logger.error(f"{e.stage}_error", error=str(e), **e.context)
            _echo_error(e.stage, str(e))
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except FileNotFoundError as e:
            logger.error("file_not_found", error=str(e))
            _echo_error("filesystem", str(e))
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except typer.Exit:
            raise
        except Exception as e:
            exc_info = logging.getLogger().isEnabledFor(logging.DEBUG)
            logger.error("unexpected_error", error=str(e), exc_info=exc_info)
            _echo_error("unexpected", str(e))
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e

    return wrapper


def _echo_error(stage: str, message: str) -> None:
    typer.echo(f"Error [{stage}]: {message}", err=True)


def print_stack_trace_if_verbose() -> None:
    """Print stack trace if verbose/debug mode is enabled."""
    if any(arg in sys.argv for arg in ["-vv", "--debug"]):
        print("\nStack trace:", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
