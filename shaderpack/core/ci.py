"""Helpers for running inside a CI system."""

import os
from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console

from shaderpack.core.errors import ConfigurationError


def is_github_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS", "").lower() == "true"


@contextmanager
def log_group(title: str, console: Console | None = None) -> Iterator[None]:
    """Fold the output of a pipeline step into a named section.

    GitHub Actions collapses the lines between ``::group::`` and
    ``::endgroup::``; elsewhere a rule is printed as a section header.
    """
    if is_github_actions():
        print(f"::group::{title}", flush=True)
        try:
            yield
        finally:
            print("::endgroup::", flush=True)
    else:
        (console or Console(stderr=True)).rule(title)
        yield


def format_ci_output(key: str, value: str) -> str:
    """Format one ``key=value`` line for a CI result file."""
    if "\n" in value or "=" in key or "\n" in key:
        raise ConfigurationError(
            f"CI output entries must be single-line: {key!r}", {"key": key}
        )
    return f"{key}={value}\n"
