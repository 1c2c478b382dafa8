"""Utility modules and functions for Shaderpack."""

from shaderpack.utils.error_utils import create_file_error
from shaderpack.utils.stream_process import OutputMiddleware, run_command


__all__ = [
    "OutputMiddleware",
    "create_file_error",
    "run_command",
]
