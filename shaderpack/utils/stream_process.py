"""Process execution and streaming output handling.

This module runs subprocesses and hands each line of their output to a
middleware object as it arrives, so long native builds report progress in
real time instead of after the process exits.

Example:
    ```python
    from shaderpack.adapters.process_adapter import LoggingOutputMiddleware
    from shaderpack.utils.stream_process import run_command

    return_code, stdout, stderr = run_command(
        ["cmake", "--version"], middleware=LoggingOutputMiddleware("configure")
    )
    ```
"""

import shlex
import subprocess
from pathlib import Path
from threading import Thread
from typing import Any, Generic, TypeAlias, TypeVar


T = TypeVar("T")  # Type of processed output

# (return_code, stdout, stderr)
ProcessResult: TypeAlias = tuple[int, list[T], list[T]]


class OutputMiddleware(Generic[T]):
    """Base class for processing command output streams.

    Type parameter T represents the return type of the process method,
    allowing middleware to transform strings into other types if needed.
    """

    def process(self, line: str, stream_type: str) -> T:
        """Process a line of output from a subprocess stream.

        Args:
            line: A line of text from the process output
            stream_type: Either "stdout" or "stderr"

        Returns:
            Processed output of type T
        """
        raise NotImplementedError()


def run_command(
    cmd: str | list[str],
    middleware: OutputMiddleware[T],
    cwd: Path | None = None,
) -> ProcessResult[T]:
    """Run a command and process its output through middleware.

    Args:
        cmd: Command to run, either as a string or list of arguments
        middleware: Receives every output line as it arrives
        cwd: Working directory for the child process

    Returns:
        Tuple containing the return code, processed stdout lines and
        processed stderr lines

    Raises:
        FileNotFoundError: If the executable does not exist
    """
    if isinstance(cmd, str):
        cmd = shlex.split(cmd)

    process = subprocess.Popen(
        cmd,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        # Compiler output is not guaranteed to be valid UTF-8; a strict
        # decode would kill the reader thread and stall the child on a full pipe
        encoding="utf-8",
        errors="replace",
        bufsize=1,
        cwd=cwd,
    )

    def stream_output(stream: Any, stream_type: str) -> list[T]:
        captured: list[T] = []
        for line in iter(stream.readline, ""):
            if line:
                processed = middleware.process(line.rstrip(), stream_type)
                if processed is not None:
                    captured.append(processed)
        stream.close()
        return captured

    stdout_lines: list[T] = []
    stderr_lines: list[T] = []

    stdout_thread = Thread(
        target=lambda: stdout_lines.extend(stream_output(process.stdout, "stdout")),
        daemon=True,
    )
    stderr_thread = Thread(
        target=lambda: stderr_lines.extend(stream_output(process.stderr, "stderr")),
        daemon=True,
    )
    stdout_thread.start()
    stderr_thread.start()

    return_code = process.wait()

    stdout_thread.join()
    stderr_thread.join()

    return return_code, stdout_lines, stderr_lines
