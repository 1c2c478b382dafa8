"""Protocol for running external processes."""

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class ProcessRunnerProtocol(Protocol):
    """Protocol for the external process runner used by the build driver."""

    def run(self, cmd: list[str], cwd: Path | None = None) -> int:
        """Run a command to completion.

        Args:
            cmd: Command and arguments
            cwd: Working directory for the child process

        Returns:
            Exit status of the process (0 for success)

        Raises:
            ExternalToolError: If the executable cannot be started
        """
        ...
