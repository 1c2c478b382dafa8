"""Subprocess runner used to drive the external native build."""

from pathlib import Path

from shaderpack.core.errors import ExternalToolError
from shaderpack.core.structlog_logger import get_struct_logger
from shaderpack.protocols import ProcessRunnerProtocol
from shaderpack.utils.stream_process import OutputMiddleware, run_command


logger = get_struct_logger(__name__)


class LoggingOutputMiddleware(OutputMiddleware[str]):
    """Forward each line of child output to the structured logger.

    stdout lines are logged at INFO, stderr lines at WARNING, so native
    compiler diagnostics stay visible at the default verbosity.
    """

    def __init__(self, step: str = "external") -> None:
        self.step = step

    def process(self, line: str, stream_type: str) -> str:
        if stream_type == "stderr":
            logger.warning("process_output", step=self.step, line=line)
        else:
            logger.info("process_output", step=self.step, line=line)
        return line


class SubprocessRunner:
    """Run external commands synchronously, streaming their output."""

    def __init__(self, middleware: OutputMiddleware[str] | None = None) -> None:
        self.middleware = middleware or LoggingOutputMiddleware()

    def run(self, cmd: list[str], cwd: Path | None = None) -> int:
        logger.info("process_start", command=" ".join(cmd), cwd=str(cwd or ""))
        try:
            return_code, _stdout, _stderr = run_command(
                cmd, middleware=self.middleware, cwd=cwd
            )
        except FileNotFoundError as e:
            logger.error("process_not_found", executable=cmd[0], error=str(e))
            raise ExternalToolError("start", cmd, 127) from e
        logger.info("process_exit", command=cmd[0], returncode=return_code)
        return return_code


def create_process_runner() -> ProcessRunnerProtocol:
    """Create a process runner with default implementation."""
    return SubprocessRunner()
