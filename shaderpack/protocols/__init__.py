"""Protocol definitions for Shaderpack adapters and interfaces.

These protocols use Python's typing.Protocol system with the
@runtime_checkable decorator to enable both static type checking and
runtime isinstance() checks.
"""

from .file_adapter_protocol import FileAdapterProtocol
from .process_runner_protocol import ProcessRunnerProtocol


__all__ = [
    "FileAdapterProtocol",
    "ProcessRunnerProtocol",
]
