"""Core test fixtures for the shaderpack project."""

import logging
import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog
from typer.testing import CliRunner

from shaderpack.core.errors import FileSystemError


# ---- In-memory file system ----


class MemoryFileAdapter:
    """In-memory implementation of FileAdapterProtocol.

    Paths are kept as given (callers use absolute POSIX paths). Every
    written file gets a modification time from a monotonically increasing
    clock unless one is passed explicitly, so recency is deterministic.
    """

    def __init__(self) -> None:
        self.files: dict[Path, bytes] = {}
        self.modes: dict[Path, int] = {}
        self.mtimes: dict[Path, float] = {}
        self.dirs: set[Path] = {Path("/")}
        self.clock = 1_700_000_000.0

    # -- helpers for tests --

    def add_file(
        self,
        path: Path | str,
        data: bytes = b"",
        mode: int = 0o644,
        mtime: float | None = None,
    ) -> Path:
        path = Path(path)
        self.create_directory(path.parent)
        self.files[path] = data
        self.modes[path] = mode
        self.mtimes[path] = mtime if mtime is not None else self._tick()
        return path

    def add_dir(self, path: Path | str) -> Path:
        path = Path(path)
        self.create_directory(path)
        return path

    def _tick(self) -> float:
        self.clock += 1
        return self.clock

    def _missing(self, path: Path, operation: str) -> FileSystemError:
        return FileSystemError(path, operation, "No such file or directory")

    # -- FileAdapterProtocol --

    def check_exists(self, path: Path) -> bool:
        return path in self.files or path in self.dirs

    def is_file(self, path: Path) -> bool:
        return path in self.files

    def is_dir(self, path: Path) -> bool:
        return path in self.dirs

    def create_directory(self, path: Path) -> None:
        if path in self.files:
            raise FileSystemError(path, "create_directory", "File exists")
        for parent in [path, *path.parents]:
            self.dirs.add(parent)

    def walk_files(self, path: Path) -> list[Path]:
        if not self.is_dir(path):
            raise FileSystemError(path, "walk_files", "Not a directory")
        return [p for p in self.files if path in p.parents]

    def get_mtime(self, path: Path) -> float:
        if path not in self.files:
            raise self._missing(path, "get_mtime")
        return self.mtimes[path]

    def get_mode(self, path: Path) -> int:
        if path not in self.files:
            raise self._missing(path, "get_mode")
        return self.modes[path]

    def read_bytes(self, path: Path) -> bytes:
        if path not in self.files:
            raise self._missing(path, "read_bytes")
        return self.files[path]

    def write_bytes(self, path: Path, data: bytes) -> None:
        self.create_directory(path.parent)
        self.files[path] = data
        self.modes.setdefault(path, 0o644)
        self.mtimes[path] = self._tick()

    def append_text(self, path: Path, content: str, encoding: str = "utf-8") -> None:
        existing = self.files.get(path, b"")
        self.write_bytes(path, existing + content.encode(encoding))

    def copy_file(self, src: Path, dst: Path) -> None:
        if src not in self.files:
            raise self._missing(src, "copy_file")
        self.create_directory(dst.parent)
        self.files[dst] = self.files[src]
        self.modes[dst] = self.modes[src]
        self.mtimes[dst] = self.mtimes[src]

    def remove_file(self, path: Path) -> None:
        self.files.pop(path, None)
        self.modes.pop(path, None)
        self.mtimes.pop(path, None)

    def remove_dir(self, path: Path) -> None:
        if path in self.files:
            raise FileSystemError(path, "remove_dir", "Not a directory")
        for file_path in [p for p in self.files if path in p.parents]:
            self.remove_file(file_path)
        self.dirs = {d for d in self.dirs if d != path and path not in d.parents}


# ---- Process runner stub ----


class StubProcessRunner:
    """Records commands instead of running them.

    ``returncodes`` maps a CMake step ("configure", "build", "install") to
    the exit code it reports; ``on_step`` callbacks run before the code is
    returned so tests can populate a fake build or install tree.
    """

    def __init__(
        self,
        returncodes: dict[str, int] | None = None,
        on_step: dict[str, Callable[[list[str]], None]] | None = None,
    ) -> None:
        self.returncodes = returncodes or {}
        self.on_step = on_step or {}
        self.calls: list[tuple[list[str], Path | None]] = []

    @staticmethod
    def step_of(cmd: list[str]) -> str:
        if "--build" in cmd:
            return "build"
        if "--install" in cmd:
            return "install"
        return "configure"

    @property
    def steps(self) -> list[str]:
        return [self.step_of(cmd) for cmd, _cwd in self.calls]

    def run(self, cmd: list[str], cwd: Path | None = None) -> int:
        self.calls.append((list(cmd), cwd))
        step = self.step_of(cmd)
        if step in self.on_step:
            self.on_step[step](cmd)
        return self.returncodes.get(step, 0)


# ---- Base Fixtures ----


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def memory_fs() -> MemoryFileAdapter:
    """Return an empty in-memory file system."""
    return MemoryFileAdapter()


@pytest.fixture
def stub_runner() -> StubProcessRunner:
    """Return a process runner that succeeds without running anything."""
    return StubProcessRunner()


# ---- Test Isolation Fixtures ----


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Keep CI variables, user config and log handlers out of every test."""
    for key in ("GITHUB_OUTPUT", "GITHUB_ACTIONS"):
        monkeypatch.delenv(key, raising=False)
    for key in [k for k in os.environ if k.startswith("SHADERPACK_")]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))

    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    try:
        yield
    finally:
        root_logger.handlers = handlers
        root_logger.setLevel(level)
        structlog.reset_defaults()
