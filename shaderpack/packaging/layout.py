"""Assemble the canonical package directory."""

from collections.abc import Iterable, Mapping
from pathlib import Path, PurePosixPath

from shaderpack.adapters import create_file_adapter
from shaderpack.core.errors import MissingHeaderError
from shaderpack.core.structlog_logger import StructlogMixin
from shaderpack.packaging.models import HeaderRequest, PackageLayout
from shaderpack.protocols import FileAdapterProtocol


class PackageLayoutBuilder(StructlogMixin):
    """Materialize a package directory from selected artifacts and headers.

    The root is wiped and recreated on every build so that files from a
    previous run can never leak into the new package. ``reset=False`` is
    only used for install-tree packages, where the external install step
    has already populated the root and the builder copies extra files on
    top of it.
    """

    def __init__(self, file_adapter: FileAdapterProtocol | None = None) -> None:
        super().__init__()
        self.file_adapter = file_adapter or create_file_adapter()

    def build(
        self,
        root: Path,
        entries: Mapping[str, Path],
        headers: HeaderRequest | None = None,
        directories: Iterable[str] = (),
        reset: bool = True,
    ) -> PackageLayout:
        """Create the package directory.

        Args:
            root: Package root directory
            entries: Package-relative destination path -> absolute source file
            headers: Headers to copy, or None
            directories: Subdirectories to create even when nothing lands in them
            reset: Delete ``root`` before building

        Returns:
            The populated layout

        Raises:
            MissingHeaderError: If a header is absent from its source directory
            FileSystemError: If a directory or file operation fails
        """
        header_sources = self._resolve_headers(headers) if headers else {}

        if reset and self.file_adapter.check_exists(root):
            self.logger.debug("layout_reset", root=str(root))
            self.file_adapter.remove_dir(root)
        self.file_adapter.create_directory(root)

        subdirs = set(directories)
        subdirs.update(
            str(PurePosixPath(dest).parent)
            for dest in list(entries) + list(header_sources)
        )
        subdirs.discard(".")
        for subdir in sorted(subdirs):
            self.file_adapter.create_directory(root / subdir)

        layout = PackageLayout(root=root, directories=sorted(subdirs))
        for dest, src in {**entries, **header_sources}.items():
            self.file_adapter.copy_file(src, root / dest)
            layout.files.append(dest)
            self.logger.debug("layout_file_copied", source=str(src), destination=dest)

        self.logger.info(
            "layout_built",
            root=str(root),
            files=len(layout.files),
            directories=layout.directories,
        )
        return layout

    def _resolve_headers(self, headers: HeaderRequest) -> dict[str, Path]:
        resolved: dict[str, Path] = {}
        for file_name in headers.file_names:
            source = headers.source_dir / file_name
            if not self.file_adapter.is_file(source):
                self.logger.error(
                    "header_missing",
                    source_dir=str(headers.source_dir),
                    file_name=file_name,
                )
                raise MissingHeaderError(headers.source_dir, file_name)
            dest = PurePosixPath(headers.destination) / PurePosixPath(file_name).name
            resolved[dest.as_posix()] = source
        return resolved


def create_layout_builder(
    file_adapter: FileAdapterProtocol | None = None,
) -> PackageLayoutBuilder:
    """Create package layout builder instance."""
    return PackageLayoutBuilder(file_adapter)
