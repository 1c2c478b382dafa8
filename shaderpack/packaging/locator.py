"""Locate build outputs anywhere below a build tree."""

from fnmatch import fnmatchcase
from pathlib import Path

from shaderpack.adapters import create_file_adapter
from shaderpack.core.errors import ConfigurationError, NotFoundError
from shaderpack.core.structlog_logger import get_struct_logger
from shaderpack.packaging.models import Candidate
from shaderpack.protocols import FileAdapterProtocol


logger = get_struct_logger(__name__)


class ArtifactLocator:
    """Recursively search a build tree for files matching a name or glob.

    Matching is done on the file name only and is case sensitive. Results
    are sorted by their full path string so that the selector sees the
    same order on every run.
    """

    def __init__(self, file_adapter: FileAdapterProtocol | None = None) -> None:
        self.file_adapter = file_adapter or create_file_adapter()

    def locate(
        self, build_tree: Path, name_pattern: str, artifact: str | None = None
    ) -> list[Candidate]:
        """Find every file below ``build_tree`` whose name matches.

        Args:
            build_tree: Directory to search
            name_pattern: Exact file name or glob pattern
            artifact: Logical artifact name, used in diagnostics only

        Returns:
            Non-empty list of candidates sorted by path

        Raises:
            ConfigurationError: If build_tree is not a directory
            NotFoundError: If no file matches
        """
        if not self.file_adapter.is_dir(build_tree):
            raise ConfigurationError(
                f"Build tree is not a directory: {build_tree}",
                {"build_tree": str(build_tree)},
            )

        matches = [
            path
            for path in self.file_adapter.walk_files(build_tree)
            if fnmatchcase(path.name, name_pattern)
        ]
        if not matches:
            logger.error(
                "artifact_not_found",
                artifact=artifact,
                pattern=name_pattern,
                build_tree=str(build_tree),
            )
            raise NotFoundError(build_tree, name_pattern, artifact)

        candidates = [
            Candidate(path=path, mtime=self.file_adapter.get_mtime(path))
            for path in sorted(matches, key=str)
        ]
        logger.debug(
            "artifact_candidates",
            artifact=artifact,
            pattern=name_pattern,
            count=len(candidates),
        )
        return candidates


def create_artifact_locator(
    file_adapter: FileAdapterProtocol | None = None,
) -> ArtifactLocator:
    """Create artifact locator instance."""
    return ArtifactLocator(file_adapter)
