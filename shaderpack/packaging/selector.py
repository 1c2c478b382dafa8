"""Pick one candidate out of several matches for the same artifact."""

from collections.abc import Sequence

from shaderpack.core.structlog_logger import get_struct_logger
from shaderpack.packaging.models import Candidate


logger = get_struct_logger(__name__)


def select_candidate(candidates: Sequence[Candidate], configuration: str) -> Candidate:
    """Deterministically choose a single candidate.

    Build trees often hold stale outputs of other configurations, so a
    candidate whose path mentions the requested configuration wins. When
    none does, the most recently modified file is taken.

    1. The first candidate (in the given path order) whose full path
       contains ``configuration`` as a substring.
    2. Otherwise the candidate with the greatest modification time; ties
       go to the earliest in path order.

    An empty configuration string gives no hint and goes straight to 2.

    Args:
        candidates: Non-empty candidates, sorted by path
        configuration: Build configuration name, e.g. "Release"

    Returns:
        The chosen candidate

    Raises:
        ValueError: If candidates is empty
    """
    if not candidates:
        raise ValueError("select_candidate() requires at least one candidate")

    if configuration:
        for candidate in candidates:
            if configuration in str(candidate.path):
                logger.debug(
                    "candidate_selected",
                    path=str(candidate.path),
                    reason="configuration_match",
                )
                return candidate

    # max() keeps the first maximal element, which preserves path order on ties
    newest = max(candidates, key=lambda c: c.mtime)
    logger.debug("candidate_selected", path=str(newest.path), reason="most_recent")
    return newest


class CandidateSelector:
    """Callable wrapper around select_candidate for dependency injection."""

    def select(self, candidates: Sequence[Candidate], configuration: str) -> Candidate:
        return select_candidate(candidates, configuration)
