"""Artifact discovery and packaging pipeline."""

from .archiver import PackageArchiver, create_archiver
from .layout import PackageLayoutBuilder, create_layout_builder
from .locator import ArtifactLocator, create_artifact_locator
from .models import Candidate, HeaderRequest, PackageLayout
from .pipeline import (
    PackageRequest,
    PackagingPipeline,
    create_packaging_pipeline,
)
from .selector import CandidateSelector, select_candidate


__all__ = [
    "ArtifactLocator",
    "Candidate",
    "CandidateSelector",
    "HeaderRequest",
    "PackageArchiver",
    "PackageLayout",
    "PackageLayoutBuilder",
    "PackageRequest",
    "PackagingPipeline",
    "create_archiver",
    "create_artifact_locator",
    "create_layout_builder",
    "create_packaging_pipeline",
    "select_candidate",
]
