"""Query services — library resolution and class staleness."""

from classjars.core.services.build_service import BuildService
from classjars.core.services.library_resolver import (
    LibraryResolver,
    ResolutionRequest,
    ResolutionStrategy,
)
from classjars.core.services.staleness import StalenessChecker, StalenessVerdict

__all__ = [
    "BuildService",
    "LibraryResolver",
    "ResolutionRequest",
    "ResolutionStrategy",
    "StalenessChecker",
    "StalenessVerdict",
]
