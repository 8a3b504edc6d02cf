"""
Artifact location decoding.

Source artifacts live under the workspace root; generated artifacts
live under the execution root. Sources from external repositories are
checked out under ``<execution_root>/external``.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from classjars.adapters.base import ArtifactDecodeError, ArtifactDecoder, OutputResolver
from classjars.core.models.project import ProjectData
from classjars.core.models.target import ArtifactLocation

logger = logging.getLogger(__name__)


class ArtifactLocationDecoder(ArtifactDecoder):
    """Decodes locations against the output roots of one snapshot."""

    def __init__(self, workspace_root: Path, execution_root: Path):
        self.workspace_root = workspace_root
        self.execution_root = execution_root

    @classmethod
    def for_project(cls, project_data: ProjectData) -> ArtifactLocationDecoder:
        return cls(project_data.workspace_root, project_data.execution_root)

    def decode(self, location: ArtifactLocation) -> Path:
        relative = location.relative_path
        if not relative:
            raise ArtifactDecodeError("Artifact location has an empty relative path")
        if PurePosixPath(relative).is_absolute():
            raise ArtifactDecodeError(f"Artifact path must be relative: {relative}")
        if ".." in PurePosixPath(relative).parts:
            raise ArtifactDecodeError(f"Artifact path escapes its root: {relative}")

        if location.is_source:
            if location.is_external:
                return self.execution_root / "external" / relative
            return self.workspace_root / relative
        return self.execution_root / location.execution_root_relative_path


class OutputArtifactResolver(OutputResolver):
    """Resolves locations to paths, dropping the ones that cannot be decoded.

    One bad location never fails the whole library list; it is logged
    and skipped.
    """

    def resolve(self, decoder: ArtifactDecoder, location: ArtifactLocation) -> Path | None:
        try:
            return decoder.decode(location)
        except ArtifactDecodeError as e:
            logger.warning("Dropping artifact %s: %s", location.relative_path or "<empty>", e)
            return None
