"""
BuildState — persisted record of manual builds.

Serialized to .classjars/build_state.json. Only the latest manual build
per project is kept; it is the tie-breaker the staleness check consults
when a source file is newer than its compiled class.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class BuildState(BaseModel):
    """Root state model — last manual build time per project."""

    schema_version: int = 1

    created_at: str = Field(default_factory=_now_iso)
    updated_at: str = Field(default_factory=_now_iso)

    # project id → POSIX seconds of the last user-triggered build
    last_build_timestamps: dict[str, float] = Field(default_factory=dict)

    def touch(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = _now_iso()

    def record(self, project_id: str, timestamp: float) -> bool:
        """Store a build time unless a newer one is already recorded.

        Returns:
            True if the stored value changed.
        """
        current = self.last_build_timestamps.get(project_id)
        if current is not None and current >= timestamp:
            return False
        self.last_build_timestamps[project_id] = timestamp
        return True
