"""
Build service — remembers when the user last asked for a build.

The staleness checker reads this value; the component that triggers
builds writes it. Writes are monotonic: recording an older time than
the one on file is a no-op.
"""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path

from classjars.adapters.base import BuildTimestampTracker
from classjars.core.persistence.state_file import load_state, save_state

logger = logging.getLogger(__name__)


class BuildService(BuildTimestampTracker):
    """Build timestamps persisted in the project's build state file."""

    def __init__(self, state_path: Path):
        self._state_path = state_path
        self._lock = threading.Lock()

    @property
    def state_path(self) -> Path:
        return self._state_path

    def record_build(self, project_id: str, when: float | None = None) -> float:
        """Record a manual build.

        Args:
            project_id: Project the build ran for.
            when: POSIX seconds of the build (default: now).

        Returns:
            The timestamp now on file, which is ``when`` unless a later
            build was already recorded.
        """
        timestamp = time.time() if when is None else when
        with self._lock:
            state = load_state(self._state_path)
            if state.record(project_id, timestamp):
                save_state(state, self._state_path)
                logger.info("Recorded manual build for %s at %.3f", project_id, timestamp)
            else:
                logger.debug("Ignoring build at %.3f for %s: newer one on file", timestamp, project_id)
            return state.last_build_timestamps[project_id]

    def last_build_timestamp(self, project_id: str) -> float | None:
        return load_state(self._state_path).last_build_timestamps.get(project_id)
