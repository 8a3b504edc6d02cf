"""
State file persistence — atomic read/write for BuildState.

State is stored as JSON in .classjars/build_state.json. Writes are
atomic (write to temp file, then rename) so a crash mid-write never
leaves a half-written timestamp behind.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path

from classjars.core.models.state import BuildState

logger = logging.getLogger(__name__)

DEFAULT_STATE_DIR = ".classjars"
BUILD_STATE_FILE = "build_state.json"


def default_state_path(project_root: Path, state_dir: str = DEFAULT_STATE_DIR) -> Path:
    """Get the build state file path for a project."""
    return project_root / state_dir / BUILD_STATE_FILE


def load_state(path: Path) -> BuildState:
    """Load build state from a JSON file.

    Returns:
        BuildState. A missing or unreadable file yields a fresh state.
    """
    if not path.is_file():
        logger.debug("No build state at %s — starting fresh", path)
        return BuildState()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        state = BuildState.model_validate(data)
        logger.debug("Loaded build state from %s (updated_at=%s)", path, state.updated_at)
        return state
    except json.JSONDecodeError as e:
        logger.warning("Corrupt build state %s: %s — starting fresh", path, e)
        return BuildState()
    except Exception as e:
        logger.warning("Cannot load build state from %s: %s — starting fresh", path, e)
        return BuildState()


def save_state(state: BuildState, path: Path) -> None:
    """Save build state to a JSON file (atomic write)."""
    state.touch()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = state.model_dump(mode="json")
    content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    try:
        _fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=".build_state_",
            suffix=".tmp",
        )
        tmp = Path(tmp_path)
        try:
            with open(_fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            tmp.replace(path)
            logger.debug("Build state saved to %s", path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
    except Exception as e:
        logger.error("Failed to save build state to %s: %s", path, e)
        raise
