"""
Project context — the single source of truth for "which project root."

The root is set ONCE at startup by whichever entry point launches the
tool:

    - CLI:    main.py   → context.set_project_root(root)
    - Tests:  conftest  → context.set_project_root(tmp_path)

get_project_root() returns None when unset; callers that need a root
fall back to the directory holding classjars.yml.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


_project_root: Optional[Path] = None


def set_project_root(root: Path) -> None:
    """Register the project root for the current process."""
    global _project_root
    _project_root = root


def get_project_root() -> Optional[Path]:
    """Return the current project root, or None if not yet set."""
    return _project_root
