"""
Snapshot graph provider — serves the target map from the last sync.

The sync step writes the graph as JSON to ``<state_dir>/target_map.json``:

    {
      "workspace_root": "/home/me/ws",
      "execution_root": "/home/me/.cache/bazel/execroot/ws",
      "sync_time": 1700000000.0,
      "targets": [
        {"key": "//java/app:app", "kind": "android_binary",
         "dependencies": ["//java/lib:lib"],
         "java_ide_info": {"jars": [{"class_jar": {...}}]}}
      ]
    }

Target keys may be written as a bare label string or as a
``{"label": ..., "aspect_ids": [...]}`` object.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path
from typing import Any

from classjars.adapters.base import GraphProvider, SnapshotError
from classjars.core.models.project import ProjectData
from classjars.core.models.target import TargetIdeInfo, TargetMap

logger = logging.getLogger(__name__)

SNAPSHOT_FILE = "target_map.json"


def _normalize_key(raw: Any) -> Any:
    if isinstance(raw, str):
        return {"label": raw}
    return raw


def parse_snapshot(data: dict[str, Any]) -> ProjectData:
    """Build a ProjectData from the decoded JSON document.

    Raises:
        SnapshotError: If the document does not describe a snapshot.
    """
    if not isinstance(data, dict):
        raise SnapshotError(f"Expected a JSON object, got {type(data).__name__}")

    for field_name in ("workspace_root", "execution_root"):
        if not data.get(field_name):
            raise SnapshotError(f"Missing required field: '{field_name}'")

    targets: list[TargetIdeInfo] = []
    for i, raw in enumerate(data.get("targets") or []):
        if not isinstance(raw, dict):
            raise SnapshotError(f"Target #{i} is not an object")
        entry = dict(raw)
        entry["key"] = _normalize_key(entry.get("key"))
        entry["dependencies"] = [_normalize_key(d) for d in entry.get("dependencies") or []]
        try:
            targets.append(TargetIdeInfo.model_validate(entry))
        except Exception as e:
            raise SnapshotError(f"Invalid target #{i}: {e}") from e

    return ProjectData(
        target_map=TargetMap(targets),
        workspace_root=Path(data["workspace_root"]),
        execution_root=Path(data["execution_root"]),
        sync_time=data.get("sync_time"),
    )


def dump_snapshot(project_data: ProjectData) -> dict[str, Any]:
    """Inverse of :func:`parse_snapshot`."""
    return {
        "workspace_root": str(project_data.workspace_root),
        "execution_root": str(project_data.execution_root),
        "sync_time": project_data.sync_time,
        "targets": [t.model_dump(mode="json") for t in project_data.target_map.targets()],
    }


def write_snapshot(project_data: ProjectData, path: Path) -> None:
    """Write a snapshot atomically, replacing any previous one."""
    path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(dump_snapshot(project_data), indent=2) + "\n"
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".target_map_", suffix=".tmp")
    tmp = Path(tmp_path)
    try:
        with open(fd, "w", encoding="utf-8") as fh:
            fh.write(content)
        tmp.replace(path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise


class SnapshotGraphProvider(GraphProvider):
    """Reads the target map snapshot written by the last sync.

    The parsed snapshot is reused until the file's mtime or size changes, so
    every query between two syncs sees the same TargetMap object.
    """

    def __init__(self, path: Path):
        self._path = path
        self._cached: ProjectData | None = None
        self._cached_stamp: tuple[int, int] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def current_snapshot(self) -> ProjectData | None:
        try:
            st = self._path.stat()
        except FileNotFoundError:
            logger.debug("No graph snapshot at %s", self._path)
            return None
        except OSError as e:
            logger.warning("Cannot stat graph snapshot %s: %s", self._path, e)
            return None
        stamp = (st.st_mtime_ns, st.st_size)

        if self._cached is not None and self._cached_stamp == stamp:
            return self._cached

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            snapshot = parse_snapshot(data)
        except (OSError, json.JSONDecodeError, SnapshotError) as e:
            logger.warning("Ignoring unreadable graph snapshot %s: %s", self._path, e)
            return None

        logger.debug("Loaded graph snapshot %s (%d targets)", self._path, len(snapshot.target_map))
        self._cached = snapshot
        self._cached_stamp = stamp
        return snapshot
