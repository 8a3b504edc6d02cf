"""
Project models — configuration from classjars.yml and the sync snapshot.

ProjectConfig is declared intent (what the user wrote). ProjectData is
what the last sync observed: the target map and the output roots its
artifact locations are relative to.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from classjars.core.models.target import TargetKey, TargetMap

WORKSPACE_MODULE_NAME = ".workspace"


class SyncMode(str, Enum):
    """How the project graph was produced."""

    ASPECT = "aspect"   # full build-aspect sync, render jars available
    QUERY = "query"     # lightweight query sync, partial graph


class Experiments(BaseModel):
    """Feature flags, overridable from the environment."""

    render_jar_as_libraries: bool = True


class ModuleRef(BaseModel):
    """An IDE module and the target it was generated from.

    ``target`` is None for modules this tool has no mapping for.
    """

    name: str
    target: str | None = None

    @property
    def target_key(self) -> TargetKey | None:
        return TargetKey.of(self.target) if self.target else None


class ProjectConfig(BaseModel):
    """Root configuration — loaded from classjars.yml."""

    version: int = 1

    name: str
    description: str = ""

    sync_mode: SyncMode = SyncMode.ASPECT
    workspace_module: str = WORKSPACE_MODULE_NAME

    state_dir: str = ".classjars"
    render_jar_dir: str = ".classjars/render_jars"
    source_roots: list[str] = Field(default_factory=list)

    experiments: Experiments = Field(default_factory=Experiments)
    modules: list[ModuleRef] = Field(default_factory=list)

    def get_module(self, name: str) -> ModuleRef | None:
        """Look up a module reference by name."""
        for mod in self.modules:
            if mod.name == name:
                return mod
        return None

    @property
    def query_sync(self) -> bool:
        return self.sync_mode == SyncMode.QUERY


class ProjectData(BaseModel):
    """A point-in-time snapshot of the synced project."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    target_map: TargetMap
    workspace_root: Path
    execution_root: Path
    sync_time: float | None = None
