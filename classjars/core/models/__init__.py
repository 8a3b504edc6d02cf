"""
Domain models — Pydantic types for classjars.

All models are re-exported here for convenient access:

    from classjars.core.models import TargetMap, ProjectConfig, VirtualFile
"""

from classjars.core.models.files import FileSystemKind, VirtualFile
from classjars.core.models.project import (
    WORKSPACE_MODULE_NAME,
    Experiments,
    ModuleRef,
    ProjectConfig,
    ProjectData,
    SyncMode,
)
from classjars.core.models.state import BuildState
from classjars.core.models.target import (
    ArtifactLocation,
    JavaIdeInfo,
    LibraryArtifact,
    TargetIdeInfo,
    TargetKey,
    TargetMap,
)

__all__ = [
    # target.py
    "ArtifactLocation",
    # state.py
    "BuildState",
    "Experiments",
    # files.py
    "FileSystemKind",
    "JavaIdeInfo",
    "LibraryArtifact",
    "ModuleRef",
    # project.py
    "ProjectConfig",
    "ProjectData",
    "SyncMode",
    "TargetIdeInfo",
    "TargetKey",
    "TargetMap",
    "VirtualFile",
    "WORKSPACE_MODULE_NAME",
]
