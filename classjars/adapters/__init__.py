"""Adapters — collaborator contracts and their on-disk implementations.

Public re-exports for convenient access.
"""

from classjars.adapters.base import (
    ArtifactDecodeError,
    ArtifactDecoder,
    BinaryIndex,
    BuildTimestampTracker,
    FileMetadata,
    GraphProvider,
    ModuleIndex,
    OutputResolver,
    RenderJarCache,
    SnapshotError,
    SymbolIndex,
)
from classjars.adapters.binaries import TargetToBinaryMap
from classjars.adapters.decoder import ArtifactLocationDecoder, OutputArtifactResolver
from classjars.adapters.graph import SnapshotGraphProvider
from classjars.adapters.modules import ModuleRegistry
from classjars.adapters.render_jars import DirectoryRenderJarCache
from classjars.adapters.symbols import JavaSourceIndex
from classjars.adapters.vfs import LocalFileSystem

__all__ = [
    "ArtifactDecodeError",
    "ArtifactDecoder",
    "ArtifactLocationDecoder",
    "BinaryIndex",
    "BuildTimestampTracker",
    "DirectoryRenderJarCache",
    "FileMetadata",
    "GraphProvider",
    "JavaSourceIndex",
    "LocalFileSystem",
    "ModuleIndex",
    "ModuleRegistry",
    "OutputArtifactResolver",
    "OutputResolver",
    "RenderJarCache",
    "SnapshotError",
    "SnapshotGraphProvider",
    "SymbolIndex",
    "TargetToBinaryMap",
]
