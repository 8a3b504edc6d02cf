"""
Adapter base — the contracts between the query services and their collaborators.

The resolver and the staleness checker only ever talk to these
interfaces. Hosts (an IDE plugin, the CLI, tests) plug in concrete
implementations; the defaults in this package work from files on disk.

Collaborators never raise for missing data: an absent snapshot, an
unmapped module or a cache miss is reported as None or an empty list.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from pathlib import Path

from classjars.core.models.files import VirtualFile
from classjars.core.models.project import ProjectData
from classjars.core.models.target import ArtifactLocation, TargetIdeInfo, TargetKey, TargetMap


class ArtifactDecodeError(Exception):
    """Raised by a decoder for an artifact location it cannot map to a path."""


class SnapshotError(Exception):
    """Raised when a stored graph snapshot cannot be parsed."""


class GraphProvider(ABC):
    """Source of the current dependency graph snapshot."""

    @abstractmethod
    def current_snapshot(self) -> ProjectData | None:
        """Return a consistent snapshot, or None if no sync has completed."""


class ArtifactDecoder(ABC):
    """Maps artifact locations onto the output roots of one snapshot."""

    @abstractmethod
    def decode(self, location: ArtifactLocation) -> Path:
        """Return the concrete path for a location.

        Raises:
            ArtifactDecodeError: If the location cannot be mapped.
        """


class OutputResolver(ABC):
    """Turns a decoded location into a usable local path."""

    @abstractmethod
    def resolve(self, decoder: ArtifactDecoder, location: ArtifactLocation) -> Path | None:
        """Return the path, or None if this location must be dropped."""


class RenderJarCache(ABC):
    """Pre-built render jars, one per binary target."""

    @abstractmethod
    def get_cached_jar(self, decoder: ArtifactDecoder, binary: TargetIdeInfo) -> Path | None:
        """Return the cached jar for a binary target, or None on a miss."""


class BinaryIndex(ABC):
    """Reverse index from a target to the binaries that depend on it."""

    @abstractmethod
    def binaries_for(self, target_map: TargetMap, key: TargetKey) -> list[TargetKey]:
        """Binary targets that transitively depend on ``key``."""


class ModuleIndex(ABC):
    """Maps IDE modules to the target they were generated from."""

    @abstractmethod
    def target_key(self, module_name: str) -> TargetKey | None:
        """The target for a module, or None if the module is unmapped."""


class BuildTimestampTracker(ABC):
    """Records when the user last triggered a build."""

    @abstractmethod
    def last_build_timestamp(self, project_id: str) -> float | None:
        """POSIX seconds of the last manual build, or None if none recorded."""


class SymbolIndex(ABC):
    """Language-aware lookup from a qualified name to its source file."""

    @abstractmethod
    def read_lock(self) -> AbstractContextManager[None]:
        """Hold a consistent read view of the index for the ``with`` body."""

    @abstractmethod
    def find_declaring_file(self, fqcn: str) -> VirtualFile | None:
        """The file declaring ``fqcn``; callers hold ``read_lock()``."""


class FileMetadata(ABC):
    """File facts the staleness check needs from the host file system.

    ``cached_timestamp`` may come from a host-side cache that has not
    seen recent out-of-band writes; ``authoritative_timestamp`` always
    goes to the disk.
    """

    @abstractmethod
    def is_unsaved(self, file: VirtualFile) -> bool:
        """Whether the file has in-memory edits not yet written to disk."""

    @abstractmethod
    def cached_timestamp(self, file: VirtualFile) -> float:
        """Last-modified time as the host last observed it."""

    @abstractmethod
    def authoritative_timestamp(self, file: VirtualFile) -> float:
        """Last-modified time read directly from the file system."""

    @abstractmethod
    def jar_for(self, file: VirtualFile) -> VirtualFile | None:
        """The jar containing ``file``, or None if it is not a jar entry."""

    @abstractmethod
    def is_local(self, file: VirtualFile) -> bool:
        """Whether ``file`` is an ordinary file on the local disk."""
