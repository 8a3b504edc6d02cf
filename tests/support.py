"""
Builders and collaborator fakes shared by the test modules.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path

from classjars.adapters.base import (
    ArtifactDecoder,
    BuildTimestampTracker,
    FileMetadata,
    GraphProvider,
    OutputResolver,
    RenderJarCache,
    SymbolIndex,
)
from classjars.adapters.decoder import OutputArtifactResolver
from classjars.core.models.files import VirtualFile
from classjars.core.models.project import ProjectData
from classjars.core.models.target import (
    ArtifactLocation,
    JavaIdeInfo,
    LibraryArtifact,
    TargetIdeInfo,
    TargetKey,
    TargetMap,
)

WORKSPACE_ROOT = Path("/ws")
EXECUTION_ROOT = Path("/exec")


# ── Builders ────────────────────────────────────────────────────────


def class_jar(path: str, generated: bool = True) -> LibraryArtifact:
    """A library artifact whose class jar lives at ``path``."""
    if generated:
        location = ArtifactLocation(
            relative_path=path,
            root_execution_path_fragment="bazel-out/k8-fastbuild/bin",
            is_source=False,
        )
    else:
        location = ArtifactLocation(relative_path=path)
    return LibraryArtifact(class_jar=location)


def java_target(
    label: str,
    jars: tuple[str, ...] = (),
    kind: str = "java_library",
    deps: tuple[str, ...] = (),
) -> TargetIdeInfo:
    return TargetIdeInfo(
        key=TargetKey.of(label),
        kind=kind,
        dependencies=[TargetKey.of(d) for d in deps],
        java_ide_info=JavaIdeInfo(jars=[class_jar(j) for j in jars]),
    )


def plain_target(label: str, kind: str = "genrule", deps: tuple[str, ...] = ()) -> TargetIdeInfo:
    return TargetIdeInfo(
        key=TargetKey.of(label),
        kind=kind,
        dependencies=[TargetKey.of(d) for d in deps],
    )


def snapshot(*targets: TargetIdeInfo) -> ProjectData:
    return ProjectData(
        target_map=TargetMap(targets),
        workspace_root=WORKSPACE_ROOT,
        execution_root=EXECUTION_ROOT,
    )


def bin_path(relative: str) -> Path:
    """Where a generated class jar built by ``class_jar`` resolves to."""
    return EXECUTION_ROOT / "bazel-out/k8-fastbuild/bin" / relative


# ── Fakes ───────────────────────────────────────────────────────────


class FakeGraph(GraphProvider):
    def __init__(self, project_data: ProjectData | None):
        self.project_data = project_data
        self.calls = 0

    def current_snapshot(self) -> ProjectData | None:
        self.calls += 1
        return self.project_data


class CountingOutputResolver(OutputResolver):
    """Real resolver with a call counter."""

    def __init__(self) -> None:
        self._inner = OutputArtifactResolver()
        self.calls = 0

    def resolve(self, decoder: ArtifactDecoder, location: ArtifactLocation) -> Path | None:
        self.calls += 1
        return self._inner.resolve(decoder, location)


class FakeRenderJarCache(RenderJarCache):
    def __init__(self, jars: dict[str, Path] | None = None):
        self.jars = dict(jars or {})
        self.requested: list[str] = []

    def get_cached_jar(self, decoder: ArtifactDecoder, binary: TargetIdeInfo) -> Path | None:
        self.requested.append(binary.key.label)
        return self.jars.get(binary.key.label)


class FakeSymbolIndex(SymbolIndex):
    """Fixed fqcn → file mapping that records lock usage."""

    def __init__(self, files: dict[str, VirtualFile] | None = None, fail: bool = False):
        self.files = dict(files or {})
        self.fail = fail
        self.held = False
        self.acquired = 0
        self.released = 0
        self.lookups_outside_lock = 0

    @contextmanager
    def read_lock(self):
        self.acquired += 1
        self.held = True
        try:
            yield
        finally:
            self.held = False
            self.released += 1

    def find_declaring_file(self, fqcn: str) -> VirtualFile | None:
        if not self.held:
            self.lookups_outside_lock += 1
        if self.fail:
            raise RuntimeError("index corrupted")
        return self.files.get(fqcn)


class FakeFiles(FileMetadata):
    """Timestamps keyed by path; authoritative values default to cached ones."""

    def __init__(self) -> None:
        self.cached: dict[str, float] = {}
        self.authoritative: dict[str, float] = {}
        self.unsaved: set[str] = set()
        self.jars: dict[str, VirtualFile] = {}
        self.authoritative_reads: list[str] = []

    def is_unsaved(self, file: VirtualFile) -> bool:
        return file.path in self.unsaved

    def cached_timestamp(self, file: VirtualFile) -> float:
        return self.cached.get(file.path, 0.0)

    def authoritative_timestamp(self, file: VirtualFile) -> float:
        self.authoritative_reads.append(file.path)
        return self.authoritative.get(file.path, self.cached_timestamp(file))

    def jar_for(self, file: VirtualFile) -> VirtualFile | None:
        return self.jars.get(file.path)

    def is_local(self, file: VirtualFile) -> bool:
        return file.file_system.value == "local"


class FakeBuilds(BuildTimestampTracker):
    def __init__(self, timestamp: float | None = None):
        self.timestamp = timestamp
        self.asked: list[str] = []

    def last_build_timestamp(self, project_id: str) -> float | None:
        self.asked.append(project_id)
        return self.timestamp
