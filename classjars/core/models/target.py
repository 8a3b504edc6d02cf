"""
Target models — the dependency graph as the build reports it.

A sync produces one TargetIdeInfo per target in the build graph. The
whole collection is a TargetMap, which is an immutable snapshot: the
next sync replaces it wholesale rather than editing it in place.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field


class TargetKey(BaseModel):
    """Unique identity of a target in the graph.

    The label alone identifies the rule; aspect ids distinguish
    aspect-generated variants of the same rule.
    """

    model_config = ConfigDict(frozen=True)

    label: str
    aspect_ids: tuple[str, ...] = ()

    @classmethod
    def of(cls, label: str) -> TargetKey:
        return cls(label=label)

    def __str__(self) -> str:
        if self.aspect_ids:
            return f"{self.label}#{','.join(self.aspect_ids)}"
        return self.label


class ArtifactLocation(BaseModel):
    """Where a build artifact lives, relative to an output root.

    Not a final path: the decoder joins it against the workspace or
    execution root that is current at resolution time.
    """

    model_config = ConfigDict(frozen=True)

    relative_path: str
    root_execution_path_fragment: str = ""
    is_source: bool = True
    is_external: bool = False

    @property
    def execution_root_relative_path(self) -> str:
        if not self.root_execution_path_fragment:
            return self.relative_path
        return f"{self.root_execution_path_fragment}/{self.relative_path}"


class LibraryArtifact(BaseModel):
    """A compiled library: its class jar plus optional companions."""

    interface_jar: ArtifactLocation | None = None
    class_jar: ArtifactLocation | None = None
    source_jars: list[ArtifactLocation] = Field(default_factory=list)


class JavaIdeInfo(BaseModel):
    """Java facet of a target."""

    jars: list[LibraryArtifact] = Field(default_factory=list)
    generated_jars: list[LibraryArtifact] = Field(default_factory=list)


class TargetIdeInfo(BaseModel):
    """A single node of the dependency graph."""

    key: TargetKey
    kind: str = ""
    dependencies: list[TargetKey] = Field(default_factory=list)
    java_ide_info: JavaIdeInfo | None = None

    @property
    def is_binary(self) -> bool:
        return self.kind.endswith("_binary")


class TargetMap:
    """Read-only mapping of TargetKey → TargetIdeInfo.

    Keys are unique; a later target with the same key replaces an
    earlier one while building the map.
    """

    def __init__(self, targets: Iterable[TargetIdeInfo] = ()):
        self._targets: dict[TargetKey, TargetIdeInfo] = {}
        for target in targets:
            self._targets[target.key] = target

    def get(self, key: TargetKey | None) -> TargetIdeInfo | None:
        if key is None:
            return None
        return self._targets.get(key)

    def contains(self, key: TargetKey) -> bool:
        return key in self._targets

    def targets(self) -> list[TargetIdeInfo]:
        return list(self._targets.values())

    def keys(self) -> list[TargetKey]:
        return list(self._targets.keys())

    def __contains__(self, key: object) -> bool:
        return key in self._targets

    def __iter__(self) -> Iterator[TargetIdeInfo]:
        return iter(self._targets.values())

    def __len__(self) -> int:
        return len(self._targets)

    def __repr__(self) -> str:
        return f"<TargetMap targets={len(self._targets)}>"
