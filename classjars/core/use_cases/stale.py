"""
Stale use case — check compiled classes against their sources, and
record manual builds.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from classjars.core.config.loader import ConfigError
from classjars.core.models.files import VirtualFile
from classjars.core.services.staleness import StalenessVerdict
from classjars.core.use_cases.workspace import open_workspace


@dataclass
class StaleResult:
    """Verdict for one class."""

    fqcn: str = ""
    class_file: str = ""
    verdict: StalenessVerdict | None = None
    error: str | None = None

    @property
    def stale(self) -> bool:
        return bool(self.verdict and self.verdict.stale)

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        result: dict = {"fqcn": self.fqcn, "class_file": self.class_file}
        if self.verdict:
            result.update(self.verdict.to_dict())
        return result


@dataclass
class BuildMarkResult:
    project: str = ""
    timestamp: float | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {"project": self.project, "timestamp": self.timestamp}


def check_stale(
    fqcn: str,
    class_file: str,
    unsaved: Iterable[str] = (),
    config_path: Path | None = None,
) -> StaleResult:
    """Check whether ``class_file`` is out of date for ``fqcn``.

    Args:
        fqcn: Fully qualified class name.
        class_file: Path to a .class file, or ``/path/lib.jar!/pkg/Cls.class``.
        unsaved: Source paths with unsaved editor changes.
        config_path: Optional explicit path to classjars.yml.
    """
    result = StaleResult(fqcn=fqcn, class_file=class_file)

    try:
        workspace = open_workspace(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    for path in unsaved:
        workspace.files.mark_unsaved(path)

    result.verdict = workspace.checker.check(fqcn, VirtualFile.parse(class_file))
    return result


def mark_build(when: float | None = None, config_path: Path | None = None) -> BuildMarkResult:
    """Record that the user triggered a build."""
    result = BuildMarkResult()

    try:
        workspace = open_workspace(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    result.project = workspace.config.name
    result.timestamp = workspace.builds.record_build(workspace.config.name, when)
    return result
