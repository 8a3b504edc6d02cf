"""
Staleness checker — is a compiled class older than its source?

A best-effort warning signal, not a build-correctness check. It never
reports staleness it cannot back up: a class whose source cannot be
found is treated as current.

Decision order:

1. Source not found                          → fresh
2. Source has unsaved edits                  → stale
3. Source mtime <= class (or jar) mtime      → fresh
4. Source newer, but a manual build happened
   at or after the source mtime              → fresh
5. Otherwise                                 → stale

Step 4 exists because touching a file without changing its content
bumps its mtime while the build sees nothing to rebuild; once the user
has built by hand, that build is taken as settling the question.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from classjars.adapters.base import BuildTimestampTracker, FileMetadata, SymbolIndex
from classjars.core.models.files import VirtualFile
from classjars.core.observability.metrics import MetricsRegistry, metrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StalenessVerdict:
    """Outcome of one check, with the reason and the timestamps compared."""

    stale: bool
    reason: str
    source: VirtualFile | None = None
    source_timestamp: float | None = None
    build_timestamp: float | None = None
    manual_build_timestamp: float | None = None

    def __bool__(self) -> bool:
        return self.stale

    def to_dict(self) -> dict:
        return {
            "stale": self.stale,
            "reason": self.reason,
            "source": self.source.path if self.source else None,
            "source_timestamp": self.source_timestamp,
            "build_timestamp": self.build_timestamp,
            "manual_build_timestamp": self.manual_build_timestamp,
        }


class StalenessChecker:
    """Decides whether a class file is out of date with respect to its source."""

    def __init__(
        self,
        project_id: str,
        symbols: SymbolIndex,
        files: FileMetadata,
        builds: BuildTimestampTracker,
        registry: MetricsRegistry | None = None,
    ):
        self._project_id = project_id
        self._symbols = symbols
        self._files = files
        self._builds = builds
        self._metrics = registry or metrics

    def is_stale(self, fqcn: str, class_file: VirtualFile) -> bool:
        return self.check(fqcn, class_file).stale

    def check(self, fqcn: str, class_file: VirtualFile) -> StalenessVerdict:
        """Full verdict for ``fqcn`` compiled into ``class_file``."""
        verdict = self._decide(fqcn, class_file)
        self._metrics.inc(
            "staleness.verdict",
            result="stale" if verdict.stale else "fresh",
            reason=verdict.reason,
        )
        logger.debug("%s in %s: %s (%s)", fqcn, class_file.path, verdict.stale, verdict.reason)
        return verdict

    def _decide(self, fqcn: str, class_file: VirtualFile) -> StalenessVerdict:
        with self._symbols.read_lock():
            source = self._symbols.find_declaring_file(fqcn)

        if source is None:
            return StalenessVerdict(stale=False, reason="source_not_found")

        if self._files.is_unsaved(source):
            return StalenessVerdict(stale=True, reason="unsaved_edits", source=source)

        source_ts = self._files.cached_timestamp(source)
        build_ts = self.build_timestamp(class_file)

        if source_ts <= build_ts:
            return StalenessVerdict(
                stale=False,
                reason="class_up_to_date",
                source=source,
                source_timestamp=source_ts,
                build_timestamp=build_ts,
            )

        manual_ts = self._builds.last_build_timestamp(self._project_id)
        stale = manual_ts is None or source_ts > manual_ts
        return StalenessVerdict(
            stale=stale,
            reason="source_newer" if stale else "manual_build_newer",
            source=source,
            source_timestamp=source_ts,
            build_timestamp=build_ts,
            manual_build_timestamp=manual_ts,
        )

    def build_timestamp(self, class_file: VirtualFile) -> float:
        """When ``class_file`` was built.

        For a class inside a jar, the entry's own time reflects when it
        was first packaged, so the jar's time is used instead. A jar on
        the local disk is stat()ed directly because the cached value may
        predate an out-of-band rebuild.
        """
        jar = self._files.jar_for(class_file)
        if jar is None:
            return self._files.cached_timestamp(class_file)
        if self._files.is_local(jar):
            return self._files.authoritative_timestamp(jar)
        return self._files.cached_timestamp(jar)
