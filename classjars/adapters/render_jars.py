"""
Render jar cache — directory of pre-built jars, one per binary target.

A separate build step writes ``<cache_dir>/<sanitized label>.jar`` for
each binary it renders. Entries outlive graph snapshots; the resolver
only asks for binaries present in the current target map, so jars of
deleted targets are never returned.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from classjars.adapters.base import ArtifactDecoder, RenderJarCache
from classjars.core.models.target import TargetIdeInfo, TargetKey

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")


def cache_file_name(key: TargetKey) -> str:
    """File name for a binary's render jar: ``//java/app:app`` → ``java_app_app.jar``."""
    name = _UNSAFE.sub("_", str(key)).strip("_")
    return f"{name}.jar"


class DirectoryRenderJarCache(RenderJarCache):
    """Render jars stored as plain files in one directory."""

    def __init__(self, cache_dir: Path):
        self._cache_dir = cache_dir

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    def path_for(self, key: TargetKey) -> Path:
        return self._cache_dir / cache_file_name(key)

    def get_cached_jar(self, decoder: ArtifactDecoder, binary: TargetIdeInfo) -> Path | None:
        path = self.path_for(binary.key)
        if path.is_file():
            return path
        logger.debug("Render jar miss for %s", binary.key)
        return None
