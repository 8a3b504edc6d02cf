"""
Local file system facade — timestamps, jar unwrapping, unsaved edits.

Two kinds of timestamp are offered on purpose:

- ``cached_timestamp``: what this process last observed. Local files
  are stat()ed once and memoized until ``refresh()``; a handle that
  carries its own timestamp reports that.
- ``authoritative_timestamp``: a fresh stat() every time.

The memo mirrors how an IDE's virtual file system behaves for files it
does not watch, such as jars rebuilt by an external build.

Unsaved edits are tracked as a set of paths the host marks and clears
as editor buffers diverge from disk.
"""

from __future__ import annotations

import logging
import os
import time
import zipfile
from collections.abc import Iterable

from classjars.adapters.base import FileMetadata
from classjars.core.models.files import FileSystemKind, VirtualFile

logger = logging.getLogger(__name__)


def _normalize(path: str) -> str:
    return os.path.normpath(os.path.abspath(path))


class LocalFileSystem(FileMetadata):
    """FileMetadata backed by os.stat() and zip directories."""

    def __init__(self, unsaved: Iterable[str] = ()):
        self._stat_cache: dict[str, float] = {}
        self._unsaved: set[str] = {_normalize(p) for p in unsaved}

    # ── Unsaved edits ───────────────────────────────────────────

    def mark_unsaved(self, path: str) -> None:
        self._unsaved.add(_normalize(path))

    def mark_saved(self, path: str) -> None:
        self._unsaved.discard(_normalize(path))

    def is_unsaved(self, file: VirtualFile) -> bool:
        if file.file_system == FileSystemKind.JAR:
            return False
        return _normalize(file.path) in self._unsaved

    # ── Timestamps ──────────────────────────────────────────────

    def cached_timestamp(self, file: VirtualFile) -> float:
        if file.timestamp is not None:
            return file.timestamp
        if file.file_system == FileSystemKind.MEMORY:
            return 0.0

        key = file.path
        if key not in self._stat_cache:
            self._stat_cache[key] = self._read_timestamp(file)
        return self._stat_cache[key]

    def authoritative_timestamp(self, file: VirtualFile) -> float:
        if file.file_system == FileSystemKind.MEMORY:
            return self.cached_timestamp(file)
        timestamp = self._read_timestamp(file)
        self._stat_cache[file.path] = timestamp
        return timestamp

    def refresh(self) -> None:
        """Forget memoized timestamps."""
        self._stat_cache.clear()

    def _read_timestamp(self, file: VirtualFile) -> float:
        if file.file_system == FileSystemKind.JAR:
            return _jar_entry_timestamp(file)
        try:
            return os.stat(file.path).st_mtime
        except OSError as e:
            logger.debug("Cannot stat %s: %s", file.path, e)
            return 0.0

    # ── Jar unwrapping ──────────────────────────────────────────

    def jar_for(self, file: VirtualFile) -> VirtualFile | None:
        if file.file_system != FileSystemKind.JAR or not file.jar_path:
            return None
        return VirtualFile.parse(file.jar_path)

    def is_local(self, file: VirtualFile) -> bool:
        return file.file_system == FileSystemKind.LOCAL


def _jar_entry_timestamp(file: VirtualFile) -> float:
    """Modification time recorded for an entry in its jar's zip directory."""
    entry = file.entry_name
    if not file.jar_path or entry is None:
        return 0.0
    try:
        with zipfile.ZipFile(file.jar_path) as jar:
            info = jar.getinfo(entry)
    except (OSError, KeyError, zipfile.BadZipFile) as e:
        logger.debug("Cannot read %s from %s: %s", entry, file.jar_path, e)
        return 0.0
    return time.mktime(info.date_time + (0, 0, -1))
