"""
Java source index — fully qualified class name → declaring source file.

Scans ``.java`` files under the configured source roots and records
every top-level type together with the file's package. Nested classes
are found through their outermost enclosing type, so ``a.b.Outer.Inner``
and ``a.b.Outer$Inner`` both resolve to the file declaring ``a.b.Outer``.

Lookups and rebuilds share one lock; a lookup always sees either the
old index or the new one, never a half-built mix.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

from classjars.adapters.base import SymbolIndex
from classjars.core.models.files import VirtualFile

logger = logging.getLogger(__name__)

_PACKAGE = re.compile(r"^\s*package\s+([\w.]+)\s*;", re.MULTILINE)
_TOP_LEVEL_TYPE = re.compile(
    r"^(?:(?:public|protected|private|abstract|final|static|sealed|non-sealed|strictfp)\s+)*"
    r"(?:class|interface|enum|record|@interface)\s+(\w+)",
    re.MULTILINE,
)
_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)


def declared_types(source: str) -> tuple[str, list[str]]:
    """Package and top-level type names declared in a Java source file."""
    source = _BLOCK_COMMENT.sub("", source)
    match = _PACKAGE.search(source)
    package = match.group(1) if match else ""
    return package, _TOP_LEVEL_TYPE.findall(source)


class JavaSourceIndex(SymbolIndex):
    """In-memory class index over one or more source roots."""

    def __init__(self, source_roots: Iterable[Path] = ()):
        self._roots = [Path(r) for r in source_roots]
        self._lock = threading.RLock()
        self._classes: dict[str, Path] = {}
        self._built = False

    @contextmanager
    def read_lock(self) -> Iterator[None]:
        with self._lock:
            if not self._built:
                self._rebuild_locked()
            yield

    def rebuild(self) -> int:
        """Rescan every source root. Returns the number of indexed classes."""
        with self._lock:
            self._rebuild_locked()
            return len(self._classes)

    def _rebuild_locked(self) -> None:
        classes: dict[str, Path] = {}
        for root in self._roots:
            if not root.is_dir():
                logger.debug("Source root %s does not exist — skipping", root)
                continue
            for path in sorted(root.rglob("*.java")):
                try:
                    text = path.read_text(encoding="utf-8", errors="replace")
                except OSError as e:
                    logger.debug("Cannot read %s: %s", path, e)
                    continue
                package, names = declared_types(text)
                if not names:
                    names = [path.stem]
                for name in names:
                    fqcn = f"{package}.{name}" if package else name
                    classes.setdefault(fqcn, path)
        self._classes = classes
        self._built = True
        logger.debug("Indexed %d classes under %d roots", len(classes), len(self._roots))

    def find_declaring_file(self, fqcn: str) -> VirtualFile | None:
        if not fqcn:
            return None
        name = fqcn.replace("$", ".")
        while name:
            path = self._classes.get(name)
            if path is not None:
                return VirtualFile(path=str(path))
            if "." not in name:
                break
            name = name.rsplit(".", 1)[0]
        return None

    def __len__(self) -> int:
        return len(self._classes)
