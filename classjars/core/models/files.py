"""
File handles — the host's view of a file.

A handle is either a plain local file, an entry inside a jar, or an
in-memory file with no disk backing. Jar entries are addressed as
``/path/to/lib.jar!/com/example/Foo.class``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

JAR_SEPARATOR = "!/"


class FileSystemKind(str, Enum):
    LOCAL = "local"
    JAR = "jar"
    MEMORY = "memory"


class VirtualFile(BaseModel):
    """A host file handle.

    ``timestamp`` is the host's cached modification time, if it has
    one. ``jar_path`` is set only for jar entries.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    file_system: FileSystemKind = FileSystemKind.LOCAL
    timestamp: float | None = None
    jar_path: str | None = None

    @classmethod
    def parse(cls, url: str) -> VirtualFile:
        """Build a handle from a path or ``jar:`` URL."""
        if url.startswith("jar://"):
            url = url[len("jar://"):]
        elif url.startswith("jar:"):
            url = url[len("jar:"):]
        elif url.startswith("file://"):
            url = url[len("file://"):]

        if JAR_SEPARATOR in url:
            jar_path, entry = url.split(JAR_SEPARATOR, 1)
            return cls(
                path=f"{jar_path}{JAR_SEPARATOR}{entry}",
                file_system=FileSystemKind.JAR,
                jar_path=jar_path,
            )
        return cls(path=url)

    @property
    def entry_name(self) -> str | None:
        """Path of a jar entry inside its jar."""
        if self.file_system != FileSystemKind.JAR:
            return None
        return self.path.split(JAR_SEPARATOR, 1)[1]

    @property
    def name(self) -> str:
        return self.path.rstrip("/").rsplit("/", 1)[-1]
