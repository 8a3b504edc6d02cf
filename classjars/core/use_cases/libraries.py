"""
Libraries use case — resolve the external jars of one module.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from classjars.core.config.loader import ConfigError
from classjars.core.use_cases.workspace import open_workspace


@dataclass
class LibrariesResult:
    """Resolved jars for a module."""

    module: str = ""
    jars: list[Path] = field(default_factory=list)
    snapshot_available: bool = False
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "module": self.module,
            "snapshot_available": self.snapshot_available,
            "jars": [str(j) for j in self.jars],
        }


def get_libraries(module: str, config_path: Path | None = None) -> LibrariesResult:
    """Resolve the library jars for ``module``.

    Args:
        module: IDE module name.
        config_path: Optional explicit path to classjars.yml.
    """
    result = LibrariesResult(module=module)

    try:
        workspace = open_workspace(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    result.snapshot_available = workspace.graph.current_snapshot() is not None
    result.jars = workspace.resolver.resolve_external_libraries(module)
    return result
