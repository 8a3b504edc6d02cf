"""
Config check use case — validate classjars.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from classjars.core.config.loader import ConfigError, find_project_file, load_project
from classjars.core.models.project import ProjectConfig


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    project: ProjectConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "project_name": self.project.name if self.project else None,
            "sync_mode": self.project.sync_mode.value if self.project else None,
            "module_count": len(self.project.modules) if self.project else 0,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate project configuration and report issues."""
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_project_file()
    if config_path is None:
        result.errors.append("No classjars.yml found.")
        return result

    result.config_path = config_path

    try:
        project = load_project(config_path)
        result.project = project
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    names = [m.name for m in project.modules]
    dupes = {n for n in names if names.count(n) > 1}
    if dupes:
        result.errors.append(f"Duplicate module names: {', '.join(sorted(dupes))}")

    if project.workspace_module in names:
        result.errors.append(
            f"Module '{project.workspace_module}' shadows the workspace module name"
        )

    unmapped = [m.name for m in project.modules if not m.target]
    if unmapped:
        result.warnings.append(
            f"Modules without a target resolve no libraries: {', '.join(unmapped)}"
        )

    root = config_path.parent
    for source_root in project.source_roots:
        if not (root / source_root).is_dir():
            result.warnings.append(f"Source root does not exist: {source_root}")

    if project.query_sync:
        result.warnings.append("Query sync is enabled: library resolution returns nothing.")

    result.valid = len(result.errors) == 0
    return result
