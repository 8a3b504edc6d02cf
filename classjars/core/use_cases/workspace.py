"""
Workspace wiring — config + on-disk adapters → ready-to-query services.

Every use case starts here. Paths in classjars.yml are relative to the
directory holding it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from classjars.adapters.binaries import TargetToBinaryMap
from classjars.adapters.decoder import OutputArtifactResolver
from classjars.adapters.graph import SNAPSHOT_FILE, SnapshotGraphProvider
from classjars.adapters.modules import ModuleRegistry
from classjars.adapters.render_jars import DirectoryRenderJarCache
from classjars.adapters.symbols import JavaSourceIndex
from classjars.adapters.vfs import LocalFileSystem
from classjars.core.config.loader import ConfigError, find_project_file, load_project, project_root
from classjars.core.context import get_project_root
from classjars.core.models.project import ProjectConfig
from classjars.core.persistence.state_file import default_state_path
from classjars.core.services.build_service import BuildService
from classjars.core.services.library_resolver import LibraryResolver
from classjars.core.services.staleness import StalenessChecker

logger = logging.getLogger(__name__)


@dataclass
class Workspace:
    """A loaded project with its services wired to on-disk adapters."""

    config: ProjectConfig
    config_path: Path
    root: Path
    graph: SnapshotGraphProvider
    files: LocalFileSystem
    symbols: JavaSourceIndex
    builds: BuildService
    resolver: LibraryResolver
    checker: StalenessChecker


def open_workspace(config_path: Path | None = None) -> Workspace:
    """Load classjars.yml and wire the services.

    Raises:
        ConfigError: If no configuration can be found or it is invalid.
    """
    if config_path is None:
        config_path = find_project_file(get_project_root())
    if config_path is None:
        raise ConfigError("No classjars.yml found. Create one at the workspace root, or specify --config.")

    config = load_project(config_path)
    root = project_root(config_path)
    state_dir = root / config.state_dir

    graph = SnapshotGraphProvider(state_dir / SNAPSHOT_FILE)
    files = LocalFileSystem()
    symbols = JavaSourceIndex(root / r for r in config.source_roots)
    builds = BuildService(default_state_path(root, config.state_dir))

    resolver = LibraryResolver(
        config=config,
        graph=graph,
        modules=ModuleRegistry(config.modules),
        binaries=TargetToBinaryMap(),
        render_jars=DirectoryRenderJarCache(root / config.render_jar_dir),
        output_resolver=OutputArtifactResolver(),
    )
    checker = StalenessChecker(
        project_id=config.name,
        symbols=symbols,
        files=files,
        builds=builds,
    )

    logger.debug("Opened workspace %s at %s", config.name, root)
    return Workspace(
        config=config,
        config_path=config_path,
        root=root,
        graph=graph,
        files=files,
        symbols=symbols,
        builds=builds,
        resolver=resolver,
        checker=checker,
    )
