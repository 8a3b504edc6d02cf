"""
Library resolver — which external jars back an IDE module.

Resolution is an ordered chain of strategies. Each strategy has a
guard and a producer; the first strategy whose guard passes answers
the query, except that a non-terminal strategy which produces nothing
lets the chain continue.

    query_sync        query sync has no render jars and a partial graph → []
    no_snapshot       no completed sync → []
    workspace_module  the synthetic whole-workspace module → every class jar
    render_jars       cached render jars of binaries depending on the module
    full_scan         every class jar, if the module maps to a known target

Results from ``render_jars`` are de-duplicated; ``full_scan`` returns
paths in target-map order and may repeat a path.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path

from classjars.adapters.base import (
    ArtifactDecoder,
    BinaryIndex,
    GraphProvider,
    ModuleIndex,
    OutputResolver,
    RenderJarCache,
)
from classjars.adapters.decoder import ArtifactLocationDecoder
from classjars.core.models.project import ProjectConfig, ProjectData
from classjars.core.models.target import TargetMap
from classjars.core.observability.metrics import MetricsRegistry, metrics

logger = logging.getLogger(__name__)

DecoderFactory = Callable[[ProjectData], ArtifactDecoder]


class ResolutionRequest:
    """One resolver query. The snapshot is fetched on first use only."""

    def __init__(self, module_name: str, graph: GraphProvider, decoder_factory: DecoderFactory):
        self.module_name = module_name
        self._graph = graph
        self._decoder_factory = decoder_factory

    @cached_property
    def snapshot(self) -> ProjectData | None:
        return self._graph.current_snapshot()

    @cached_property
    def decoder(self) -> ArtifactDecoder:
        assert self.snapshot is not None
        return self._decoder_factory(self.snapshot)

    @property
    def target_map(self) -> TargetMap:
        assert self.snapshot is not None
        return self.snapshot.target_map


@dataclass(frozen=True)
class ResolutionStrategy:
    """A named step of the resolution chain."""

    name: str
    applies: Callable[[ResolutionRequest], bool]
    produce: Callable[[ResolutionRequest], list[Path]]
    terminal: bool = True


class LibraryResolver:
    """Resolves the external library jars visible to a module.

    Feature flags are read from ``config`` on every call, so toggling
    ``sync_mode`` or an experiment takes effect on the next query.
    """

    def __init__(
        self,
        config: ProjectConfig,
        graph: GraphProvider,
        modules: ModuleIndex,
        binaries: BinaryIndex,
        render_jars: RenderJarCache,
        output_resolver: OutputResolver,
        decoder_factory: DecoderFactory = ArtifactLocationDecoder.for_project,
        registry: MetricsRegistry | None = None,
    ):
        self._config = config
        self._graph = graph
        self._modules = modules
        self._binaries = binaries
        self._render_jars = render_jars
        self._output_resolver = output_resolver
        self._decoder_factory = decoder_factory
        self._metrics = registry or metrics

        self.strategies: list[ResolutionStrategy] = [
            ResolutionStrategy("query_sync", lambda r: self._config.query_sync, _nothing),
            ResolutionStrategy("no_snapshot", lambda r: r.snapshot is None, _nothing),
            ResolutionStrategy(
                "workspace_module",
                lambda r: r.module_name == self._config.workspace_module,
                self._all_class_jars,
            ),
            ResolutionStrategy(
                "render_jars",
                lambda r: self._config.experiments.render_jar_as_libraries,
                self._render_jar_libraries,
                terminal=False,
            ),
            ResolutionStrategy("full_scan", lambda r: True, self._module_class_jars),
        ]

    def resolve_external_libraries(self, module_name: str) -> list[Path]:
        """Ordered list of jar paths backing ``module_name``."""
        request = ResolutionRequest(module_name, self._graph, self._decoder_factory)

        with self._metrics.timed("resolver.duration_ms"):
            for strategy in self.strategies:
                if not strategy.applies(request):
                    continue
                libraries = strategy.produce(request)
                if libraries or strategy.terminal:
                    self._metrics.inc("resolver.strategy", strategy=strategy.name)
                    logger.debug(
                        "Module %s resolved by %s: %d jars",
                        module_name,
                        strategy.name,
                        len(libraries),
                    )
                    return libraries
                logger.debug("Strategy %s produced nothing for %s", strategy.name, module_name)

        return []

    # ── Producers ───────────────────────────────────────────────

    def _render_jar_libraries(self, request: ResolutionRequest) -> list[Path]:
        key = self._modules.target_key(request.module_name)
        target_map = request.target_map
        if key is None or target_map.get(key) is None:
            return []

        jars: list[Path] = []
        for binary_key in self._binaries.binaries_for(target_map, key):
            binary = target_map.get(binary_key)
            if binary is None:
                continue
            jar = self._render_jars.get_cached_jar(request.decoder, binary)
            if jar is not None and jar not in jars:
                jars.append(jar)
        return jars

    def _module_class_jars(self, request: ResolutionRequest) -> list[Path]:
        key = self._modules.target_key(request.module_name)
        if key is None or request.target_map.get(key) is None:
            logger.debug("Module %s does not map to a synced target", request.module_name)
            return []
        return self._all_class_jars(request)

    def _all_class_jars(self, request: ResolutionRequest) -> list[Path]:
        jars: list[Path] = []
        for target in request.target_map:
            java = target.java_ide_info
            if java is None:
                continue
            for library in java.jars:
                if library.class_jar is None:
                    continue
                path = self._output_resolver.resolve(request.decoder, library.class_jar)
                if path is not None:
                    jars.append(path)
        return jars


def _nothing(request: ResolutionRequest) -> list[Path]:
    return []
