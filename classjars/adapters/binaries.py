"""
Target-to-binary map — which binaries transitively depend on a target.

Computed once per TargetMap by walking dependency edges backwards from
every binary. The map is cached against the identity of the TargetMap
it was built from; a new sync produces a new TargetMap and therefore a
fresh index.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from classjars.adapters.base import BinaryIndex
from classjars.core.models.target import TargetKey, TargetMap

logger = logging.getLogger(__name__)


def build_reverse_index(target_map: TargetMap) -> dict[TargetKey, list[TargetKey]]:
    """Map each target to the binary targets that reach it."""
    reached_by: dict[TargetKey, set[TargetKey]] = defaultdict(set)

    for binary in target_map:
        if not binary.is_binary:
            continue
        seen: set[TargetKey] = set()
        stack = [binary.key]
        while stack:
            key = stack.pop()
            if key in seen:
                continue
            seen.add(key)
            target = target_map.get(key)
            if target is None:
                continue
            reached_by[key].add(binary.key)
            stack.extend(target.dependencies)

    return {key: sorted(binaries, key=str) for key, binaries in reached_by.items()}


class TargetToBinaryMap(BinaryIndex):
    """Lazily built reverse index, one per TargetMap."""

    def __init__(self) -> None:
        self._source: TargetMap | None = None
        self._index: dict[TargetKey, list[TargetKey]] = {}

    def _index_for(self, target_map: TargetMap) -> dict[TargetKey, list[TargetKey]]:
        if self._source is not target_map:
            self._index = build_reverse_index(target_map)
            self._source = target_map
            logger.debug("Built binary index for %d targets", len(self._index))
        return self._index

    def binaries_for(self, target_map: TargetMap, key: TargetKey) -> list[TargetKey]:
        return list(self._index_for(target_map).get(key, []))

    def source_binary_targets(self, target_map: TargetMap) -> list[TargetKey]:
        """Every binary target in the map."""
        return sorted((t.key for t in target_map if t.is_binary), key=str)
