"""Module registry — IDE module name → generating target."""

from __future__ import annotations

from collections.abc import Iterable

from classjars.adapters.base import ModuleIndex
from classjars.core.models.project import ModuleRef
from classjars.core.models.target import TargetKey


class ModuleRegistry(ModuleIndex):
    """Module mapping declared in the ``modules:`` section of classjars.yml."""

    def __init__(self, modules: Iterable[ModuleRef] = ()):
        self._targets: dict[str, TargetKey] = {}
        for mod in modules:
            key = mod.target_key
            if key is not None:
                self._targets[mod.name] = key

    def register(self, module_name: str, key: TargetKey) -> None:
        self._targets[module_name] = key

    def target_key(self, module_name: str) -> TargetKey | None:
        return self._targets.get(module_name)

    def __len__(self) -> int:
        return len(self._targets)
