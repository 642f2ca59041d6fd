"""
Read-only context handed to every rule.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from layr_search.core.config import SearchConfig
from layr_search.core.ir import Component, ProjectFiles

from .contextless import FormulaExpander, make_expander
from .resolver import ComponentScope, NamespaceResolver

T = TypeVar("T")


class RuleContext:
    """
    Project snapshot plus resolver for one run.

    Exposes read accessors only. ``memo`` caches values derived from the
    snapshot (reference sets, lookups), keyed by name.
    """

    __slots__ = ("_files", "_resolver", "_config", "_cache")

    def __init__(self, files: ProjectFiles, config: SearchConfig | None = None) -> None:
        config = config or SearchConfig()
        self._files = files
        self._config = config
        self._resolver = NamespaceResolver(
            files,
            builtin_prefix=config.builtin_prefix,
            resolution_order=config.resolution_order,
        )
        self._cache: dict[str, object] = {}

    @property
    def files(self) -> ProjectFiles:
        return self._files

    @property
    def resolver(self) -> NamespaceResolver:
        return self._resolver

    @property
    def config(self) -> SearchConfig:
        return self._config

    def components(self) -> list[tuple[str, Component]]:
        """Project components (not package components) in declaration order."""
        return self._files.iter_components()

    def scope(self, component_name: str) -> ComponentScope:
        return self._resolver.scope(component_name)

    def expander(self, component_name: str) -> FormulaExpander:
        """Formula expander bound to a component scope, for contextless evaluation."""
        return make_expander(self.scope(component_name), self._config.max_expansion_depth)

    def memo(self, key: str, factory: Callable[[], T]) -> T:
        if key not in self._cache:
            self._cache[key] = factory()
        return self._cache[key]  # type: ignore[return-value]
