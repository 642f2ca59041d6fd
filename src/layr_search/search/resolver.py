"""
Namespace resolution for component, formula, event and action references.

Three scope tiers are consulted:

- local:   the referencing component's own formulas
- global:  project-level components, formulas and actions
- package: ``alias/name`` references into an installed package

Names starting with the built-in prefix always resolve. A name is treated
as package-qualified only when it contains ``/``; it is split on the first
``/`` only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from layr_search.core.config import DEFAULT_BUILTIN_PREFIX, ResolutionOrder
from layr_search.core.ir import Component, InstalledPackage, ProjectFiles


def split_qualified(name: str) -> tuple[str, str] | None:
    """Split ``alias/name`` on the first ``/``; None for a bare name."""
    alias, sep, child = name.partition("/")
    if not sep:
        return None
    return alias, child


class NamespaceResolver:
    """
    Project-wide lookups shared by all rules of one run.

    Bare component names are resolved according to ``resolution_order``:
    ``project_only`` never looks into packages, the other two orders scan
    packages in mapping order before or after the project.
    """

    def __init__(
        self,
        files: ProjectFiles,
        builtin_prefix: str = DEFAULT_BUILTIN_PREFIX,
        resolution_order: ResolutionOrder = ResolutionOrder.PROJECT_ONLY,
    ) -> None:
        self.files = files
        self.builtin_prefix = builtin_prefix
        self.resolution_order = resolution_order
        self._packages = self._index_packages(files)
        self._scopes: dict[str, ComponentScope] = {}

    @staticmethod
    def _index_packages(files: ProjectFiles) -> dict[str, InstalledPackage]:
        packages: dict[str, InstalledPackage] = {}
        for alias, package in files.iter_packages():
            packages.setdefault(alias, package)
        # A package is also addressable by its manifest name
        for _, package in files.iter_packages():
            if package.manifest.name:
                packages.setdefault(package.manifest.name, package)
        return packages

    # ------------------------------------------------------------------
    # Basics
    # ------------------------------------------------------------------

    def is_builtin(self, name: str) -> bool:
        return name.startswith(self.builtin_prefix)

    def package(self, alias: str) -> InstalledPackage | None:
        return self._packages.get(alias)

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def _project_component(self, name: str) -> Component | None:
        return self.files.components.get(name)

    def _package_component_by_bare_name(self, name: str) -> Component | None:
        for _, package in self.files.iter_packages():
            component = package.components.get(name)
            if component is not None:
                return component
        return None

    def resolve_component(self, name: str) -> Component | None:
        """Return the referenced component, or None if it cannot be resolved.

        Built-in names are resolved by :meth:`has_component` but have no
        component model, so this returns None for them.
        """
        if not name:
            return None
        qualified = split_qualified(name)
        if qualified is not None:
            alias, child = qualified
            package = self.package(alias)
            return package.components.get(child) if package is not None else None

        order = self.resolution_order
        if order == ResolutionOrder.PACKAGES_THEN_PROJECT:
            return self._package_component_by_bare_name(name) or self._project_component(name)
        found = self._project_component(name)
        if found is None and order == ResolutionOrder.PROJECT_THEN_PACKAGES:
            found = self._package_component_by_bare_name(name)
        return found

    def has_component(self, name: str) -> bool:
        if self.is_builtin(name):
            return True
        return self.resolve_component(name) is not None

    # ------------------------------------------------------------------
    # Formulas and actions
    # ------------------------------------------------------------------

    def resolve_global_formula(self, name: str) -> Any:
        """Project formula for a bare name, package formula for ``alias/name``."""
        qualified = split_qualified(name)
        if qualified is None:
            return self.files.formulas.get(name)
        alias, child = qualified
        package = self.package(alias)
        return package.formulas.get(child) if package is not None else None

    def has_action(self, name: str, package: str | None = None) -> bool:
        if not name:
            return False
        if self.is_builtin(name):
            return True
        if package and split_qualified(name) is None:
            name = f"{package}/{name}"
        qualified = split_qualified(name)
        if qualified is None:
            return self.files.actions.get(name) is not None
        alias, child = qualified
        pkg = self.package(alias)
        return pkg is not None and pkg.actions.get(child) is not None

    # ------------------------------------------------------------------
    # Component scopes
    # ------------------------------------------------------------------

    def scope(self, component_name: str, component: Component | None = None) -> ComponentScope:
        """Cached scope for references made from inside ``component_name``."""
        cached = self._scopes.get(component_name)
        if cached is None:
            if component is None:
                component = self._project_component(component_name)
            cached = ComponentScope(resolver=self, name=component_name, component=component)
            self._scopes[component_name] = cached
        return cached


@dataclass
class ComponentScope:
    """Lookups as seen from inside one component."""

    resolver: NamespaceResolver
    name: str
    component: Component | None
    _local_formulas: frozenset[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.component is None:
            self._local_formulas = frozenset()
        else:
            self._local_formulas = frozenset(
                name for name, formula in self.component.formulas.items() if formula is not None
            )

    def has_component(self, name: str) -> bool:
        return self.resolver.has_component(name)

    def resolve_component(self, name: str) -> Component | None:
        return self.resolver.resolve_component(name)

    def has_formula(self, name: str) -> bool:
        """Local, then global, then ``alias/name`` package formulas. Local shadows global."""
        if not name:
            return False
        if self.resolver.is_builtin(name) or name in self._local_formulas:
            return True
        return self.resolver.resolve_global_formula(name) is not None

    def resolve_formula(self, name: str) -> Any:
        """Body-bearing model for ``name``: the local formula if present, else the global one."""
        if self.component is not None:
            local = self.component.formulas.get(name)
            if local is not None:
                return local
        return self.resolver.resolve_global_formula(name)

    def has_variable(self, name: str) -> bool:
        return self.component is not None and self.component.variables.get(name) is not None

    def has_event(self, target: Component, event_name: str) -> bool:
        """Whether ``target`` declares the custom event ``event_name``."""
        return target.events.get(event_name) is not None
