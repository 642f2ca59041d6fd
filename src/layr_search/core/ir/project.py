"""
Project-level models: the ``files`` bag and installed packages.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .base import Entry, IRModel
from .components import Component
from .formulas import Formula


class ProjectFormula(IRModel):
    """Project-global (or package) formula addressed as ``Formulas.<name>``."""

    name: str = ""
    arguments: list[Any] = Field(default_factory=list)
    formula: Formula | None = None
    exported: bool | None = None


class ProjectAction(IRModel):
    """Project-global (or package) custom action, invoked by ``Custom`` actions."""

    name: str = ""
    arguments: list[Any] = Field(default_factory=list)
    events: dict[str, Any] = Field(default_factory=dict)
    exported: bool | None = None


class PackageManifest(IRModel):
    name: str = ""
    commit: str | None = None


class InstalledPackage(IRModel):
    """
    A package imported into the project.

    Its key in ``ProjectFiles.packages`` is the alias used in qualified
    references (``alias/name``).
    """

    manifest: PackageManifest = Field(default_factory=PackageManifest)
    components: dict[str, Entry[Component]] = Field(default_factory=dict)
    formulas: dict[str, Entry[ProjectFormula]] = Field(default_factory=dict)
    actions: dict[str, Entry[ProjectAction]] = Field(default_factory=dict)


class ProjectFiles(BaseModel):
    """
    Immutable snapshot of a project's ``files``.

    The four top-level collections must be mappings (``null`` reads as
    empty); anything else is a load error. Entries that do not validate are
    kept as ``None`` and every consumer skips them.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    components: dict[str, Entry[Component]] = Field(default_factory=dict)
    formulas: dict[str, Entry[ProjectFormula]] = Field(default_factory=dict)
    actions: dict[str, Entry[ProjectAction]] = Field(default_factory=dict)
    packages: dict[str, Entry[InstalledPackage]] = Field(default_factory=dict)

    @field_validator("components", "formulas", "actions", "packages", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    def iter_components(self) -> list[tuple[str, Component]]:
        """Project components in declaration order, skipping empty entries."""
        return [(name, comp) for name, comp in self.components.items() if comp is not None]

    def iter_packages(self) -> list[tuple[str, InstalledPackage]]:
        return [(alias, pkg) for alias, pkg in self.packages.items() if pkg is not None]
