"""
Pydantic models for search diagnostics.

All models use frozen=True per codebase convention.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

Path = tuple[str | int, ...]

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class IssueLevel(StrEnum):
    ERROR = "error"
    WARNING = "warning"


class RuleCategory(StrEnum):
    ACTIONS = "actions"
    ATTRIBUTES = "attributes"
    COMPONENTS = "components"
    CONTEXTS = "contexts"
    EVENTS = "events"
    FORMULAS = "formulas"
    LOGIC = "logic"
    MISC = "misc"
    VARIABLES = "variables"
    WORKFLOWS = "workflows"


# ---------------------------------------------------------------------------
# Core models
# ---------------------------------------------------------------------------


class Diagnostic(BaseModel):
    """One finding: which rule, how severe, what was found, and where."""

    code: str
    level: IssueLevel
    category: RuleCategory
    payload: dict[str, Any] = Field(default_factory=dict)
    path: Path = ()

    model_config = ConfigDict(frozen=True)

    @property
    def component(self) -> str | None:
        """Name of the project component the path points into, if any."""
        if len(self.path) > 1 and self.path[0] == "components":
            return str(self.path[1])
        return None

    @property
    def dotted_path(self) -> str:
        return ".".join(str(segment) for segment in self.path)


class SearchOptions(BaseModel):
    """Host-side filters for a run. ``None`` means no filtering."""

    levels: list[IssueLevel] | None = None
    rules: list[str] | None = None
    paths_to_visit: list[Path] | None = None

    model_config = ConfigDict(frozen=True)

    def wants_path(self, path: Path) -> bool:
        if not self.paths_to_visit:
            return True
        return any(_has_prefix(path, prefix) for prefix in self.paths_to_visit)


def _has_prefix(path: Path, prefix: Path) -> bool:
    # Segments compare by string form: "0" from a CLI filter matches index 0
    if len(prefix) > len(path):
        return False
    return all(str(a) == str(b) for a, b in zip(path, prefix))
