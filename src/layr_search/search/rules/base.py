"""
Base class and decorator for search rules.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from layr_search.search.models import IssueLevel, RuleCategory

if TYPE_CHECKING:
    from layr_search.search.context import RuleContext

Report = Callable[[dict[str, Any], Sequence[str | int]], None]
VisitFunc = Callable[[Report, "RuleContext"], None]


@dataclass(frozen=True)
class RuleMeta:
    code: str
    level: IssueLevel
    category: RuleCategory
    description: str = ""


class Rule(ABC):
    """Abstract base for all rules.

    ``visit`` receives the report sink and the read-only context and may
    report any number of findings. Missing references are ordinary input;
    a rule only raises on data it cannot make sense of, and the runner
    turns that into an ``internal-rule-error`` diagnostic.
    """

    @property
    @abstractmethod
    def meta(self) -> RuleMeta: ...

    @abstractmethod
    def visit(self, report: Report, context: RuleContext) -> None: ...

    @property
    def code(self) -> str:
        return self.meta.code

    @property
    def level(self) -> IssueLevel:
        return self.meta.level

    @property
    def category(self) -> RuleCategory:
        return self.meta.category

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.code}>"


class FunctionRule(Rule):
    """Rule backed by a plain ``visit(report, context)`` function."""

    def __init__(self, func: VisitFunc, meta: RuleMeta) -> None:
        self._func = func
        self._meta = meta
        self.__doc__ = func.__doc__

    @property
    def meta(self) -> RuleMeta:
        return self._meta

    def visit(self, report: Report, context: RuleContext) -> None:
        self._func(report, context)


def rule(
    code: str,
    *,
    level: IssueLevel | str,
    category: RuleCategory | str,
) -> Callable[[VisitFunc], FunctionRule]:
    """Mark a visit function as a rule with metadata."""

    def decorator(func: VisitFunc) -> FunctionRule:
        summary = (func.__doc__ or "").strip().splitlines()
        meta = RuleMeta(
            code=code,
            level=IssueLevel(level),
            category=RuleCategory(category),
            description=summary[0] if summary else "",
        )
        return FunctionRule(func, meta)

    return decorator
