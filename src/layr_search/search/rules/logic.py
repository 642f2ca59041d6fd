"""
Static condition rules.

A node condition whose value can be computed without runtime data either
always shows the node (the condition is unnecessary) or never does (the
node is dead).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from layr_search.search.contextless import contextless_evaluate, is_truthy
from layr_search.search.models import IssueLevel, Path, RuleCategory
from layr_search.search.walker import iter_nodes

from .base import Report, rule

if TYPE_CHECKING:
    from layr_search.search.context import RuleContext


@dataclass(frozen=True)
class StaticCondition:
    node_id: str
    path: Path
    value: Any

    @property
    def is_truthy(self) -> bool:
        return is_truthy(self.value)


def static_conditions(ctx: RuleContext) -> list[StaticCondition]:
    """Node conditions across the project that evaluate statically."""

    def collect() -> list[StaticCondition]:
        found: list[StaticCondition] = []
        for name, component in ctx.components():
            expander = ctx.expander(name)
            for node_id, node, path in iter_nodes(component, ("components", name)):
                if node.condition is None:
                    continue
                result = contextless_evaluate(node.condition, expander)
                if result.is_static:
                    found.append(StaticCondition(node_id, (*path, "condition"), result.result))
        return found

    return ctx.memo("static-conditions", collect)


@rule("no-static-node-condition", level=IssueLevel.WARNING, category=RuleCategory.LOGIC)
def no_static_node_condition(report: Report, ctx: RuleContext) -> None:
    """Node conditions whose value is known without running the project."""
    for condition in static_conditions(ctx):
        report({"isTruthy": condition.is_truthy, "value": condition.value}, condition.path)


@rule("no-unnecessary-condition-truthy", level=IssueLevel.WARNING, category=RuleCategory.LOGIC)
def no_unnecessary_condition_truthy(report: Report, ctx: RuleContext) -> None:
    """Node conditions that are always ``true``."""
    for condition in static_conditions(ctx):
        if condition.value is True:
            report({"nodeId": condition.node_id}, condition.path)


@rule("no-unnecessary-condition-falsy", level=IssueLevel.WARNING, category=RuleCategory.LOGIC)
def no_unnecessary_condition_falsy(report: Report, ctx: RuleContext) -> None:
    """Node conditions that are always falsy; the node never renders."""
    for condition in static_conditions(ctx):
        if not condition.is_truthy:
            report({"nodeId": condition.node_id}, condition.path)
