"""
Component reference rules.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from layr_search.core.ir import ComponentNode
from layr_search.search.models import IssueLevel, RuleCategory
from layr_search.search.walker import iter_nodes

from .base import Report, rule

if TYPE_CHECKING:
    from layr_search.search.context import RuleContext


@rule("unknown-component", level=IssueLevel.ERROR, category=RuleCategory.COMPONENTS)
def unknown_component(report: Report, ctx: RuleContext) -> None:
    """Component nodes and context bindings naming a component that does not exist."""
    resolver = ctx.resolver
    for name, component in ctx.components():
        base = ("components", name)
        for _, node, path in iter_nodes(component, base):
            if not isinstance(node, ComponentNode) or not node.name:
                continue
            referenced = node.qualified_name
            if not resolver.has_component(referenced):
                report({"componentName": referenced}, path)

        for context_name, binding in component.contexts.items():
            if binding is None:
                continue
            referenced = binding.qualified_name
            if referenced and not resolver.has_component(referenced):
                report({"componentName": referenced}, (*base, "contexts", context_name))


def referenced_component_names(ctx: RuleContext) -> frozenset[str]:
    """Names used by any component node or context binding in the project."""

    def collect() -> frozenset[str]:
        names: set[str] = set()
        for name, component in ctx.components():
            for _, node, _ in iter_nodes(component, ("components", name)):
                if isinstance(node, ComponentNode) and node.name:
                    names.add(node.qualified_name)
            for binding in component.contexts.values():
                if binding is not None and binding.qualified_name:
                    names.add(binding.qualified_name)
        return frozenset(names)

    return ctx.memo("referenced-components", collect)


@rule("no-reference-component", level=IssueLevel.WARNING, category=RuleCategory.COMPONENTS)
def no_reference_component(report: Report, ctx: RuleContext) -> None:
    """Project components that nothing references.

    Pages (components with a route) and exported components are entry
    points and never reported.
    """
    referenced = referenced_component_names(ctx)
    for name, component in ctx.components():
        if component.is_page or component.exported:
            continue
        if name not in referenced:
            report({"componentName": name}, ("components", name))
