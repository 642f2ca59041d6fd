"""
Event handler rules.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from layr_search.core.ir import ComponentNode, ElementNode
from layr_search.search.models import IssueLevel, RuleCategory
from layr_search.search.walker import iter_nodes

from .base import Report, rule

if TYPE_CHECKING:
    from layr_search.search.context import RuleContext


@rule("unknown-event", level=IssueLevel.ERROR, category=RuleCategory.EVENTS)
def unknown_event(report: Report, ctx: RuleContext) -> None:
    """Handlers on component nodes for events the target component does not declare."""
    resolver = ctx.resolver
    for name, component in ctx.components():
        for _, node, path in iter_nodes(component, ("components", name)):
            # Elements accept the platform's native events; never checked
            if isinstance(node, ElementNode):
                continue
            if not isinstance(node, ComponentNode) or not node.events:
                continue

            referenced = node.qualified_name
            target = resolver.resolve_component(referenced)
            # Unresolved targets are reported by unknown-component
            if target is None:
                continue

            scope = ctx.scope(name)
            for event_name in node.events:
                if not scope.has_event(target, event_name):
                    report(
                        {"eventName": event_name, "componentName": referenced},
                        (*path, "events", event_name),
                    )
