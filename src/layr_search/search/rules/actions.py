"""
Action reference rules.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from layr_search.core.ir import CustomAction
from layr_search.search.models import IssueLevel, RuleCategory
from layr_search.search.walker import iter_actions, iter_component_actions

from .base import Report, rule

if TYPE_CHECKING:
    from layr_search.search.context import RuleContext


@rule("unknown-action", level=IssueLevel.ERROR, category=RuleCategory.ACTIONS)
def unknown_action(report: Report, ctx: RuleContext) -> None:
    """Custom actions naming no project, package or built-in action."""
    resolver = ctx.resolver
    for name, component in ctx.components():
        for root, root_path in iter_component_actions(component, ("components", name)):
            for action, path in iter_actions(root, root_path):
                if not isinstance(action, CustomAction) or not action.name:
                    continue
                if resolver.has_action(action.name, action.package):
                    continue
                action_name = action.name
                if action.package and "/" not in action_name:
                    action_name = f"{action.package}/{action_name}"
                report({"actionName": action_name}, path)
