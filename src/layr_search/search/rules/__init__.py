"""
Rule registry.
"""

from __future__ import annotations

from .base import FunctionRule, Report, Rule, RuleMeta, rule

__all__ = [
    "FunctionRule",
    "Report",
    "Rule",
    "RuleMeta",
    "get_all_rules",
    "get_rule",
    "rule",
]


def get_all_rules() -> list[Rule]:
    """Return every registered rule in run order."""
    from .actions import unknown_action
    from .attributes import no_reference_attribute
    from .components import no_reference_component, unknown_component
    from .events import unknown_event
    from .formulas import unknown_formula
    from .logic import (
        no_static_node_condition,
        no_unnecessary_condition_falsy,
        no_unnecessary_condition_truthy,
    )
    from .variables import no_reference_variable, unknown_variable

    return [
        unknown_component,
        unknown_formula,
        unknown_event,
        unknown_action,
        unknown_variable,
        no_reference_component,
        no_reference_variable,
        no_reference_attribute,
        no_static_node_condition,
        no_unnecessary_condition_truthy,
        no_unnecessary_condition_falsy,
    ]


def get_rule(code: str) -> Rule | None:
    """Return a single rule by its code."""
    for candidate in get_all_rules():
        if candidate.code == code:
            return candidate
    return None
