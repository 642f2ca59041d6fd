"""
Variable rules: unknown references and unused declarations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from layr_search.core.ir import SetVariableAction
from layr_search.search.models import IssueLevel, RuleCategory
from layr_search.search.walker import iter_actions, iter_component_actions, iter_path_references

from .base import Report, rule

if TYPE_CHECKING:
    from layr_search.search.context import RuleContext

VARIABLES_NAMESPACE = "Variables"


@rule("unknown-variable", level=IssueLevel.ERROR, category=RuleCategory.VARIABLES)
def unknown_variable(report: Report, ctx: RuleContext) -> None:
    """Reads (``Variables.<name>``) and writes (``SetVariable``) of undeclared variables."""
    for name, component in ctx.components():
        base = ("components", name)
        scope = ctx.scope(name)

        for variable_name, _, path in iter_path_references(component, base, VARIABLES_NAMESPACE):
            if not scope.has_variable(variable_name):
                report({"variableName": variable_name}, path)

        for root, root_path in iter_component_actions(component, base):
            for action, path in iter_actions(root, root_path):
                if not isinstance(action, SetVariableAction) or not action.name:
                    continue
                if not scope.has_variable(action.name):
                    report({"variableName": action.name}, (*path, "name"))


@rule("no-reference-variable", level=IssueLevel.WARNING, category=RuleCategory.VARIABLES)
def no_reference_variable(report: Report, ctx: RuleContext) -> None:
    """Declared variables never read through ``Variables.<name>``."""
    for name, component in ctx.components():
        declared = [v for v, variable in component.variables.items() if variable is not None]
        if not declared:
            continue
        base = ("components", name)
        read = {v for v, _, _ in iter_path_references(component, base, VARIABLES_NAMESPACE)}
        for variable_name in declared:
            if variable_name not in read:
                report({"variableName": variable_name}, (*base, "variables", variable_name))
