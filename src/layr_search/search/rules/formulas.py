"""
Formula reference rules.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from layr_search.search.models import IssueLevel, RuleCategory
from layr_search.search.walker import iter_path_references

from .base import Report, rule

if TYPE_CHECKING:
    from layr_search.search.context import RuleContext

FORMULAS_NAMESPACE = "Formulas"


@rule("unknown-formula", level=IssueLevel.ERROR, category=RuleCategory.FORMULAS)
def unknown_formula(report: Report, ctx: RuleContext) -> None:
    """``Formulas.<name>`` references that resolve to no local, global or package formula."""
    for name, component in ctx.components():
        scope = ctx.scope(name)
        for formula_name, _, path in iter_path_references(
            component, ("components", name), FORMULAS_NAMESPACE
        ):
            if not scope.has_formula(formula_name):
                report({"formulaName": formula_name}, path)
