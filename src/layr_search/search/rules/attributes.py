"""
Attribute rules.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from layr_search.search.models import IssueLevel, RuleCategory
from layr_search.search.walker import iter_path_references

from .base import Report, rule

if TYPE_CHECKING:
    from layr_search.search.context import RuleContext


@rule("no-reference-attribute", level=IssueLevel.WARNING, category=RuleCategory.ATTRIBUTES)
def no_reference_attribute(report: Report, ctx: RuleContext) -> None:
    """Declared attributes never read through ``Attributes.<name>``."""
    for name, component in ctx.components():
        declared = [a for a, attribute in component.attributes.items() if attribute is not None]
        if not declared:
            continue
        base = ("components", name)
        read = {a for a, _, _ in iter_path_references(component, base, "Attributes")}
        for attribute_name in declared:
            if attribute_name not in read:
                report({"attributeName": attribute_name}, (*base, "attributes", attribute_name))
