"""
Rule-based static analysis for layr projects.

Public API:
    from layr_search.search import find_problems, RuleRunner, Diagnostic
"""

from __future__ import annotations

from .context import RuleContext
from .contextless import ContextlessResult, contextless_evaluate, is_truthy
from .models import Diagnostic, IssueLevel, RuleCategory, SearchOptions
from .reporter import DiagnosticReporter
from .resolver import ComponentScope, NamespaceResolver
from .rules import Rule, get_all_rules, get_rule, rule
from .runner import INTERNAL_RULE_ERROR, RuleRunner, find_problems, iter_batches

__all__ = [
    "INTERNAL_RULE_ERROR",
    "ComponentScope",
    "ContextlessResult",
    "Diagnostic",
    "DiagnosticReporter",
    "IssueLevel",
    "NamespaceResolver",
    "Rule",
    "RuleCategory",
    "RuleContext",
    "RuleRunner",
    "SearchOptions",
    "contextless_evaluate",
    "find_problems",
    "get_all_rules",
    "get_rule",
    "is_truthy",
    "iter_batches",
    "rule",
]
