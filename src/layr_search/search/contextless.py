"""
Contextless formula evaluation.

Computes a formula's value without runtime data, where that is possible:
literals and constructors over literals are static, ``and``/``or``
short-circuit on static operands, anything reading runtime state (paths,
function calls, switches) is not.

With an expander, argument-less ``apply`` calls and ``Formulas.<name>``
paths are replaced by the referenced formula body. Expansion keeps a
visited-name set and a depth limit; a repeated name or an exhausted depth
makes the result "not static" rather than raising.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from layr_search.core.config import DEFAULT_MAX_EXPANSION_DEPTH
from layr_search.core.ir import (
    AndOperation,
    ApplyOperation,
    ArrayOperation,
    ObjectOperation,
    OrOperation,
    PathOperation,
    RecordOperation,
    ValueOperation,
)

if TYPE_CHECKING:
    from .resolver import ComponentScope


@dataclass(frozen=True)
class ContextlessResult:
    is_static: bool
    result: Any = None


NOT_STATIC = ContextlessResult(is_static=False)


@dataclass(frozen=True)
class FormulaExpander:
    """Looks up the body of a named formula for expansion."""

    lookup: Callable[[str], Any]
    max_depth: int = DEFAULT_MAX_EXPANSION_DEPTH


def make_expander(
    scope: ComponentScope, max_depth: int = DEFAULT_MAX_EXPANSION_DEPTH
) -> FormulaExpander:
    def lookup(name: str) -> Any:
        declared = scope.resolve_formula(name)
        return getattr(declared, "formula", None)

    return FormulaExpander(lookup=lookup, max_depth=max_depth)


def is_truthy(value: Any) -> bool:
    """Truthiness as the runtime sees it: empty lists and objects are truthy."""
    if value is None or value is False:
        return False
    if isinstance(value, bool):
        return True
    if isinstance(value, (int, float)):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value != ""
    return True


def contextless_evaluate(formula: Any, expand: FormulaExpander | None = None) -> ContextlessResult:
    return _evaluate(formula, expand, frozenset(), 0)


def _expand(
    name: str, expand: FormulaExpander, visited: frozenset[str], depth: int
) -> ContextlessResult:
    if name in visited or depth >= expand.max_depth:
        return NOT_STATIC
    body = expand.lookup(name)
    if body is None:
        return NOT_STATIC
    return _evaluate(body, expand, visited | {name}, depth + 1)


def _evaluate(
    formula: Any, expand: FormulaExpander | None, visited: frozenset[str], depth: int
) -> ContextlessResult:
    if isinstance(formula, ValueOperation):
        return ContextlessResult(is_static=True, result=formula.value)

    if isinstance(formula, ArrayOperation):
        items: list[Any] = []
        for argument in formula.arguments:
            if argument is None:
                continue
            item = _evaluate(argument.formula, expand, visited, depth)
            if not item.is_static:
                return NOT_STATIC
            items.append(item.result)
        return ContextlessResult(is_static=True, result=items)

    if isinstance(formula, (ObjectOperation, RecordOperation)):
        entries: dict[str, Any] = {}
        for argument in formula.arguments:
            if argument is None:
                continue
            entry = _evaluate(argument.formula, expand, visited, depth)
            if not entry.is_static:
                return NOT_STATIC
            entries[argument.name or ""] = entry.result
        return ContextlessResult(is_static=True, result=entries)

    if isinstance(formula, (AndOperation, OrOperation)):
        # and: first falsy operand decides; or: first truthy operand decides
        deciding = isinstance(formula, OrOperation)
        for argument in formula.arguments:
            if argument is None:
                continue
            operand = _evaluate(argument.formula, expand, visited, depth)
            if not operand.is_static:
                return NOT_STATIC
            if is_truthy(operand.result) is deciding:
                return ContextlessResult(is_static=True, result=deciding)
        return ContextlessResult(is_static=True, result=not deciding)

    if expand is not None:
        if isinstance(formula, ApplyOperation) and not formula.arguments and formula.name:
            return _expand(formula.name, expand, visited, depth)
        if (
            isinstance(formula, PathOperation)
            and formula.root == "Formulas"
            and len(formula.path) == 2
            and isinstance(formula.target, str)
        ):
            return _expand(formula.target, expand, visited, depth)

    # path, function, switch, apply with arguments, and anything malformed
    return NOT_STATIC
