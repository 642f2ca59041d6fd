"""
Tree walker for formula and action trees.

Every walk is a pre-order traversal over the literal nested structure: a
node is yielded before its children, children in declared field order then
index order. References to other named formulas or workflows (``apply``,
``TriggerWorkflow``, ``Custom``) are never followed. ``None`` entries and
``Invalid*`` models are skipped without descending.

Traversal uses an explicit stack so deeply nested trees cannot hit the
interpreter recursion limit.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

from layr_search.core.ir import (
    API_FORMULA_FIELDS,
    ActionBlock,
    ArgumentOperation,
    Component,
    CustomAction,
    FetchAction,
    HandlerNode,
    InvalidAction,
    InvalidFormula,
    InvalidNode,
    PathOperation,
    SetURLParameterAction,
    SetURLParametersAction,
    SetVariableAction,
    SwitchAction,
    SwitchOperation,
    TextNode,
    TriggerEventAction,
    TriggerWorkflowAction,
    TriggerWorkflowCallbackAction,
)

from .models import Path

Visit = tuple[Any, Path]

# ---------------------------------------------------------------------------
# Formula trees
# ---------------------------------------------------------------------------


def _formula_children(formula: Any, path: Path) -> list[Visit]:
    children: list[Visit] = []
    if isinstance(formula, SwitchOperation):
        for i, case in enumerate(formula.cases):
            if case is None:
                continue
            children.append((case.condition, (*path, "cases", i, "condition")))
            children.append((case.formula, (*path, "cases", i, "formula")))
        children.append((formula.default, (*path, "default")))
    elif isinstance(formula, ArgumentOperation):
        for i, argument in enumerate(formula.arguments):
            if argument is None:
                continue
            children.append((argument.formula, (*path, "arguments", i, "formula")))
    return children


def iter_formula(formula: Any, path: Path) -> Iterator[Visit]:
    """Yield ``(sub_formula, path)`` for every node of a formula tree."""
    stack: list[Visit] = [(formula, path)]
    while stack:
        node, node_path = stack.pop()
        if node is None or isinstance(node, InvalidFormula):
            continue
        yield node, node_path
        stack.extend(reversed(_formula_children(node, node_path)))


def visit_formula(formula: Any, path: Path, callback: Callable[[Any, Path], None]) -> None:
    """Callback form of :func:`iter_formula`."""
    for node, node_path in iter_formula(formula, path):
        callback(node, node_path)


# ---------------------------------------------------------------------------
# Action trees
# ---------------------------------------------------------------------------


def _block_children(block: ActionBlock | None, path: Path) -> list[Visit]:
    if block is None:
        return []
    return [(action, (*path, "actions", j)) for j, action in enumerate(block.actions)]


def _action_children(action: Any, path: Path) -> list[Visit]:
    children: list[Visit] = []
    if isinstance(action, SwitchAction):
        for i, case in enumerate(action.cases):
            if case is None:
                continue
            children.extend(
                (sub, (*path, "cases", i, "actions", j)) for j, sub in enumerate(case.actions)
            )
        children.extend(_block_children(action.default, (*path, "default")))
    elif isinstance(action, FetchAction):
        children.extend(_block_children(action.on_success, (*path, "onSuccess")))
        children.extend(_block_children(action.on_error, (*path, "onError")))
        children.extend(_block_children(action.on_message, (*path, "onMessage")))
    elif isinstance(action, TriggerWorkflowAction):
        for name, callback in action.callbacks.items():
            children.extend(_block_children(callback, (*path, "callbacks", name)))
    elif isinstance(action, CustomAction):
        for name, handler in action.events.items():
            children.extend(_block_children(handler, (*path, "events", name)))
    return children


def iter_actions(action: Any, path: Path) -> Iterator[Visit]:
    """Yield ``(sub_action, path)`` for every action in an action tree."""
    stack: list[Visit] = [(action, path)]
    while stack:
        node, node_path = stack.pop()
        if node is None or isinstance(node, InvalidAction):
            continue
        yield node, node_path
        stack.extend(reversed(_action_children(node, node_path)))


def visit_actions(action: Any, path: Path, callback: Callable[[Any, Path], None]) -> None:
    """Callback form of :func:`iter_actions`."""
    for node, node_path in iter_actions(action, path):
        callback(node, node_path)


def _named_formulas(entries: list[Any], path: Path, key: str) -> Iterator[Visit]:
    for i, entry in enumerate(entries):
        if entry is not None and entry.formula is not None:
            yield entry.formula, (*path, key, i, "formula")


# Actions whose `data` field holds a formula
_DATA_ACTIONS = (
    SetVariableAction,
    TriggerEventAction,
    SwitchAction,
    CustomAction,
    SetURLParameterAction,
    TriggerWorkflowCallbackAction,
)


def iter_action_formulas(action: Any, path: Path) -> Iterator[Visit]:
    """Yield the formula roots embedded directly in one action (not its sub-actions)."""
    if isinstance(action, _DATA_ACTIONS) and action.data is not None:
        yield action.data, (*path, "data")
    if isinstance(action, SwitchAction):
        for i, case in enumerate(action.cases):
            if case is not None and case.condition is not None:
                yield case.condition, (*path, "cases", i, "condition")
    elif isinstance(action, FetchAction):
        yield from _named_formulas(action.inputs, path, "inputs")
    elif isinstance(action, CustomAction):
        yield from _named_formulas(action.arguments, path, "arguments")
    elif isinstance(action, (SetURLParametersAction, TriggerWorkflowAction)):
        yield from _named_formulas(action.parameters, path, "parameters")


def iter_action_tree_formulas(action: Any, path: Path) -> Iterator[Visit]:
    """Formula roots of every action in the tree rooted at ``action``."""
    for sub, sub_path in iter_actions(action, path):
        yield from iter_action_formulas(sub, sub_path)


# ---------------------------------------------------------------------------
# Component attachment points
# ---------------------------------------------------------------------------


def iter_nodes(component: Component, base_path: Path) -> Iterator[tuple[str, Any, Path]]:
    """Yield ``(node_id, node, path)`` for every well-formed node, in insertion order."""
    for node_id, node in component.nodes.items():
        if node is None or isinstance(node, InvalidNode):
            continue
        yield node_id, node, (*base_path, "nodes", node_id)


def _iter_node_action_roots(node: Any, node_path: Path) -> Iterator[Visit]:
    if not isinstance(node, HandlerNode):
        return
    for event_name, handler in node.events.items():
        if handler is None:
            continue
        for j, action in enumerate(handler.actions):
            yield action, (*node_path, "events", event_name, "actions", j)


def _lifecycle_blocks(component: Component) -> list[tuple[str, ActionBlock | None]]:
    return [("onLoad", component.on_load), ("onAttributeChange", component.on_attribute_change)]


def iter_component_actions(component: Component, base_path: Path) -> Iterator[Visit]:
    """
    Yield every action root of a component with its path.

    Order: node event handlers (node insertion order), workflows,
    ``onLoad``, ``onAttributeChange``. Use :func:`iter_actions` on each root
    to reach nested actions.
    """
    for _, node, node_path in iter_nodes(component, base_path):
        yield from _iter_node_action_roots(node, node_path)
    for name, workflow in component.workflows.items():
        if workflow is None:
            continue
        for i, action in enumerate(workflow.actions):
            yield action, (*base_path, "workflows", name, "actions", i)
    for key, block in _lifecycle_blocks(component):
        for action, action_path in _block_children(block, (*base_path, key)):
            yield action, action_path


def _iter_node_formula_roots(node: Any, node_path: Path) -> Iterator[Visit]:
    if isinstance(node, HandlerNode):
        for name, value in node.attrs.items():
            yield value, (*node_path, "attrs", name)
        for name, value in node.style.items():
            yield value, (*node_path, "style", name)
    if isinstance(node, TextNode):
        yield node.value, (*node_path, "value")
    yield node.condition, (*node_path, "condition")
    yield node.repeat, (*node_path, "repeat")
    yield node.repeat_key, (*node_path, "repeatKey")
    for action, action_path in _iter_node_action_roots(node, node_path):
        yield from iter_action_tree_formulas(action, action_path)


def iter_formula_roots(component: Component, base_path: Path) -> Iterator[Visit]:
    """
    Yield every formula root in a component, in a fixed order.

    Formula bodies, variable initial values, then per node its attributes,
    styles, text value, condition, repeat, repeat key and the formulas inside
    its event handlers; then workflow actions, ``onLoad``,
    ``onAttributeChange`` and API request fields. Roots that are absent or
    not formulas are skipped.
    """
    for root, path in _iter_formula_roots(component, base_path):
        if root is not None and not isinstance(root, InvalidFormula):
            yield root, path


def _iter_formula_roots(component: Component, base_path: Path) -> Iterator[Visit]:
    for name, formula in component.formulas.items():
        if formula is not None:
            yield formula.formula, (*base_path, "formulas", name, "formula")
    for name, variable in component.variables.items():
        if variable is not None:
            yield variable.initial_value, (*base_path, "variables", name, "initialValue")
    for _, node, node_path in iter_nodes(component, base_path):
        yield from _iter_node_formula_roots(node, node_path)
    for name, workflow in component.workflows.items():
        if workflow is None:
            continue
        for i, action in enumerate(workflow.actions):
            action_path = (*base_path, "workflows", name, "actions", i)
            yield from iter_action_tree_formulas(action, action_path)
    for key, block in _lifecycle_blocks(component):
        for action, action_path in _block_children(block, (*base_path, key)):
            yield from iter_action_tree_formulas(action, action_path)
    for name, api in component.apis.items():
        if api is None:
            continue
        api_path = (*base_path, "apis", name)
        for attr, key in API_FORMULA_FIELDS:
            yield getattr(api, attr), (*api_path, key)
        for key, entries in (("headers", api.headers), ("queryParams", api.query_params)):
            for entry_name, entry in entries.items():
                if entry is not None:
                    yield entry.formula, (*api_path, key, entry_name, "formula")


def iter_component_formulas(component: Component, base_path: Path) -> Iterator[Visit]:
    """Every formula node in a component: :func:`iter_formula` over each root."""
    for root, path in iter_formula_roots(component, base_path):
        yield from iter_formula(root, path)


def iter_path_references(
    component: Component, base_path: Path, namespace: str
) -> Iterator[tuple[str, PathOperation, Path]]:
    """
    Yield ``(name, formula, path)`` for every ``<namespace>.<name>`` path
    formula in the component (e.g. ``Variables.count``).
    """
    for formula, path in iter_component_formulas(component, base_path):
        if isinstance(formula, PathOperation) and formula.root == namespace:
            target = formula.target
            if isinstance(target, str):
                yield target, formula, path
