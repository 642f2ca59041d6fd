"""Shared builders for search tests."""

from __future__ import annotations

from typing import Any

import pytest

from layr_search.core.config import SearchConfig
from layr_search.core.ir import ProjectFiles
from layr_search.search.models import Diagnostic
from layr_search.search.rules import Rule
from layr_search.search.runner import RuleRunner

# ---------------------------------------------------------------------------
# Formula helpers
# ---------------------------------------------------------------------------


def value(v: Any) -> dict[str, Any]:
    return {"type": "value", "value": v}


def path_ref(*segments: str | int) -> dict[str, Any]:
    return {"type": "path", "path": list(segments)}


def formula_ref(name: str) -> dict[str, Any]:
    return path_ref("Formulas", name)


def variable_ref(name: str) -> dict[str, Any]:
    return path_ref("Variables", name)


def attribute_ref(name: str) -> dict[str, Any]:
    return path_ref("Attributes", name)


def _args(formulas: tuple[Any, ...]) -> list[dict[str, Any]]:
    return [{"name": str(i), "formula": f} for i, f in enumerate(formulas)]


def function(name: str, *args: Any) -> dict[str, Any]:
    return {"type": "function", "name": name, "arguments": _args(args)}


def apply(name: str, *args: Any) -> dict[str, Any]:
    return {"type": "apply", "name": name, "arguments": _args(args)}


def and_(*args: Any) -> dict[str, Any]:
    return {"type": "and", "arguments": _args(args)}


def or_(*args: Any) -> dict[str, Any]:
    return {"type": "or", "arguments": _args(args)}


def array(*args: Any) -> dict[str, Any]:
    return {"type": "array", "arguments": _args(args)}


def obj(**entries: Any) -> dict[str, Any]:
    return {"type": "object", "arguments": [{"name": k, "formula": f} for k, f in entries.items()]}


def switch(cases: list[tuple[Any, Any]], default: Any = None) -> dict[str, Any]:
    return {
        "type": "switch",
        "cases": [{"condition": c, "formula": f} for c, f in cases],
        "default": default,
    }


# ---------------------------------------------------------------------------
# Action helpers
# ---------------------------------------------------------------------------


def set_variable(name: str, data: Any = None) -> dict[str, Any]:
    return {"type": "SetVariable", "name": name, "data": data}


def custom_action(name: str, **fields: Any) -> dict[str, Any]:
    return {"type": "Custom", "name": name, **fields}


def switch_action(cases: list[tuple[Any, list[Any]]], default: list[Any] | None = None) -> dict[str, Any]:
    return {
        "type": "Switch",
        "cases": [{"condition": c, "actions": actions} for c, actions in cases],
        "default": {"actions": default or []},
    }


def handler(*actions: Any) -> dict[str, Any]:
    return {"trigger": "click", "actions": list(actions)}


# ---------------------------------------------------------------------------
# Node and component helpers
# ---------------------------------------------------------------------------


def element(**fields: Any) -> dict[str, Any]:
    return {"type": "element", "tag": "div", "attrs": {}, "events": {}, "children": [], **fields}


def component_node(name: str, **fields: Any) -> dict[str, Any]:
    return {"type": "component", "name": name, "attrs": {}, "events": {}, "children": [], **fields}


def text(v: Any) -> dict[str, Any]:
    return {"type": "text", "value": v}


def make_component(name: str, nodes: dict[str, Any] | None = None, **fields: Any) -> dict[str, Any]:
    return {"name": name, "nodes": nodes or {"root": element()}, **fields}


def make_package(
    name: str,
    components: dict[str, Any] | None = None,
    formulas: dict[str, Any] | None = None,
    actions: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return {
        "manifest": {"name": name, "commit": "abc123"},
        "components": components or {},
        "formulas": formulas or {},
        "actions": actions or {},
    }


def project_dict(
    components: dict[str, Any] | None = None,
    formulas: dict[str, Any] | None = None,
    actions: dict[str, Any] | None = None,
    packages: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return {
        "components": components or {},
        "formulas": formulas or {},
        "actions": actions or {},
        "packages": packages or {},
    }


def make_files(**kwargs: Any) -> ProjectFiles:
    return ProjectFiles.model_validate(project_dict(**kwargs))


# ---------------------------------------------------------------------------
# Running
# ---------------------------------------------------------------------------


def run_rule(rule: Rule, files: ProjectFiles, config: SearchConfig | None = None) -> list[Diagnostic]:
    return RuleRunner([rule], config).run(files)


def follow(data: Any, path: tuple[str | int, ...]) -> Any:
    """Follow a diagnostic path through raw project JSON (rooted at ``files``)."""
    current = data
    for segment in path:
        current = current[segment]
    return current


@pytest.fixture
def empty_files() -> ProjectFiles:
    return make_files()
