"""Tests for the formula/action tree walker."""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter

from layr_search.core.ir import Action, Component, Formula, ProjectFiles
from layr_search.search.walker import (
    iter_action_formulas,
    iter_actions,
    iter_component_actions,
    iter_formula,
    iter_formula_roots,
    iter_path_references,
    visit_actions,
    visit_formula,
)

from .conftest import (
    and_,
    array,
    component_node,
    custom_action,
    element,
    follow,
    formula_ref,
    function,
    handler,
    make_component,
    project_dict,
    set_variable,
    switch,
    switch_action,
    text,
    value,
    variable_ref,
)

_formula = TypeAdapter(Formula)
_action = TypeAdapter(Action)


def _paths(pairs: Any) -> list[tuple[str | int, ...]]:
    return [path for _, path in pairs]


# =============================================================================
# Formula trees
# =============================================================================


class TestIterFormula:
    def test_preorder_over_arguments(self) -> None:
        tree = _formula.validate_python(function("@toddle/concat", value("a"), array(value(1))))
        paths = _paths(iter_formula(tree, ("root",)))
        assert paths == [
            ("root",),
            ("root", "arguments", 0, "formula"),
            ("root", "arguments", 1, "formula"),
            ("root", "arguments", 1, "formula", "arguments", 0, "formula"),
        ]

    def test_switch_cases_then_default(self) -> None:
        tree = _formula.validate_python(
            switch([(value(True), value("a")), (value(False), value("b"))], default=value("c"))
        )
        paths = _paths(iter_formula(tree, ()))
        assert paths == [
            (),
            ("cases", 0, "condition"),
            ("cases", 0, "formula"),
            ("cases", 1, "condition"),
            ("cases", 1, "formula"),
            ("default",),
        ]

    def test_skips_invalid_and_missing(self) -> None:
        raw = {
            "type": "and",
            "arguments": [{"formula": {"no_type": 1}}, None, {"formula": None}, {"formula": value(1)}],
        }
        tree = _formula.validate_python(raw)
        paths = _paths(iter_formula(tree, ()))
        assert paths == [(), ("arguments", 3, "formula")]

    def test_none_root_yields_nothing(self) -> None:
        assert list(iter_formula(None, ("x",))) == []

    def test_visit_formula_matches_iterator(self) -> None:
        tree = _formula.validate_python(and_(value(1), formula_ref("x")))
        seen: list[tuple[str | int, ...]] = []
        visit_formula(tree, (), lambda node, path: seen.append(path))
        assert seen == _paths(iter_formula(tree, ()))

    def test_deep_tree_does_not_recurse(self) -> None:
        # Built bottom-up from model instances so validation stays shallow
        tree = _formula.validate_python(value(0))
        for _ in range(3000):
            tree = _formula.validate_python({"type": "array", "arguments": [{"formula": tree}]})
        assert sum(1 for _ in iter_formula(tree, ())) == 3001


# =============================================================================
# Action trees
# =============================================================================


class TestIterActions:
    def test_switch_cases_then_default(self) -> None:
        tree = _action.validate_python(
            switch_action(
                [(value(True), [set_variable("a"), set_variable("b")])],
                default=[set_variable("c")],
            )
        )
        assert _paths(iter_actions(tree, ())) == [
            (),
            ("cases", 0, "actions", 0),
            ("cases", 0, "actions", 1),
            ("default", "actions", 0),
        ]

    def test_fetch_callbacks_in_order(self) -> None:
        tree = _action.validate_python(
            {
                "type": "Fetch",
                "name": "load",
                "onMessage": {"actions": [set_variable("m")]},
                "onError": {"actions": [set_variable("e")]},
                "onSuccess": {"actions": [set_variable("s")]},
            }
        )
        assert _paths(iter_actions(tree, ())) == [
            (),
            ("onSuccess", "actions", 0),
            ("onError", "actions", 0),
            ("onMessage", "actions", 0),
        ]

    def test_trigger_workflow_and_custom_events(self) -> None:
        tree = _action.validate_python(
            {
                "type": "TriggerWorkflow",
                "name": "save",
                "callbacks": {
                    "done": {
                        "actions": [
                            custom_action("notify", events={"ok": {"actions": [set_variable("x")]}})
                        ]
                    }
                },
            }
        )
        assert _paths(iter_actions(tree, ())) == [
            (),
            ("callbacks", "done", "actions", 0),
            ("callbacks", "done", "actions", 0, "events", "ok", "actions", 0),
        ]

    def test_legacy_custom_and_invalid_actions(self) -> None:
        tree = _action.validate_python(
            switch_action([(value(True), [{"name": "legacy"}, {"foo": "bar"}, None])])
        )
        kinds = [type(node).__name__ for node, _ in iter_actions(tree, ())]
        assert kinds == ["SwitchAction", "CustomAction"]

    def test_visit_actions_matches_iterator(self) -> None:
        tree = _action.validate_python(switch_action([(value(1), [set_variable("a")])]))
        seen: list[tuple[str | int, ...]] = []
        visit_actions(tree, (), lambda node, path: seen.append(path))
        assert seen == _paths(iter_actions(tree, ()))

    def test_action_formulas(self) -> None:
        tree = _action.validate_python(
            custom_action(
                "go",
                data=value(1),
                arguments=[{"name": "url", "formula": value("/")}],
            )
        )
        assert _paths(iter_action_formulas(tree, ("a",))) == [
            ("a", "data"),
            ("a", "arguments", 0, "formula"),
        ]


# =============================================================================
# Component attachment points
# =============================================================================


def _component_raw() -> dict[str, Any]:
    return make_component(
        "home",
        nodes={
            "root": element(
                attrs={"title": formula_ref("title"), "static": "plain"},
                style={"color": value("red")},
                condition=value(True),
                events={"click": handler(set_variable("count", variable_ref("count")))},
                children=["label", "missing-child"],
            ),
            "label": text(formula_ref("label")),
            "card": component_node("card", repeat=array(value(1)), repeatKey=value("k")),
            "broken": {"type": "unknown"},
        },
        formulas={"title": {"name": "title", "formula": value("Hi")}},
        variables={"count": {"initialValue": value(0)}},
        workflows={"reset": {"name": "reset", "actions": [set_variable("count", value(0))]}},
        onLoad={"actions": [custom_action("@toddle/console", data=value("loaded"))]},
        apis={
            "load": {
                "name": "load",
                "url": value("/api"),
                "headers": {"auth": {"formula": variable_ref("token")}},
            }
        },
    )


class TestComponentWalks:
    def test_formula_roots_order(self) -> None:
        raw = _component_raw()
        component = Component.model_validate(raw)
        roots = _paths(iter_formula_roots(component, ("components", "home")))
        base = ("components", "home")
        assert roots == [
            (*base, "formulas", "title", "formula"),
            (*base, "variables", "count", "initialValue"),
            (*base, "nodes", "root", "attrs", "title"),
            (*base, "nodes", "root", "style", "color"),
            (*base, "nodes", "root", "condition"),
            (*base, "nodes", "root", "events", "click", "actions", 0, "data"),
            (*base, "nodes", "label", "value"),
            (*base, "nodes", "card", "repeat"),
            (*base, "nodes", "card", "repeatKey"),
            (*base, "workflows", "reset", "actions", 0, "data"),
            (*base, "onLoad", "actions", 0, "data"),
            (*base, "apis", "load", "url"),
            (*base, "apis", "load", "headers", "auth", "formula"),
        ]

    def test_formula_root_paths_land_on_formulas(self) -> None:
        raw = _component_raw()
        files = project_dict(components={"home": raw})
        component = Component.model_validate(raw)
        for _, path in iter_formula_roots(component, ("components", "home")):
            target = follow(files, path)
            assert isinstance(target, dict) and "type" in target, path

    def test_component_actions(self) -> None:
        component = Component.model_validate(_component_raw())
        base = ("components", "home")
        assert _paths(iter_component_actions(component, base)) == [
            (*base, "nodes", "root", "events", "click", "actions", 0),
            (*base, "workflows", "reset", "actions", 0),
            (*base, "onLoad", "actions", 0),
        ]

    def test_path_references(self) -> None:
        component = Component.model_validate(_component_raw())
        refs = [name for name, _, _ in iter_path_references(component, (), "Variables")]
        assert refs == ["count", "token"]

    def test_project_with_dangling_children_loads_and_walks(self) -> None:
        files = ProjectFiles.model_validate(project_dict(components={"home": _component_raw()}))
        component = files.components["home"]
        assert component is not None
        assert list(iter_formula_roots(component, ()))
