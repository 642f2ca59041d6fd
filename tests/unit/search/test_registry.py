"""Tests for rule metadata and the registry."""

from __future__ import annotations

import pytest

from layr_search.search.models import IssueLevel, RuleCategory
from layr_search.search.rules import FunctionRule, Rule, get_all_rules, get_rule, rule


class TestRegistry:
    def test_codes_are_unique(self) -> None:
        codes = [r.code for r in get_all_rules()]
        assert len(codes) == len(set(codes))

    def test_run_order(self) -> None:
        codes = [r.code for r in get_all_rules()]
        assert codes[:5] == [
            "unknown-component",
            "unknown-formula",
            "unknown-event",
            "unknown-action",
            "unknown-variable",
        ]
        assert len(codes) == 11

    def test_every_rule_has_description(self) -> None:
        for registered in get_all_rules():
            assert isinstance(registered, Rule)
            assert registered.meta.description

    def test_get_rule(self) -> None:
        found = get_rule("unknown-event")
        assert found is not None
        assert found.category == RuleCategory.EVENTS
        assert get_rule("nope") is None


class TestDecorator:
    def test_builds_function_rule(self) -> None:
        @rule("sample", level="warning", category="misc")
        def sample(report, ctx):
            """First line.

            More detail.
            """

        assert isinstance(sample, FunctionRule)
        assert sample.level == IssueLevel.WARNING
        assert sample.meta.description == "First line."
        assert repr(sample) == "<FunctionRule sample>"

    def test_rejects_unknown_level(self) -> None:
        with pytest.raises(ValueError):
            rule("x", level="fatal", category="misc")(lambda report, ctx: None)
