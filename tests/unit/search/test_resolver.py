"""Tests for the namespace resolver."""

from __future__ import annotations

import pytest

from layr_search.core.config import ResolutionOrder
from layr_search.search.resolver import NamespaceResolver, split_qualified

from .conftest import make_component, make_files, make_package, value


@pytest.fixture
def files():
    return make_files(
        components={
            "home": make_component("home", formulas={"local": {"name": "local", "formula": value(1)}}),
            "card": make_component("card", events=[{"name": "expand"}]),
        },
        formulas={"total": {"name": "total", "formula": value(2)}, "local": {"name": "local"}},
        actions={"track": {"name": "track"}},
        packages={
            "shop": make_package(
                "shop",
                components={"title": make_component("title"), "card": make_component("card")},
                formulas={"totalPrice": {"name": "totalPrice", "formula": value(3)}},
                actions={"checkout": {"name": "checkout"}},
            ),
            "ui": make_package("ui-kit", components={"button": make_component("button")}),
        },
    )


class TestSplitQualified:
    def test_bare_name(self) -> None:
        assert split_qualified("card") is None

    def test_splits_on_first_slash(self) -> None:
        assert split_qualified("shop/a/b") == ("shop", "a/b")


class TestComponents:
    def test_project_component(self, files) -> None:
        assert NamespaceResolver(files).has_component("card")

    def test_package_qualified(self, files) -> None:
        resolver = NamespaceResolver(files)
        assert resolver.has_component("shop/title")
        assert not resolver.has_component("shop/missing")
        assert not resolver.has_component("nope/title")

    def test_manifest_name_alias(self, files) -> None:
        resolver = NamespaceResolver(files)
        assert resolver.has_component("ui/button")
        assert resolver.has_component("ui-kit/button")

    def test_builtin_prefix(self, files) -> None:
        resolver = NamespaceResolver(files)
        assert resolver.has_component("@toddle/anything")
        assert resolver.resolve_component("@toddle/anything") is None

    def test_custom_builtin_prefix(self, files) -> None:
        resolver = NamespaceResolver(files, builtin_prefix="@std/")
        assert resolver.has_component("@std/x")
        assert not resolver.has_component("@toddle/x")

    def test_empty_name_never_resolves(self, files) -> None:
        assert not NamespaceResolver(files).has_component("")


class TestResolutionOrder:
    def test_project_only_ignores_bare_package_names(self, files) -> None:
        resolver = NamespaceResolver(files)
        assert not resolver.has_component("title")

    def test_project_then_packages(self, files) -> None:
        resolver = NamespaceResolver(files, resolution_order=ResolutionOrder.PROJECT_THEN_PACKAGES)
        assert resolver.has_component("title")
        # Collision: the project component wins
        assert resolver.resolve_component("card") is files.components["card"]

    def test_packages_then_project(self, files) -> None:
        resolver = NamespaceResolver(files, resolution_order=ResolutionOrder.PACKAGES_THEN_PROJECT)
        shop = files.packages["shop"]
        assert shop is not None
        assert resolver.resolve_component("card") is shop.components["card"]
        assert resolver.resolve_component("home") is files.components["home"]


class TestFormulas:
    def test_local_shadows_global(self, files) -> None:
        scope = NamespaceResolver(files).scope("home")
        assert scope.has_formula("local")
        resolved = scope.resolve_formula("local")
        assert resolved is files.components["home"].formulas["local"]

    def test_global_formula(self, files) -> None:
        assert NamespaceResolver(files).scope("home").has_formula("total")

    def test_bare_package_formula_does_not_resolve(self, files) -> None:
        scope = NamespaceResolver(files).scope("home")
        assert not scope.has_formula("totalPrice")
        assert scope.has_formula("shop/totalPrice")

    def test_scope_is_cached(self, files) -> None:
        resolver = NamespaceResolver(files)
        assert resolver.scope("home") is resolver.scope("home")

    def test_scope_for_unknown_component(self, files) -> None:
        scope = NamespaceResolver(files).scope("ghost")
        assert scope.component is None
        assert scope.has_formula("total")
        assert not scope.has_formula("local")


class TestEventsAndActions:
    def test_has_event_with_list_form_events(self, files) -> None:
        resolver = NamespaceResolver(files)
        card = resolver.resolve_component("card")
        assert card is not None
        scope = resolver.scope("home")
        assert scope.has_event(card, "expand")
        assert not scope.has_event(card, "expanded")

    def test_actions(self, files) -> None:
        resolver = NamespaceResolver(files)
        assert resolver.has_action("track")
        assert resolver.has_action("shop/checkout")
        assert resolver.has_action("checkout", package="shop")
        assert resolver.has_action("@toddle/console")
        assert not resolver.has_action("checkout")
        assert not resolver.has_action("")
