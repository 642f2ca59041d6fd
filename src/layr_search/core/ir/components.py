"""
Component models.

A component owns its node tree plus the local namespaces that formulas and
actions inside it refer to: attributes, variables, formulas, workflows,
contexts, APIs and declared events.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field, field_validator

from .actions import Action, ActionBlock, NamedFormula
from .base import Entry, IRModel
from .formulas import Formula
from .nodes import Node


class ComponentAttribute(IRModel):
    name: str = ""
    test_value: Any = Field(default=None, alias="testValue")


class ComponentVariable(IRModel):
    initial_value: Formula | None = Field(default=None, alias="initialValue")


class ComponentFormula(IRModel):
    """Formula declared on the component and called through ``Formulas.<name>``."""

    name: str = ""
    arguments: list[Any] = Field(default_factory=list)
    formula: Formula | None = None
    memoize: bool | None = None
    exposed_in_context: bool | None = Field(default=None, alias="exposeInContext")


class ComponentEvent(IRModel):
    """Custom event a component can emit to its parent."""

    name: str = ""
    dummy_event: Any = Field(default=None, alias="dummyEvent")


class ComponentContext(IRModel):
    """Subscription to formulas/workflows exposed by an ancestor component."""

    formulas: list[str] = Field(default_factory=list)
    workflows: list[str] = Field(default_factory=list)
    component_name: str | None = Field(default=None, alias="componentName")
    package: str | None = None

    @property
    def qualified_name(self) -> str | None:
        if self.component_name and self.package and "/" not in self.component_name:
            return f"{self.package}/{self.component_name}"
        return self.component_name


class ComponentWorkflow(IRModel):
    name: str = ""
    parameters: list[Any] = Field(default_factory=list)
    callbacks: list[Any] = Field(default_factory=list)
    actions: list[Action] = Field(default_factory=list)
    exposed_in_context: bool | None = Field(default=None, alias="exposeInContext")


class ComponentApi(IRModel):
    """Request definition. Every request field may hold a formula."""

    name: str = ""
    url: Formula | None = None
    method: Formula | None = None
    body: Formula | None = None
    path: Formula | None = None
    auto_fetch: Formula | None = Field(default=None, alias="autoFetch")
    is_error: Formula | None = Field(default=None, alias="isError")
    timeout: Formula | None = None
    headers: dict[str, Entry[NamedFormula]] = Field(default_factory=dict)
    query_params: dict[str, Entry[NamedFormula]] = Field(default_factory=dict, alias="queryParams")


# Formula-valued request fields in traversal order: (attribute, JSON key)
API_FORMULA_FIELDS: tuple[tuple[str, str], ...] = (
    ("url", "url"),
    ("method", "method"),
    ("body", "body"),
    ("path", "path"),
    ("auto_fetch", "autoFetch"),
    ("is_error", "isError"),
    ("timeout", "timeout"),
)


class Component(IRModel):
    """
    A project or package component.

    ``events`` is normalized to a mapping keyed by event name; the editor
    serializes it either that way or as a list of ``{name, ...}`` entries.
    """

    _list_as_mapping: ClassVar[frozenset[str]] = frozenset({"events"})

    name: str = ""
    route: dict[str, Any] | None = None
    exported: bool | None = None
    attributes: dict[str, Entry[ComponentAttribute]] = Field(default_factory=dict)
    variables: dict[str, Entry[ComponentVariable]] = Field(default_factory=dict)
    formulas: dict[str, Entry[ComponentFormula]] = Field(default_factory=dict)
    contexts: dict[str, Entry[ComponentContext]] = Field(default_factory=dict)
    workflows: dict[str, Entry[ComponentWorkflow]] = Field(default_factory=dict)
    apis: dict[str, Entry[ComponentApi]] = Field(default_factory=dict)
    nodes: dict[str, Node | None] = Field(default_factory=dict)
    events: dict[str, Entry[ComponentEvent]] = Field(default_factory=dict)
    on_load: Entry[ActionBlock] = Field(default=None, alias="onLoad")
    on_attribute_change: Entry[ActionBlock] = Field(default=None, alias="onAttributeChange")

    @field_validator("events", mode="before")
    @classmethod
    def _events_by_name(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        events: dict[str, Any] = {}
        for entry in value:
            name = entry.get("name") if isinstance(entry, dict) else getattr(entry, "name", None)
            if isinstance(name, str) and name:
                events[name] = entry
        return events

    @property
    def is_page(self) -> bool:
        return self.route is not None
