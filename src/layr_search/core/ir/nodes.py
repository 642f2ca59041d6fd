"""
Component node tree.

Nodes are stored flat in ``Component.nodes`` keyed by id; ``children``
lists ids in the same mapping. Only the four node kinds below are
recognized; everything else, and any node that does not validate as the
kind it names, becomes ``InvalidNode``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Discriminator, Field, Tag, model_validator

from .actions import ActionBlock
from .base import Entry, IRModel, invalid_on_error
from .formulas import Formula

NODE_TYPES: frozenset[str] = frozenset({"element", "text", "component", "slot"})


class NodeEvent(ActionBlock):
    """Handler attached to a node: ``{trigger, actions}``."""

    trigger: str | None = None


class ElementNode(IRModel):
    type: Literal["element"] = "element"
    tag: str = "div"
    attrs: dict[str, Formula | None] = Field(default_factory=dict)
    style: dict[str, Formula | None] = Field(default_factory=dict)
    events: dict[str, Entry[NodeEvent]] = Field(default_factory=dict)
    children: list[Any] = Field(default_factory=list)
    condition: Formula | None = None
    repeat: Formula | None = None
    repeat_key: Formula | None = Field(default=None, alias="repeatKey")


class ComponentNode(IRModel):
    """Instance of another component.

    ``name`` is either bare (project component) or ``alias/name``
    (package component). ``package`` qualifies a bare name.
    """

    type: Literal["component"] = "component"
    name: str = ""
    package: str | None = None
    attrs: dict[str, Formula | None] = Field(default_factory=dict)
    style: dict[str, Formula | None] = Field(default_factory=dict)
    events: dict[str, Entry[NodeEvent]] = Field(default_factory=dict)
    children: list[Any] = Field(default_factory=list)
    condition: Formula | None = None
    repeat: Formula | None = None
    repeat_key: Formula | None = Field(default=None, alias="repeatKey")

    @property
    def qualified_name(self) -> str:
        if self.package and "/" not in self.name:
            return f"{self.package}/{self.name}"
        return self.name


class TextNode(IRModel):
    type: Literal["text"] = "text"
    value: Formula | None = None
    condition: Formula | None = None
    repeat: Formula | None = None
    repeat_key: Formula | None = Field(default=None, alias="repeatKey")


class SlotNode(IRModel):
    type: Literal["slot"] = "slot"
    name: str | None = None
    children: list[Any] = Field(default_factory=list)
    condition: Formula | None = None
    repeat: Formula | None = None
    repeat_key: Formula | None = Field(default=None, alias="repeatKey")


class InvalidNode(IRModel):
    type: Any = None
    raw: Any = None

    @model_validator(mode="before")
    @classmethod
    def _wrap_scalars(cls, data: Any) -> Any:
        if isinstance(data, (dict, BaseModel)):
            return data
        return {"raw": data}


def _node_tag(value: Any) -> str:
    if isinstance(value, dict):
        kind = value.get("type")
    else:
        kind = getattr(value, "type", None)
    if isinstance(kind, str) and kind in NODE_TYPES:
        return kind
    return "invalid"


Node = Annotated[
    Union[
        Annotated[ElementNode, Tag("element")],
        Annotated[ComponentNode, Tag("component")],
        Annotated[TextNode, Tag("text")],
        Annotated[SlotNode, Tag("slot")],
        Annotated[InvalidNode, Tag("invalid")],
    ],
    Discriminator(_node_tag),
    invalid_on_error(InvalidNode),
]

# Nodes that can hold attribute formulas and event handlers
HandlerNode = ElementNode | ComponentNode
