"""
Action trees.

Actions are the side-effecting statements attached to events, workflows and
lifecycle hooks. Like formulas they form a closed tagged union on ``type``;
nested action lists hang off ``Switch`` cases, ``Fetch`` callbacks,
``TriggerWorkflow`` callbacks and ``Custom`` action events.

An action serialized without ``type`` but with a ``name`` is a custom action
(the legacy form the editor still writes). Anything else without a known
discriminator, or that does not validate as the variant it names, becomes
``InvalidAction``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Discriminator, Field, Tag, model_validator

from .base import Entry, IRModel, invalid_on_error
from .formulas import Formula

ACTION_TYPES: frozenset[str] = frozenset(
    {
        "SetVariable",
        "TriggerEvent",
        "Switch",
        "Fetch",
        "AbortFetch",
        "Custom",
        "SetURLParameter",
        "SetURLParameters",
        "TriggerWorkflow",
        "TriggerWorkflowCallback",
    }
)


# ---------------------------------------------------------------------------
# Shared containers
# ---------------------------------------------------------------------------


class ActionBlock(IRModel):
    """An ordered list of actions (event handler, callback, switch branch)."""

    actions: list[Action] = Field(default_factory=list)


class NamedFormula(IRModel):
    """``{name, formula}`` pair used for inputs, arguments and parameters."""

    name: str | None = None
    formula: Formula | None = None


class SwitchActionCase(IRModel):
    condition: Formula | None = None
    actions: list[Action] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


class SetVariableAction(IRModel):
    type: Literal["SetVariable"] = "SetVariable"
    name: str = ""
    data: Formula | None = None


class TriggerEventAction(IRModel):
    type: Literal["TriggerEvent"] = "TriggerEvent"
    name: str = ""
    data: Formula | None = None


class SwitchAction(IRModel):
    type: Literal["Switch"] = "Switch"
    data: Formula | None = None
    cases: list[Entry[SwitchActionCase]] = Field(default_factory=list)
    default: Entry[ActionBlock] = None


class FetchAction(IRModel):
    type: Literal["Fetch"] = "Fetch"
    name: str = ""
    inputs: list[Entry[NamedFormula]] = Field(default_factory=list)
    on_success: Entry[ActionBlock] = Field(default=None, alias="onSuccess")
    on_error: Entry[ActionBlock] = Field(default=None, alias="onError")
    on_message: Entry[ActionBlock] = Field(default=None, alias="onMessage")


class AbortFetchAction(IRModel):
    type: Literal["AbortFetch"] = "AbortFetch"
    name: str = ""


class CustomAction(IRModel):
    """Call to a project, package or built-in action by name."""

    type: Literal["Custom"] = "Custom"
    name: str = ""
    package: str | None = None
    version: int | None = None
    arguments: list[Entry[NamedFormula]] = Field(default_factory=list)
    data: Formula | None = None
    events: dict[str, Entry[ActionBlock]] = Field(default_factory=dict)


class SetURLParameterAction(IRModel):
    type: Literal["SetURLParameter"] = "SetURLParameter"
    name: str = ""
    data: Formula | None = None
    history_mode: str | None = Field(default=None, alias="historyMode")


class SetURLParametersAction(IRModel):
    type: Literal["SetURLParameters"] = "SetURLParameters"
    parameters: list[Entry[NamedFormula]] = Field(default_factory=list)
    history_mode: str | None = Field(default=None, alias="historyMode")


class TriggerWorkflowAction(IRModel):
    type: Literal["TriggerWorkflow"] = "TriggerWorkflow"
    name: str = ""
    parameters: list[Entry[NamedFormula]] = Field(default_factory=list)
    callbacks: dict[str, Entry[ActionBlock]] = Field(default_factory=dict)
    component_name: str | None = Field(default=None, alias="componentName")
    package: str | None = None


class TriggerWorkflowCallbackAction(IRModel):
    type: Literal["TriggerWorkflowCallback"] = "TriggerWorkflowCallback"
    name: str = ""
    data: Formula | None = None


class InvalidAction(IRModel):
    """Value found in an action list but without a known ``type``."""

    type: Any = None
    raw: Any = None

    @model_validator(mode="before")
    @classmethod
    def _wrap_scalars(cls, data: Any) -> Any:
        if isinstance(data, (dict, BaseModel)):
            return data
        return {"raw": data}


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------


def _action_tag(value: Any) -> str:
    if isinstance(value, dict):
        kind = value.get("type")
        if kind is None and isinstance(value.get("name"), str):
            return "Custom"
    else:
        kind = getattr(value, "type", None)
    if isinstance(kind, str) and kind in ACTION_TYPES:
        return kind
    return "invalid"


Action = Annotated[
    Union[
        Annotated[SetVariableAction, Tag("SetVariable")],
        Annotated[TriggerEventAction, Tag("TriggerEvent")],
        Annotated[SwitchAction, Tag("Switch")],
        Annotated[FetchAction, Tag("Fetch")],
        Annotated[AbortFetchAction, Tag("AbortFetch")],
        Annotated[CustomAction, Tag("Custom")],
        Annotated[SetURLParameterAction, Tag("SetURLParameter")],
        Annotated[SetURLParametersAction, Tag("SetURLParameters")],
        Annotated[TriggerWorkflowAction, Tag("TriggerWorkflow")],
        Annotated[TriggerWorkflowCallbackAction, Tag("TriggerWorkflowCallback")],
        Annotated[InvalidAction, Tag("invalid")],
    ],
    Discriminator(_action_tag),
    invalid_on_error(InvalidAction),
]

# Rebuild models for recursive forward references
ActionBlock.model_rebuild()
NamedFormula.model_rebuild()
SwitchActionCase.model_rebuild()
SetVariableAction.model_rebuild()
TriggerEventAction.model_rebuild()
SwitchAction.model_rebuild()
FetchAction.model_rebuild()
CustomAction.model_rebuild()
SetURLParameterAction.model_rebuild()
SetURLParametersAction.model_rebuild()
TriggerWorkflowAction.model_rebuild()
TriggerWorkflowCallbackAction.model_rebuild()
