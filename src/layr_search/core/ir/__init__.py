"""
Project Model types.

Immutable pydantic models for a serialized project. Formula, action and
node trees are closed unions discriminated on ``type``; unknown or
malformed shapes validate to the ``Invalid*`` models instead of failing
(see ``base``).

All types are re-exported from this package.
"""

from .actions import (
    ACTION_TYPES,
    AbortFetchAction,
    Action,
    ActionBlock,
    CustomAction,
    FetchAction,
    InvalidAction,
    NamedFormula,
    SetURLParameterAction,
    SetURLParametersAction,
    SetVariableAction,
    SwitchAction,
    SwitchActionCase,
    TriggerEventAction,
    TriggerWorkflowAction,
    TriggerWorkflowCallbackAction,
)
from .base import Entry, IRModel
from .components import (
    API_FORMULA_FIELDS,
    Component,
    ComponentApi,
    ComponentAttribute,
    ComponentContext,
    ComponentEvent,
    ComponentFormula,
    ComponentVariable,
    ComponentWorkflow,
)
from .formulas import (
    FORMULA_TYPES,
    AndOperation,
    ApplyOperation,
    ArgumentOperation,
    ArrayOperation,
    Formula,
    FormulaArgument,
    FunctionOperation,
    InvalidFormula,
    ObjectOperation,
    OrOperation,
    PathOperation,
    RecordOperation,
    SwitchCase,
    SwitchOperation,
    ValueOperation,
)
from .nodes import (
    NODE_TYPES,
    ComponentNode,
    ElementNode,
    HandlerNode,
    InvalidNode,
    Node,
    NodeEvent,
    SlotNode,
    TextNode,
)
from .project import (
    InstalledPackage,
    PackageManifest,
    ProjectAction,
    ProjectFiles,
    ProjectFormula,
)

__all__ = [
    # Base
    "Entry",
    "IRModel",
    # Formulas
    "FORMULA_TYPES",
    "AndOperation",
    "ApplyOperation",
    "ArgumentOperation",
    "ArrayOperation",
    "Formula",
    "FormulaArgument",
    "FunctionOperation",
    "InvalidFormula",
    "ObjectOperation",
    "OrOperation",
    "PathOperation",
    "RecordOperation",
    "SwitchCase",
    "SwitchOperation",
    "ValueOperation",
    # Actions
    "ACTION_TYPES",
    "AbortFetchAction",
    "Action",
    "ActionBlock",
    "CustomAction",
    "FetchAction",
    "InvalidAction",
    "NamedFormula",
    "SetURLParameterAction",
    "SetURLParametersAction",
    "SetVariableAction",
    "SwitchAction",
    "SwitchActionCase",
    "TriggerEventAction",
    "TriggerWorkflowAction",
    "TriggerWorkflowCallbackAction",
    # Nodes
    "NODE_TYPES",
    "ComponentNode",
    "ElementNode",
    "HandlerNode",
    "InvalidNode",
    "Node",
    "NodeEvent",
    "SlotNode",
    "TextNode",
    # Components
    "API_FORMULA_FIELDS",
    "Component",
    "ComponentApi",
    "ComponentAttribute",
    "ComponentContext",
    "ComponentEvent",
    "ComponentFormula",
    "ComponentVariable",
    "ComponentWorkflow",
    # Project
    "InstalledPackage",
    "PackageManifest",
    "ProjectAction",
    "ProjectFiles",
    "ProjectFormula",
]
