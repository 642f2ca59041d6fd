"""
Formula expression trees.

A formula is a closed tagged union discriminated on its ``type`` key:

- value:    literal
- path:     reference such as ``["Formulas", "total"]`` or ``["Variables", "x"]``
- function: built-in call by qualified name
- apply:    call to a component/project formula by name
- object, array, record: structural constructors over argument formulas
- switch:   ordered ``cases`` of condition/formula pairs plus a ``default``
- and, or:  short-circuit argument lists

Anything that does not carry a recognized discriminator, or that does not
validate as the variant it names, becomes ``InvalidFormula``. Scalars stored
where a formula may appear (a plain string attribute, for example) end up
there too, so loading never fails on them and the walker has a single case
to skip.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Discriminator, Field, Tag, model_validator

from .base import Entry, IRModel, invalid_on_error

FORMULA_TYPES: frozenset[str] = frozenset(
    {"value", "path", "function", "apply", "object", "array", "record", "switch", "and", "or"}
)


# ---------------------------------------------------------------------------
# Argument containers
# ---------------------------------------------------------------------------


class FormulaArgument(IRModel):
    """Argument of a function/apply/constructor formula."""

    name: str | None = None
    formula: Formula | None = None
    is_function: bool | None = Field(default=None, alias="isFunction")


class SwitchCase(IRModel):
    """One ``condition -> formula`` pair of a switch formula."""

    condition: Formula | None = None
    formula: Formula | None = None


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


class ValueOperation(IRModel):
    type: Literal["value"] = "value"
    value: Any = None


class PathOperation(IRModel):
    """Reference into the runtime data, e.g. ``Formulas.total``."""

    type: Literal["path"] = "path"
    path: list[str | int] = Field(default_factory=list)

    @property
    def root(self) -> str | int | None:
        """First path segment (the namespace marker), if any."""
        return self.path[0] if self.path else None

    @property
    def target(self) -> str | int | None:
        """Second path segment (the referenced name), if any."""
        return self.path[1] if len(self.path) > 1 else None


class FunctionOperation(IRModel):
    type: Literal["function"] = "function"
    name: str = ""
    package: str | None = None
    arguments: list[Entry[FormulaArgument]] = Field(default_factory=list)
    variable_arguments: bool | None = Field(default=None, alias="variableArguments")


class ApplyOperation(IRModel):
    """Call to a formula declared on the component or project, by bare name."""

    type: Literal["apply"] = "apply"
    name: str = ""
    arguments: list[Entry[FormulaArgument]] = Field(default_factory=list)


class ObjectOperation(IRModel):
    type: Literal["object"] = "object"
    arguments: list[Entry[FormulaArgument]] = Field(default_factory=list)


class ArrayOperation(IRModel):
    type: Literal["array"] = "array"
    arguments: list[Entry[FormulaArgument]] = Field(default_factory=list)


class RecordOperation(IRModel):
    type: Literal["record"] = "record"
    arguments: list[Entry[FormulaArgument]] = Field(default_factory=list)


class SwitchOperation(IRModel):
    type: Literal["switch"] = "switch"
    cases: list[Entry[SwitchCase]] = Field(default_factory=list)
    default: Formula | None = None


class AndOperation(IRModel):
    type: Literal["and"] = "and"
    arguments: list[Entry[FormulaArgument]] = Field(default_factory=list)


class OrOperation(IRModel):
    type: Literal["or"] = "or"
    arguments: list[Entry[FormulaArgument]] = Field(default_factory=list)


class InvalidFormula(IRModel):
    """Value found where a formula may appear but without a known ``type``."""

    type: Any = None
    raw: Any = None

    @model_validator(mode="before")
    @classmethod
    def _wrap_scalars(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return data
        if isinstance(data, BaseModel):
            return data
        return {"raw": data}


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------


def _formula_tag(value: Any) -> str:
    if isinstance(value, dict):
        kind = value.get("type")
    else:
        kind = getattr(value, "type", None)
    if isinstance(kind, str) and kind in FORMULA_TYPES:
        return kind
    return "invalid"


Formula = Annotated[
    Union[
        Annotated[ValueOperation, Tag("value")],
        Annotated[PathOperation, Tag("path")],
        Annotated[FunctionOperation, Tag("function")],
        Annotated[ApplyOperation, Tag("apply")],
        Annotated[ObjectOperation, Tag("object")],
        Annotated[ArrayOperation, Tag("array")],
        Annotated[RecordOperation, Tag("record")],
        Annotated[SwitchOperation, Tag("switch")],
        Annotated[AndOperation, Tag("and")],
        Annotated[OrOperation, Tag("or")],
        Annotated[InvalidFormula, Tag("invalid")],
    ],
    Discriminator(_formula_tag),
    invalid_on_error(InvalidFormula),
]

# Operations whose only child-bearing field is ``arguments``
ArgumentOperation = (
    FunctionOperation
    | ApplyOperation
    | ObjectOperation
    | ArrayOperation
    | RecordOperation
    | AndOperation
    | OrOperation
)

# Rebuild models for recursive forward references
FormulaArgument.model_rebuild()
SwitchCase.model_rebuild()
FunctionOperation.model_rebuild()
ApplyOperation.model_rebuild()
ObjectOperation.model_rebuild()
ArrayOperation.model_rebuild()
RecordOperation.model_rebuild()
SwitchOperation.model_rebuild()
AndOperation.model_rebuild()
OrOperation.model_rebuild()
