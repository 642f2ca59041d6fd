"""
Shared base for Project Model types.

Every model is frozen and keeps unknown keys. A value the editor stored in
an unexpected shape never fails the whole project; it degrades locally:

- ``null`` in a field that has a default reads as the default
- a collection field holding the wrong kind of value reads as empty
- a formula, action or node that does not validate becomes the matching
  ``Invalid*`` model (see ``invalid_on_error``)
- a mapping entry or optional sub-object that does not validate reads as
  ``None`` (see ``Entry``)

Consumers already skip ``None`` and ``Invalid*``, so the rest of the
project is still analysed. This also covers trees nested deeper than
pydantic-core's recursion guard allows (a few hundred schema levels): the
part below the limit is replaced, the project still loads.
"""

from __future__ import annotations

from functools import cache
from typing import Annotated, Any, ClassVar, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    ValidatorFunctionWrapHandler,
    WrapValidator,
    model_validator,
)
from pydantic.fields import FieldInfo

T = TypeVar("T")


class IRModel(BaseModel):
    """Base class for all Project Model types."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    # Mapping fields that also accept the list form (normalized by a field validator)
    _list_as_mapping: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def _fill_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        fields = _fields_by_key(cls)
        dropped = {
            key
            for key, value in data.items()
            if key in fields and _falls_back(cls, fields[key], value)
        }
        if not dropped:
            return data
        return {key: value for key, value in data.items() if key not in dropped}


@cache
def _fields_by_key(cls: type[BaseModel]) -> dict[str, tuple[str, FieldInfo]]:
    keys: dict[str, tuple[str, FieldInfo]] = {}
    for name, info in cls.model_fields.items():
        keys[name] = (name, info)
        if info.alias:
            keys[info.alias] = (name, info)
    return keys


def _falls_back(cls: type[IRModel], field: tuple[str, FieldInfo], value: Any) -> bool:
    name, info = field
    if info.is_required():
        return False
    if value is None:
        return info.default is not None or info.default_factory is not None
    if info.default_factory is list:
        return not isinstance(value, list)
    if info.default_factory is dict:
        if isinstance(value, list) and name in cls._list_as_mapping:
            return False
        return not isinstance(value, dict)
    return False


def invalid_on_error(fallback: type[BaseModel]) -> WrapValidator:
    """Validate normally; on failure keep the raw value as ``fallback(raw=...)``."""

    def validate(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        try:
            return handler(value)
        except (ValidationError, RecursionError):  # too deep for the interpreter stack
            return fallback(raw=value)

    return WrapValidator(validate)


def _none_on_error(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
    try:
        return handler(value)
    except ValidationError:
        return None


# Mapping entry or optional sub-object; reads as None when it does not validate
Entry = Annotated[T | None, WrapValidator(_none_on_error)]
