"""Value types for TOON Core."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import Any, Union


class _Null:
    """Singleton for the null value."""

    _instance: "_Null | None" = None

    def __new__(cls) -> "_Null":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Null"

    def __bool__(self) -> bool:
        return False


Null = _Null()


@dataclass(slots=True)
class VBool:
    value: bool


@dataclass(slots=True)
class VInt:
    value: int


@dataclass(slots=True)
class VFloat:
    value: float


@dataclass(slots=True)
class VString:
    value: str


@dataclass(slots=True)
class VDate:
    value: datetime  # naive values are taken as UTC


@dataclass(slots=True)
class VArray:
    items: list["Value"] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(slots=True)
class VObject:
    entries: dict[str, "Value"] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.entries)


Value = Union[_Null, VBool, VInt, VFloat, VString, VDate, VArray, VObject]

_VALUE_TYPES = (_Null, VBool, VInt, VFloat, VString, VDate, VArray, VObject)


def is_value(obj: Any) -> bool:
    return isinstance(obj, _VALUE_TYPES)


def is_scalar(value: Value) -> bool:
    """True for every variant except VArray and VObject."""
    return not isinstance(value, (VArray, VObject))


# ---------------------------------------------------------------------------
# Native Python <-> Value
# ---------------------------------------------------------------------------

def from_python(obj: Any) -> Value:
    """Convert plain Python data (as produced by ``json.loads``) to a Value.

    Mapping key order is kept.  Objects of unsupported types become ``Null``.
    """
    if is_value(obj):
        return obj
    if obj is None:
        return Null
    # bool before int: bool is an int subclass
    if isinstance(obj, bool):
        return VBool(obj)
    if isinstance(obj, int):
        return VInt(obj)
    if isinstance(obj, float):
        return VFloat(obj)
    if isinstance(obj, str):
        return VString(obj)
    if isinstance(obj, datetime):
        return VDate(obj)
    if isinstance(obj, date):
        return VDate(datetime.combine(obj, time(), tzinfo=timezone.utc))
    if isinstance(obj, Mapping):
        return VObject({str(k): from_python(v) for k, v in obj.items()})
    if isinstance(obj, (list, tuple)):
        return VArray([from_python(v) for v in obj])
    return Null


def to_python(value: Value) -> Any:
    """Convert a Value back to plain Python data."""
    if isinstance(value, VObject):
        return {k: to_python(v) for k, v in value.entries.items()}
    if isinstance(value, VArray):
        return [to_python(v) for v in value.items]
    if isinstance(value, (VBool, VInt, VFloat, VString, VDate)):
        return value.value
    return None
