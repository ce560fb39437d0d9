"""Tests for toon_core.values."""

from datetime import date, datetime, timezone

from toon_core.values import (
    Null,
    VArray,
    VBool,
    VDate,
    VFloat,
    VInt,
    VObject,
    VString,
    _Null,
    from_python,
    is_scalar,
    to_python,
)


class TestNull:
    def test_singleton(self):
        assert Null is _Null()

    def test_falsy(self):
        assert not Null

    def test_repr(self):
        assert repr(Null) == "Null"


class TestValueTypes:
    def test_vint_and_vfloat_differ(self):
        assert VInt(1) != VFloat(1.0)

    def test_vobject_keeps_order(self):
        obj = VObject({"b": VInt(1), "a": VInt(2)})
        assert list(obj.entries) == ["b", "a"]

    def test_containers_default_empty(self):
        assert len(VArray()) == 0
        assert len(VObject()) == 0

    def test_is_scalar(self):
        assert is_scalar(Null)
        assert is_scalar(VString("x"))
        assert not is_scalar(VArray())
        assert not is_scalar(VObject())


# ---------------------------------------------------------------------------
# from_python / to_python
# ---------------------------------------------------------------------------

def test_from_python_scalars():
    assert from_python(None) is Null
    assert from_python(True) == VBool(True)
    assert from_python(3) == VInt(3)
    assert from_python(3.5) == VFloat(3.5)
    assert from_python("hi") == VString("hi")

def test_from_python_bool_is_not_int():
    assert from_python(False) == VBool(False)

def test_from_python_nested():
    v = from_python({"a": [1, {"b": None}], "c": (True,)})
    assert v == VObject({
        "a": VArray([VInt(1), VObject({"b": Null})]),
        "c": VArray([VBool(True)]),
    })

def test_from_python_key_order():
    v = from_python({"z": 1, "y": 2, "x": 3})
    assert list(v.entries) == ["z", "y", "x"]

def test_from_python_non_string_keys():
    assert from_python({1: "a"}) == VObject({"1": VString("a")})

def test_from_python_dates():
    dt = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    assert from_python(dt) == VDate(dt)
    assert from_python(date(2024, 1, 15)) == VDate(datetime(2024, 1, 15, tzinfo=timezone.utc))

def test_from_python_unsupported_is_null():
    assert from_python(object()) is Null
    assert from_python({1, 2}) is Null

def test_from_python_passes_values_through():
    v = VString("x")
    assert from_python(v) is v

def test_to_python_roundtrip():
    data = {"name": "Alice", "tags": ["a", 1, 2.5, None, False], "nested": {}}
    assert to_python(from_python(data)) == data
