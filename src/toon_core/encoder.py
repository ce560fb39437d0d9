"""Encoder: Value → TOON text."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta
from typing import Any

from .config import DEFAULT_CONFIG, ToonConfig
from .lexical import INT64_MAX, INT64_MIN, ArrayForm, key_needs_quoting, needs_quoting, quote
from .values import (
    Value,
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
    is_value,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def encode(value: Any, config: ToonConfig | None = None) -> str:
    """Encode a Value (or plain Python data) as TOON text."""
    return ToonEncoder(config).encode(value)


def format_date(dt: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    offset = dt.utcoffset()
    dt = dt.replace(tzinfo=None)
    if offset:
        try:
            dt = dt - offset
        except OverflowError:
            # Instant falls outside years 1..9999 in UTC: clamp.
            dt = datetime.min if offset > timedelta(0) else datetime.max
    return (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
        f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
        f".{dt.microsecond // 1000:03d}Z"
    )


def format_float(v: float) -> str:
    """Shortest text that reads back as a float; integral values print as ints.

    The decoder only treats tokens with a ``.`` as floats, so exponent forms
    always carry one (``1.0e-07``).
    """
    if math.isnan(v) or math.isinf(v):
        return "null"
    if v.is_integer() and INT64_MIN <= v <= INT64_MAX:
        return str(int(v))
    text = repr(v)
    mantissa, e, exponent = text.partition("e")
    if e and "." not in mantissa:
        text = mantissa + ".0e" + exponent
    return text


# ---------------------------------------------------------------------------
# Array classification
# ---------------------------------------------------------------------------

def is_tabular(arr: VArray) -> bool:
    """Non-empty objects with one shared key set and scalar values only."""
    if not arr.items:
        return False
    first_keys: set[str] | None = None
    for item in arr.items:
        if not isinstance(item, VObject) or not item.entries:
            return False
        if not all(is_scalar(v) for v in item.entries.values()):
            return False
        keys = set(item.entries)
        if first_keys is None:
            first_keys = keys
        elif keys != first_keys:
            return False
    return True


def is_inline(arr: VArray) -> bool:
    return all(is_scalar(v) for v in arr.items)


def classify_array(arr: VArray) -> ArrayForm:
    """Pick the encoding for a non-empty array: tabular, then inline, then list."""
    if is_tabular(arr):
        return ArrayForm.Tabular
    if is_inline(arr):
        return ArrayForm.Inline
    return ArrayForm.List


# ---------------------------------------------------------------------------
# ToonEncoder
# ---------------------------------------------------------------------------

class ToonEncoder:
    """Serialises Values into TOON.

    The ``_*_lines`` methods return lists of output lines; ``encode`` joins them.
    *depth* is a nesting level, converted to spaces by ``_pad``.
    """

    def __init__(self, config: ToonConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG

    def encode(self, value: Any) -> str:
        if not is_value(value):
            value = from_python(value)
        if isinstance(value, VObject):
            lines = self._object_lines(value, 0)
        elif isinstance(value, VArray):
            lines = self._array_lines("", value, 0)
        else:
            return self.scalar(value)
        return "\n".join(lines)

    # -- Scalars ----------------------------------------------------------

    def scalar(self, value: Value) -> str:
        if isinstance(value, _Null):
            return "null"
        if isinstance(value, VBool):
            return "true" if value.value else "false"
        if isinstance(value, VInt):
            return str(value.value)
        if isinstance(value, VFloat):
            return format_float(value.value)
        if isinstance(value, VString):
            return self.string(value.value)
        if isinstance(value, VDate):
            return '"' + format_date(value.value) + '"'
        logger.debug("Unsupported value %r encoded as null", value)
        return "null"

    def string(self, s: str) -> str:
        if needs_quoting(s, self.config.delimiter):
            return quote(s, self.config.delimiter)
        return s

    def key(self, k: str) -> str:
        if key_needs_quoting(k, self.config.delimiter):
            return quote(k, self.config.delimiter)
        return k

    # -- Objects ----------------------------------------------------------

    def _object_lines(self, obj: VObject, depth: int) -> list[str]:
        lines: list[str] = []
        pad = self._pad(depth)
        for k, v in obj.entries.items():
            lead = pad + self.key(k)
            if isinstance(v, VObject):
                lines.append(lead + ":")
                if v.entries:
                    lines.extend(self._object_lines(v, depth + 1))
            elif isinstance(v, VArray):
                if v.items:
                    lines.extend(self._array_lines(lead, v, depth))
                else:
                    lines.append(lead + ": " + self._header(0))
            else:
                lines.append(lead + ": " + self.scalar(v))
        return lines

    # -- Arrays -----------------------------------------------------------

    def _header(self, count: int, fields: list[str] | None = None) -> str:
        cfg = self.config
        head = f"[{cfg.length_marker}{count}"
        if count:
            head += cfg.delimiter_display
        head += "]"
        if fields is not None:
            head += "{" + cfg.delimiter.join(self.key(f) for f in fields) + "}"
        return head + ":"

    def _array_lines(self, lead: str, arr: VArray, depth: int) -> list[str]:
        """Header on the first line after *lead*; body one level deeper."""
        if not arr.items:
            return [lead + self._header(0)]

        delim = self.config.delimiter
        form = classify_array(arr)

        if form is ArrayForm.Tabular:
            fields = list(arr.items[0].entries)
            lines = [lead + self._header(len(arr.items), fields)]
            pad = self._pad(depth + 1)
            for row in arr.items:
                cells = (self.scalar(row.entries[f]) for f in fields)
                lines.append(pad + delim.join(cells))
            return lines

        if form is ArrayForm.Inline:
            cells = delim.join(self.scalar(v) for v in arr.items)
            return [lead + self._header(len(arr.items)) + " " + cells]

        lines = [lead + self._header(len(arr.items))]
        for item in arr.items:
            lines.extend(self._list_item_lines(item, depth + 1))
        return lines

    def _list_item_lines(self, item: Value, depth: int) -> list[str]:
        pad = self._pad(depth)
        dash = pad + "- "
        if isinstance(item, VObject):
            if not item.entries:
                return [pad + "-"]
            # First field shares the dash line; the rest sit one level deeper.
            lines = self._object_lines(item, depth + 1)
            lines[0] = dash + lines[0][len(self._pad(depth + 1)):]
            return lines
        if isinstance(item, VArray):
            return self._array_lines(dash, item, depth)
        return [dash + self.scalar(item)]

    def _pad(self, depth: int) -> str:
        return " " * (depth * self.config.indent)
