"""Decoder: TOON text → Value.

A recursive-descent parser over a list of lines.  The decoder is lenient:
it never raises, and structure it cannot make sense of becomes an empty
container or a plain string.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .config import DEFAULT_CONFIG, ToonConfig
from .lexical import (
    ARRAY_HEADER_RE,
    ArrayForm,
    INT64_MAX,
    INT64_MIN,
    NUMERIC_RE,
    TABULAR_HEADER_RE,
    closing_quote,
    find_unquoted_colon,
    indent_of,
    is_quoted,
    split_delimited,
    unescape,
    unquote,
)
from .values import Null, Value, VArray, VBool, VFloat, VInt, VObject, VString

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def decode(text: str, config: ToonConfig | None = None) -> Value:
    """Decode TOON *text*.  Blank input gives an empty VObject."""
    return ToonDecoder(config).decode(text)


def parse_scalar(token: str) -> Value:
    """Convert a single scalar token to a Value.

    - ``null`` / ``true`` / ``false`` → Null / VBool
    - ``"..."`` → VString (unescaped)
    - numeric literals → VFloat if they carry a ``.``, else VInt (64-bit range)
    - anything else → VString of the trimmed token
    """
    token = token.strip()
    if token == "null":
        return Null
    if token == "true":
        return VBool(True)
    if token == "false":
        return VBool(False)
    if is_quoted(token):
        return VString(unescape(token[1:-1]))
    if NUMERIC_RE.match(token):
        try:
            if "." in token:
                return VFloat(float(token))
            n = int(token)
            if INT64_MIN <= n <= INT64_MAX:
                return VInt(n)
        except ValueError:
            return VString(token)
    return VString(token)


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, dropping the ``\\r`` of a CRLF ending."""
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


# ---------------------------------------------------------------------------
# LineCursor
# ---------------------------------------------------------------------------

@dataclass
class LineCursor:
    """Index into the input lines; the parser only ever moves forward."""

    lines: list[str]
    index: int = 0

    def has_more(self) -> bool:
        return self.index < len(self.lines)

    def current(self) -> str:
        return self.lines[self.index]

    def advance(self) -> None:
        self.index += 1

    def skip_blank(self) -> None:
        while self.has_more() and not self.current().strip():
            self.index += 1


# ---------------------------------------------------------------------------
# ToonDecoder
# ---------------------------------------------------------------------------

@dataclass
class _Header:
    form: ArrayForm
    delimiter: str
    fields: list[str] = field(default_factory=list)
    content: str = ""


class ToonDecoder:
    def __init__(self, config: ToonConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self._cursor = LineCursor([])

    def decode(self, text: str) -> Value:
        if not text or not text.strip():
            return VObject()

        self._cursor = LineCursor(split_lines(text))
        self._cursor.skip_blank()
        first = self._cursor.current()
        if first.strip().startswith("["):
            return self._parse_array(first.strip(), indent_of(first))
        return self._parse_object(0)

    # -- Objects ----------------------------------------------------------

    def _parse_object(self, base_indent: int, into: VObject | None = None) -> VObject:
        """Read fields at exactly *base_indent* until the block ends."""
        result = into if into is not None else VObject()
        cursor = self._cursor

        while cursor.has_more():
            line = cursor.current()
            trimmed = line.strip()
            if not trimmed:
                cursor.advance()
                continue

            indent = indent_of(line)
            if indent < base_indent:
                break
            if indent > base_indent:
                logger.debug("Skipping over-indented line %d: %r", cursor.index + 1, line)
                cursor.advance()
                continue
            if trimmed == "-" or trimmed.startswith("- "):
                break

            self._parse_field(trimmed, indent, result)

        return result

    def _parse_field(self, text: str, indent: int, result: VObject) -> None:
        """Parse one ``key: value`` line (and any block it opens) into *result*.

        *indent* is the field's logical indent, which differs from the
        physical one when the field shares a ``- `` list-item line.
        """
        cursor = self._cursor
        colon = find_unquoted_colon(text)
        if colon == -1:
            logger.debug("Skipping line %d without a key: %r", cursor.index + 1, text)
            cursor.advance()
            return

        key, header = self._split_key(text, colon)
        value = text[colon + 1:].strip()

        if header is not None:
            result.entries[key] = self._parse_array(header, indent)
        elif not value:
            cursor.advance()
            cursor.skip_blank()
            if cursor.has_more() and indent_of(cursor.current()) > indent:
                result.entries[key] = self._parse_object(indent + self.config.indent)
            else:
                result.entries[key] = VObject()
        elif value.startswith("["):
            result.entries[key] = self._parse_array(value, indent)
        else:
            result.entries[key] = parse_scalar(value)
            cursor.advance()

    @staticmethod
    def _split_key(text: str, colon: int) -> tuple[str, str | None]:
        """Separate ``key[N]...`` into the key and its array header."""
        raw = text[:colon].rstrip()
        start = 0
        if raw.startswith('"'):
            start = closing_quote(raw) + 1
        bracket = raw.find("[", start)
        if bracket > 0 and ARRAY_HEADER_RE.match(text[bracket:]):
            return unquote(raw[:bracket]), text[bracket:]
        return unquote(raw), None

    # -- Arrays -----------------------------------------------------------

    def _read_header(self, header: str) -> _Header:
        delimiter = self.config.delimiter

        m = TABULAR_HEADER_RE.match(header)
        if m:
            delimiter = m.group(3) or delimiter
            fields = [unquote(f) for f in split_delimited(m.group(4), delimiter)]
            return _Header(ArrayForm.Tabular, delimiter, fields=fields)

        m = ARRAY_HEADER_RE.match(header)
        if m:
            delimiter = m.group(3) or delimiter
            rest = m.group(4)
            if rest.startswith(": "):
                return _Header(ArrayForm.Inline, delimiter, content=rest[2:])
            if rest.strip() == ":":
                return _Header(ArrayForm.List, delimiter)

        return _Header(ArrayForm.Invalid, delimiter)

    def _parse_array(self, header: str, base_indent: int) -> VArray:
        """Parse the array whose header sits on the current line.

        Leaves the cursor on the first line after the array.
        """
        head = self._read_header(header)
        self._cursor.advance()

        if head.form is ArrayForm.Tabular:
            return self._parse_tabular(head, base_indent)
        if head.form is ArrayForm.Inline:
            return self._parse_inline(head)
        if head.form is ArrayForm.List:
            return self._parse_list(base_indent)

        logger.debug("Unrecognised array header %r", header)
        return VArray()

    @staticmethod
    def _parse_inline(head: _Header) -> VArray:
        content = head.content.strip()
        if not content:
            return VArray()
        return VArray([parse_scalar(tok) for tok in split_delimited(content, head.delimiter)])

    def _parse_tabular(self, head: _Header, base_indent: int) -> VArray:
        rows: list[Value] = []
        cursor = self._cursor

        while cursor.has_more():
            cursor.skip_blank()
            if not cursor.has_more():
                break
            line = cursor.current()
            if indent_of(line) <= base_indent:
                break
            trimmed = line.strip()
            if trimmed == "-" or trimmed.startswith("- "):
                break

            values = split_delimited(trimmed, head.delimiter)
            # Short rows leave trailing fields unset; surplus values are dropped.
            row = VObject({name: parse_scalar(raw) for name, raw in zip(head.fields, values)})
            rows.append(row)
            cursor.advance()

        return VArray(rows)

    def _parse_list(self, base_indent: int) -> VArray:
        items: list[Value] = []
        cursor = self._cursor

        while cursor.has_more():
            cursor.skip_blank()
            if not cursor.has_more():
                break
            line = cursor.current()
            indent = indent_of(line)
            if indent <= base_indent:
                break
            trimmed = line.strip()

            if trimmed == "-":
                items.append(VObject())
                cursor.advance()
                continue
            if not trimmed.startswith("- "):
                break

            content = trimmed[2:].strip()
            if content.startswith("["):
                items.append(self._parse_array(content, indent))
            elif find_unquoted_colon(content) != -1:
                items.append(self._parse_list_object(content, indent))
            else:
                items.append(parse_scalar(content))
                cursor.advance()

        return VArray(items)

    def _parse_list_object(self, content: str, dash_indent: int) -> VObject:
        """An object list item: first field on the dash line, the rest below."""
        field_indent = dash_indent + self.config.indent
        obj = VObject()
        self._parse_field(content, field_indent, obj)
        return self._parse_object(field_indent, into=obj)
