"""Lexical rules shared by the encoder and the decoder.

Quoting predicates, escaping, and the quote-aware scanners used to split
delimited fields and to find the key/value colon.
"""

from __future__ import annotations

import re
import unicodedata
from enum import Enum, auto


SAFE_WORD_RE = re.compile(r"^[A-Za-z0-9_]+$")
NUMERIC_RE = re.compile(r"^[-+]?\d+(\.\d+)?([eE][+-]?\d+)?$")
LEADING_ZERO_RE = re.compile(r"^0\d+$")

# VInt range; wider integer literals decode as strings
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# [<marker><count><delimiter>]<rest>
ARRAY_HEADER_RE = re.compile(r"^\[([^\]\d]*)(\d+)([^\]]*)\](.*)$")
# [<marker><count><delimiter>]{<fields>}:
TABULAR_HEADER_RE = re.compile(r"^\[([^\]\d]*)(\d+)([^\]]*)\]\{(.+)\}:$")


class ArrayForm(Enum):
    Tabular = auto()   # [N]{a,b}: then one row per line
    Inline = auto()    # [N]: a,b
    List = auto()      # [N]: then "- " items
    Invalid = auto()   # decoder only: header did not match


RESERVED_WORDS = frozenset({"true", "false", "null"})
STRUCTURAL_CHARS = frozenset(":[]{}")

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_UNESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    '"': '"',
}


# ---------------------------------------------------------------------------
# Quoting predicates
# ---------------------------------------------------------------------------

def _has_control_char(s: str) -> bool:
    return any(unicodedata.category(c) == "Cc" for c in s)


def _looks_structural(s: str, delimiter: str) -> bool:
    return (
        delimiter in s
        or any(c in STRUCTURAL_CHARS for c in s)
        or s.startswith("-")
        or '"' in s
        or "\\" in s
    )


def needs_quoting(s: str, delimiter: str) -> bool:
    """Return True if the string value *s* must be written quoted."""
    if not s:
        return True
    if s != s.strip():
        return True
    if s in RESERVED_WORDS:
        return True
    if NUMERIC_RE.match(s) or LEADING_ZERO_RE.match(s):
        return True
    if _looks_structural(s, delimiter):
        return True
    if not SAFE_WORD_RE.match(s) and _has_control_char(s):
        return True
    return False


def key_needs_quoting(key: str, delimiter: str) -> bool:
    """Return True if the object key or tabular header *key* must be quoted."""
    if not key:
        return True
    if key != key.strip():
        return True
    if key in RESERVED_WORDS:
        return True
    if NUMERIC_RE.match(key) or LEADING_ZERO_RE.match(key):
        return True
    if _looks_structural(key, delimiter):
        return True
    return _has_control_char(key)


# ---------------------------------------------------------------------------
# Escaping
# ---------------------------------------------------------------------------

def escape(s: str, delimiter: str) -> str:
    """Escape *s* for use between double quotes.

    A tab is kept literal when the tab character is itself the delimiter.
    """
    keep_tab = delimiter == "\t"
    out: list[str] = []
    for c in s:
        if c == "\t" and keep_tab:
            out.append(c)
        else:
            out.append(_ESCAPES.get(c, c))
    return "".join(out)


def quote(s: str, delimiter: str) -> str:
    return '"' + escape(s, delimiter) + '"'


def unescape(s: str) -> str:
    """Reverse :func:`escape`.  Unknown escapes yield the escaped character."""
    out: list[str] = []
    escaped = False
    for c in s:
        if escaped:
            out.append(_UNESCAPES.get(c, c))
            escaped = False
        elif c == "\\":
            escaped = True
        else:
            out.append(c)
    return "".join(out)


def is_quoted(s: str) -> bool:
    return len(s) >= 2 and s.startswith('"') and s.endswith('"')


def unquote(s: str) -> str:
    """Strip and unescape a double-quoted token; return bare tokens trimmed."""
    s = s.strip()
    if is_quoted(s):
        return unescape(s[1:-1])
    return s


# ---------------------------------------------------------------------------
# Quote-aware scanning
# ---------------------------------------------------------------------------

def split_delimited(s: str, delimiter: str) -> list[str]:
    """Split *s* on *delimiter* outside double quotes.

    The delimiter may be several characters long.  Fields are returned
    untrimmed and still quoted.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    escaped = False
    i = 0
    n = len(s)

    while i < n:
        c = s[i]
        if escaped:
            current.append(c)
            escaped = False
        elif c == "\\":
            current.append(c)
            escaped = True
        elif c == '"':
            current.append(c)
            in_quotes = not in_quotes
        elif not in_quotes and s.startswith(delimiter, i):
            fields.append("".join(current))
            current = []
            i += len(delimiter)
            continue
        else:
            current.append(c)
        i += 1

    fields.append("".join(current))
    return fields


def find_unquoted_colon(s: str) -> int:
    """Index of the first ``:`` outside double quotes, or -1."""
    in_quotes = False
    escaped = False
    for i, c in enumerate(s):
        if escaped:
            escaped = False
        elif c == "\\":
            escaped = True
        elif c == '"':
            in_quotes = not in_quotes
        elif not in_quotes and c == ":":
            return i
    return -1


def closing_quote(s: str) -> int:
    """Index of the quote closing the one at ``s[0]``, or -1."""
    escaped = False
    for i in range(1, len(s)):
        c = s[i]
        if escaped:
            escaped = False
        elif c == "\\":
            escaped = True
        elif c == '"':
            return i
    return -1


def indent_of(line: str) -> int:
    """Number of leading space characters.  Tabs are not expanded."""
    return len(line) - len(line.lstrip(" "))
