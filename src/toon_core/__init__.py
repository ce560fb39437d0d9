"""TOON Core — encoder and decoder for Token-Oriented Object Notation."""

from __future__ import annotations

from typing import Any

from .config import DEFAULT_CONFIG, ToonConfig
from .decoder import ToonDecoder, decode, parse_scalar
from .encoder import ToonEncoder, encode
from .errors import ToonConfigError, ToonError
from .values import (
    Null,
    Value,
    VArray,
    VBool,
    VDate,
    VFloat,
    VInt,
    VObject,
    VString,
    from_python,
    to_python,
)

__version__ = "0.9.0"


def dumps(obj: Any, config: ToonConfig | None = None) -> str:
    """Encode plain Python data (dicts, lists, scalars) as TOON text."""
    return encode(from_python(obj), config)


def loads(text: str, config: ToonConfig | None = None) -> Any:
    """Decode TOON text into plain Python data."""
    return to_python(decode(text, config))


__all__ = [
    "encode",
    "decode",
    "dumps",
    "loads",
    "parse_scalar",
    "ToonEncoder",
    "ToonDecoder",
    "ToonConfig",
    "DEFAULT_CONFIG",
    "ToonError",
    "ToonConfigError",
    "Null",
    "Value",
    "VArray",
    "VBool",
    "VDate",
    "VFloat",
    "VInt",
    "VObject",
    "VString",
    "from_python",
    "to_python",
]
