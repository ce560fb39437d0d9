"""Formatting options shared by the encoder and the decoder."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ToonConfigError


DEFAULT_DELIMITER = ","
DEFAULT_INDENT = 2

_DELIMITER_ALIASES: dict[str, str] = {
    "comma": ",",
    "pipe": "|",
    "tab": "\t",
    "\\t": "\t",
}


@dataclass(frozen=True, slots=True)
class ToonConfig:
    delimiter: str = DEFAULT_DELIMITER
    indent: int = DEFAULT_INDENT
    length_marker: str = ""

    def __post_init__(self) -> None:
        # Frozen: normalise through object.__setattr__
        if not self.delimiter:
            object.__setattr__(self, "delimiter", DEFAULT_DELIMITER)
        if self.indent < 1:
            object.__setattr__(self, "indent", 1)
        if self.length_marker is None:
            object.__setattr__(self, "length_marker", "")

    @property
    def delimiter_display(self) -> str:
        """Delimiter as written inside array headers ("" for the default)."""
        if self.delimiter == DEFAULT_DELIMITER:
            return ""
        return self.delimiter

    @classmethod
    def from_options(
        cls,
        indent: str | int | None = None,
        delimiter: str | None = None,
        length_marker: str | None = None,
    ) -> "ToonConfig":
        """Build a config from raw option strings, e.g. command-line values.

        Raises ToonConfigError when *indent* is not an integer.
        """
        if indent is None:
            width = DEFAULT_INDENT
        else:
            try:
                width = int(indent)
            except (TypeError, ValueError):
                raise ToonConfigError(f"indent must be an integer, got {indent!r}") from None

        if delimiter is None:
            delimiter = DEFAULT_DELIMITER
        delimiter = _DELIMITER_ALIASES.get(delimiter, delimiter)

        return cls(delimiter=delimiter, indent=width, length_marker=length_marker or "")


DEFAULT_CONFIG = ToonConfig()
