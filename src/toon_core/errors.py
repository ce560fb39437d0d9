"""Exceptions for TOON Core.

``encode`` and ``decode`` never raise these; they are reserved for the
option-validation boundary and the command line.
"""


class ToonError(Exception):
    """Base class for TOON Core errors."""


class ToonConfigError(ToonError):
    """An option value could not be turned into a ToonConfig."""
