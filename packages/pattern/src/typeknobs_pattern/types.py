"""Enumerations and sentinels shared by the pattern engine."""

from __future__ import annotations

from enum import Enum, IntEnum


class MatchMode(IntEnum):
    """How a pattern turns an accepted input into its result.

    The modes are mutually exclusive. Negation is not a mode; it is applied
    by ``Pattern.exec`` around whichever mode is selected.
    """

    KEEP = 0
    """Return the input unchanged; acceptance alone is the contract."""
    REGEX_MATCH = 1
    """Match the text against the regex and return the matched text."""
    TYPE_CONVERT = 2
    """Pass the input to the converter and check the result's type."""
    REGEX_CONVERT = 3
    """Match the text against the regex and convert the matched text."""


class ResultFlag(str, Enum):
    """Outcome of a single validation."""

    VALID = "valid"
    ERROR = "error"
    DEFAULT = "default"


class _EmptyType:
    """Type of the ``Empty`` sentinel."""

    _instance: _EmptyType | None = None

    def __new__(cls) -> _EmptyType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Empty"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _EmptyType:
        return self

    def __deepcopy__(self, memo: dict) -> _EmptyType:
        return self


Empty = _EmptyType()
"""Default value meaning "fall back, but with no value".

Passing ``Empty`` as the default of ``validate``/``invalidate``/``exec``
yields a DEFAULT outcome whose value is ``None``. It also marks a missing
value inside ``ValidateResult``.
"""
