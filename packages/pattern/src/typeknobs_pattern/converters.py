"""Safe default converters selected by a pattern's target type.

A pattern built without an explicit converter gets one from a closed table
keyed by its origin type. Nothing here evaluates input text as code.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from .types import MatchMode

if TYPE_CHECKING:
    from .core import Pattern

Converter = Callable[["Pattern", Any], Any]

_INT_TEXT = re.compile(r"[+-]?\d+")

TRUE_WORDS = frozenset({"true", "yes", "y", "on", "1"})
FALSE_WORDS = frozenset({"false", "no", "n", "off", "0"})


def parse_int(value: Any) -> int:
    """Convert to ``int`` without guessing.

    Accepts ints, integral floats and decimal integer text (optional sign,
    no surrounding whitespace).

    Raises:
        ValueError: If the text is not a decimal integer or the float has a
            fractional part
        TypeError: For any other input type, including ``bool``
    """
    if type(value) is int:
        return value
    if type(value) is float:
        if not math.isfinite(value) or value != int(value):
            raise ValueError(f"Float {value} cannot be losslessly converted to int")
        return int(value)
    if isinstance(value, str):
        if not _INT_TEXT.fullmatch(value):
            raise ValueError(f"'{value}' is not an integer")
        return int(value)
    raise TypeError(f"Cannot convert {type(value).__name__} to int")


def parse_float(value: Any) -> float:
    """Convert numbers and float literal text to ``float``."""
    if type(value) in (int, float):
        return float(value)
    if isinstance(value, str):
        if not value or value != value.strip():
            raise ValueError(f"'{value}' is not a float")
        return float(value)
    raise TypeError(f"Cannot convert {type(value).__name__} to float")


def parse_bool(value: Any) -> bool:
    """Convert booleans, 0/1 and yes/no style words to ``bool``."""
    if type(value) is bool:
        return value
    if type(value) is int and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.lower()
        if lowered in TRUE_WORDS:
            return True
        if lowered in FALSE_WORDS:
            return False
        raise ValueError(f"Cannot interpret '{value}' as boolean")
    raise TypeError(f"Cannot convert {type(value).__name__} to bool")


_BY_ORIGIN: dict[type, Callable[[Any], Any]] = {
    int: parse_int,
    float: parse_float,
    bool: parse_bool,
    str: str,
}


def default_converter(origin: type, mode: MatchMode) -> Converter:
    """Pick the converter a pattern uses when none is given.

    Known origins (``int``, ``float``, ``bool``, ``str``) use the parsers
    above. Other origins are constructed from the value in ``TYPE_CONVERT``
    mode and left as the matched text in ``REGEX_CONVERT`` mode.
    """
    parse = _BY_ORIGIN.get(origin)
    if parse is not None:
        return lambda _, value: parse(value)
    if mode == MatchMode.TYPE_CONVERT:
        return lambda _, value: origin(value)
    return lambda _, value: value
