"""Ready-made patterns for common command-line argument shapes."""

from __future__ import annotations

from typing import Any

from .core import Pattern
from .types import MatchMode

_INT_RE = r"[+-]?\d+"
_FLOAT_RE = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"


def _to_number(_: Pattern, text: str) -> Any:
    try:
        return int(text)
    except ValueError:
        return float(text)


def _valid_octets(address: str) -> bool:
    return all(0 <= int(octet) <= 255 for octet in address.split("."))


ANY = Pattern(object, "", MatchMode.KEEP)
"""Accepts every input unchanged."""

STRING = Pattern(str, "", MatchMode.KEEP, alias="str", accepts=[str])

INTEGER = Pattern(int, _INT_RE, MatchMode.REGEX_CONVERT, alias="int")

FLOAT = Pattern(float, _FLOAT_RE, MatchMode.REGEX_CONVERT, alias="float")

NUMERIC_TEXT = Pattern(
    str,
    "",
    MatchMode.TYPE_CONVERT,
    lambda _, value: str(value) if type(value) in (int, float) else None,
    alias="numeric",
)
"""Renders ints and floats as text so that text patterns can re-read them."""

NUMBER = Pattern(
    float,
    _FLOAT_RE,
    MatchMode.REGEX_CONVERT,
    _to_number,
    alias="number",
    previous=NUMERIC_TEXT,
)
"""Integer or float; integral text becomes an ``int``."""

BOOLEAN = Pattern(
    bool,
    r"(?i:true|false|yes|no|on|off)",
    MatchMode.REGEX_CONVERT,
    alias="bool",
)

HEX = Pattern(
    int,
    r"0[xX]([0-9a-fA-F]+)",
    MatchMode.REGEX_CONVERT,
    lambda _, digits: int(digits, 16),
    alias="hex",
)

EMAIL = Pattern(str, r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+", MatchMode.REGEX_MATCH, alias="email")

URL = Pattern(
    str,
    r"[a-zA-Z][a-zA-Z0-9+.-]*://[^\s/?#]+[^\s]*",
    MatchMode.REGEX_MATCH,
    alias="url",
)

IP = Pattern(
    str,
    r"\d{1,3}(?:\.\d{1,3}){3}",
    MatchMode.REGEX_MATCH,
    alias="ip",
    validators=[_valid_octets],
)

BUILTIN_PATTERNS: dict[str, Pattern[Any]] = {
    "any": ANY,
    "str": STRING,
    "int": INTEGER,
    "float": FLOAT,
    "number": NUMBER,
    "bool": BOOLEAN,
    "hex": HEX,
    "email": EMAIL,
    "url": URL,
    "ip": IP,
}
