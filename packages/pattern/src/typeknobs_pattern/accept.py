"""Acceptance checks run before a pattern converts its input.

A pattern may restrict what it is willing to look at, either by naming
runtime types (``TypeTag``) or by listing other patterns that must validate
the input first. The tags are resolved once, when the pattern is built, so
the per-input check is a plain predicate call.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .exceptions import PatternDefinitionError

if TYPE_CHECKING:
    from .core import Pattern


@dataclass(frozen=True)
class TypeTag:
    """A named runtime-type predicate.

    Attributes:
        name: Display name used in help text (``accepts_repr``)
        predicate: Returns True when a value has the tagged type
    """

    name: str
    predicate: Callable[[Any], bool]

    def matches(self, value: Any) -> bool:
        return self.predicate(value)

    def __str__(self) -> str:
        return self.name


_WELL_KNOWN_TYPES: dict[str, type] = {
    "str": str,
    "string": str,
    "int": int,
    "integer": int,
    "float": float,
    "bool": bool,
    "boolean": bool,
    "list": list,
    "dict": dict,
    "tuple": tuple,
    "set": set,
    "bytes": bytes,
    "none": type(None),
    "nonetype": type(None),
}


def _exact_type(cls: type) -> Callable[[Any], bool]:
    # bool is a subclass of int but must not pass as one
    return lambda value: type(value) is cls


def _type_name(name: str) -> Callable[[Any], bool]:
    lowered = name.lower()
    return lambda value: type(value).__name__.lower() == lowered


def resolve_type_tag(tag: TypeTag | type | str) -> TypeTag:
    """Resolve a type, a type name or an existing tag into a ``TypeTag``.

    Args:
        tag: A Python type (exact runtime-type check), a type name (matched
            case-insensitively; well-known names such as ``"integer"`` map
            to builtin types) or a ready ``TypeTag``

    Returns:
        The resolved tag

    Raises:
        PatternDefinitionError: If ``tag`` is none of the supported forms
    """
    if isinstance(tag, TypeTag):
        return tag
    if isinstance(tag, type):
        return TypeTag(tag.__name__, _exact_type(tag))
    if isinstance(tag, str):
        if not tag:
            raise PatternDefinitionError("Type tag must not be empty")
        known = _WELL_KNOWN_TYPES.get(tag.lower())
        if known is not None:
            return TypeTag(tag, _exact_type(known))
        return TypeTag(tag, _type_name(tag))
    raise PatternDefinitionError(
        f"Cannot use {tag!r} as an accepted type",
        context={"tag": repr(tag)},
    )


def split_accepts(
    accepts: Iterable[Pattern | TypeTag | type | str] | None,
) -> tuple[tuple[Pattern, ...], tuple[TypeTag, ...]]:
    """Split a mixed ``accepts`` list into sub-patterns and resolved type tags."""
    from .core import Pattern

    patterns: list[Pattern] = []
    tags: list[TypeTag] = []
    for item in accepts or ():
        if isinstance(item, Pattern):
            patterns.append(item)
        else:
            tags.append(resolve_type_tag(item))
    return tuple(patterns), tuple(tags)


def accepts(
    input_: Any,
    pattern_accepts: Sequence[Pattern] = (),
    type_accepts: Sequence[TypeTag] = (),
) -> bool:
    """Decide whether an input passes a pattern's acceptance gate.

    The input is accepted if any sub-pattern executes successfully on it
    (each sub-pattern applies its own negation) or if it has any of the
    tagged runtime types. Callers only run this when at least one of the
    two collections is non-empty.
    """
    if any(pattern.exec(input_).success for pattern in pattern_accepts):
        return True
    return any(tag.matches(input_) for tag in type_accepts)
