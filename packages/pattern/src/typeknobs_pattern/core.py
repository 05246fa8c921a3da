"""The ``Pattern`` coercion rule.

A pattern decides whether a raw input (usually a command-line token) is
acceptable and what it becomes. Each call runs three stages:

1. an acceptance gate over the input's runtime type or sub-patterns,
2. the mode-specific conversion (keep, regex match, type convert, regex
   convert),
3. the validator chain over the converted value.

When a stage cannot handle the input directly, the pattern asks its
``previous`` pattern to normalize the input first and tries once more.

Example:
    ```python
    from typeknobs_pattern import MatchMode, Pattern

    digits = Pattern(int, r"(\\d+)px", MatchMode.REGEX_CONVERT, alias="pixels")
    digits.exec("120px").value
    # 120
    digits.exec("wide").failed
    # True
    digits.reverse().exec("wide").value
    # 'wide'
    ```

Patterns are never mutated after construction; ``reverse`` and
``with_alias`` return modified copies, so one pattern can be shared freely.
"""

from __future__ import annotations

import copy
import logging
import re
from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar

from .accept import TypeTag, accepts, resolve_type_tag, split_accepts
from .converters import Converter, default_converter
from .exceptions import MatchFailed, PatternDefinitionError
from .result import ValidateResult
from .types import MatchMode

logger = logging.getLogger(__name__)

TOrigin = TypeVar("TOrigin")


def _is_anchored(text: str) -> bool:
    if text.startswith("^"):
        return True
    if not text.endswith("$"):
        return False
    # an escaped "\$" is a literal dollar sign
    backslashes = len(text[:-1]) - len(text[:-1].rstrip("\\"))
    return backslashes % 2 == 0


class Pattern(Generic[TOrigin]):
    """A reusable coercion and validation rule.

    Args:
        origin: Type the pattern produces on success
        source: Regex text (or compiled regex) without ``^``/``$`` anchors;
            only used by the two regex modes
        mode: How accepted input is turned into the result
        converter: ``(pattern, value) -> converted`` used by the two
            ``*_CONVERT`` modes; defaults to a safe converter for ``origin``
        alias: Display name for help text
        previous: Fallback pattern asked to normalize inputs this pattern
            cannot take directly
        accepts: Types, type names, ``TypeTag`` objects or patterns that an
            input must satisfy before conversion (any one of them)
        validators: Predicates over the converted value; all must pass
        anti: Negate the pattern, so that ``exec`` succeeds exactly when
            the input would not validate

    Raises:
        PatternDefinitionError: If the source is anchored or not a valid
            regex, the mode is unknown, or the fallback chain is invalid
    """

    def __init__(
        self,
        origin: type[TOrigin] = str,  # type: ignore[assignment]
        source: str | re.Pattern[str] = "",
        mode: MatchMode | int = MatchMode.REGEX_MATCH,
        converter: Converter | None = None,
        alias: str | None = None,
        previous: Pattern[Any] | None = None,
        accepts: Iterable[Pattern[Any] | TypeTag | type | str] | None = None,
        validators: Iterable[Callable[[TOrigin], bool]] | None = None,
        anti: bool = False,
    ):
        try:
            self.mode = MatchMode(mode)
        except ValueError as e:
            raise PatternDefinitionError(
                f"Unknown match mode: {mode!r}", context={"mode": mode}
            ) from e

        if isinstance(source, re.Pattern):
            text, flags = source.pattern, source.flags
        else:
            text, flags = source, 0
        if _is_anchored(text):
            raise PatternDefinitionError(
                f"Regex '{text}' must not start with '^' or end with '$'",
                context={"source": text},
            )
        try:
            self.regex = re.compile(text, flags)
        except re.error as e:
            raise PatternDefinitionError(
                f"Invalid regex '{text}': {e}", context={"source": text}
            ) from e
        self.source = text

        self.origin = origin
        self.converter: Converter = converter or default_converter(origin, self.mode)
        self.validators: tuple[Callable[[TOrigin], bool], ...] = tuple(validators or ())
        self.pattern_accepts, self.type_accepts = split_accepts(accepts)

        self._check_chain(previous)
        self._previous = previous
        self._alias = alias
        self._anti = anti

    def _check_chain(self, previous: Any) -> None:
        seen = {id(self)}
        node = previous
        while node is not None:
            if not isinstance(node, Pattern):
                raise PatternDefinitionError(
                    f"Fallback must be a Pattern, got {type(node).__name__}"
                )
            if id(node) in seen:
                raise PatternDefinitionError(
                    "Fallback chain must not contain a cycle",
                    context={"pattern": str(node)},
                )
            seen.add(id(node))
            node = node._previous

    @property
    def previous(self) -> Pattern[Any] | None:
        """The fallback pattern, if any."""
        return self._previous

    @property
    def alias(self) -> str | None:
        return self._alias

    @property
    def anti(self) -> bool:
        """Whether the pattern is negated."""
        return self._anti

    @staticmethod
    def of(unit: type[TOrigin]) -> Pattern[TOrigin]:
        """Pattern accepting only values whose runtime type is ``unit``."""
        return Pattern(
            unit,
            "",
            MatchMode.KEEP,
            lambda _, value: unit(value),  # type: ignore[call-arg]
            alias=unit.__name__,
            accepts=[unit],
        )

    @staticmethod
    def on(obj: TOrigin) -> Pattern[TOrigin]:
        """Pattern accepting only values equal to ``obj`` (of the same type)."""
        unit = type(obj)
        return Pattern(
            unit,
            "",
            MatchMode.KEEP,
            alias=str(obj),
            validators=[lambda value: value is obj or (type(value) is unit and value == obj)],
        )

    def copy(self) -> Pattern[TOrigin]:
        return copy.copy(self)

    def reverse(self) -> Pattern[TOrigin]:
        """Return a copy with negation toggled."""
        reversed_ = self.copy()
        reversed_._anti = not self._anti
        return reversed_

    def with_alias(self, name: str) -> Pattern[TOrigin]:
        """Return a copy displayed as ``name``."""
        renamed = self.copy()
        renamed._alias = name
        return renamed

    def _accepted(self, input_: Any) -> bool:
        return accepts(input_, self.pattern_accepts, self.type_accepts)

    def _fail(self, message: str, input_: Any) -> MatchFailed:
        return MatchFailed(message.format(input=repr(input_)), input_, self)

    def _fall_back(self, input_: Any, fail_message: str) -> Any:
        """Normalize ``input_`` through ``previous`` or fail."""
        if self._previous is None:
            raise self._fail(fail_message, input_)
        logger.debug(f"Pattern {self} falling back to {self._previous} for {input_!r}")
        return self._previous.match(input_)

    def _convert(self, value: Any) -> Any:
        try:
            return self.converter(self, value)
        except (ValueError, TypeError) as e:
            logger.debug(f"Pattern {self} could not convert {value!r}: {e}")
            return None

    def match(self, input_: Any) -> TOrigin:
        """Coerce an input, raising on failure.

        Validators are not run; use ``exec`` for the full pipeline.

        Raises:
            MatchFailed: If the input is not accepted, cannot be converted
                or does not match the regex
        """
        if (
            self.mode != MatchMode.KEEP
            and self.origin is not str
            and type(input_) is self.origin
        ):
            return input_

        if (self.pattern_accepts or self.type_accepts) and not self._accepted(input_):
            input_ = self._fall_back(input_, "Parameter {input} has incorrect type")
            if not self._accepted(input_):
                raise self._fail("Parameter {input} has incorrect type", input_)

        if self.mode == MatchMode.KEEP:
            return input_
        if self.mode == MatchMode.TYPE_CONVERT:
            return self._match_type(input_)
        return self._match_regex(input_)

    def _match_type(self, input_: Any) -> TOrigin:
        result = self._convert(input_)
        if result is None or type(result) is not self.origin:
            normalized = self._fall_back(input_, "Parameter {input} is incorrect")
            result = self._convert(normalized)
            if result is None or type(result) is not self.origin:
                raise self._fail("Parameter {input} is incorrect", input_)
        return result

    def _match_regex(self, input_: Any) -> Any:
        if not isinstance(input_, str):
            input_ = self._fall_back(input_, "Parameter {input} has incorrect type")
            if not isinstance(input_, str):
                raise self._fail("Parameter {input} has incorrect type", input_)

        mat = self.regex.fullmatch(input_)
        if mat is None:
            raise self._fail("Parameter {input} is incorrect", input_)
        text = mat.group(1) if self.regex.groups and mat.group(1) is not None else mat.group(0)

        if self.mode == MatchMode.REGEX_MATCH:
            return text
        result = self._convert(text)
        if result is None:
            raise self._fail("Parameter {input} cannot be converted", input_)
        return result

    def validate(self, input_: Any, default: Any = None) -> ValidateResult[Any]:
        """Match an input and run the validators over the result.

        Args:
            input_: Raw input
            default: Value to fall back to on failure; ``None`` means no
                default and ``Empty`` means a default of ``None``

        Returns:
            VALID with the converted value, otherwise ERROR with the
            ``MatchFailed`` cause, or DEFAULT when a default was given
        """
        try:
            result = self.match(input_)
            for validator in self.validators:
                if not validator(result):
                    raise self._fail("Parameter {input} is incorrect", input_)
        except MatchFailed as e:
            if default is None:
                return ValidateResult.failure(e)
            return ValidateResult.fallback(default)
        return ValidateResult.valid(result)

    def invalidate(self, input_: Any, default: Any = None) -> ValidateResult[Any]:
        """Succeed with the original input exactly when ``validate`` would fail.

        Args:
            input_: Raw input
            default: As for ``validate``

        Returns:
            VALID with ``input_`` if matching or any validator fails,
            otherwise ERROR, or DEFAULT when a default was given
        """
        try:
            result = self.match(input_)
        except MatchFailed:
            return ValidateResult.valid(input_)
        for validator in self.validators:
            if not validator(result):
                return ValidateResult.valid(input_)
        if default is None:
            return ValidateResult.failure(
                self._fail("Parameter {input} should not match", input_)
            )
        return ValidateResult.fallback(default)

    def exec(self, input_: Any, default: Any = None) -> ValidateResult[Any]:
        """Validate an input, honouring negation."""
        if self._anti:
            return self.invalidate(input_, default)
        return self.validate(input_, default)

    def __rrshift__(self, other: Any) -> ValidateResult[Any]:
        return self.exec(other)

    def accepts_repr(self) -> str:
        """Describe the acceptance gate, e.g. ``"str|int"``."""
        names = [tag.name for tag in self.type_accepts]
        names.extend(str(pattern) for pattern in self.pattern_accepts)
        return "|".join(names)

    def _text(self) -> str:
        if self._alias:
            return self._alias
        has_accepts = bool(self.type_accepts or self.pattern_accepts)
        if self.mode == MatchMode.KEEP:
            return self.accepts_repr() if has_accepts else "Any"
        if self.mode == MatchMode.REGEX_MATCH:
            return self.source
        origin_name = getattr(self.origin, "__name__", str(self.origin))
        if self.mode == MatchMode.REGEX_CONVERT or not has_accepts:
            return origin_name
        return f"{self.accepts_repr()} -> {origin_name}"

    def __str__(self) -> str:
        prefix = f"{self._previous} -> " if self._previous is not None else ""
        return f"{prefix}{'!' if self._anti else ''}{self._text()}"

    def __repr__(self) -> str:
        return f"Pattern({str(self)!r}, mode={self.mode.name})"
