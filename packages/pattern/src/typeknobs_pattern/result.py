"""Tri-state result of applying a pattern to one input."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .exceptions import ResultAccessError
from .types import Empty, ResultFlag

if TYPE_CHECKING:
    from .core import Pattern

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class ValidateResult(Generic[T]):
    """Outcome of ``Pattern.validate``/``invalidate``/``exec``.

    Exactly one of value and error is present: ERROR results carry the
    exception that caused them, VALID and DEFAULT results carry a value.
    Results are immutable; the combinators return new results.

    Use the constructors ``valid``, ``failure`` and ``fallback`` rather than
    the dataclass initializer.
    """

    flag: ResultFlag
    _value: Any = Empty
    _error: Exception | None = None

    def __post_init__(self) -> None:
        if self.flag == ResultFlag.ERROR:
            if self._error is None or self._value is not Empty:
                raise ValueError("ERROR results carry an error and no value")
        elif self._error is not None:
            raise ValueError(f"{self.flag.value.upper()} results carry no error")

    @classmethod
    def valid(cls, value: T) -> ValidateResult[T]:
        """Create a successful result."""
        return cls(ResultFlag.VALID, _value=value)

    @classmethod
    def failure(cls, error: Exception) -> ValidateResult[Any]:
        """Create a failed result."""
        return cls(ResultFlag.ERROR, _error=error)

    @classmethod
    def fallback(cls, default: T) -> ValidateResult[T]:
        """Create a result that fell back to a default value.

        ``Empty`` as the default becomes a value of ``None``.
        """
        return cls(ResultFlag.DEFAULT, _value=None if default is Empty else default)

    @property
    def value(self) -> T:
        """The value of a VALID or DEFAULT result.

        Raises:
            ResultAccessError: If the result is an ERROR
        """
        if self.flag == ResultFlag.ERROR or self._value is Empty:
            raise ResultAccessError(
                "Cannot access the value of a failed result",
                context={"error": str(self._error)},
            )
        return self._value

    @property
    def error(self) -> Exception | None:
        """The error of an ERROR result, otherwise None."""
        if self.flag == ResultFlag.ERROR:
            return self._error
        return None

    @property
    def success(self) -> bool:
        return self.flag == ResultFlag.VALID

    @property
    def failed(self) -> bool:
        return self.flag == ResultFlag.ERROR

    @property
    def or_default(self) -> bool:
        return self.flag == ResultFlag.DEFAULT

    def map(self, func: Callable[[T], U]) -> ValidateResult[U] | ValidateResult[T]:
        """Apply ``func`` to the value of a VALID result, keeping it VALID."""
        if not self.success:
            return self
        return ValidateResult.valid(func(self._value))

    def and_then(self, pattern: Pattern) -> ValidateResult[Any]:
        """Re-validate the value of a VALID result through another pattern."""
        if not self.success:
            return self
        return pattern.exec(self._value)

    def build_with(self, cls: type[U]) -> U | ValidateResult[T]:
        """Construct ``cls(value)`` from a VALID result."""
        if not self.success:
            return self
        return cls(self._value)

    def step(self, other: Any) -> Any:
        """Apply a pattern, a type or a function to a VALID result.

        Non-VALID results are returned unchanged. A pattern re-validates the
        value (``and_then``), a type is constructed from it (``build_with``)
        and any other callable is applied to it and its return value passed
        through as-is.

        Raises:
            TypeError: If ``other`` is none of the supported shapes
        """
        from .core import Pattern

        if isinstance(other, Pattern):
            return self.and_then(other)
        if isinstance(other, type):
            return self.build_with(other)
        if callable(other):
            if not self.success:
                return self
            return other(self._value)
        raise TypeError(f"Cannot step a result with {type(other).__name__}")

    def __rshift__(self, other: Any) -> Any:
        return self.step(other)

    def __bool__(self) -> bool:
        """True for VALID and DEFAULT results."""
        return self.flag != ResultFlag.ERROR

    def __repr__(self) -> str:
        if self.flag == ResultFlag.ERROR:
            return f"ValidateResult(error={self._error!r}, flag='{self.flag.value}')"
        return f"ValidateResult(value={self._value!r}, flag='{self.flag.value}')"
