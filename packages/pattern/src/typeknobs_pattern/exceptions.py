"""Exceptions raised by the pattern engine."""

from typing import Any

from typeknobs_common import ConfigurationError, OperationError, ValidationError


class MatchFailed(ValidationError):
    """Raised by ``Pattern.match`` when an input cannot be matched.

    ``validate``, ``invalidate`` and ``exec`` never let this escape; they
    turn it into an ERROR (or DEFAULT) outcome.
    """

    def __init__(self, message: str, input_: Any = None, pattern: Any = None):
        super().__init__(
            message,
            context={"input": input_, "pattern": str(pattern) if pattern is not None else None},
        )
        self.input = input_
        self.pattern = pattern


class PatternDefinitionError(ConfigurationError):
    """Raised when a pattern is constructed with an invalid definition."""

    pass


class ResultAccessError(OperationError):
    """Raised when reading the value of a result that has none."""

    pass
