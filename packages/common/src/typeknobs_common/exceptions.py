"""Common exception hierarchy for all typeknobs packages.

Every error raised by a typeknobs package derives from ``TypeknobsError``,
which accepts an optional context dictionary describing what was being
processed when the error occurred.

The hierarchy supports:
- Simple error messages for straightforward cases
- Context dictionaries for rich error information
- Package-specific extensions (``MatchFailed`` in ``typeknobs_pattern``,
  ``ConfigFileNotFoundError`` in ``typeknobs_config``)

Example:
    ```python
    from typeknobs_common.exceptions import TypeknobsError, ValidationError

    # Simple exception
    raise ValidationError("Token is not an integer")

    # Context-rich exception
    raise ValidationError(
        "Token is not an integer",
        context={"input": "seven", "pattern": "int"}
    )

    # Catch any typeknobs error
    try:
        operation()
    except TypeknobsError as e:
        logger.error(f"Error: {e}")
        if e.context:
            logger.error(f"Context: {e.context}")
    ```
"""

from typing import Any, Dict


class TypeknobsError(Exception):
    """Base exception for all typeknobs packages.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context (input, pattern, key, ...)
        details: Alternative to context (both are supported)

    Example:
        ```python
        error = TypeknobsError(
            "Operation failed",
            context={"operation": "register", "key": "int"}
        )
        str(error)
        # 'Operation failed'
        error.context
        # {'operation': 'register', 'key': 'int'}
        ```
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        """Initialize the exception with optional context.

        Args:
            message: Error message
            context: Optional context dictionary
            details: Optional details dictionary (takes precedence over context)
        """
        super().__init__(message)
        self.context = details or context or {}
        self.details = self.context


class ValidationError(TypeknobsError):
    """Raised when a value fails validation.

    Common scenarios include:
    - An input token that does not match a pattern
    - A converted value rejected by a validator
    - A malformed configuration reference

    Example:
        ```python
        raise ValidationError(
            "Value out of range",
            context={"value": 300, "max": 255}
        )
        ```
    """

    pass


class ConfigurationError(TypeknobsError):
    """Raised when a definition or configuration is invalid.

    Use this exception for errors that are the caller's fault at build
    time rather than at match time, for example:
    - A regex source that is already anchored
    - A cyclic fallback chain
    - An unsupported configuration file format

    Example:
        ```python
        raise ConfigurationError(
            "Unknown match mode",
            context={"mode": "fuzzy"}
        )
        ```
    """

    pass


class NotFoundError(TypeknobsError):
    """Raised when a requested item is not found.

    Example:
        ```python
        raise NotFoundError(
            "Pattern not found",
            context={"key": "uuid", "registry": "patterns"}
        )
        ```
    """

    pass


class OperationError(TypeknobsError):
    """Raised when an operation is used incorrectly or cannot complete.

    Example:
        ```python
        raise OperationError(
            "Item already registered",
            context={"key": "int", "registry": "patterns"}
        )
        ```
    """

    pass


__all__ = [
    "TypeknobsError",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "OperationError",
]
