"""Custom exceptions for the config package.

This module defines exception types for the config package,
built on the common exception framework from typeknobs_common.
"""

from typeknobs_common import (
    ConfigurationError as BaseConfigurationError,
    NotFoundError,
    ValidationError,
)

ConfigError = BaseConfigurationError


class ConfigFileNotFoundError(NotFoundError):
    """Raised when a configuration file does not exist."""

    pass


class CircularReferenceError(ValidationError):
    """Raised when configuration entries reference each other in a loop."""

    pass
