"""Common utilities and base classes for typeknobs packages.

This package provides shared functionality used across all typeknobs packages:

- **Exceptions**: Unified exception hierarchy with context support
- **Registry**: Generic thread-safe registry for managing named items

Example:
    ```python
    from typeknobs_common import Registry, TypeknobsError

    # Use common exceptions
    raise TypeknobsError("Something went wrong", context={"details": "here"})

    # Create a registry
    registry = Registry[MyType]("my_registry")
    registry.register("key", my_item)
    ```
"""

from typeknobs_common.exceptions import (
    ConfigurationError,
    NotFoundError,
    OperationError,
    TypeknobsError,
    ValidationError,
)
from typeknobs_common.registry import Registry

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "TypeknobsError",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "OperationError",
    # Registry
    "Registry",
]
