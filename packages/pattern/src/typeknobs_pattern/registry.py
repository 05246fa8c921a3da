"""Named collections of patterns."""

from __future__ import annotations

import logging
from typing import Any

from typeknobs_common import Registry

from .builtins import BUILTIN_PATTERNS
from .core import Pattern

logger = logging.getLogger(__name__)


class PatternRegistry(Registry[Pattern[Any]]):
    """Registry of patterns keyed by the name callers refer to them by.

    Registries are ordinary objects; there is no process-wide registry.
    Metrics are on by default so that each entry records its match mode.

    Example:
        ```python
        registry = create_default_registry()
        registry.register_pattern(Pattern(str, r"[a-z]+", alias="word"))
        registry.get("word").exec("hello").value
        # 'hello'
        ```
    """

    def __init__(self, name: str = "patterns", enable_metrics: bool = True):
        super().__init__(name, enable_metrics=enable_metrics)

    def register_pattern(
        self,
        pattern: Pattern[Any],
        name: str | None = None,
        allow_overwrite: bool = False,
    ) -> str:
        """Register a pattern under ``name``, its alias, or its display text.

        Returns:
            The key the pattern was registered under
        """
        key = name or pattern.alias or str(pattern)
        self.register(
            key,
            pattern,
            metadata={"mode": pattern.mode.name},
            allow_overwrite=allow_overwrite,
        )
        return key


def create_default_registry(name: str = "patterns") -> PatternRegistry:
    """Create a new registry holding the built-in patterns."""
    registry = PatternRegistry(name)
    for key, pattern in BUILTIN_PATTERNS.items():
        registry.register_pattern(pattern, name=key)
    logger.info(f"Created pattern registry '{name}' with {registry.count()} built-in patterns")
    return registry
