"""Type coercion and validation patterns for command-line arguments.

This package provides the rule objects an argument parser uses to check and
convert individual tokens:

- **Pattern**: a coercion rule with an acceptance gate, a match mode, a
  converter, validators, a fallback chain and optional negation
- **ValidateResult**: the tri-state (valid / error / default) outcome
- **Built-ins**: ready-made patterns such as ``INTEGER`` and ``BOOLEAN``
- **PatternRegistry** / **load_patterns**: named patterns, loadable from
  YAML or JSON

Example:
    ```python
    from typeknobs_pattern import INTEGER, MatchMode, Pattern

    INTEGER.exec("42").value
    # 42
    INTEGER.exec("forty-two", default=0).value
    # 0

    word = Pattern(str, r"[a-z]+", MatchMode.REGEX_MATCH, alias="word")
    word.reverse().exec("123").success
    # True
    ```
"""

from .accept import TypeTag, accepts, resolve_type_tag
from .builtins import (
    ANY,
    BOOLEAN,
    BUILTIN_PATTERNS,
    EMAIL,
    FLOAT,
    HEX,
    INTEGER,
    IP,
    NUMBER,
    STRING,
    URL,
)
from .converters import default_converter, parse_bool, parse_float, parse_int
from .core import Pattern
from .exceptions import MatchFailed, PatternDefinitionError, ResultAccessError
from .factory import PatternFactory, load_patterns
from .registry import PatternRegistry, create_default_registry
from .result import ValidateResult
from .types import Empty, MatchMode, ResultFlag

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Core
    "Pattern",
    "ValidateResult",
    "MatchMode",
    "ResultFlag",
    "Empty",
    # Acceptance
    "TypeTag",
    "accepts",
    "resolve_type_tag",
    # Converters
    "default_converter",
    "parse_int",
    "parse_float",
    "parse_bool",
    # Exceptions
    "MatchFailed",
    "PatternDefinitionError",
    "ResultAccessError",
    # Built-ins
    "ANY",
    "STRING",
    "INTEGER",
    "FLOAT",
    "NUMBER",
    "BOOLEAN",
    "HEX",
    "EMAIL",
    "URL",
    "IP",
    "BUILTIN_PATTERNS",
    # Registry and configuration
    "PatternRegistry",
    "create_default_registry",
    "PatternFactory",
    "load_patterns",
]
