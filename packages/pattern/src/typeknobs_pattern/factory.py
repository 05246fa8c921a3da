"""Building patterns from declarative configuration."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any, Union

from typeknobs_common import NotFoundError
from typeknobs_config import CircularReferenceError, ConfigError, FactoryBase, load_config

from .core import Pattern
from .registry import PatternRegistry, create_default_registry
from .types import MatchMode

logger = logging.getLogger(__name__)

ORIGIN_TYPES: dict[str, type] = {
    "str": str,
    "string": str,
    "int": int,
    "integer": int,
    "float": float,
    "bool": bool,
    "boolean": bool,
    "list": list,
    "dict": dict,
    "any": object,
}


class PatternFactory(FactoryBase):
    """Factory for creating patterns from configuration.

    Configuration Options:
        origin (str): Target type name (str, int, float, bool, list, dict, any;
            default: str)
        source (str): Regex text, unanchored
        mode (str): KEEP, REGEX_MATCH, TYPE_CONVERT or REGEX_CONVERT, any case
            (default: REGEX_MATCH when a source is given, otherwise KEEP)
        alias (str): Display name
        previous (str): Registry key of the fallback pattern
        accepts (list): Type names, or ``@key`` references to registered patterns
        anti (bool): Negate the pattern (default: False)
        validators (list): Validator definitions

    Validator Definition Options:
        type (str): range, length, choices or regex
        min / max: Bounds for range and length
        values (list): Allowed values for choices
        pattern (str): Regex the value's text must fully match

    Example Configuration:
        patterns:
          port:
            origin: int
            source: "\\\\d+"
            mode: regex_convert
            validators:
              - type: range
                min: 1
                max: 65535
          not_number:
            source: "\\\\d+"
            anti: true
    """

    def __init__(self, registry: PatternRegistry | None = None):
        """Initialize the factory.

        Args:
            registry: Registry used to resolve ``previous`` and ``@key``
                references (default: a new registry of built-in patterns)
        """
        self.registry = registry if registry is not None else create_default_registry()

    def create(self, **config: Any) -> Pattern[Any]:
        """Create a Pattern from configuration.

        Raises:
            ConfigError: If the origin or mode is unknown, ``anti`` is not a
                boolean, or a validator regex is invalid
            NotFoundError: If a referenced pattern is not registered
        """
        source = config.get("source", "")
        alias = config.get("alias")
        logger.info(f"Creating pattern: {alias or source or 'unnamed'}")

        previous_key = config.get("previous")
        previous = self.registry.get(previous_key) if previous_key else None

        return Pattern(
            self._origin(config.get("origin", "str")),
            source,
            self._mode(config.get("mode"), source),
            alias=alias,
            previous=previous,
            accepts=[self._accept(item) for item in config.get("accepts") or []],
            validators=self._build_validators(config.get("validators") or []),
            anti=self._anti(config.get("anti", False)),
        )

    def _anti(self, value: Any) -> bool:
        if not isinstance(value, bool):
            raise ConfigError(
                f"'anti' must be true or false, got {value!r}",
                context={"anti": repr(value)},
            )
        return value

    def _origin(self, name: str) -> type:
        origin = ORIGIN_TYPES.get(str(name).lower())
        if origin is None:
            raise ConfigError(
                f"Unknown origin type: {name}",
                context={"origin": name, "known": sorted(ORIGIN_TYPES)},
            )
        return origin

    def _mode(self, name: str | None, source: str) -> MatchMode:
        if name is None:
            return MatchMode.REGEX_MATCH if source else MatchMode.KEEP
        try:
            return MatchMode[str(name).upper()]
        except KeyError as e:
            raise ConfigError(
                f"Unknown match mode: {name}",
                context={"mode": name, "known": [m.name for m in MatchMode]},
            ) from e

    def _accept(self, item: str) -> Pattern[Any] | str:
        if not isinstance(item, str):
            raise ConfigError(
                f"Accepted types must be names or @references, got {item!r}",
                context={"item": repr(item)},
            )
        if item.startswith("@"):
            return self.registry.get(item[1:])
        return item

    def _build_validators(
        self, validator_configs: list[dict[str, Any]]
    ) -> list[Callable[[Any], bool]]:
        validators: list[Callable[[Any], bool]] = []

        for config in validator_configs:
            validator_type = config.get("type", "").lower()

            if validator_type == "range":
                validators.append(_range(config.get("min"), config.get("max")))

            elif validator_type == "length":
                validators.append(_length(config.get("min"), config.get("max")))

            elif validator_type == "choices":
                values = config.get("values", [])
                if values:
                    validators.append(lambda value, allowed=tuple(values): value in allowed)

            elif validator_type == "regex":
                pattern = config.get("pattern")
                if pattern:
                    validators.append(_regex(pattern))

            else:
                logger.warning(f"Unknown validator type: {validator_type}")

        return validators


def _range(low: Any, high: Any) -> Callable[[Any], bool]:
    return lambda value: (low is None or value >= low) and (high is None or value <= high)


def _length(low: int | None, high: int | None) -> Callable[[Any], bool]:
    return lambda value: (low is None or len(value) >= low) and (high is None or len(value) <= high)


def _regex(pattern: str) -> Callable[[Any], bool]:
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        raise ConfigError(
            f"Invalid regex validator '{pattern}': {e}",
            context={"pattern": pattern},
        ) from e
    return lambda value: compiled.fullmatch(str(value)) is not None


def _references(definition: dict[str, Any]) -> list[str]:
    refs = []
    if definition.get("previous"):
        refs.append(definition["previous"])
    refs.extend(
        item[1:]
        for item in definition.get("accepts") or []
        if isinstance(item, str) and item.startswith("@")
    )
    return refs


def load_patterns(
    source: Union[str, Path, dict],
    registry: PatternRegistry | None = None,
) -> PatternRegistry:
    """Load named pattern definitions into a registry.

    The source holds a ``patterns`` mapping of name to definition (see
    ``PatternFactory``). A definition may refer to other definitions in the
    same source, in any order, and to patterns already in the registry.
    Each pattern is registered under its name, which is also its default
    alias; names from the source replace existing entries.

    Args:
        source: Configuration dictionary or YAML/JSON file path
        registry: Registry to populate (default: a new registry of
            built-in patterns)

    Returns:
        The populated registry

    Raises:
        CircularReferenceError: If definitions refer to each other in a loop
        NotFoundError: If a reference names no definition or registered pattern
        ConfigError: If the configuration is malformed
    """
    data = load_config(source)
    definitions = data.get("patterns") or {}
    if not isinstance(definitions, dict):
        raise ConfigError("'patterns' must be a mapping of name to definition")

    registry = registry if registry is not None else create_default_registry()
    factory = PatternFactory(registry)
    built: set[str] = set()

    def build(name: str, chain: list[str]) -> None:
        if name in built:
            return
        if name in chain:
            cycle = " -> ".join(chain + [name])
            raise CircularReferenceError(
                f"Circular pattern reference: {cycle}",
                context={"cycle": chain + [name]},
            )
        definition = definitions[name]
        if not isinstance(definition, dict):
            raise ConfigError(
                f"Pattern definition '{name}' must be a mapping",
                context={"pattern": name},
            )
        for ref in _references(definition):
            if ref in definitions:
                build(ref, chain + [name])
            elif not registry.has(ref):
                raise NotFoundError(
                    f"Pattern '{name}' refers to unknown pattern '{ref}'",
                    context={"pattern": name, "reference": ref},
                )
        pattern = factory.create(**{"alias": name, **definition})
        registry.register_pattern(pattern, name=name, allow_overwrite=True)
        built.add(name)

    for name in definitions:
        build(name, [])

    logger.info(f"Loaded {len(built)} patterns into registry '{registry.name}'")
    return registry
