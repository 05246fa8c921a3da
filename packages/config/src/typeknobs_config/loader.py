"""Loading configuration dictionaries from YAML and JSON files."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml  # type: ignore[import-untyped]

from .exceptions import ConfigError, ConfigFileNotFoundError

logger = logging.getLogger(__name__)


def load_config(source: Union[str, Path, dict]) -> Dict[str, Any]:
    """Load a configuration dictionary from a source.

    Args:
        source: A dictionary (returned as a shallow copy) or a path to a
            ``.yaml``/``.yml`` or ``.json`` file

    Returns:
        Configuration dictionary (empty for an empty file)

    Raises:
        ConfigFileNotFoundError: If the file does not exist
        ConfigError: If the source type or file format is unsupported
    """
    if isinstance(source, dict):
        return dict(source)
    if isinstance(source, (str, Path)):
        return _load_file(source)
    raise ConfigError(
        f"Invalid source type: {type(source)}",
        context={"source_type": type(source).__name__},
    )


def _load_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Load configuration from a file, dispatching on its suffix."""
    path = Path(path).resolve()

    if not path.exists():
        raise ConfigFileNotFoundError(
            f"Configuration file not found: {path}",
            context={"path": str(path)},
        )

    suffix = path.suffix.lower()
    with open(path) as f:
        if suffix in [".yaml", ".yml"]:
            data = yaml.safe_load(f)
        elif suffix == ".json":
            data = json.load(f)
        else:
            raise ConfigError(
                f"Unsupported file format: {suffix}",
                context={"path": str(path)},
            )

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration root must be a mapping, got {type(data).__name__}",
            context={"path": str(path)},
        )

    logger.debug(f"Loaded configuration from {path}")
    return data
