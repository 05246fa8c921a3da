"""typeknobs Config Package

Loading declarative definitions from YAML/JSON and the factory protocol
used to turn them into objects.
"""

from .builders import FactoryBase
from .exceptions import CircularReferenceError, ConfigError, ConfigFileNotFoundError
from .loader import load_config

__version__ = "0.3.1"
__all__ = [
    "CircularReferenceError",
    "ConfigError",
    "ConfigFileNotFoundError",
    "FactoryBase",
    "load_config",
]
