"""kvconf: typed access to key=value configuration files."""

from .config import (
    ConfigLoadError,
    ConfigStore,
    Entry,
    ParserSettings,
    SettingsLoader,
    ValueKind,
)
from . import api

__version__ = "0.1.0"

__all__ = [
    "ConfigStore",
    "ConfigLoadError",
    "Entry",
    "ValueKind",
    "ParserSettings",
    "SettingsLoader",
    "api",
    "__version__",
]
