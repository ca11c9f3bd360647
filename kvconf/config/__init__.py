"""Config package: key=value parsing and typed lookups.

Provides the parsed store, its entry types and parser settings.
"""

from .entry import Entry, ValueKind
from .errors import ConfigLoadError
from .parser import parse_line, infer_value
from .settings import ParserSettings, SettingsLoader
from .store import ConfigStore

__all__ = [
    "ConfigStore",
    "ConfigLoadError",
    "Entry",
    "ValueKind",
    "ParserSettings",
    "SettingsLoader",
    "parse_line",
    "infer_value",
]
