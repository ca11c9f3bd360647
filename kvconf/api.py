"""Functional interface over ConfigStore.

Mirrors the load/get/free contract of the library: ``load`` returns None
instead of raising, and every getter accepts a missing store and answers
with the default.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .config.entry import Entry
from .config.errors import ConfigLoadError
from .config.settings import ParserSettings
from .config.store import ConfigStore

logger = logging.getLogger(__name__)

__all__ = [
    "load",
    "free",
    "get_pair",
    "get_int",
    "get_long",
    "get_float",
    "get_double",
    "get_string",
    "get_char",
]


def load(path: Union[str, Path], settings: Optional[ParserSettings] = None) -> Optional[ConfigStore]:
    """Load a config file, returning None if it cannot be read."""
    try:
        return ConfigStore.load(path, settings)
    except ConfigLoadError as e:
        logger.error("Could not load config file: %s", e)
        return None


def free(store: Optional[ConfigStore]) -> None:
    """Release a store. Passing None is a no-op."""
    if store is not None:
        store.close()


def get_pair(store: Optional[ConfigStore], key: Optional[str]) -> Optional[Entry]:
    if store is None:
        return None
    return store.get_pair(key)


def get_int(store: Optional[ConfigStore], key: str, default: int) -> int:
    return default if store is None else store.get_int(key, default)


def get_long(store: Optional[ConfigStore], key: str, default: int) -> int:
    return default if store is None else store.get_long(key, default)


def get_float(store: Optional[ConfigStore], key: str, default: float) -> float:
    return default if store is None else store.get_float(key, default)


def get_double(store: Optional[ConfigStore], key: str, default: float) -> float:
    return default if store is None else store.get_double(key, default)


def get_string(store: Optional[ConfigStore], key: str, default: Optional[str]) -> Optional[str]:
    return default if store is None else store.get_string(key, default)


def get_char(store: Optional[ConfigStore], key: str, default: str) -> str:
    return default if store is None else store.get_char(key, default)
