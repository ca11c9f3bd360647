"""In-memory store of typed entries loaded from a key=value file.

The store is built once by ``ConfigStore.load`` and is read-only afterwards.
Lookups never raise: a missing key or a kind mismatch returns the caller's
default. Two narrowing coercions are applied instead of falling back:
``get_int`` on a long entry wraps to 32 bits, and ``get_float`` on a double
entry rounds to single precision.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, TextIO, Tuple, Union

import numpy as np

from .entry import Entry, ValueKind
from .errors import ConfigLoadError
from .parser import parse_line
from .settings import ParserSettings

logger = logging.getLogger(__name__)


def narrow_to_int32(value: int) -> int:
    """Two's-complement narrowing of a 64-bit integer to 32 bits."""
    return int(np.array(value, dtype=np.int64).astype(np.int32))


def narrow_to_float32(value: float) -> float:
    """Round a double to the nearest single-precision value."""
    with np.errstate(over="ignore"):
        return float(np.array(value, dtype=np.float64).astype(np.float32))


def _bounded_lines(fh: TextIO, max_length: Optional[int]) -> Iterator[str]:
    """Yield lines without their terminator, cut to ``max_length`` characters.

    Only LF and CRLF end a line; a lone CR stays part of the text.
    """
    for line in fh:
        if line.endswith("\r\n"):
            line = line[:-2]
        elif line.endswith("\n"):
            line = line[:-1]
        if max_length is not None:
            line = line[:max_length]
        yield line


class ConfigStore:
    """Ordered, immutable collection of typed config entries."""

    def __init__(
        self,
        entries: Iterable[Entry] = (),
        path: Optional[Path] = None,
        settings: Optional[ParserSettings] = None,
    ):
        """Initialize a store from already parsed entries.

        Args:
            entries: Entries in file order
            path: File the entries were read from, if any
            settings: Settings used while parsing
        """
        self.path = path
        self.settings = settings if settings is not None else ParserSettings()
        self._entries: Tuple[Entry, ...] = tuple(entries)
        self._closed = False

        # First occurrence of a key shadows later duplicates
        self._index: Dict[str, Entry] = {}
        for entry in self._entries:
            self._index.setdefault(entry.key, entry)

    @classmethod
    def load(
        cls,
        path: Union[str, Path],
        settings: Optional[ParserSettings] = None,
    ) -> "ConfigStore":
        """Parse a config file into a new store.

        Args:
            path: Path to the key=value file
            settings: Parser limits, defaults to ParserSettings()

        Returns:
            Populated ConfigStore

        Raises:
            ConfigLoadError: If the file cannot be opened or decoded, or memory
                runs out while parsing
        """
        if settings is None:
            settings = ParserSettings()
        path = Path(path)
        logger.debug("Loading config from: %s", path)

        entries: List[Entry] = []
        skipped = 0
        try:
            fh = open(path, "r", encoding=settings.encoding, newline="\n")
        except (OSError, ValueError) as e:
            # ValueError covers paths open() rejects outright, e.g. embedded NUL
            error_msg = f"Failed to open file {path}: {e}"
            logger.debug(error_msg)
            raise ConfigLoadError(error_msg) from e

        try:
            with fh:
                for line_number, line in enumerate(_bounded_lines(fh, settings.max_line_length), 1):
                    entry = parse_line(line, settings)
                    if entry is None:
                        skipped += 1
                        logger.debug("%s:%d: no entry, line skipped", path, line_number)
                        continue
                    entries.append(entry)
        except OSError as e:
            error_msg = f"Failed to read file {path}: {e}"
            logger.debug(error_msg)
            raise ConfigLoadError(error_msg) from e
        except UnicodeDecodeError as e:
            error_msg = f"File {path} is not valid {settings.encoding} text: {e}"
            logger.debug(error_msg)
            raise ConfigLoadError(error_msg) from e
        except MemoryError as e:
            entries.clear()
            raise ConfigLoadError(f"Failed to allocate memory while parsing {path}") from e

        store = cls(entries, path=path, settings=settings)
        logger.info("Loaded %d entries from %s (%d lines skipped)", len(entries), path, skipped)
        return store

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def close(self) -> None:
        """Release all entries. Later lookups return their defaults."""
        if self._closed:
            return
        self._entries = ()
        self._index = {}
        self._closed = True
        logger.debug("Config store for %s closed", self.path)

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "ConfigStore":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------
    @property
    def entries(self) -> Tuple[Entry, ...]:
        """All entries in file order, duplicates included."""
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in self._index

    def __repr__(self) -> str:
        state = "closed" if self._closed else f"{len(self._entries)} entries"
        return f"ConfigStore(path={str(self.path)!r}, {state})"

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def get_pair(self, key: Optional[str]) -> Optional[Entry]:
        """Return the first entry whose key matches exactly, or None."""
        if key is None:
            return None
        return self._index.get(key)

    def get_int(self, key: str, default: int) -> int:
        entry = self.get_pair(key)
        if entry is None:
            return default
        if entry.kind is ValueKind.INTEGER:
            return entry.value
        if entry.kind is ValueKind.LONG:
            return narrow_to_int32(entry.value)
        return default

    def get_long(self, key: str, default: int) -> int:
        entry = self.get_pair(key)
        if entry is not None and entry.kind is ValueKind.LONG:
            return entry.value
        return default

    def get_float(self, key: str, default: float) -> float:
        entry = self.get_pair(key)
        if entry is None:
            return default
        if entry.kind is ValueKind.FLOAT:
            return entry.value
        if entry.kind is ValueKind.DOUBLE:
            return narrow_to_float32(entry.value)
        return default

    def get_double(self, key: str, default: float) -> float:
        entry = self.get_pair(key)
        if entry is not None and entry.kind is ValueKind.DOUBLE:
            return entry.value
        return default

    def get_string(self, key: str, default: Optional[str]) -> Optional[str]:
        entry = self.get_pair(key)
        if entry is not None and entry.kind is ValueKind.STRING:
            return entry.value
        return default

    def get_char(self, key: str, default: str) -> str:
        """Char entries are never produced by the parser; kept for API parity."""
        entry = self.get_pair(key)
        if entry is not None and entry.kind is ValueKind.CHAR:
            return entry.value
        return default
