"""Typed key/value records produced by the parser."""

from dataclasses import dataclass
from enum import Enum
from typing import Union

ASCII_WHITESPACE = " \t\n\v\f\r"

EntryValue = Union[int, float, str]


class ValueKind(Enum):
    """Semantic type inferred for a config value."""
    INTEGER = "int"  # signed 32-bit
    LONG = "long"  # signed 64-bit
    FLOAT = "float"  # reserved, never produced by the parser
    DOUBLE = "double"
    STRING = "string"
    CHAR = "char"  # reserved, never produced by the parser


@dataclass(frozen=True)
class Entry:
    """One parsed config line."""
    key: str
    kind: ValueKind
    value: EntryValue

    def __post_init__(self):
        """Keys are stored trimmed and non-empty."""
        if not self.key:
            raise ValueError("Entry key must be non-empty")
        if self.key != self.key.strip(ASCII_WHITESPACE):
            raise ValueError(f"Entry key has surrounding whitespace: {self.key!r}")
