"""Line parsing and value type inference for key=value files.

Numbers are recognised with the syntax accepted by C ``strtod``: an optional
sign followed by a decimal literal (optional fraction and exponent), a
hexadecimal float (``0x1.8p3``), ``inf``/``infinity`` or ``nan``. Whole
numbers inside the signed 64-bit range become integers, everything else that
parses becomes a double. Values that are not numbers are kept as text.
"""

import math
import re
from typing import Optional, Tuple

from .entry import ASCII_WHITESPACE, Entry, EntryValue, ValueKind
from .settings import ParserSettings

INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1
LONG_MIN = -(2 ** 63)
LONG_MAX = 2 ** 63 - 1

_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_RE = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?[0-9]+)?"
)
_SPECIAL_RE = re.compile(
    r"(?P<sign>[+-]?)(?:(?P<inf>inf(?:inity)?)|nan(?:\([0-9A-Za-z_]*\))?)",
    re.IGNORECASE,
)


def trim(text: str) -> str:
    """Strip leading and trailing ASCII whitespace."""
    return text.strip(ASCII_WHITESPACE)


def parse_number(raw: str) -> Optional[float]:
    """Parse ``raw`` as a double, or return None if it is not purely numeric.

    Surrounding whitespace is allowed; any other trailing content is not.
    """
    candidate = trim(raw)
    if not candidate:
        return None

    if _DECIMAL_RE.fullmatch(candidate):
        # Overflowing literals come back as +/-inf, same as strtod
        return float(candidate)

    if _HEX_RE.fullmatch(candidate):
        try:
            return float.fromhex(candidate)
        except OverflowError:
            return -math.inf if candidate.startswith("-") else math.inf

    match = _SPECIAL_RE.fullmatch(candidate)
    if match:
        sign = -1.0 if match.group("sign") == "-" else 1.0
        if match.group("inf"):
            return sign * math.inf
        return math.copysign(math.nan, sign)

    return None


def classify_number(number: float) -> Tuple[ValueKind, EntryValue]:
    """Choose the narrowest kind able to hold ``number``."""
    if math.isfinite(number) and number.is_integer() and LONG_MIN <= number <= LONG_MAX:
        whole = int(number)
        if INT_MIN <= whole <= INT_MAX:
            return ValueKind.INTEGER, whole
        return ValueKind.LONG, whole
    return ValueKind.DOUBLE, number


def clean_string(raw: str, max_length: Optional[int]) -> str:
    """Trim a text value and cap its length.

    Leading '=' characters are dropped along with leading whitespace, so
    ``key== value`` reads as ``value``.
    """
    text = raw.lstrip(ASCII_WHITESPACE + "=").rstrip(ASCII_WHITESPACE)
    if max_length is not None and len(text) > max_length:
        text = text[:max_length].rstrip(ASCII_WHITESPACE)
    return text


def infer_value(raw: str, settings: Optional[ParserSettings] = None) -> Tuple[ValueKind, EntryValue]:
    """Infer the kind and typed value of the text after the first '='."""
    if settings is None:
        settings = ParserSettings()

    # Nothing after the '=' reads as zero; whitespace-only text stays a string
    if not raw:
        return classify_number(0.0)

    number = parse_number(raw)
    if number is not None:
        return classify_number(number)
    return ValueKind.STRING, clean_string(raw, settings.max_value_length)


def parse_line(line: str, settings: Optional[ParserSettings] = None) -> Optional[Entry]:
    """Parse one line into an Entry.

    Returns None for comment lines, lines without '=' and lines whose key
    is empty after trimming.
    """
    if settings is None:
        settings = ParserSettings()

    if line.startswith(settings.comment_marker):
        return None

    raw_key, sep, raw_value = line.partition("=")
    if not sep:
        return None

    key = trim(raw_key)
    if not key:
        return None

    kind, value = infer_value(raw_value, settings)
    return Entry(key=key, kind=kind, value=value)
