"""
Value parsing primitives for opcode values.

Two failure modes are kept apart on purpose:

- A literal that is not a number of the requested kind raises
  ``LiteralError``. The caller must abort the whole parse.
- A well-formed literal outside the requested ``[min, max]`` range returns
  ``None``. The caller drops the opcode or applies a default.

Note names carry an octave number and a sharp or flat spelling. Each
octave runs contiguously from ``c`` to ``b``, so ``c4`` is key 59 and
``b4`` is key 70.
"""

from __future__ import annotations

import math
import re
import struct
import threading
from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType

from .errors import LiteralError

# Optional sign followed by digits
_INT_RE = re.compile(r"[+-]?[0-9]+")
# Optional sign, mantissa with optional fraction, optional exponent
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class IntWidth(StrEnum):
    """Integer kinds an opcode value can be declared as."""

    I8 = "i8"
    U8 = "u8"
    I16 = "i16"
    U16 = "u16"
    I32 = "i32"
    U32 = "u32"

    @property
    def signed(self) -> bool:
        return self.value.startswith("i")

    @property
    def bits(self) -> int:
        return int(self.value[1:])

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1


# =============================================================================
# Numbers
# =============================================================================


def parse_int(value: str, width: IntWidth) -> int:
    """
    Parse ``value`` as an integer of the given width.

    Raises:
        LiteralError: If the text is not an integer or overflows the width
    """
    if not _INT_RE.fullmatch(value):
        raise LiteralError(value, width.value)
    if not width.signed and value.startswith("-"):
        raise LiteralError(value, width.value)
    num = int(value)
    if not width.min <= num <= width.max:
        raise LiteralError(value, width.value)
    return num


def parse_int_between(value: str, width: IntWidth, low: int, high: int) -> int | None:
    """Parse an integer of the given width, returning None outside [low, high]."""
    num = parse_int(value, width)
    if low <= num <= high:
        return num
    return None


def parse_float(value: str) -> float:
    """
    Parse ``value`` as a floating point number.

    ``inf`` and ``nan`` are not accepted.

    Raises:
        LiteralError: If the text is not a number
    """
    if not _FLOAT_RE.fullmatch(value):
        raise LiteralError(value, "f32")
    return float(value)


def _as_single(num: float) -> float:
    """Round a double to the nearest single precision value."""
    try:
        return struct.unpack("f", struct.pack("f", num))[0]
    except OverflowError:
        return math.copysign(math.inf, num)


def parse_float_between(value: str, low: float, high: float) -> float | None:
    """
    Parse a float, returning None outside [low, high].

    Values are stored as single precision, so a literal that only leaves
    the range by less than single precision can resolve is accepted and
    returned rounded (``6.0000001`` with a high of 6 gives ``6.0``).
    """
    num = parse_float(value)
    if low <= num <= high:
        return num
    single = _as_single(num)
    if low <= single <= high:
        return single
    return None


# =============================================================================
# Key names
# =============================================================================

# Sharp and flat spellings indexed by (key + 4) % 12, so key 59 is "c"
KEY_SPELLINGS: tuple[tuple[str, str], ...] = (
    ("a", "a"),
    ("a#", "bb"),
    ("b", "b"),
    ("c", "c"),
    ("c#", "db"),
    ("d", "d"),
    ("d#", "eb"),
    ("e", "e"),
    ("f", "f"),
    ("f#", "gb"),
    ("g", "g"),
    ("g#", "ab"),
)

MIN_KEY = -1
MAX_KEY = 127


def build_key_name_map() -> dict[str, int]:
    """Build the lowercase note name -> key number table for keys -1..127."""
    names: dict[str, int] = {}
    for number in range(MIN_KEY, MAX_KEY + 1):
        pitch_class = (number + 4) % 12
        octave = (number + 1) // 12 - 1
        sharp, flat = KEY_SPELLINGS[pitch_class]
        names[f"{sharp}{octave}"] = number
        names[f"{flat}{octave}"] = number
    return names


_key_map: Mapping[str, int] | None = None
_key_map_lock = threading.Lock()


def key_name_map() -> Mapping[str, int]:
    """Get the shared, read-only key name table, building it on first use."""
    global _key_map
    if _key_map is None:
        with _key_map_lock:
            if _key_map is None:
                _key_map = MappingProxyType(build_key_name_map())
    return _key_map


def key_number(name: str) -> int | None:
    """Look up a note name (any case). Returns None if it is not a note name."""
    return key_name_map().get(name.lower())


def key_names(number: int) -> tuple[str, str]:
    """
    Get the (sharp, flat) spellings of a key number.

    Raises:
        ValueError: If the number is outside -1..127
    """
    if not MIN_KEY <= number <= MAX_KEY:
        raise ValueError(f"Key number out of range ({MIN_KEY}..{MAX_KEY}): {number}")
    sharp, flat = KEY_SPELLINGS[(number + 4) % 12]
    octave = (number + 1) // 12 - 1
    return f"{sharp}{octave}", f"{flat}{octave}"


def parse_key(value: str) -> int | None:
    """
    Parse a note name or a MIDI key number in 0..127.

    Returns None for keys outside 0..127 (including the name of key -1).

    Raises:
        LiteralError: If the text is neither a note name nor a u8 number
    """
    key = key_number(value)
    if key is not None:
        return key if key >= 0 else None
    num = parse_int(value, IntWidth.U8)
    if num > MAX_KEY:
        return None
    return num


def parse_signed_key(value: str) -> int | None:
    """
    Parse a note name or a key number in -1..127.

    Raises:
        LiteralError: If the text is neither a note name nor an i8 number
    """
    key = key_number(value)
    if key is not None:
        return key
    num = parse_int(value, IntWidth.I8)
    if num < MIN_KEY:
        return None
    return num
