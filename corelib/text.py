"""String helpers: number formatting and parsing, hashing, and a string builder."""

from __future__ import annotations

import math
import re
import struct
from typing import Any, Optional, TypeVar

_T = TypeVar("_T")

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_INITIAL_BUILDER_SIZE = 512

_INT_PREFIX = re.compile(r"\s*([+-]?[0-9]+)")
_HEX_FLOAT = re.compile(
    r"\s*([+-]?)0[xX]((?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?[0-9]+)?)"
)
_SPECIAL_FLOAT = re.compile(r"\s*([+-]?)(infinity|inf|nan)", re.IGNORECASE)
_DECIMAL_FLOAT = re.compile(
    r"\s*([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
)
_FLOAT_FORMAT = re.compile(r"%(?:\.([0-9]*))?(.?)", re.DOTALL)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= 0x80000000 else value


def format_int(value: int, radix: int = 10) -> str:
    """Render ``value`` in ``radix`` (2 to 36) with lower-case digits.

    An unsupported radix yields an empty string.
    """
    if not 2 <= radix <= 36:
        return ""
    magnitude = abs(value)
    digits = []
    while True:
        magnitude, digit = divmod(magnitude, radix)
        digits.append(_DIGITS[digit])
        if magnitude == 0:
            break
    if value < 0:
        digits.append("-")
    return "".join(reversed(digits))


def format_float(value: float, fmt: Optional[str] = "%e") -> str:
    """Format ``value`` from a printf-like spec such as ``%e``, ``%.2f`` or ``%g``.

    Only an optional precision and the style letter are honoured; unknown
    styles fall back to scientific notation with precision 6 by default.
    """
    spec = "%e" if fmt is None else fmt
    precision = 6
    style = "e"
    if len(spec) > 1 and spec[0] == "%":
        match = _FLOAT_FORMAT.match(spec)
        if match is not None:
            if match.group(1) is not None:
                precision = int(match.group(1) or "0")
            if match.group(2):
                style = match.group(2).lower()
    if style == "f":
        return f"{value:.{precision}f}"
    if style == "g":
        return f"{value:.{precision}g}"
    return f"{value:.{precision}e}"


def float_as_int(value: float) -> int:
    """Reinterpret ``value`` as a 32-bit float's bits, read as a signed int."""
    return struct.unpack("<i", struct.pack("<f", value))[0]


def string_hash(text: str) -> int:
    """32-bit signed hash of ``text``, stopping at the first NUL character."""
    result = 0
    for ch in text:
        code = ord(ch)
        if code == 0:
            break
        result = _to_int32(code + (result << 6) + (result << 16) - result)
    return result


def string_to_int(text: str) -> int:
    """Parse a leading decimal integer, returning 0 when there is none.

    The value saturates at the 64-bit range and is then truncated to 32 bits.
    """
    match = _INT_PREFIX.match(text)
    if match is None:
        return 0
    value = int(match.group(1))
    value = max(-(1 << 63), min((1 << 63) - 1, value))
    return _to_int32(value)


def string_to_double(text: str) -> float:
    """Parse the longest leading floating-point number, returning 0.0 when there is none."""
    match = _HEX_FLOAT.match(text)
    if match is not None:
        sign = -1.0 if match.group(1) == "-" else 1.0
        try:
            return sign * float.fromhex("0x" + match.group(2))
        except OverflowError:
            return sign * math.inf
    match = _SPECIAL_FLOAT.match(text)
    if match is not None:
        sign = "-" if match.group(1) == "-" else ""
        word = "nan" if match.group(2).lower() == "nan" else "inf"
        return float(sign + word)
    match = _DECIMAL_FLOAT.match(text)
    if match is not None:
        return float(match.group(1))
    return 0.0


def substring(text: str, start: int, length: int) -> str:
    """``length`` characters from ``start``; an invalid range yields ``""``."""
    if length <= 0 or start < 0 or start > len(text) or start + length > len(text):
        return ""
    return text[start:start + length]


def index_of(text: str, sub: Optional[str], start: int = 0) -> int:
    """Position of ``sub`` at or after ``start``, or -1.

    A start outside ``0..len(text)`` or a missing ``sub`` yields -1.
    """
    if sub is None or start < 0 or start > len(text):
        return -1
    return text.find(sub, start)


def char_at(text: str, index: int) -> str:
    """Character at ``index``, or ``"\\0"`` when the index is out of range."""
    if 0 <= index < len(text):
        return text[index]
    return "\0"


def clamp(value: _T, low: _T, high: _T) -> _T:
    """``value`` limited to the closed range ``[low, high]``."""
    if value < low:  # type: ignore[operator]
        return low
    if value > high:  # type: ignore[operator]
        return high
    return value


class StringBuilder:
    """Accumulates text with a tracked buffer capacity."""

    __slots__ = ("_chunks", "_length", "_capacity")

    def __init__(self, capacity: int = 1024) -> None:
        self._chunks: list[str] = []
        self._length = 0
        self._capacity = max(capacity + 1, _INITIAL_BUILDER_SIZE)

    def _text(self) -> str:
        if len(self._chunks) > 1:
            self._chunks = ["".join(self._chunks)]
        return self._chunks[0] if self._chunks else ""

    def ensure_capacity(self, size: int) -> None:
        """Grow the buffer so that it holds more than ``size`` characters."""
        if self._capacity <= size:
            self._capacity = size + 1

    def append(self, value: Any, radix: int = 10) -> "StringBuilder":
        """Append a string, or an integer rendered in ``radix``; ``None`` is ignored."""
        if value is None:
            return self
        if isinstance(value, int) and not isinstance(value, bool):
            value = format_int(value, radix)
        elif not isinstance(value, str):
            raise TypeError(f"cannot append {type(value).__name__} to StringBuilder")
        if not value:
            return self
        new_length = self._length + len(value)
        if self._capacity < new_length + 1:
            size = max(self._capacity, _INITIAL_BUILDER_SIZE)
            while size < new_length + 1:
                size <<= 1
            self._capacity = size
        self._chunks.append(value)
        self._length = new_length
        return self

    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._length

    def __str__(self) -> str:
        return self._text()

    def produce_string(self) -> str:
        """Return the text and reset the builder to an empty initial buffer."""
        result = self._text()
        self._chunks = []
        self._length = 0
        self._capacity = _INITIAL_BUILDER_SIZE
        return result

    def remove(self, index: int, length: int) -> None:
        """Delete up to ``length`` characters at ``index``; invalid ranges are ignored."""
        if index < 0 or index >= self._length or length <= 0:
            return
        text = self._text()
        end = min(index + length, self._length)
        text = text[:index] + text[end:]
        self._chunks = [text] if text else []
        self._length = len(text)

    def clear(self) -> None:
        self._chunks = []
        self._length = 0

    def __repr__(self) -> str:
        return f"StringBuilder({self._text()!r})"