"""Text readers and writers over byte streams, with UTF-16 and locale encodings."""

from __future__ import annotations

import abc
import codecs
import locale
import os
from typing import Any, Iterable, Optional, Union

from corelib.errors import ArgumentError, EndOfStreamError, InvalidOperationError
from corelib.streams import FileMode, FileStream, SeekOrigin, Stream
from corelib.text import format_float, format_int

_BOM = b"\xff\xfe"
_BUFFER_SIZE = 4096
_MB_LEN_MAX = 16


def _locale_encoding() -> str:
    return locale.getpreferredencoding(False)


def _until_nul(text: str) -> str:
    return text.split("\0", 1)[0]


def _combine_units(units: Iterable[str]) -> str:
    """Join characters, merging UTF-16 surrogate pairs into single code points."""
    text = "".join(units)
    return text.encode("utf-16-le", errors="surrogatepass").decode(
        "utf-16-le", errors="surrogatepass"
    )


class Encoding(abc.ABC):
    """Converts between text and bytes."""

    @abc.abstractmethod
    def get_bytes(self, text: str) -> bytes:
        """Encode ``text``."""

    @abc.abstractmethod
    def get_string(self, data: Optional[bytes]) -> str:
        """Decode ``data``."""


class UnicodeEncoding(Encoding):
    """UTF-16 little-endian text; a leading byte-order mark is skipped on decode."""

    def get_bytes(self, text: str) -> bytes:
        return text.encode("utf-16-le", errors="surrogatepass")

    def get_string(self, data: Optional[bytes]) -> str:
        if not data:
            return ""
        payload = bytes(data)
        if payload.startswith(_BOM):
            payload = payload[2:]
        if len(payload) % 2:
            raise ArgumentError("Invalid UTF-16LE text format.")
        return _until_nul(payload.decode("utf-16-le", errors="surrogatepass"))


class AnsiEncoding(Encoding):
    """Text in the multibyte encoding of the user's locale."""

    def get_bytes(self, text: str) -> bytes:
        text = _until_nul(text)
        if not text:
            return b""
        try:
            return text.encode(_locale_encoding())
        except UnicodeEncodeError as exc:
            raise InvalidOperationError(
                "Failed to convert wide string to multibyte text."
            ) from exc

    def get_string(self, data: Optional[bytes]) -> str:
        if not data:
            return ""
        payload = bytes(data).split(b"\0", 1)[0]
        try:
            return payload.decode(_locale_encoding())
        except UnicodeDecodeError as exc:
            raise InvalidOperationError(
                "Failed to convert multibyte text to wide string."
            ) from exc


UNICODE = UnicodeEncoding()
ANSI = AnsiEncoding()


def _render(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return format_int(int(value))
    if isinstance(value, float):
        return format_float(value)
    return str(value)


class TextWriter(abc.ABC):
    """Destination for text; numbers are written in their text form."""

    @abc.abstractmethod
    def write(self, value: Any) -> None:
        """Write ``value`` as text."""

    def write_line(self, value: Any = "") -> None:
        """Write ``value`` followed by the platform line ending."""
        self.write(value)
        self.write(os.linesep)

    def close(self) -> None:
        """Release the underlying resources."""

    def __enter__(self) -> "TextWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class StreamWriter(TextWriter):
    """Writes text to a stream, or to a new file given by path.

    A file opened by path with the UTF-16 encoding starts with a byte-order
    mark. ``bytes`` values are taken as locale-encoded text.
    """

    def __init__(
        self,
        target: Union[Stream, str, os.PathLike],
        encoding: Optional[Encoding] = UNICODE,
    ) -> None:
        self._encoding = UNICODE if encoding is None else encoding
        if isinstance(target, Stream):
            self._stream = target
        else:
            self._stream = FileStream(target, FileMode.CREATE)
            if isinstance(self._encoding, UnicodeEncoding):
                self._stream.write(_BOM)

    def write(self, value: Any) -> None:
        if value is None:
            return
        if isinstance(value, (bytes, bytearray)):
            if not value:
                return
            if isinstance(self._encoding, AnsiEncoding):
                self._stream.write(bytes(value))
                return
            data = UNICODE.get_bytes(ANSI.get_string(bytes(value)))
        else:
            data = self._encoding.get_bytes(_render(value))
        if data:
            self._stream.write(data)

    def close(self) -> None:
        self._stream.close()


class StreamReader:
    """Reads characters from a stream, or from a file given by path.

    The encoding is detected from a UTF-16 byte-order mark or from zero
    bytes at odd offsets in the first block; otherwise ``encoding`` is used.
    """

    def __init__(
        self,
        source: Union[Stream, str, os.PathLike],
        encoding: Optional[Encoding] = ANSI,
    ) -> None:
        if isinstance(source, Stream):
            self._stream = source
        else:
            self._stream = FileStream(source, FileMode.OPEN)
        self._buffer = b""
        self._pos = 0
        try:
            self._fill()
        except EndOfStreamError:
            self._buffer = b""
            self._pos = 0
        detected = self._detect()
        if detected is not None:
            self._encoding: Encoding = detected
        else:
            self._encoding = ANSI if encoding is None else encoding
        if isinstance(self._encoding, UnicodeEncoding) and self._buffer.startswith(_BOM):
            self._pos = 2

    def _detect(self) -> Optional[Encoding]:
        if self._buffer.startswith(_BOM):
            return UNICODE
        if any(byte == 0 for byte in self._buffer[1::2]):
            return UNICODE
        return None

    def _fill(self) -> None:
        self._buffer = self._stream.read(_BUFFER_SIZE)
        self._pos = 0

    def _next_byte(self) -> int:
        if self._pos >= len(self._buffer):
            self._fill()
        byte = self._buffer[self._pos]
        self._pos += 1
        return byte

    def read(self) -> str:
        """Read one character; raise :class:`EndOfStreamError` at the end."""
        if isinstance(self._encoding, UnicodeEncoding):
            low = self._next_byte()
            high = self._next_byte()
            return chr(low | (high << 8))
        decoder = codecs.getincrementaldecoder(_locale_encoding())(errors="strict")
        for _ in range(_MB_LEN_MAX):
            try:
                text = decoder.decode(bytes([self._next_byte()]))
            except UnicodeDecodeError as exc:
                raise InvalidOperationError("Invalid multibyte character sequence.") from exc
            if text:
                return text[0]
        raise InvalidOperationError("Invalid multibyte character sequence.")

    def peek(self) -> str:
        """Return the next character without consuming it."""
        saved_buffer, saved_pos = self._buffer, self._pos
        position = self._stream.position()
        try:
            return self.read()
        finally:
            self._stream.seek(SeekOrigin.START, position)
            self._buffer = saved_buffer
            self._pos = saved_pos

    def read_chars(self, count: int) -> str:
        """Read up to ``count`` characters, fewer at the end of the stream."""
        if count < 0:
            raise ArgumentError("Read length cannot be negative.")
        units = []
        for _ in range(count):
            try:
                units.append(self.read())
            except EndOfStreamError:
                break
        return _combine_units(units)

    def _skip_newline_after_cr(self) -> None:
        try:
            if self.peek() == "\n":
                self.read()
        except EndOfStreamError:
            pass

    def read_line(self) -> str:
        """Read up to a ``\\n``, ``\\r`` or ``\\r\\n`` line end, which is dropped."""
        units = []
        while True:
            try:
                ch = self.read()
            except EndOfStreamError:
                break
            if ch == "\r":
                self._skip_newline_after_cr()
                break
            if ch == "\n":
                break
            units.append(ch)
        return _combine_units(units)

    def read_to_end(self) -> str:
        """Read the rest of the text with every line end turned into ``\\n``."""
        units = []
        while True:
            try:
                ch = self.read()
            except EndOfStreamError:
                break
            if ch == "\r":
                units.append("\n")
                self._skip_newline_after_cr()
            else:
                units.append(ch)
        return _combine_units(units)

    def close(self) -> None:
        self._stream.close()

    def __enter__(self) -> "StreamReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()