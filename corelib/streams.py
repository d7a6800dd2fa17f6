"""Byte streams over files, with binary readers and writers on top."""

from __future__ import annotations

import abc
import array
import enum
import os
import struct
import sys
from typing import Iterable, Optional, Union

from corelib.errors import (
    ArgumentError,
    CoreIOError,
    EndOfStreamError,
    NotSupportedError,
)

_INT_MAX = (1 << 31) - 1
_WIDE_CHAR_SIZE = 2


class SeekOrigin(enum.Enum):
    START = os.SEEK_SET
    END = os.SEEK_END
    CURRENT = os.SEEK_CUR


class FileMode(enum.Enum):
    CREATE = "create"
    OPEN = "open"
    CREATE_NEW = "create_new"
    APPEND = "append"


class FileAccess(enum.IntFlag):
    READ = 1
    WRITE = 2
    READ_WRITE = 3


class FileShare(enum.Enum):
    NONE = "none"
    READ_ONLY = "read_only"
    WRITE_ONLY = "write_only"
    READ_WRITE = "read_write"


class Stream(abc.ABC):
    """A seekable sequence of bytes that may be read, written, or both."""

    @abc.abstractmethod
    def position(self) -> int:
        """Current offset from the start of the stream."""

    @abc.abstractmethod
    def seek(self, origin: SeekOrigin, offset: int) -> None:
        """Move to ``offset`` relative to ``origin``."""

    @abc.abstractmethod
    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes."""

    @abc.abstractmethod
    def write(self, data: bytes) -> int:
        """Write ``data`` and return the number of bytes written."""

    @abc.abstractmethod
    def can_read(self) -> bool:
        """Whether the stream was opened for reading."""

    @abc.abstractmethod
    def can_write(self) -> bool:
        """Whether the stream was opened for writing."""

    @abc.abstractmethod
    def close(self) -> None:
        """Release the stream; further operations fail."""

    def __enter__(self) -> "Stream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _open_mode(path: str, mode: FileMode, access: FileAccess) -> tuple[str, FileAccess]:
    if mode is FileMode.CREATE:
        if access == FileAccess.READ:
            raise ArgumentError("Read-only access is incompatible with Create mode.")
        if access == FileAccess.READ_WRITE:
            return "w+b", FileAccess.READ_WRITE
        return "wb", FileAccess.WRITE
    if mode is FileMode.OPEN:
        if access == FileAccess.READ:
            return "rb", FileAccess.READ
        if access == FileAccess.READ_WRITE:
            return "r+b", FileAccess.READ_WRITE
        return "wb", FileAccess.WRITE
    if mode is FileMode.CREATE_NEW:
        if os.path.exists(path):
            raise CoreIOError(f"Failed opening '{path}', file already exists.")
        if access == FileAccess.READ:
            raise ArgumentError("Read-only access is incompatible with Create mode.")
        if access == FileAccess.READ_WRITE:
            return "w+b", FileAccess.READ_WRITE
        return "wb", FileAccess.WRITE
    if mode is FileMode.APPEND:
        if access == FileAccess.READ:
            raise ArgumentError("Read-only access is incompatible with Append mode.")
        if access == FileAccess.READ_WRITE:
            return "a+b", FileAccess.READ_WRITE
        return "ab", FileAccess.WRITE
    raise ArgumentError("Invalid file mode.")


class FileStream(Stream):
    """A :class:`Stream` backed by a file on disk.

    Without an explicit ``access``, :attr:`FileMode.OPEN` reads and every
    other mode writes. Only :attr:`FileShare.NONE` is supported.
    """

    def __init__(
        self,
        path: Union[str, os.PathLike],
        mode: FileMode = FileMode.OPEN,
        access: Optional[FileAccess] = None,
        share: FileShare = FileShare.NONE,
    ) -> None:
        self._handle = None
        name = os.fspath(path)
        if not name:
            raise CoreIOError("Cannot open file: path is empty.")
        if access is None:
            access = FileAccess.READ if mode is FileMode.OPEN else FileAccess.WRITE
        open_mode, self._access = _open_mode(name, mode, access)
        if share is not FileShare.NONE:
            raise NotSupportedError("Only FileShare.NONE is currently supported.")
        try:
            self._handle = open(name, open_mode)
        except OSError as exc:
            raise CoreIOError(f"Cannot open file '{name}'") from exc

    def _require_open(self):
        if self._handle is None:
            raise CoreIOError("FileStream is closed.")
        return self._handle

    def position(self) -> int:
        handle = self._require_open()
        try:
            return handle.tell()
        except OSError as exc:
            raise CoreIOError("Failed to get file position.") from exc

    def seek(self, origin: SeekOrigin, offset: int) -> None:
        handle = self._require_open()
        if not isinstance(origin, SeekOrigin):
            raise NotSupportedError("Unsupported seek origin.")
        try:
            handle.seek(offset, origin.value)
        except (OSError, ValueError) as exc:
            raise CoreIOError("FileStream seek failed.") from exc

    def read(self, size: int) -> bytes:
        handle = self._require_open()
        if not self.can_read():
            raise CoreIOError("FileStream does not support reading.")
        if size < 0:
            raise ArgumentError("Read length cannot be negative.")
        if size == 0:
            return b""
        try:
            data = handle.read(size)
        except OSError as exc:
            raise CoreIOError("FileStream read failed.") from exc
        if not data:
            raise EndOfStreamError("End of stream reached when reading.")
        return data

    def write(self, data: bytes) -> int:
        handle = self._require_open()
        if not self.can_write():
            raise CoreIOError("FileStream does not support writing.")
        if data is None:
            raise ArgumentError("Write buffer cannot be null.")
        payload = bytes(data)
        if not payload:
            return 0
        try:
            handle.write(payload)
        except OSError as exc:
            raise CoreIOError("FileStream write failed.") from exc
        return len(payload)

    def can_read(self) -> bool:
        return bool(self._access & FileAccess.READ)

    def can_write(self) -> bool:
        return bool(self._access & FileAccess.WRITE)

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None


def _native_to_little(values: array.array) -> array.array:
    if sys.byteorder == "big":
        values.byteswap()
    return values


class BinaryReader:
    """Reads little-endian fixed-size values and strings from a stream."""

    def __init__(self, stream: Stream) -> None:
        self.stream = stream

    def read_bytes(self, count: int) -> bytes:
        """Read exactly ``count`` bytes or raise :class:`EndOfStreamError`."""
        if count < 0:
            raise ArgumentError("Read count cannot be negative.")
        if count > _INT_MAX:
            raise ArgumentError("Read count is too large.")
        buffer = bytearray()
        while len(buffer) < count:
            try:
                piece = self.stream.read(count - len(buffer))
            except EndOfStreamError as exc:
                raise EndOfStreamError(
                    "End of stream reached before the requested data was read."
                ) from exc
            if not piece:
                raise EndOfStreamError(
                    "End of stream reached before the requested data was read."
                )
            buffer += piece
        return bytes(buffer)

    def read_array(self, typecode: str, count: int) -> list:
        """Read ``count`` items of the :mod:`array` type ``typecode``."""
        try:
            values = array.array(typecode)
        except (ValueError, TypeError) as exc:
            raise ArgumentError(f"Unsupported element type {typecode!r}.") from exc
        if count < 0:
            raise ArgumentError("Read count cannot be negative.")
        if count == 0:
            return []
        if count > _INT_MAX // values.itemsize:
            raise ArgumentError("Read count is too large.")
        values.frombytes(self.read_bytes(count * values.itemsize))
        return list(_native_to_little(values))

    def _unpack(self, fmt: str):
        return struct.unpack(fmt, self.read_bytes(struct.calcsize(fmt)))[0]

    def read_int32(self) -> int:
        return self._unpack("<i")

    def read_int16(self) -> int:
        return self._unpack("<h")

    def read_int64(self) -> int:
        return self._unpack("<q")

    def read_float(self) -> float:
        return self._unpack("<f")

    def read_double(self) -> float:
        return self._unpack("<d")

    def read_char(self) -> bytes:
        """Read a single byte."""
        return self.read_bytes(1)

    def read_string(self) -> str:
        """Read a length-prefixed UTF-16LE string; text after a NUL is dropped."""
        length = self.read_int32()
        if length < 0:
            raise CoreIOError("Invalid string length.")
        if length == 0:
            return ""
        if length > _INT_MAX // _WIDE_CHAR_SIZE:
            raise CoreIOError("String byte length is too large.")
        raw = self.read_bytes(length * _WIDE_CHAR_SIZE)
        text = raw.decode("utf-16-le", errors="surrogatepass")
        return text.split("\0", 1)[0]


class BinaryWriter:
    """Writes little-endian fixed-size values and strings to a stream."""

    def __init__(self, stream: Stream) -> None:
        self.stream = stream

    def write_bytes(self, data: bytes) -> None:
        if data is None:
            raise ArgumentError("Write buffer cannot be null.")
        payload = bytes(data)
        if len(payload) > _INT_MAX:
            raise ArgumentError("Write count is too large.")
        if payload:
            self.stream.write(payload)

    def write_array(self, typecode: str, values: Iterable) -> None:
        """Write ``values`` as items of the :mod:`array` type ``typecode``."""
        try:
            items = array.array(typecode, values)
        except (ValueError, TypeError, OverflowError) as exc:
            raise ArgumentError(f"Cannot pack values as {typecode!r}.") from exc
        if not items:
            return
        if len(items) > _INT_MAX // items.itemsize:
            raise ArgumentError("Write count is too large.")
        self.stream.write(_native_to_little(items).tobytes())

    def _pack(self, fmt: str, value) -> None:
        try:
            payload = struct.pack(fmt, value)
        except struct.error as exc:
            raise ArgumentError(str(exc)) from exc
        self.stream.write(payload)

    def write_int32(self, value: int) -> None:
        self._pack("<i", value)

    def write_int16(self, value: int) -> None:
        self._pack("<h", value)

    def write_int64(self, value: int) -> None:
        self._pack("<q", value)

    def write_float(self, value: float) -> None:
        self._pack("<f", value)

    def write_double(self, value: float) -> None:
        self._pack("<d", value)

    def write_char(self, value: bytes) -> None:
        """Write a single byte."""
        payload = bytes(value)
        if len(payload) != 1:
            raise ArgumentError("A char must be exactly one byte.")
        self.stream.write(payload)

    def write_string(self, text: str) -> None:
        """Write the UTF-16 code-unit count followed by the UTF-16LE text."""
        raw = text.encode("utf-16-le", errors="surrogatepass")
        self.write_int32(len(raw) // _WIDE_CHAR_SIZE)
        self.write_bytes(raw)

    def close(self) -> None:
        self.stream.close()