"""File existence, whole-file reading and path-string helpers."""

from __future__ import annotations

import os
from typing import Optional, Union

from corelib.errors import CoreIOError
from corelib.textio import StreamReader

_PathArg = Union[str, os.PathLike]
_SEPARATORS = tuple(sep for sep in (os.sep, os.altsep) if sep)


def _name_start(path: str) -> int:
    return max(path.rfind(sep) for sep in _SEPARATORS) + 1


def _ext_start(path: str) -> int:
    """Index of the extension's dot in ``path``, or -1 when there is none."""
    start = _name_start(path)
    name = path[start:]
    if name in (".", ".."):
        return -1
    dot = name.rfind(".")
    if dot <= 0:
        return -1
    return start + dot


def file_exists(path: _PathArg) -> bool:
    name = os.fspath(path)
    if not name:
        return False
    return os.path.exists(name)


def read_all_text(path: _PathArg) -> str:
    """Read a whole text file, detecting UTF-16 and normalising line ends."""
    name = os.fspath(path)
    if not name:
        raise CoreIOError("Failed to open file: path is empty.")
    with StreamReader(name) as reader:
        return reader.read_to_end()


def truncate_ext(path: _PathArg) -> str:
    """``path`` without the extension of its last component."""
    name = os.fspath(path)
    dot = _ext_start(name)
    return name if dot == -1 else name[:dot]


def replace_ext(path: _PathArg, new_ext: Optional[str]) -> str:
    """``path`` with its extension replaced; an empty ``new_ext`` removes it."""
    name = os.fspath(path)
    if not name:
        return ""
    stem = truncate_ext(name)
    if not new_ext:
        return stem
    return stem + (new_ext if new_ext.startswith(".") else "." + new_ext)


def get_file_name(path: _PathArg) -> str:
    name = os.fspath(path)
    return name[_name_start(name):]


def get_file_ext(path: _PathArg) -> str:
    """Extension of the last component, without the dot."""
    name = os.fspath(path)
    dot = _ext_start(name)
    return "" if dot == -1 else name[dot + 1:]


def get_directory_name(path: _PathArg) -> str:
    """Everything before the last component, without trailing separators."""
    name = os.fspath(path)
    start = _name_start(name)
    if start == 0:
        return ""
    prefix = name[:start]
    stripped = prefix.rstrip("".join(_SEPARATORS))
    return stripped if stripped else prefix[0]


def combine(*args: _PathArg) -> str:
    """Join path parts with the platform separator, skipping empty parts."""
    parts = [os.fspath(part) for part in args]
    parts = [part for part in parts if part]
    if not parts:
        return ""
    return os.path.join(*parts)