"""Bitmap integer sets, linked lists, hash tables, string helpers, binary streams and text I/O."""

__version__ = "0.1.0"

__all__ = ["errors", "intset", "linked", "text", "dictionary", "streams", "textio", "paths"]