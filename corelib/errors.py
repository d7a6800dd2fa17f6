"""Exception hierarchy shared by the collections and I/O helpers."""


class CoreLibError(Exception):
    """Base class of every error raised by this package."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class IndexOutOfRangeError(CoreLibError, IndexError):
    """An index or position lies outside the valid range."""


class InvalidOperationError(CoreLibError):
    """The operation is not valid for the object's current state."""


class ArgumentError(CoreLibError, ValueError):
    """An argument has a value the operation cannot accept."""


class KeyNotFoundError(CoreLibError, KeyError):
    """A lookup found no entry for the requested key."""


class KeyExistsError(CoreLibError, KeyError):
    """An insertion found an entry already present for the key."""


class NotSupportedError(CoreLibError):
    """The requested feature or mode is not supported."""


class CoreIOError(CoreLibError, OSError):
    """A stream or file operation failed."""


class EndOfStreamError(CoreIOError, EOFError):
    """A read went past the end of the stream."""