"""Exception types raised by the file viewer."""

from typing import Optional


class FileViewerError(Exception):
    """Base class for all file viewer faults."""


class DocumentLoadError(FileViewerError):
    """A document could not be read or decoded.

    The underlying ``OSError`` or ``UnicodeDecodeError`` is kept on
    ``error`` and is also chained as ``__cause__``.
    """

    def __init__(self, path: str, error: Optional[BaseException] = None):
        self.path = path
        self.error = error
        reason = str(error) if error is not None else "unknown error"
        super().__init__(f"{path} - {reason}")


class UnsupportedEventError(FileViewerError):
    """An event of an unknown kind reached the input dispatcher."""

    def __init__(self, kind: object, payload: object = None):
        self.kind = kind
        self.payload = payload
        super().__init__(f"Unsupported event kind: {kind!r}")


class LineIndexError(FileViewerError, IndexError):
    """A document line was requested outside the document."""

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"Line {index} out of range for document of {length} lines")
