"""Immutable line sequence shown by the viewer, and loading it from disk."""

from __future__ import annotations

import logging
import os
from typing import Iterable, Iterator, Union

from .errors import DocumentLoadError, LineIndexError

logger = logging.getLogger(__name__)


class Document:
    """Ordered, read-only sequence of display lines.

    Lines are zero-indexed and never contain line breaks. ``load`` swaps the
    whole content at once; there is no partial update.
    """

    def __init__(self, lines: Iterable[str] = ()):
        self._lines: tuple[str, ...] = ()
        self.load(lines)

    def load(self, lines: Iterable[str]) -> "Document":
        """Replace the content with ``lines``.

        Raises:
            ValueError: if a line contains a line break.
        """
        new_lines = tuple(lines)
        for i, line in enumerate(new_lines):
            if "\n" in line or "\r" in line:
                raise ValueError(f"Line {i} contains a line break")
        self._lines = new_lines
        return self

    def length(self) -> int:
        return len(self._lines)

    def line(self, index: int) -> str:
        """Return the text of line ``index``.

        Raises:
            LineIndexError: if ``index`` is not in ``[0, length())``.
        """
        if not 0 <= index < len(self._lines):
            raise LineIndexError(index, len(self._lines))
        return self._lines[index]

    def has_line(self, index: int) -> bool:
        return 0 <= index < len(self._lines)

    @property
    def last_index(self) -> int:
        """Index of the last line, ``-1`` when empty."""
        return len(self._lines) - 1

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)


def read_lines(path: Union[str, os.PathLike], encoding: str = "utf-8") -> list[str]:
    """Read ``path`` and return its lines without trailing newlines.

    Raises:
        DocumentLoadError: wrapping the OS or decode error.
    """
    name = os.fspath(path)
    try:
        # Universal newlines: '\r\n' and '\r' both arrive as '\n'
        with open(name, "r", encoding=encoding) as f:
            lines = [line[:-1] if line.endswith("\n") else line for line in f]
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Failed to load {name}: {e}")
        raise DocumentLoadError(name, e) from e
    logger.debug(f"Loaded {len(lines)} lines from {name}")
    return lines


def load_document(path: Union[str, os.PathLike], encoding: str = "utf-8") -> Document:
    """Load a file into a new ``Document``."""
    return Document(read_lines(path, encoding=encoding))
