"""The file viewer component."""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Iterable, Optional, Union

from .commands import CommandRegistry
from .constants import ViewerConstants
from .dispatcher import InputDispatcher
from .document import Document, read_lines
from .render import RenderHooks, RenderPipeline
from .surface import DisplaySurface
from .viewport import ViewportController

logger = logging.getLogger(__name__)


class FileViewer:
    """Scrollable, cursor-navigable view of a fixed set of lines.

    The viewer owns its document, viewport state and render pipeline and
    borrows a ``DisplaySurface`` (its window) while one is attached. Cursor
    and scroll changes never draw directly; they record damage, and the host
    calls ``flush()`` (or ``render()``) to paint it.

    Args:
        file: Path of a file to load.
        lines: Lines to show instead of a file.
        gutter_width: Columns reserved for line numbers.
        hooks: Replacement render hooks.
        on_redraw: Called whenever new damage is recorded, so a host can
            schedule a repaint.
        encoding: Text encoding used when loading ``file``.
        page_step: Lines moved by PageUp and PageDown.
    """

    def __init__(
        self,
        file: Optional[Union[str, os.PathLike]] = None,
        lines: Optional[Iterable[str]] = None,
        gutter_width: int = ViewerConstants.GUTTER_WIDTH,
        hooks: Optional[RenderHooks] = None,
        on_redraw: Optional[Callable[[], None]] = None,
        encoding: str = "utf-8",
        page_step: int = ViewerConstants.PAGE_STEP,
    ):
        self.document = Document()
        self.filename: Optional[str] = None
        self.encoding = encoding
        self.on_redraw = on_redraw
        self.viewport = ViewportController(
            on_redraw=self.redraw, on_expose=self.expose, on_scroll=self._scrolled
        )
        self.pipeline = RenderPipeline(gutter_width=gutter_width, hooks=hooks)
        self.dispatcher = InputDispatcher(
            self.document, self.viewport, registry=CommandRegistry(page_step=page_step)
        )
        self._full_redraw = False
        self._damage: list[tuple[int, int]] = []
        self.configure(file=file, lines=lines)

    def configure(self, **kwargs: Any) -> "FileViewer":
        """Apply settings.

        Accepts ``file``, ``lines``, ``gutter_width`` and ``hooks``; unknown
        names raise ``TypeError``.
        """
        file = kwargs.pop("file", None)
        lines = kwargs.pop("lines", None)
        gutter_width = kwargs.pop("gutter_width", None)
        hooks = kwargs.pop("hooks", None)
        if kwargs:
            raise TypeError(f"Unknown configuration: {', '.join(sorted(kwargs))}")
        if file is not None:
            self.load_file(file)
        elif lines is not None:
            self.load_lines(lines)
        if gutter_width is not None:
            if gutter_width < 0:
                raise ValueError(f"gutter_width must not be negative, got {gutter_width}")
            self.pipeline.gutter_width = gutter_width
            self.redraw()
        if hooks is not None:
            self.pipeline.hooks = hooks
            self.redraw()
        return self

    def load_file(self, filename: Union[str, os.PathLike]) -> "FileViewer":
        """Load a file, replacing the current document.

        Raises:
            DocumentLoadError: if the file cannot be read or decoded. The
                current document is left untouched.
        """
        lines = read_lines(filename, encoding=self.encoding)
        self.filename = os.fspath(filename)
        return self._replace_document(lines)

    def load_lines(self, lines: Iterable[str]) -> "FileViewer":
        """Show ``lines`` instead of a file."""
        self.filename = None
        return self._replace_document(lines)

    def _replace_document(self, lines: Iterable[str]) -> "FileViewer":
        self.document.load(lines)
        self.viewport.reset()
        self.redraw()
        return self

    # Window handling

    @property
    def window(self) -> Optional[DisplaySurface]:
        return self.viewport.surface

    def attach_window(self, surface: DisplaySurface) -> None:
        """Start drawing on ``surface``; the cursor is brought into view."""
        self.viewport.attach(surface)
        self.viewport.follow_cursor()
        self.redraw()

    def detach_window(self) -> None:
        self.viewport.detach()
        self._full_redraw = False
        self._damage.clear()

    def resized(self) -> None:
        """Call after the window changed size."""
        self.viewport.follow_cursor()
        self.redraw()

    # Cursor and scrolling

    @property
    def cursor_line(self) -> int:
        return self.viewport.cursor_line

    @cursor_line.setter
    def cursor_line(self, line: int) -> None:
        self.viewport.set_cursor_line(line)

    @property
    def top_line(self) -> int:
        return self.viewport.top_line

    @top_line.setter
    def top_line(self, line: int) -> None:
        self.viewport.set_top_line(line)

    # Repainting

    def redraw(self) -> None:
        """Mark the whole window as needing a repaint."""
        if self.window is None:
            return
        self._full_redraw = True
        self._damage.clear()
        self._notify()

    def expose(self, top: int, lines: int) -> None:
        """Mark window rows ``[top, top + lines)`` as needing a repaint."""
        if self.window is None or lines <= 0:
            return
        if not self._full_redraw:
            self._damage.append((top, lines))
        self._notify()

    def _scrolled(self, row_delta: int) -> None:
        """Move pending damage along with content the window scrolled in place."""
        window = self.window
        if window is None or self._full_redraw or not self._damage:
            return
        rows = window.row_count()
        shifted = []
        for top, lines in self._damage:
            start = max(0, top - row_delta)
            end = min(rows, top + lines - row_delta)
            if end > start:
                shifted.append((start, end - start))
        self._damage = shifted

    def _notify(self) -> None:
        if self.on_redraw is not None:
            self.on_redraw()

    @property
    def needs_render(self) -> bool:
        return self._full_redraw or bool(self._damage)

    def flush(self) -> int:
        """Paint pending damage and return the number of rows painted."""
        window = self.window
        if window is None:
            return 0
        if self._full_redraw:
            pending = [(0, window.row_count())]
        else:
            pending = list(self._damage)
        self._full_redraw = False
        self._damage.clear()
        return sum(self.render(top, lines) for top, lines in pending)

    def render(self, top: int = 0, lines: Optional[int] = None) -> int:
        """Paint window rows ``[top, top + lines)``; all rows by default."""
        window = self.window
        if window is None:
            return 0
        if lines is None:
            lines = window.row_count() - top
        return self.pipeline.render(window, self.viewport, self.document, top, lines)

    # Input

    def on_key(self, kind: str, payload: str, origin: Any = None) -> bool:
        return self.dispatcher.on_key(kind, payload, origin)

    def handle_key(self, key: str) -> bool:
        return self.dispatcher.handle_key(key)

    def handle_text(self, text: str) -> bool:
        return self.dispatcher.handle_text(text)
