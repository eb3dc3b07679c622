"""Viewport and cursor coordination."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .surface import DisplaySurface

logger = logging.getLogger(__name__)


@dataclass
class ViewportState:
    top_line: int = 0  # First document line shown on row 0
    cursor_line: int = 0  # The active line


class ViewportController:
    """Owns ``top_line`` and ``cursor_line`` and keeps the cursor on screen.

    Mutations only request repaints through callbacks; nothing here draws.
    ``on_redraw()`` asks for a full repaint. After an in-place scroll,
    ``on_scroll(row_delta)`` reports how far the surface content moved and
    ``on_expose(top, lines)`` reports the rows it uncovered.
    """

    def __init__(
        self,
        on_redraw: Optional[Callable[[], None]] = None,
        on_expose: Optional[Callable[[int, int], None]] = None,
        on_scroll: Optional[Callable[[int], None]] = None,
    ):
        self.state = ViewportState()
        self.surface: Optional[DisplaySurface] = None
        self._on_redraw = on_redraw
        self._on_expose = on_expose
        self._on_scroll = on_scroll

    @property
    def top_line(self) -> int:
        return self.state.top_line

    @property
    def cursor_line(self) -> int:
        return self.state.cursor_line

    def attach(self, surface: DisplaySurface) -> None:
        self.surface = surface

    def detach(self) -> None:
        self.surface = None

    def reset(self) -> None:
        """Return to the first line without touching the surface."""
        self.state = ViewportState()

    def request_redraw(self) -> None:
        if self._on_redraw is not None:
            self._on_redraw()

    def _request_expose(self, top: int, lines: int) -> None:
        if self._on_expose is not None:
            self._on_expose(top, lines)
        else:
            self.request_redraw()

    def set_cursor_line(self, line: int) -> None:
        """Move the cursor, snapping the viewport just enough to show it."""
        if line == self.state.cursor_line:
            return
        self.state.cursor_line = line
        if self.surface is not None:
            self._follow(self.surface.row_count())
            self.request_redraw()

    def follow_cursor(self) -> None:
        """Bring the current cursor line back into view, e.g. after a resize."""
        if self.surface is None:
            return
        self._follow(self.surface.row_count())

    def _follow(self, height: int) -> None:
        if height <= 0:
            return
        line = self.state.cursor_line
        top = self.state.top_line
        if line < top:
            logger.debug(f"Cursor {line} above viewport, snapping top to {line}")
            self.set_top_line(line)
        elif line >= top + height:
            new_top = line - (height - 1)
            logger.debug(f"Cursor {line} below viewport, snapping top to {new_top}")
            self.set_top_line(new_top)

    def set_top_line(self, line: int) -> None:
        """Set the first visible line, scrolling the surface in place if it can.

        The value is not clamped: rows before the start or past the end of
        the document render as blank.
        """
        if line == self.state.top_line:
            return
        previous = self.state.top_line
        self.state.top_line = line
        surface = self.surface
        if surface is None:
            return
        delta = line - previous
        if surface.scroll(delta, 0):
            if self._on_scroll is not None:
                self._on_scroll(delta)
            rows = surface.row_count()
            if delta > 0:
                exposed = min(delta, rows)
                self._request_expose(rows - exposed, exposed)
            else:
                exposed = min(-delta, rows)
                self._request_expose(0, exposed)
        else:
            logger.debug(f"Surface cannot scroll by {delta}, requesting redraw")
            self.request_redraw()
