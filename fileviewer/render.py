"""Turning a range of screen rows into draw calls.

The pipeline decides, row by row, whether a document line is shown or the
row is blanked, and leaves the actual drawing to three hooks:

- the number renderer paints the gutter,
- the attribute resolver picks a ``Style`` for a line,
- the content renderer paints the prepared line text.

Hooks are plain callables bundled in ``RenderHooks``; replace any one of
them to customize rendering (selection or syntax coloring, for example).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from wcwidth import wcwidth

from .constants import ViewerConstants
from .document import Document
from .style import CURSOR_STYLE, GUTTER_STYLE, NORMAL_STYLE, Style
from .surface import DisplaySurface
from .viewport import ViewportController

logger = logging.getLogger(__name__)

NumberRenderer = Callable[[DisplaySurface, int, int], None]
AttributeResolver = Callable[[int, str, int], Style]
StyleLookup = Callable[[int, str], Style]
ContentRenderer = Callable[[DisplaySurface, int, str, StyleLookup], None]

REPLACEMENT_CHAR = "\ufffd"


def prepare_line(text: str, width: int, tab_size: int = ViewerConstants.TAB_SIZE) -> str:
    """Expand tabs and fit ``text`` into exactly ``width`` display columns.

    Wide characters count as two columns; one that would straddle the edge
    is dropped and the remainder padded with spaces. Non-printable
    characters are replaced with U+FFFD.
    """
    if width <= 0:
        return ""
    out = []
    used = 0
    for ch in text.expandtabs(tab_size):
        w = wcwidth(ch)
        if w < 0:
            ch, w = REPLACEMENT_CHAR, 1
        if used + w > width:
            break
        out.append(ch)
        used += w
    if used < width:
        out.append(" " * (width - used))
    return "".join(out)


def default_number_renderer(surface: DisplaySurface, index: int, gutter_width: int) -> None:
    """Draw the 1-based line number right-aligned in the gutter.

    Numbers too long for the gutter keep only their trailing digits, so the
    gutter never grows into the content.
    """
    if gutter_width <= 0:
        return
    digits = gutter_width - 1
    number = str(index + 1)[-digits:] if digits else ""
    surface.draw_text(f"{number:>{digits}} ", GUTTER_STYLE)


def default_attribute_resolver(index: int, text: str, cursor_line: int) -> Style:
    """Highlight the cursor line, draw everything else normally."""
    if index == cursor_line:
        return CURSOR_STYLE
    return NORMAL_STYLE


def default_content_renderer(surface: DisplaySurface, index: int, text: str,
                             resolve_style: StyleLookup) -> None:
    """Resolve the line's style, then draw the text with it."""
    surface.draw_text(text, resolve_style(index, text))


@dataclass
class RenderHooks:
    """The three drawing strategies of a ``RenderPipeline``.

    The content renderer receives ``resolve_style(index, text)``, which
    calls ``attribute_resolver`` with the current cursor line. A content
    renderer decides itself whether and when to resolve attributes.
    """

    number_renderer: NumberRenderer = default_number_renderer
    attribute_resolver: AttributeResolver = default_attribute_resolver
    content_renderer: ContentRenderer = default_content_renderer


class RenderPipeline:
    """Paints rows of a surface from a document and a viewport."""

    def __init__(self, gutter_width: int = ViewerConstants.GUTTER_WIDTH,
                 hooks: Optional[RenderHooks] = None):
        if gutter_width < 0:
            raise ValueError(f"gutter_width must not be negative, got {gutter_width}")
        self.gutter_width = gutter_width
        self.hooks = hooks or RenderHooks()

    def content_width(self, columns: int) -> int:
        """Columns left for line text once the gutter is taken."""
        return max(0, columns - self.gutter_width)

    def render(
        self,
        surface: Optional[DisplaySurface],
        viewport: ViewportController,
        document: Document,
        top: int,
        lines: int,
    ) -> int:
        """Paint surface rows ``[top, top + lines)``.

        Row ``r`` shows document line ``viewport.top_line + r``. Rows with
        no document line are erased across the full width. Returns the
        number of rows painted, which is always ``lines`` when a surface is
        given.
        """
        if surface is None or lines <= 0:
            return 0
        columns = surface.column_count()
        width = self.content_width(columns)
        # A gutter wider than the surface is cut at the right edge
        gutter = min(self.gutter_width, columns)
        cursor_line = viewport.cursor_line
        hooks = self.hooks

        def resolve_style(line_index: int, text: str) -> Style:
            return hooks.attribute_resolver(line_index, text, cursor_line)

        index = viewport.top_line + top
        painted = 0
        for row in range(top, top + lines):
            surface.move_cursor_to(row, 0)
            if document.has_line(index):
                text = prepare_line(document.line(index), width)
                hooks.number_renderer(surface, index, gutter)
                surface.move_cursor_to(row, gutter)
                hooks.content_renderer(surface, index, text, resolve_style)
            else:
                surface.erase_row(0, columns)
            index += 1
            painted += 1
        logger.debug(f"Rendered rows {top}..{top + lines - 1} from line {viewport.top_line + top}")
        return painted
