"""Display surface capability and an in-memory implementation."""

from abc import ABC, abstractmethod
from typing import Optional

from wcwidth import wcwidth

from .style import DEFAULT_STYLE, Style


class DisplaySurface(ABC):
    """A rectangular region the viewer paints into.

    The viewer only borrows a surface; it may be attached and detached at
    any time.
    """

    @abstractmethod
    def row_count(self) -> int:
        """Number of rows available for content."""

    @abstractmethod
    def column_count(self) -> int:
        """Number of display columns per row."""

    @abstractmethod
    def move_cursor_to(self, row: int, col: int) -> None:
        """Position the drawing cursor."""

    @abstractmethod
    def draw_text(self, text: str, style: Style) -> None:
        """Draw ``text`` at the drawing cursor and advance it."""

    @abstractmethod
    def erase_row(self, from_col: int, width: int) -> None:
        """Blank ``width`` columns of the cursor's row starting at ``from_col``."""

    @abstractmethod
    def scroll(self, row_delta: int, col_delta: int) -> bool:
        """Scroll the content in place.

        Positive ``row_delta`` moves content up (the view moves down the
        document). Returns False if the surface cannot scroll in place and
        needs a full repaint instead.
        """


Cell = tuple[str, Style]
BLANK_CELL: Cell = (" ", DEFAULT_STYLE)


class BufferSurface(DisplaySurface):
    """Surface backed by a grid of cells held in memory.

    A double-width character occupies its cell plus a following
    placeholder cell holding the empty string.
    """

    def __init__(self, rows: int = 0, columns: int = 0, can_scroll: bool = True):
        self.can_scroll = can_scroll
        self.cursor: tuple[int, int] = (0, 0)
        self._rows = 0
        self._columns = 0
        self._cells: list[list[Cell]] = []
        self.resize(rows, columns)

    def resize(self, rows: int, columns: int) -> None:
        """Change the geometry; the content is cleared."""
        self._rows = max(0, rows)
        self._columns = max(0, columns)
        self._cells = [self._blank_row() for _ in range(self._rows)]
        self.cursor = (0, 0)

    def _blank_row(self) -> list[Cell]:
        return [BLANK_CELL] * self._columns

    def row_count(self) -> int:
        return self._rows

    def column_count(self) -> int:
        return self._columns

    def move_cursor_to(self, row: int, col: int) -> None:
        self.cursor = (row, col)

    def _put(self, row: int, col: int, ch: str, style: Style, width: int) -> None:
        cells = self._cells[row]
        # Break up any wide character being partially overwritten
        if cells[col][0] == "" and col > 0:
            cells[col - 1] = BLANK_CELL
        end = col + width
        if end < self._columns and cells[end][0] == "":
            cells[end] = BLANK_CELL
        cells[col] = (ch, style)
        if width == 2:
            cells[col + 1] = ("", style)

    def draw_text(self, text: str, style: Style) -> None:
        row, col = self.cursor
        if not 0 <= row < self._rows:
            return
        for ch in text:
            w = wcwidth(ch)
            if w == 0:
                # Combining character joins the previous cell
                if 0 < col <= self._columns:
                    prev, prev_style = self._cells[row][col - 1]
                    if prev == "" and col > 1:
                        prev, prev_style = self._cells[row][col - 2]
                        self._cells[row][col - 2] = (prev + ch, prev_style)
                    else:
                        self._cells[row][col - 1] = (prev + ch, prev_style)
                continue
            if w < 0:
                w = 1
            if col < 0 or col + w > self._columns:
                col += w
                continue
            self._put(row, col, ch, style, w)
            col += w
        self.cursor = (row, col)

    def erase_row(self, from_col: int, width: int) -> None:
        row, _ = self.cursor
        if not 0 <= row < self._rows:
            return
        start = max(0, from_col)
        end = min(self._columns, from_col + width)
        cells = self._cells[row]
        if 0 < start < self._columns and cells[start][0] == "":
            cells[start - 1] = BLANK_CELL
        if end < self._columns and cells[end][0] == "":
            cells[end] = BLANK_CELL
        for col in range(start, end):
            cells[col] = BLANK_CELL
        self.cursor = (row, end)

    def scroll(self, row_delta: int, col_delta: int) -> bool:
        if not self.can_scroll or col_delta != 0:
            return False
        if row_delta == 0:
            return True
        if abs(row_delta) >= self._rows:
            return False
        if row_delta > 0:
            self._cells = self._cells[row_delta:] + [self._blank_row() for _ in range(row_delta)]
        else:
            self._cells = [self._blank_row() for _ in range(-row_delta)] + self._cells[:row_delta]
        return True

    def row_text(self, row: int) -> str:
        """Return the characters shown on ``row``."""
        return "".join(ch for ch, _ in self._cells[row])

    def style_at(self, row: int, col: int) -> Style:
        return self._cells[row][col][1]

    def row_segments(self, row: int) -> list[tuple[str, Optional[Style]]]:
        """Return ``row`` as runs of text sharing one style."""
        segments: list[tuple[str, Optional[Style]]] = []
        text = ""
        current: Optional[Style] = None
        for ch, style in self._cells[row]:
            if ch == "":
                continue
            if text and style != current:
                segments.append((text, current))
                text = ""
            current = style
            text += ch
        if text:
            segments.append((text, current))
        return segments
