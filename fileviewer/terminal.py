"""Terminal surface using Blessed for display and Curtsies for input."""

import logging
import select
import sys
from typing import Optional

import blessed

from .render import prepare_line
from .style import Style
from .surface import DisplaySurface

logger = logging.getLogger(__name__)


class TerminalSurface(DisplaySurface):
    """Draws on the terminal with Blessed.

    The bottom terminal row is reserved for a status line, so the surface
    reports one row fewer than the terminal has.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._curtsies_active: bool = False

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        self._write(self.term.enter_fullscreen + self.term.hide_cursor + self.term.clear)
        self.flush()
        self.is_fullscreen = True
        if self._curtsies_input is None:
            try:
                from curtsies import Input  # type: ignore
                # Enter raw mode immediately so reads work
                self._curtsies_input = Input(keynames='curtsies')  # type: ignore
                self._curtsies_input.__enter__()
                self._curtsies_active = True
            except Exception as e:
                # No tty (pipes, CI): run without input
                logger.warning(f"Keyboard input unavailable: {e}")
                self._curtsies_input = None
                self._curtsies_active = False

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            self._write(self.term.normal + self.term.exit_fullscreen + self.term.normal_cursor)
            self.flush()
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                if self._curtsies_active:
                    self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except Exception as e:
                logger.debug(f"Could not leave raw mode: {e}")
            finally:
                self._curtsies_input = None
                self._curtsies_active = False

    def _write(self, text: str) -> None:
        print(text, end='')

    def flush(self) -> None:
        sys.stdout.flush()

    def clear_screen(self):
        """Clear the entire screen."""
        self._write(self.term.home + self.term.clear)

    # DisplaySurface

    def row_count(self) -> int:
        return max(0, self.term.height - 1)  # Reserve one line for status

    def column_count(self) -> int:
        return self.term.width

    def move_cursor_to(self, row: int, col: int) -> None:
        self._write(self.term.move_yx(row, col))

    def _attributes(self, style: Style) -> str:
        """Escape sequences selecting ``style``, starting from a reset."""
        seq = self.term.normal
        if style.bold:
            seq += self.term.bold
        if style.fg is not None:
            seq += self.term.color(int(style.fg))
        if style.bg is not None:
            seq += self.term.on_color(int(style.bg))
        return seq

    def draw_text(self, text: str, style: Style) -> None:
        self._write(self._attributes(style) + text + self.term.normal)

    def erase_row(self, from_col: int, width: int) -> None:
        if width <= 0:
            return
        self._write(self.term.normal + self.term.move_x(from_col) + ' ' * width)

    def scroll(self, row_delta: int, col_delta: int) -> bool:
        """Scroll the content rows with the terminal's scroll region.

        Returns False when the terminal lacks the needed capabilities, for
        horizontal scrolls, and when the whole surface would be replaced.
        """
        rows = self.row_count()
        if col_delta != 0 or abs(row_delta) >= rows:
            return False
        if row_delta == 0:
            return True
        if not (self.term.csr and self.term.ind and self.term.ri):
            return False
        out = [self.term.normal, self.term.csr(0, rows - 1)]
        if row_delta > 0:
            out.append(self.term.move_yx(rows - 1, 0))
            out.append(self.term.ind * row_delta)
        else:
            out.append(self.term.move_yx(0, 0))
            out.append(self.term.ri * -row_delta)
        out.append(self.term.csr(0, self.term.height - 1))
        self._write(''.join(out))
        return True

    # Status line and input

    def draw_status(self, text: str) -> None:
        """Draw ``text`` in reverse video on the status line below the surface."""
        self._write(self.term.normal + self.term.move_yx(self.term.height - 1, 0)
                    + self.term.reverse + prepare_line(text, self.term.width) + self.term.normal)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies token as a string, or None.
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            return str(next(self._curtsies_input))
        r, _, _ = select.select([sys.stdin], [], [], float(timeout))
        if not r:
            return None
        return str(next(self._curtsies_input))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows (excluding status line)."""
        return self.row_count()
