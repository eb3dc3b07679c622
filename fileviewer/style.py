"""Style descriptors used by the render pipeline."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class Color(IntEnum):
    """The eight basic terminal colors, by ANSI number."""
    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7


@dataclass(frozen=True)
class Style:
    """Closed set of attributes a surface is asked to draw with.

    ``None`` for a color means the surface default.
    """
    fg: Optional[Color] = None
    bg: Optional[Color] = None
    bold: bool = False


DEFAULT_STYLE = Style()
NORMAL_STYLE = Style(fg=Color.WHITE)
GUTTER_STYLE = Style(fg=Color.CYAN)
CURSOR_STYLE = Style(fg=Color.CYAN, bg=Color.BLUE, bold=True)
