#!/usr/bin/env python3
"""fileviewer - page through a text file with line numbers.

Usage:
    python main.py [--gutter N] [--textual] [--log FILE] filename

Controls:
    Up/Down: Move the cursor line (wraps at either end)
    PageUp/PageDown: Move ten lines (stops at either end)
    q, Ctrl-Q, Esc: Quit
"""

import sys
from fileviewer.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
