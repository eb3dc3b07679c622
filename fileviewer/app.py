"""Full-screen terminal pager built around the viewer component."""

import logging
import os
import select
import signal
from typing import Optional

from wcwidth import wcswidth

from .constants import ViewerConstants
from .keyboard import KeyEvent, create_keyboard_handler
from .settings_persistence import SettingsPersistence
from .terminal import TerminalSurface
from .viewer import FileViewer

logger = logging.getLogger(__name__)

QUIT_KEYS = ('C-q', 'C-c', 'Escape')
QUIT_TEXT = ('q', 'Q')


class ViewerApp:
    """Runs a ``FileViewer`` on the terminal until the user quits."""

    def __init__(
        self,
        viewer: FileViewer,
        terminal: Optional[TerminalSurface] = None,
        persistence: Optional[SettingsPersistence] = None,
        remember_position: bool = True,
    ):
        self.viewer = viewer
        self.terminal = terminal or TerminalSurface()
        self.keyboard = create_keyboard_handler(self.terminal)
        self.persistence = persistence
        self.remember_position = remember_position
        self.running = False
        # Text input is the viewer's extension point; the pager uses it for quitting
        self.viewer.dispatcher.text_handler = self._handle_text
        # Create pipe for resize signaling
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, ViewerConstants.RESIZE_PIPE_MARKER)

    def restore_position(self) -> None:
        """Return to where this file was last left, if remembered."""
        if not self.remember_position or self.persistence is None or self.viewer.filename is None:
            return
        position = self.persistence.load_position(self.viewer.filename)
        if position is None:
            return
        cursor_line, top_line = position
        if cursor_line >= len(self.viewer.document):
            logger.debug(f"Saved cursor {cursor_line} is past the end of {self.viewer.filename}")
            return
        self.viewer.top_line = min(top_line, cursor_line)
        self.viewer.cursor_line = cursor_line

    def save_position(self) -> None:
        if not self.remember_position or self.persistence is None or self.viewer.filename is None:
            return
        self.persistence.save_position(
            self.viewer.filename, self.viewer.cursor_line, self.viewer.top_line
        )

    def run(self):
        """Run the main viewer loop."""
        self.restore_position()
        self.terminal.setup()
        self.viewer.attach_window(self.terminal)
        self.running = True

        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        try:
            with self.terminal.term.cbreak():
                self._draw()
                while self.running:
                    # Wait for input on stdin or resize pipe
                    ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

                    if self._resize_pipe_r in ready:
                        os.read(self._resize_pipe_r, 1024)
                        self.terminal.clear_screen()
                        self.viewer.resized()
                    elif 0 in ready:
                        key_event = self.keyboard.get_key_event(timeout=0)
                        if key_event:
                            self.handle_key_event(key_event)
                    if self.running:
                        self._draw()
        except KeyboardInterrupt:
            # Ctrl-C outside raw mode just ends the session
            pass
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.viewer.detach_window()
            self.terminal.cleanup()
            self.save_position()

    def handle_key_event(self, key_event: KeyEvent) -> None:
        """Handle a keyboard event.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        kind, payload = key_event.to_viewer_event()
        if kind == 'key' and payload in QUIT_KEYS:
            self.running = False
            return
        self.viewer.on_key(kind, payload, key_event)

    def _handle_text(self, text: str) -> bool:
        if text in QUIT_TEXT:
            self.running = False
            return True
        return False

    def status_text(self) -> str:
        """Compose the status line: file name and position, help on the right."""
        name = os.path.basename(self.viewer.filename) if self.viewer.filename else "[lines]"
        total = len(self.viewer.document)
        if total == 0:
            left = ViewerConstants.EMPTY_STATUS_TEMPLATE.format(name=name)
        else:
            left = ViewerConstants.STATUS_TEMPLATE.format(
                name=name, line=self.viewer.cursor_line + 1, total=total
            )
        help_text = ViewerConstants.HELP_TEXT
        pad = self.terminal.width - max(wcswidth(left), len(left)) - len(help_text) - 1
        if pad >= 1:
            return left + " " * pad + help_text
        return left

    def _draw(self) -> None:
        """Paint pending damage and the status line."""
        self.viewer.flush()
        self.terminal.draw_status(self.status_text())
        self.terminal.flush()


def run_viewer(filename: str, gutter_width: Optional[int] = None,
               persistence: Optional[SettingsPersistence] = None) -> None:
    """Load ``filename`` and page through it on the terminal.

    Raises:
        DocumentLoadError: if the file cannot be read.
    """
    settings = persistence.load_viewer_settings() if persistence is not None else {}
    if gutter_width is None:
        gutter_width = settings.get("gutter_width", ViewerConstants.GUTTER_WIDTH)
    viewer = FileViewer(file=filename, gutter_width=gutter_width)
    app = ViewerApp(
        viewer,
        persistence=persistence,
        remember_position=settings.get("remember_position", True),
    )
    app.run()
