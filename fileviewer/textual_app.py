"""Textual front end: the viewer component as a Textual widget."""

from typing import Optional

from rich.segment import Segment
from rich.style import Style as RichStyle
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.strip import Strip
from textual.widget import Widget
from textual.widgets import Footer, Header

from .style import Style
from .surface import BufferSurface
from .viewer import FileViewer

# Textual key names mapped onto the viewer's symbolic names
TEXTUAL_KEY_NAMES = {
    "up": "Up",
    "down": "Down",
    "pageup": "PageUp",
    "pagedown": "PageDown",
    "home": "Home",
    "end": "End",
    "enter": "Enter",
    "escape": "Escape",
}


def rich_style(style: Optional[Style]) -> RichStyle:
    """Convert a viewer style into a Rich style."""
    if style is None:
        return RichStyle()
    return RichStyle(
        color=style.fg.name.lower() if style.fg is not None else None,
        bgcolor=style.bg.name.lower() if style.bg is not None else None,
        bold=style.bold,
    )


class FileViewerWidget(Widget, can_focus=True):
    """Shows a FileViewer, painting it into an in-memory surface."""

    DEFAULT_CSS = """
    FileViewerWidget {
        width: 1fr;
        height: 1fr;
    }
    """

    def __init__(self, viewer: FileViewer, *, name: Optional[str] = None,
                 id: Optional[str] = None, classes: Optional[str] = None):
        super().__init__(name=name, id=id, classes=classes)
        self.viewer = viewer
        self.surface = BufferSurface()
        self.viewer.on_redraw = self.refresh

    def on_resize(self, event: events.Resize) -> None:
        self.surface.resize(event.size.height, event.size.width)
        if self.viewer.window is not self.surface:
            self.viewer.attach_window(self.surface)
        else:
            self.viewer.resized()

    def on_unmount(self) -> None:
        self.viewer.detach_window()

    def on_key(self, event: events.Key) -> None:
        name = TEXTUAL_KEY_NAMES.get(event.key)
        if name is not None:
            handled = self.viewer.on_key("key", name, event)
        elif event.is_printable and event.character:
            handled = self.viewer.on_key("text", event.character, event)
        else:
            return
        if handled:
            event.stop()
            event.prevent_default()

    def render_line(self, y: int) -> Strip:
        if self.viewer.needs_render:
            self.viewer.flush()
        if y >= self.surface.row_count():
            return Strip.blank(self.size.width)
        segments = [
            Segment(text, rich_style(style)) for text, style in self.surface.row_segments(y)
        ]
        return Strip(segments, self.surface.column_count())


class FileViewerApp(App):
    """Textual app showing a single file."""

    BINDINGS = [
        Binding("q", "quit", "Quit", priority=True),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(self, viewer: FileViewer):
        super().__init__()
        self.viewer = viewer

    def compose(self) -> ComposeResult:
        yield Header()
        yield FileViewerWidget(self.viewer)
        yield Footer()

    def on_mount(self) -> None:
        if self.viewer.filename:
            self.sub_title = self.viewer.filename
        self.query_one(FileViewerWidget).focus()


def run_textual(filename: str, gutter_width: Optional[int] = None) -> None:
    """Run the Textual front end on ``filename``."""
    viewer = FileViewer(file=filename)
    if gutter_width is not None:
        viewer.configure(gutter_width=gutter_width)
    FileViewerApp(viewer).run()
