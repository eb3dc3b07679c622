"""Tests for the Textual front end."""

import asyncio

from rich.style import Style as RichStyle

from fileviewer.style import CURSOR_STYLE, Color, Style
from fileviewer.textual_app import FileViewerApp, FileViewerWidget, rich_style
from fileviewer.viewer import FileViewer


def make_viewer(num_lines=40):
    return FileViewer(lines=[f"line {i}" for i in range(num_lines)])


def test_rich_style_conversion():
    assert rich_style(None) == RichStyle()
    assert rich_style(Style()) == RichStyle(bold=False)
    converted = rich_style(CURSOR_STYLE)
    assert converted.color.name == "cyan"
    assert converted.bgcolor.name == "blue"
    assert converted.bold
    assert rich_style(Style(fg=Color.RED)).color.name == "red"


def test_widget_hooks_viewer_redraw():
    viewer = make_viewer()
    widget = FileViewerWidget(viewer)
    assert viewer.on_redraw == widget.refresh
    assert viewer.window is None


def test_app_creation():
    viewer = make_viewer()
    app = FileViewerApp(viewer)
    assert app.viewer is viewer


def test_keys_move_cursor_in_running_app():
    """Arrow keys reach the viewer once the widget has focus."""
    viewer = make_viewer()
    app = FileViewerApp(viewer)

    async def drive():
        async with app.run_test(size=(40, 12)) as pilot:
            await pilot.pause()
            widget = app.query_one(FileViewerWidget)
            assert viewer.window is widget.surface
            await pilot.press("down", "down")
            assert viewer.cursor_line == 2
            await pilot.press("pagedown")
            assert viewer.cursor_line == 12
            await pilot.press("up")
            assert viewer.cursor_line == 11
            await pilot.pause()
            assert viewer.top_line > 0
            await pilot.press("q")

    asyncio.run(drive())
