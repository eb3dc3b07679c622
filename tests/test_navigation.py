"""Tests for key navigation and event dispatch."""

from unittest.mock import Mock

import pytest

from fileviewer.commands import (
    CommandRegistry,
    DownLineCommand,
    PageDownCommand,
    PageUpCommand,
    UpLineCommand,
)
from fileviewer.dispatcher import InputDispatcher
from fileviewer.document import Document
from fileviewer.errors import UnsupportedEventError
from fileviewer.surface import BufferSurface
from fileviewer.viewport import ViewportController


def make_dispatcher(num_lines, height=None):
    document = Document([f"line {i}" for i in range(num_lines)])
    viewport = ViewportController()
    if height is not None:
        viewport.attach(BufferSurface(rows=height, columns=40))
    return InputDispatcher(document, viewport), viewport


def test_down_moves_one_line():
    d, vp = make_dispatcher(3)
    assert d.handle_key("Down")
    assert vp.cursor_line == 1


def test_down_wraps_to_top():
    d, vp = make_dispatcher(3, height=2)
    vp.set_cursor_line(2)
    assert vp.top_line == 1
    d.handle_key("Down")
    assert vp.cursor_line == 0
    # Scroll-follow brings the first line back into view
    assert vp.top_line == 0


def test_up_wraps_to_bottom():
    d, vp = make_dispatcher(3, height=2)
    d.handle_key("Up")
    assert vp.cursor_line == 2
    assert vp.top_line == 1


def test_up_moves_one_line():
    d, vp = make_dispatcher(5)
    vp.set_cursor_line(3)
    d.handle_key("Up")
    assert vp.cursor_line == 2


def test_page_down_clamps_at_last_line():
    d, vp = make_dispatcher(15)
    vp.set_cursor_line(5)
    d.handle_key("PageDown")
    assert vp.cursor_line == 14
    assert not d.handle_key("PageDown")
    assert vp.cursor_line == 14


def test_page_down_moves_ten_lines():
    d, vp = make_dispatcher(100, height=20)
    d.handle_key("PageDown")
    assert vp.cursor_line == 10
    assert vp.top_line == 0
    d.handle_key("PageDown")
    d.handle_key("PageDown")
    assert vp.cursor_line == 30
    assert vp.top_line == 11


def test_page_up_clamps_at_first_line():
    d, vp = make_dispatcher(50)
    vp.set_cursor_line(4)
    d.handle_key("PageUp")
    assert vp.cursor_line == 0
    assert not d.handle_key("PageUp")
    assert vp.cursor_line == 0


def test_page_up_moves_ten_lines():
    d, vp = make_dispatcher(50)
    vp.set_cursor_line(35)
    d.handle_key("PageUp")
    assert vp.cursor_line == 25


def test_repeated_page_down_converges_without_wrapping():
    d, vp = make_dispatcher(37)
    seen = []
    for _ in range(10):
        d.handle_key("PageDown")
        seen.append(vp.cursor_line)
    assert seen == [10, 20, 30, 36, 36, 36, 36, 36, 36, 36]
    for _ in range(10):
        d.handle_key("PageUp")
    assert vp.cursor_line == 0


def test_single_line_document():
    d, vp = make_dispatcher(1)
    for key in ("Down", "Up", "PageDown", "PageUp"):
        d.handle_key(key)
        assert vp.cursor_line == 0


def test_empty_document_ignores_navigation():
    d, vp = make_dispatcher(0)
    for key in ("Down", "Up", "PageDown", "PageUp"):
        assert not d.handle_key(key)
    assert vp.cursor_line == 0


def test_unknown_keys_are_ignored():
    d, vp = make_dispatcher(5)
    assert not d.handle_key("Left")
    assert not d.handle_key("C-x")
    assert not d.handle_key("")
    assert vp.cursor_line == 0


def test_on_key_routes_by_kind():
    d, vp = make_dispatcher(5)
    assert d.on_key("key", "Down", None)
    assert vp.cursor_line == 1
    assert not d.on_key("text", "j")
    assert vp.cursor_line == 1


def test_unsupported_event_kind_raises():
    d, _ = make_dispatcher(5)
    with pytest.raises(UnsupportedEventError) as excinfo:
        d.on_key("mouse", "press")
    assert excinfo.value.kind == "mouse"


def test_text_handler_extension_point():
    d, _ = make_dispatcher(5)
    d.text_handler = Mock(return_value=True)
    assert d.handle_text("x")
    d.text_handler.assert_called_once_with("x")


def test_moves_go_through_set_cursor_line():
    document = Document(["a", "b", "c"])
    viewport = Mock()
    viewport.cursor_line = 2
    DownLineCommand().execute(document, viewport)
    viewport.set_cursor_line.assert_called_once_with(0)


def test_registry_defaults():
    registry = CommandRegistry()
    assert sorted(registry.keys()) == ["Down", "PageDown", "PageUp", "Up"]
    assert isinstance(registry.get_command("Up"), UpLineCommand)
    assert registry.get_command("Home") is None


def test_registry_page_step():
    registry = CommandRegistry(page_step=3)
    assert registry.get_command("PageDown").step == 3
    assert isinstance(registry.get_command("PageUp"), PageUpCommand)


def test_registry_custom_command():
    registry = CommandRegistry()
    registry.register("End", PageDownCommand(step=1000))
    document = Document([str(i) for i in range(50)])
    viewport = ViewportController()
    assert registry.execute("End", document, viewport)
    assert viewport.cursor_line == 49
