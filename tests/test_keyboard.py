"""Test keyboard input handling."""

import pytest
from unittest.mock import Mock

from fileviewer.keyboard import KeyboardHandler, KeyEvent, KeyType


class MockTerminal:
    """Mock terminal interface for testing."""

    def __init__(self):
        self._key_queue = []

    def get_key(self, timeout=None):
        """Mock get_key that returns from queue."""
        if self._key_queue:
            return self._key_queue.pop(0)
        return None

    def add_key(self, key_str):
        self._key_queue.append(key_str)


@pytest.fixture
def handler():
    return KeyboardHandler(MockTerminal())


@pytest.mark.parametrize("token,expected", [
    ('<UP>', ('key', 'Up')),
    ('<DOWN>', ('key', 'Down')),
    ('<PAGEUP>', ('key', 'PageUp')),
    ('<PAGEDOWN>', ('key', 'PageDown')),
    ('<ESC>', ('key', 'Escape')),
    ('<Ctrl-q>', ('key', 'C-q')),
    ('\x03', ('key', 'C-c')),
    ('<Esc+f>', ('key', 'M-f')),
    ('<Shift-UP>', ('key', 'S-Up')),
    ('<F1>', ('key', 'F1')),
    ('\r', ('key', 'Enter')),
    ('q', ('text', 'q')),
    ('<SPACE>', ('text', ' ')),
])
def test_viewer_events(handler, token, expected):
    """Tokens map onto the viewer's (kind, payload) events."""
    assert handler.parse_key(token).to_viewer_event() == expected


def test_ctrl_key_flags(handler):
    event = handler.parse_key('<Ctrl-q>')
    assert event.key_type == KeyType.CTRL
    assert event.value == 'q'
    assert event.is_ctrl


def test_page_down_aliases(handler):
    """Terminfo-style names for paging keys are accepted."""
    assert handler.parse_key('<NEXT>').value == 'page_down'
    assert handler.parse_key('<PRIOR>').value == 'page_up'


def test_tab_is_text(handler):
    assert handler.parse_key('\t').to_viewer_event() == ('text', '\t')
    assert handler.parse_key('<TAB>').to_viewer_event() == ('text', '\t')


def test_get_key_event_reads_terminal():
    terminal = MockTerminal()
    handler = KeyboardHandler(terminal)
    terminal.add_key('<DOWN>')
    event = handler.get_key_event()
    assert event == KeyEvent(key_type=KeyType.SPECIAL, value='down', raw='<DOWN>', is_sequence=True)
    assert handler.get_key_event() is None


def test_get_key_event_passes_timeout():
    terminal = Mock()
    terminal.get_key.return_value = None
    KeyboardHandler(terminal).get_key_event(timeout=0)
    terminal.get_key.assert_called_once_with(0)
