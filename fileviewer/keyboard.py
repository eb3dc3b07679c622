"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"
    SHIFT_SPECIAL = "shift_special"  # Shift + arrow keys, etc.


# Symbolic names handed to the viewer for special keys
SPECIAL_KEY_NAMES = {
    'up': 'Up',
    'down': 'Down',
    'left': 'Left',
    'right': 'Right',
    'page_up': 'PageUp',
    'page_down': 'PageDown',
    'home': 'Home',
    'end': 'End',
    'enter': 'Enter',
    'backspace': 'Backspace',
    'delete': 'Delete',
    'insert': 'Insert',
    'escape': 'Escape',
}


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'page_down')
    raw: str  # The raw token from curtsies
    is_alt: bool = False
    is_ctrl: bool = False
    is_shift: bool = False
    is_sequence: bool = False

    def to_viewer_event(self) -> tuple[str, str]:
        """Return the ``(kind, payload)`` pair the viewer understands.

        Printable characters become ``('text', ch)``; everything else becomes
        a ``('key', name)`` event such as ``'Down'``, ``'PageUp'``, ``'C-q'``
        or ``'M-left'``.
        """
        if self.key_type == KeyType.REGULAR:
            return ('text', self.value)
        if self.key_type == KeyType.CTRL:
            return ('key', f'C-{self.value}')
        if self.key_type == KeyType.ALT:
            return ('key', f'M-{self.value}')
        name = SPECIAL_KEY_NAMES.get(self.value, self.value.capitalize())
        if self.key_type == KeyType.SHIFT_SPECIAL:
            return ('key', f'S-{name}')
        return ('key', name)


class KeyboardHandler:
    """Handles keyboard input using curtsies-style key names."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get next key event and map curtsies-style names to KeyEvent."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies token into a KeyEvent.

        Args:
            key: Token such as ``'<DOWN>'``, ``'<Ctrl-q>'`` or ``'a'``

        Returns:
            Parsed KeyEvent
        """
        key_str = str(key)

        # Curtsies-style key names like '<LEFT>', '<Ctrl-x>', '<Alt-left>'
        if key_str.startswith('<') and key_str.endswith('>') and len(key_str) > 2:
            name = key_str[1:-1]
            lower = name.lower()
            # Support both '-' and '+' as modifier separators (e.g., '<Esc+u>')
            lower = lower.replace('+', '-')
            parts = lower.split('-') if '-' in lower else [lower]
            mods = set()
            base = parts[-1]
            if len(parts) > 1:
                mods = set(parts[:-1])
            if 'meta' in mods or 'esc' in mods:
                mods.add('alt')
            if base in ('pageup', 'page_up', 'prior'):
                base = 'page_up'
            elif base in ('pagedown', 'page_down', 'next'):
                base = 'page_down'

            specials = {
                'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace', 'delete',
                'page_up', 'page_down', 'insert'
            }
            if base in ('space', 'spacebar', 'spc') and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
            if base == 'tab' and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')
            if 'ctrl' in mods and len(base) == 1:
                # Ctrl-J / Ctrl-M are Enter
                if base in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str, is_sequence=True)
                return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str, is_ctrl=True)
            if 'alt' in mods and (base in specials or len(base) == 1):
                return KeyEvent(key_type=KeyType.ALT, value=base, raw=key_str, is_alt=True)
            if 'shift' in mods and base in specials:
                return KeyEvent(key_type=KeyType.SHIFT_SPECIAL, value=base, raw=key_str,
                                is_shift=True, is_sequence=True)
            if base in specials:
                return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str, is_sequence=True)
            if base in ('esc', 'escape'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')
            # Unknown tokens (function keys and the like) stay special
            return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str, is_sequence=True)

        # Single-byte ASCII control chars (Ctrl-<letter>)
        if len(key_str) == 1:
            o = ord(key_str)
            if 1 <= o <= 26:
                ch = chr(ord('a') + o - 1)
                if ch in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
                if ch == 'i':
                    return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
                return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, is_ctrl=True)

        if key_str == '\x1b':
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')

        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)


def create_keyboard_handler(terminal_interface):
    """Factory function to create a keyboard handler.

    Args:
        terminal_interface: TerminalSurface instance

    Returns:
        KeyboardHandler instance
    """
    return KeyboardHandler(terminal_interface)
