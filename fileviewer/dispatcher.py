"""Routing of key and text events onto viewport operations."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from .commands import CommandRegistry
from .document import Document
from .errors import UnsupportedEventError
from .viewport import ViewportController

logger = logging.getLogger(__name__)

KEY_EVENT = "key"
TEXT_EVENT = "text"


class InputDispatcher:
    """Translates ``(kind, payload, origin)`` events into cursor moves.

    Key events go through the command registry; names it does not know are
    ignored. Text events are handed to ``text_handler`` when one is set and
    otherwise dropped. Any other event kind is a programming error upstream
    and raises ``UnsupportedEventError``.
    """

    def __init__(
        self,
        document: Document,
        viewport: ViewportController,
        registry: Optional[CommandRegistry] = None,
        text_handler: Optional[Callable[[str], bool]] = None,
    ):
        self.document = document
        self.viewport = viewport
        self.registry = registry or CommandRegistry()
        self.text_handler = text_handler

    def on_key(self, kind: str, payload: str, origin: Any = None) -> bool:
        """Handle one event; returns True if it was consumed."""
        if kind == KEY_EVENT:
            return self.handle_key(payload)
        if kind == TEXT_EVENT:
            return self.handle_text(payload)
        raise UnsupportedEventError(kind, payload)

    def handle_key(self, key: str) -> bool:
        handled = self.registry.execute(key, self.document, self.viewport)
        if handled:
            logger.debug(f"{key} moved cursor to {self.viewport.cursor_line}")
        return handled

    def handle_text(self, text: str) -> bool:
        """Extension point for literal input; the viewer itself ignores it."""
        if self.text_handler is None:
            return False
        return bool(self.text_handler(text))
