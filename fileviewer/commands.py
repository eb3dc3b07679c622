"""Command pattern implementation for viewer navigation."""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from .constants import ViewerConstants
from .document import Document
from .viewport import ViewportController


class ViewerCommand(ABC):
    """Base class for viewer commands."""

    @abstractmethod
    def execute(self, document: Document, viewport: ViewportController) -> bool:
        """Execute the command.

        Args:
            document: The document being viewed
            viewport: Controller owning the cursor and top line

        Returns:
            True if the cursor line changed
        """
        pass


class MovementCommand(ViewerCommand):
    """Base class for cursor movement commands."""

    def execute(self, document: Document, viewport: ViewportController) -> bool:
        # Nothing to move through in an empty document
        if len(document) == 0:
            return False
        before = viewport.cursor_line
        target = self._target(viewport.cursor_line, document.last_index)
        if target is None:
            return False
        viewport.set_cursor_line(target)
        return viewport.cursor_line != before

    @abstractmethod
    def _target(self, cursor: int, last: int) -> Optional[int]:
        """Return the new cursor line, or None to stay put."""
        pass


class DownLineCommand(MovementCommand):
    def _target(self, cursor, last):
        if cursor < last:
            return cursor + 1
        return 0


class UpLineCommand(MovementCommand):
    def _target(self, cursor, last):
        if cursor > 0:
            return cursor - 1
        return last


class PageDownCommand(MovementCommand):
    """Move a page down, stopping at the last line."""

    def __init__(self, step: int = ViewerConstants.PAGE_STEP):
        self.step = step

    def _target(self, cursor, last):
        if cursor < last:
            return min(cursor + self.step, last)
        return None


class PageUpCommand(MovementCommand):
    """Move a page up, stopping at the first line."""

    def __init__(self, step: int = ViewerConstants.PAGE_STEP):
        self.step = step

    def _target(self, cursor, last):
        if cursor > 0:
            return max(cursor - self.step, 0)
        return None


class CommandRegistry:
    """Maps symbolic key names to commands."""

    def __init__(self, page_step: int = ViewerConstants.PAGE_STEP):
        self._commands: Dict[str, ViewerCommand] = {}
        self._setup_default_commands(page_step)

    def _setup_default_commands(self, page_step: int):
        """Set up the default command mappings."""
        self.register('Down', DownLineCommand())
        self.register('Up', UpLineCommand())
        self.register('PageDown', PageDownCommand(page_step))
        self.register('PageUp', PageUpCommand(page_step))

    def register(self, key: str, command: ViewerCommand):
        """Register a command for a key name."""
        self._commands[key] = command

    def get_command(self, key: str) -> Optional[ViewerCommand]:
        """Get the command for a key name."""
        return self._commands.get(key)

    def keys(self) -> list[str]:
        return list(self._commands)

    def execute(self, key: str, document: Document, viewport: ViewportController) -> bool:
        """Execute the command bound to ``key``.

        Returns:
            True if the key is bound and moved the cursor; unknown keys are
            ignored.
        """
        command = self.get_command(key)
        if command is None:
            return False
        return command.execute(document, viewport)
