"""Settings persistence for viewer preferences and per-document positions.

Settings are stored in an OS-appropriate location and survive application
restarts. The file holds two sections: ``viewer`` with global preferences and
``documents`` with the last viewing position of each file, indexed by its
absolute path.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import ViewerConstants

logger = logging.getLogger(__name__)

DEFAULT_VIEWER_SETTINGS: Dict[str, Any] = {
    "gutter_width": ViewerConstants.GUTTER_WIDTH,
    "remember_position": True,
}


class SettingsPersistence:
    """Manages persistent storage of viewer settings.

    Settings are stored in a JSON file in the user's config directory.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize settings persistence."""
        # Get platform-appropriate config directory
        self._config_dir = Path(config_dir or platformdirs.user_config_dir("fileviewer"))
        self._settings_file = self._config_dir / "settings.json"
        self._settings_cache: Optional[Dict[str, Any]] = None

    def _ensure_config_dir(self) -> None:
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")

    def _load_all(self) -> Dict[str, Any]:
        """Load the whole settings file.

        Returns:
            The decoded settings, or an empty dict if the file is missing or
            unreadable.
        """
        if self._settings_cache is not None:
            return self._settings_cache

        if not self._settings_file.exists():
            self._settings_cache = {}
            return self._settings_cache

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            self._settings_cache = {}
            return self._settings_cache

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            data = {}
        self._settings_cache = data
        return self._settings_cache

    def _save_all(self, settings: Dict[str, Any]) -> bool:
        """Save all settings to disk atomically (temp file + rename).

        Returns:
            True if save was successful, False otherwise.
        """
        self._ensure_config_dir()
        temp_file = self._settings_file.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)
            temp_file.replace(self._settings_file)
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False
        self._settings_cache = settings
        return True

    def load_viewer_settings(self) -> Dict[str, Any]:
        """Return the global viewer settings merged over the defaults.

        Invalid values are logged and replaced by their default.
        """
        settings = dict(DEFAULT_VIEWER_SETTINGS)
        stored = self._load_all().get("viewer", {})
        if not isinstance(stored, dict):
            logger.warning("Viewer settings are not a dict, ignoring")
            return settings
        for key, value in stored.items():
            if value is None:
                continue
            if self.validate_setting(key, value):
                settings[key] = value
            else:
                logger.warning(f"Ignoring invalid setting {key}={value!r}")
        return settings

    def save_viewer_settings(self, settings: Dict[str, Any]) -> bool:
        all_settings = dict(self._load_all())
        all_settings["viewer"] = dict(settings)
        return self._save_all(all_settings)

    def _document_key(self, document_path: Optional[str]) -> Optional[str]:
        if document_path is None:
            return None
        try:
            return os.path.abspath(document_path)
        except (OSError, ValueError):
            logger.warning(f"Invalid document path: {document_path}")
            return None

    def load_position(self, document_path: Optional[str]) -> Optional[tuple[int, int]]:
        """Return the saved ``(cursor_line, top_line)`` for a document, if any."""
        key = self._document_key(document_path)
        if key is None:
            return None
        documents = self._load_all().get("documents", {})
        entry = documents.get(key) if isinstance(documents, dict) else None
        if not isinstance(entry, dict):
            return None
        cursor_line = entry.get("cursor_line")
        top_line = entry.get("top_line")
        if not (self.validate_setting("cursor_line", cursor_line)
                and self.validate_setting("top_line", top_line)):
            logger.warning(f"Saved position for {key} is invalid, ignoring")
            return None
        if cursor_line is None or top_line is None:
            return None
        return cursor_line, top_line

    def save_position(self, document_path: Optional[str], cursor_line: int, top_line: int) -> bool:
        """Remember the viewing position of a document."""
        key = self._document_key(document_path)
        if key is None:
            return False
        all_settings = dict(self._load_all())
        documents = all_settings.get("documents")
        documents = dict(documents) if isinstance(documents, dict) else {}
        documents[key] = {"cursor_line": cursor_line, "top_line": top_line}
        all_settings["documents"] = documents
        return self._save_all(all_settings)

    def validate_setting(self, key: str, value: Any) -> bool:
        """Validate a setting value.

        Returns:
            True if setting is valid, False otherwise.
        """
        if value is None:
            return True  # None is valid (means "not set")

        if key == 'gutter_width':
            # bool is an int subclass; reject it explicitly
            if not isinstance(value, int) or isinstance(value, bool):
                return False
            return 0 <= value <= ViewerConstants.MAX_GUTTER_WIDTH

        if key == 'remember_position':
            return isinstance(value, bool)

        if key in ('cursor_line', 'top_line'):
            return isinstance(value, int) and not isinstance(value, bool) and value >= 0

        # Unknown settings are considered valid (forward compatibility)
        return True

    def clear_cache(self) -> None:
        """Clear the in-memory cache of settings."""
        self._settings_cache = None


# Global instance
_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Get the global settings persistence instance."""
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
