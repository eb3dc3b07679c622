from __future__ import annotations

import importlib.metadata
from typing import Optional


def get_version() -> Optional[str]:
    """Return the installed distribution version, if installed."""
    try:
        return importlib.metadata.version("fileviewer")
    except importlib.metadata.PackageNotFoundError:
        return None


def get_version_string() -> str:
    return f"fileviewer {get_version() or 'unknown'}"
