"""
figma-tokens - SCSS design tokens generated from a Figma page.

Reads colors, sizes, spacing, borders, radii, shadows and text styles
from a Figma file and writes them as SCSS variables and mixins,
keeping removed tokens around as deprecated.
"""

from __future__ import annotations

import re
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

from .core.errors import (
    ConfigError,
    FetchError,
    FigmaTokensError,
    MalformedSnapshotError,
    PageNotFoundError,
    PromptCancelledError,
)


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    # In editable mode, read directly from pyproject.toml for live updates
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    try:
        return _metadata_version("figma-tokens")
    except Exception:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "FigmaTokensError",
    "FetchError",
    "PageNotFoundError",
    "MalformedSnapshotError",
    "PromptCancelledError",
    "ConfigError",
]
