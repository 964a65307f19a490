"""Path resolution helpers for list files inside the data directory."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Final

WINDOWS_ABSOLUTE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z]:")


class PathBlockedError(Exception):
    """Raised when a display name cannot be mapped to a file in the data directory."""

    def __init__(self, reason: str, hint: str) -> None:
        super().__init__(reason)
        self.reason = reason
        self.hint = hint


def display_name(path: Path) -> str:
    """Return the filename without its extension."""
    return path.stem


def resolve_list_path(data_dir: Path, name: str, extension: str) -> Path:
    """Resolve a display name to ``<data_dir>/<name><extension>`` with sandbox enforcement."""
    root = data_dir.resolve()
    if not name or not name.strip():
        raise PathBlockedError(
            reason="File name is empty.",
            hint="Type a name such as 'groceries'.",
        )
    if "/" in name or "\\" in name or WINDOWS_ABSOLUTE_PATTERN.match(name):
        raise PathBlockedError(
            reason="File name must not contain path separators.",
            hint="Use a plain name without '/' or '\\'.",
        )
    if "\x00" in name:
        raise PathBlockedError(
            reason="File name contains a NUL byte.",
            hint="Remove control characters from the name.",
        )
    if name.startswith("."):
        raise PathBlockedError(
            reason="File name must not start with '.'.",
            hint="Hidden and relative names are reserved.",
        )

    resolved = (root / f"{name}{extension}").resolve(strict=False)
    if resolved.parent != root:
        raise PathBlockedError(
            reason="Resolved path escapes the data directory.",
            hint="Use a plain name located directly under the data directory.",
        )
    return resolved
