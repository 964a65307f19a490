"""Deterministic list file discovery, loading and directory bootstrap."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from yoku.config import AppConfig
from yoku.document import parse_text
from yoku.security import display_name
from yoku.workspace.models import Workspace

STARTER_FILE_STEM = "tutorial"
STARTER_FILE_CONTENT = (
    "# Start\n"
    "This is a simple todo list\n"
    "- [ ] change a note's state with Enter, Space, x, + or -\n"
    "- [ ] navigate with the arrow keys, WASD or HJKL\n"
    "\n"
    "# Create\n"
    "Shortcuts for creating new entries (press Enter to confirm)\n"
    "- [ ] u = create a new file\n"
    "- [ ] i = create a new list\n"
    "- [ ] o = create a new note\n"
    "\n"
    "# Modify\n"
    "Shortcuts for changing existing entries\n"
    "- [ ] e = rename the current file, list or note\n"
    "- [ ] Ctrl + e = edit the current list's description\n"
    "- [ ] r = remove the current file, list or note\n"
    "- [ ] Escape = leave the notes of the current list\n"
    "\n"
    "# Exiting\n"
    "- [ ] q = save and exit\n"
    "- [ ] Ctrl + q = exit and discard changes\n"
    "- [ ] Ctrl + c = exit and discard changes\n"
)


@dataclass(slots=True, frozen=True)
class WorkspaceLoadError(Exception):
    """Raised when a list file cannot be read; startup must not continue."""

    path: str
    reason: str

    def __str__(self) -> str:
        return f"could not load {self.path}: {self.reason}"


def discover_list_files(data_dir: Path, extension: str) -> list[Path]:
    """Return list files directly under data_dir, sorted by path."""
    output: list[Path] = []
    try:
        with os.scandir(data_dir) as entries:
            for entry in entries:
                if entry.name.startswith("."):
                    continue
                if not entry.is_file():
                    continue
                if not entry.name.endswith(extension) or entry.name == extension:
                    continue
                output.append(Path(entry.path))
    except OSError as error:
        raise WorkspaceLoadError(path=str(data_dir), reason=_describe(error)) from error
    output.sort()
    return output


def read_list_files(data_dir: Path, extension: str) -> list[tuple[Path, str]]:
    """Read every list file as ``(path, text)`` pairs, sorted by path."""
    pairs: list[tuple[Path, str]] = []
    for path in discover_list_files(data_dir, extension):
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as error:
            raise WorkspaceLoadError(path=str(path), reason=_describe(error)) from error
        pairs.append((path, text))
    return pairs


def load_workspace(data_dir: Path, extension: str = ".md") -> Workspace:
    """Parse every list file into a fresh workspace.

    Any unreadable file aborts the whole load.
    """
    workspace = Workspace(data_dir=data_dir, extension=extension)
    for path, text in read_list_files(workspace.data_dir, extension):
        workspace.add_loaded(path=path, name=display_name(path), document=parse_text(text))
    return workspace


def bootstrap_data_dir(config: AppConfig) -> Path | None:
    """Create the data directory and, when it holds no list files, the tutorial file.

    Returns the starter file path when one was written.
    """
    data_dir = config.data_dir
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise WorkspaceLoadError(path=str(data_dir), reason=_describe(error)) from error
    if not config.storage.create_starter_file:
        return None
    if discover_list_files(data_dir, config.storage.extension):
        return None
    starter = data_dir / f"{STARTER_FILE_STEM}{config.storage.extension}"
    try:
        starter.write_text(STARTER_FILE_CONTENT, encoding="utf-8")
    except OSError as error:
        raise WorkspaceLoadError(path=str(starter), reason=_describe(error)) from error
    return starter


def _describe(error: BaseException) -> str:
    if isinstance(error, OSError) and error.strerror:
        return error.strerror
    return str(error) or type(error).__name__
