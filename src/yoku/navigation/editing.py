"""Modal text entry for creating and renaming files, sections and notes."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from yoku.navigation.navigator import FocusLevel, Navigator


class EditMode(Enum):
    """Current input mode; everything but VIEWING captures typed text."""

    VIEWING = "viewing"
    CREATE_FILE = "create_file"
    CREATE_SECTION = "create_section"
    CREATE_NOTE = "create_note"
    RENAME_FILE = "rename_file"
    RENAME_SECTION = "rename_section"
    EDIT_DESCRIPTION = "edit_description"
    EDIT_NOTE_CONTENT = "edit_note_content"


@dataclass(slots=True, frozen=True)
class EditTarget:
    """Indices of the entity an input mode was opened for."""

    level: FocusLevel
    file_index: int
    section_index: int
    note_index: int


@dataclass(slots=True, frozen=True)
class EditSession:
    """Immutable snapshot of the input flow: mode, target and buffer."""

    mode: EditMode = EditMode.VIEWING
    target: EditTarget | None = None
    buffer: str = ""

    @property
    def active(self) -> bool:
        return self.mode is not EditMode.VIEWING

    def typed(self, text: str) -> EditSession:
        return replace(self, buffer=self.buffer + text)

    def erased(self) -> EditSession:
        return replace(self, buffer=self.buffer[:-1])


VIEWING = EditSession()


class EditController:
    """Opens, feeds and commits input modes against the navigator's focus."""

    def __init__(self, navigator: Navigator) -> None:
        self._navigator = navigator
        self._session = VIEWING

    @property
    def session(self) -> EditSession:
        return self._session

    @property
    def mode(self) -> EditMode:
        return self._session.mode

    @property
    def buffer(self) -> str:
        return self._session.buffer

    def begin_create_file(self) -> bool:
        return self._open(EditMode.CREATE_FILE, seed="", require=FocusLevel.FILE, empty_ok=True)

    def begin_create_section(self) -> bool:
        return self._open(EditMode.CREATE_SECTION, seed="", require=FocusLevel.FILE)

    def begin_create_note(self) -> bool:
        return self._open(EditMode.CREATE_NOTE, seed="", require=FocusLevel.SECTION)

    def begin_rename(self) -> bool:
        """Open the rename mode matching the focus level, seeded with the current value."""
        nav = self._navigator
        if nav.focus is FocusLevel.FILE:
            item = nav.current_file()
            seed = item.name if item is not None else None
            return self._open(EditMode.RENAME_FILE, seed=seed, require=FocusLevel.FILE)
        if nav.focus is FocusLevel.SECTION:
            section = nav.current_section()
            seed = section.title if section is not None else None
            return self._open(EditMode.RENAME_SECTION, seed=seed, require=FocusLevel.SECTION)
        note = nav.current_note()
        seed = note.content if note is not None else None
        return self._open(EditMode.EDIT_NOTE_CONTENT, seed=seed, require=FocusLevel.NOTE)

    def begin_edit_description(self) -> bool:
        section = self._navigator.current_section()
        seed = section.description if section is not None else None
        return self._open(EditMode.EDIT_DESCRIPTION, seed=seed, require=FocusLevel.SECTION)

    def type_text(self, text: str) -> None:
        if self._session.active:
            self._session = self._session.typed(text)

    def backspace(self) -> None:
        if self._session.active:
            self._session = self._session.erased()

    def cancel(self) -> None:
        self._session = VIEWING

    def confirm(self) -> bool:
        """Commit the buffer into the model and return to VIEWING.

        Returns True when the model changed. An empty buffer commits nothing.
        Raises PathBlockedError for an unusable file name; the session is then
        left as it was so the name can be corrected.
        """
        session = self._session
        if not session.active:
            return False
        if not session.buffer:
            self._session = VIEWING
            return False
        changed = self._apply(session)
        self._session = VIEWING
        self._navigator.reclamp()
        return changed

    def _apply(self, session: EditSession) -> bool:
        workspace = self._navigator.workspace
        target = session.target
        text = session.buffer
        if session.mode is EditMode.CREATE_FILE:
            workspace.create_file(text)
            return True
        if target is None:
            return False
        item = workspace.file_at(target.file_index)
        if item is None:
            return False
        if session.mode is EditMode.RENAME_FILE:
            workspace.rename_file(target.file_index, text)
            return True
        if session.mode is EditMode.CREATE_SECTION:
            item.document.add_section(text)
            return True
        section = item.document.section_at(target.section_index)
        if section is None:
            return False
        if session.mode is EditMode.CREATE_NOTE:
            section.add_note(text)
            return True
        if session.mode is EditMode.RENAME_SECTION:
            section.title = text
            return True
        if session.mode is EditMode.EDIT_DESCRIPTION:
            section.description = text
            return True
        if not 0 <= target.note_index < len(section.notes):
            return False
        section.notes[target.note_index].content = text
        return True

    def _open(
        self, mode: EditMode, seed: str | None, require: FocusLevel, empty_ok: bool = False
    ) -> bool:
        if self._session.active:
            return False
        if seed is None or not (empty_ok or self._has(require)):
            return False
        nav = self._navigator
        self._session = EditSession(
            mode=mode,
            target=EditTarget(
                level=nav.focus,
                file_index=nav.file_index,
                section_index=nav.section_index,
                note_index=nav.note_index,
            ),
            buffer=seed,
        )
        return True

    def _has(self, level: FocusLevel) -> bool:
        nav = self._navigator
        if level is FocusLevel.FILE:
            return nav.current_file() is not None
        if level is FocusLevel.SECTION:
            return nav.current_section() is not None
        return nav.current_note() is not None
