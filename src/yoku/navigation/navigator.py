"""Three-level focus state machine over the workspace: file, section, note."""

from __future__ import annotations

from enum import Enum

from yoku.document import Note, Section
from yoku.workspace import ListFile, Workspace


class FocusLevel(Enum):
    """Which row of the interface has input focus."""

    FILE = "file"
    SECTION = "section"
    NOTE = "note"


class Navigator:
    """Tracks the focused file/section/note indices and keeps them in range.

    ``section_index`` and ``note_index`` always address the currently focused
    parent collection when it is non-empty; against an empty collection they
    are 0 and unused.
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace
        self.focus = FocusLevel.FILE
        self.file_index = 0
        self.section_index = 0
        self.note_index = 0
        self.reclamp()

    @property
    def workspace(self) -> Workspace:
        return self._workspace

    def current_file(self) -> ListFile | None:
        return self._workspace.file_at(self.file_index)

    def current_section(self) -> Section | None:
        item = self.current_file()
        if item is None:
            return None
        return item.document.section_at(self.section_index)

    def current_note(self) -> Note | None:
        section = self.current_section()
        if section is None or not 0 <= self.note_index < len(section.notes):
            return None
        return section.notes[self.note_index]

    def section_count(self) -> int:
        item = self.current_file()
        return len(item.document.sections) if item is not None else 0

    def note_count(self) -> int:
        section = self.current_section()
        return len(section.notes) if section is not None else 0

    def descend(self) -> None:
        if not self._workspace:
            return
        if self.focus is FocusLevel.FILE:
            if self.section_count() > 0:
                self.focus = FocusLevel.SECTION
        elif self.focus is FocusLevel.SECTION:
            if self.note_count() > 0:
                self.focus = FocusLevel.NOTE
        else:
            self.next_sibling()
        self.reclamp()

    def ascend(self) -> None:
        if not self._workspace:
            return
        if self.focus is FocusLevel.NOTE:
            if self.note_index > 0:
                self.note_index -= 1
            else:
                self.focus = FocusLevel.SECTION
                self.note_index = 0
        elif self.focus is FocusLevel.SECTION:
            self.focus = FocusLevel.FILE
        self.reclamp()

    def next_sibling(self) -> None:
        self._step(1)

    def previous_sibling(self) -> None:
        self._step(-1)

    def leave_notes(self) -> None:
        """Drop the note selection and return focus to the section row."""
        if self.focus is FocusLevel.NOTE:
            self.note_index = 0
            self.focus = FocusLevel.SECTION

    def reclamp(self) -> None:
        """Pull every index back into range after the collections changed.

        A level whose collection became empty loses focus to its parent.
        """
        file_count = len(self._workspace)
        if file_count == 0:
            self.focus = FocusLevel.FILE
            self.file_index = self.section_index = self.note_index = 0
            return
        self.file_index = _clamp(self.file_index, file_count)

        section_count = self.section_count()
        if section_count == 0:
            self.section_index = self.note_index = 0
            self.focus = FocusLevel.FILE
            return
        self.section_index = _clamp(self.section_index, section_count)

        note_count = self.note_count()
        if note_count == 0:
            self.note_index = 0
            if self.focus is FocusLevel.NOTE:
                self.focus = FocusLevel.SECTION
            return
        self.note_index = _clamp(self.note_index, note_count)

    def _step(self, delta: int) -> None:
        if not self._workspace:
            return
        if self.focus is FocusLevel.FILE:
            self.file_index = _clamp(self.file_index + delta, len(self._workspace))
            self.section_index = 0
            self.note_index = 0
        elif self.focus is FocusLevel.SECTION:
            count = self.section_count()
            if count:
                self.section_index = _clamp(self.section_index + delta, count)
                self.note_index = 0
        else:
            count = self.note_count()
            if count:
                self.note_index = _clamp(self.note_index + delta, count)
        self.reclamp()


def _clamp(index: int, count: int) -> int:
    return max(0, min(index, count - 1))
