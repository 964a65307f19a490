"""Typed models for one todo list file."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class NoteState(Enum):
    """Checkbox state of a single note."""

    OPEN = "open"
    DONE = "done"
    REJECTED = "rejected"

    def cycled(self) -> NoteState:
        """Return the next state in the OPEN -> DONE -> REJECTED -> OPEN cycle."""
        return _NEXT_STATE[self]


_NEXT_STATE = {
    NoteState.OPEN: NoteState.DONE,
    NoteState.DONE: NoteState.REJECTED,
    NoteState.REJECTED: NoteState.OPEN,
}


@dataclass(slots=True)
class Note:
    """One checkbox item."""

    content: str
    state: NoteState = NoteState.OPEN

    def cycle_state(self) -> None:
        self.state = self.state.cycled()


@dataclass(slots=True)
class Section:
    """A titled block with a description paragraph and a flat list of notes."""

    title: str
    description: str = ""
    notes: list[Note] = field(default_factory=list)

    def add_note(self, content: str, state: NoteState = NoteState.OPEN) -> Note:
        note = Note(content=content, state=state)
        self.notes.append(note)
        return note

    def remove_note(self, index: int) -> Note:
        """Remove the note at index, raising IndexError when out of range."""
        _check_index(index, len(self.notes), "note")
        return self.notes.pop(index)


@dataclass(slots=True)
class Document:
    """Ordered sections parsed from, or serialised to, one list file."""

    sections: list[Section] = field(default_factory=list)

    def add_section(self, title: str, description: str = "") -> Section:
        section = Section(title=title, description=description)
        self.sections.append(section)
        return section

    def remove_section(self, index: int) -> Section:
        """Remove the section at index, raising IndexError when out of range."""
        _check_index(index, len(self.sections), "section")
        return self.sections.pop(index)

    def section_at(self, index: int) -> Section | None:
        if 0 <= index < len(self.sections):
            return self.sections[index]
        return None


def _check_index(index: int, size: int, kind: str) -> None:
    if index < 0 or index >= size:
        raise IndexError(f"{kind} index {index} out of range for {size} item(s)")
