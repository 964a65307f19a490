"""Markdown-subset codec for list files.

Recognised lines:

* ``# <title>`` starts a section.
* ``- [ ] <content>``, ``- [] <content>``, ``- [x] <content>`` and
  ``- [-] <content>`` are notes of the current section.
* Any other non-empty line extends the current section description.

Everything else is dropped without error.
"""

from __future__ import annotations

from collections.abc import Iterable

from yoku.document.models import Document, Note, NoteState, Section

HEADER_PREFIX = "# "
NOTE_PREFIX = "- "

# Order matters only for readability; the markers are mutually exclusive.
NOTE_MARKERS: tuple[tuple[str, NoteState], ...] = (
    ("- [x] ", NoteState.DONE),
    ("- [ ] ", NoteState.OPEN),
    ("- [] ", NoteState.OPEN),
    ("- [-] ", NoteState.REJECTED),
)

_STATE_MARKERS = {
    NoteState.DONE: "- [x] ",
    NoteState.OPEN: "- [ ] ",
    NoteState.REJECTED: "- [-] ",
}


def parse_text(text: str) -> Document:
    """Parse full file text."""
    return parse_lines(text.splitlines())


def parse_lines(lines: Iterable[str]) -> Document:
    """Parse lines into a document.

    Lines before the first header have no owning section and are dropped.
    Input without any header yields one section with an empty title.
    """
    sections: list[Section] = []
    current: Section | None = None
    for line in lines:
        if line.startswith(HEADER_PREFIX):
            if current is not None:
                sections.append(current)
            current = Section(title=line[len(HEADER_PREFIX) :])
            continue
        if current is None:
            continue
        if line.startswith(NOTE_PREFIX):
            note = parse_note_line(line)
            if note is not None:
                current.notes.append(note)
            continue
        if not line:
            continue
        if current.description:
            current.description = f"{current.description} {line}"
        else:
            current.description = line

    sections.append(current if current is not None else Section(title=""))
    return Document(sections=sections)


def parse_note_line(line: str) -> Note | None:
    """Return the note encoded by line, or None when no checkbox marker matches."""
    for marker, state in NOTE_MARKERS:
        if line.startswith(marker):
            return Note(content=line[len(marker) :], state=state)
    return None


def format_note(note: Note) -> str:
    return f"{_STATE_MARKERS[note.state]}{single_line(note.content)}"


def serialize(document: Document) -> str:
    """Render a document to canonical text ending with exactly one newline.

    A document without sections renders as the placeholder section that
    parsing empty text produces, so ``serialize(parse_text(serialize(d)))``
    always equals ``serialize(d)``.
    """
    sections = document.sections or [Section(title="")]
    blocks: list[str] = []
    for section in sections:
        lines = [f"{HEADER_PREFIX}{single_line(section.title)}"]
        description = single_line(section.description)
        if description.startswith((HEADER_PREFIX, NOTE_PREFIX)):
            # A leading space keeps the line a description when parsed again.
            description = f" {description}"
        if description:
            lines.append(description)
        lines.extend(format_note(note) for note in section.notes)
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks) + "\n"


def single_line(text: str) -> str:
    """Collapse multi-line text the same way the parser joins description lines."""
    parts = text.splitlines()
    if len(parts) == 1 and parts[0] == text:
        return text
    return " ".join(part for part in parts if part)
