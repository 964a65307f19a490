"""Document model and markdown codec."""

from .codec import format_note, parse_lines, parse_note_line, parse_text, serialize, single_line
from .models import Document, Note, NoteState, Section

__all__ = [
    "Document",
    "Note",
    "NoteState",
    "Section",
    "format_note",
    "parse_lines",
    "parse_note_line",
    "parse_text",
    "serialize",
    "single_line",
]
