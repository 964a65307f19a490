"""Workspace aggregate: every open list file plus save bookkeeping."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path

from yoku.document import Document, Note, Section, serialize
from yoku.security import PathBlockedError, resolve_list_path

NEW_FILE_TITLE = "Todo"
NEW_FILE_DESCRIPTION = "This is a simple todo list"
NEW_FILE_NOTE = "you may check this"


@dataclass(slots=True)
class ListFile:
    """One open document with its backing path and display name."""

    path: Path
    name: str
    document: Document


def document_fingerprint(document: Document) -> str:
    """Return the SHA-256 of the document's canonical serialized form."""
    return fingerprint_text(serialize(document))


def fingerprint_text(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def new_list_document() -> Document:
    """Seed content for list files created from the shell."""
    return Document(
        sections=[
            Section(
                title=NEW_FILE_TITLE,
                description=NEW_FILE_DESCRIPTION,
                notes=[Note(content=NEW_FILE_NOTE)],
            )
        ]
    )


class Workspace:
    """Owns the ordered list files, their fingerprints and pending deletions.

    Paths, names and documents live together in one ``ListFile`` record so
    the three sequences can never disagree in length.
    """

    def __init__(self, data_dir: Path, extension: str = ".md") -> None:
        self._data_dir = data_dir.resolve()
        self._extension = extension
        self._files: list[ListFile] = []
        self._fingerprints: dict[Path, str] = {}
        self._pending_deletions: set[Path] = set()

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def extension(self) -> str:
        return self._extension

    @property
    def files(self) -> tuple[ListFile, ...]:
        return tuple(self._files)

    @property
    def documents(self) -> tuple[Document, ...]:
        return tuple(item.document for item in self._files)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(item.name for item in self._files)

    @property
    def paths(self) -> tuple[Path, ...]:
        return tuple(item.path for item in self._files)

    @property
    def fingerprints(self) -> dict[Path, str]:
        """Return a copy of the last loaded/saved fingerprint per path."""
        return dict(self._fingerprints)

    @property
    def pending_deletions(self) -> tuple[Path, ...]:
        return tuple(sorted(self._pending_deletions))

    def __len__(self) -> int:
        return len(self._files)

    def file_at(self, index: int) -> ListFile | None:
        if 0 <= index < len(self._files):
            return self._files[index]
        return None

    def add_loaded(self, path: Path, name: str, document: Document) -> ListFile:
        """Append a document read from disk and record its load-time fingerprint."""
        item = ListFile(path=path, name=name, document=document)
        self._files.append(item)
        self._fingerprints[path] = document_fingerprint(document)
        return item

    def create_file(self, name: str) -> ListFile:
        """Append a new seeded list file named ``name``; written at the next save."""
        path = self._claim_path(name, owner=None)
        item = ListFile(path=path, name=name, document=new_list_document())
        self._files.append(item)
        return item

    def rename_file(self, index: int, name: str) -> ListFile:
        """Rename the file at index; the old backing file is removed at save time."""
        item = self._files[index]
        if name == item.name:
            return item
        path = self._claim_path(name, owner=item)
        if path != item.path:
            self._schedule_deletion(item.path)
        item.path = path
        item.name = name
        return item

    def remove_file(self, index: int) -> ListFile:
        """Drop the file at index and schedule its backing file for deletion."""
        if index < 0 or index >= len(self._files):
            raise IndexError(f"file index {index} out of range for {len(self._files)} item(s)")
        item = self._files.pop(index)
        self._schedule_deletion(item.path)
        return item

    def is_modified(self, item: ListFile) -> bool:
        """Return True when the document differs from what is known to be on disk."""
        return self._fingerprints.get(item.path) != document_fingerprint(item.document)

    def mark_saved(self, path: Path, fingerprint: str) -> None:
        self._fingerprints[path] = fingerprint

    def mark_deleted(self, path: Path) -> None:
        self._pending_deletions.discard(path)

    def _schedule_deletion(self, path: Path) -> None:
        # Only files known to exist on disk need removing.
        if path in self._fingerprints:
            del self._fingerprints[path]
            self._pending_deletions.add(path)

    def _claim_path(self, name: str, owner: ListFile | None) -> Path:
        path = resolve_list_path(self._data_dir, name, self._extension)
        for item in self._files:
            if item is not owner and item.path == path:
                raise PathBlockedError(
                    reason="A list file with that name already exists.",
                    hint="Choose a different name.",
                )
        self._pending_deletions.discard(path)
        return path
