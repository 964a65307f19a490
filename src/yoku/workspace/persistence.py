"""Save-time change detection: rewrite only documents that changed."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from yoku.document import serialize
from yoku.workspace.models import Workspace, fingerprint_text


class FileWriter(Protocol):
    """Whole-file writer used at save time."""

    def write_text(self, path: Path, text: str) -> None: ...

    def delete(self, path: Path) -> None: ...


class LocalFileWriter:
    """Writes through a temporary sibling file and an atomic replace."""

    def write_text(self, path: Path, text: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        try:
            with tmp.open("w", encoding="utf-8", newline="\n") as handle:
                handle.write(text)
            tmp.replace(path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise

    def delete(self, path: Path) -> None:
        # A file that is already gone counts as deleted.
        path.unlink(missing_ok=True)


@dataclass(slots=True, frozen=True)
class SaveFailure:
    """One path that could not be written or deleted."""

    path: str
    operation: str
    reason: str


@dataclass(slots=True, frozen=True)
class SaveReport:
    """Deterministic outcome of one save pass."""

    written: tuple[str, ...]
    unchanged: tuple[str, ...]
    deleted: tuple[str, ...]
    failures: tuple[SaveFailure, ...]

    @property
    def ok(self) -> bool:
        return not self.failures


def save_all(workspace: Workspace, writer: FileWriter | None = None) -> SaveReport:
    """Apply pending deletions, then rewrite every document whose fingerprint changed.

    Per-file I/O failures are collected in the report and never stop the pass.
    """
    io = writer or LocalFileWriter()
    failures: list[SaveFailure] = []

    deleted: list[str] = []
    for path in workspace.pending_deletions:
        try:
            io.delete(path)
        except OSError as error:
            failures.append(SaveFailure(path=str(path), operation="delete", reason=_reason(error)))
            continue
        workspace.mark_deleted(path)
        deleted.append(str(path))

    written: list[str] = []
    unchanged: list[str] = []
    recorded = workspace.fingerprints
    for item in workspace.files:
        text = serialize(item.document)
        fingerprint = fingerprint_text(text)
        if recorded.get(item.path) == fingerprint:
            unchanged.append(str(item.path))
            continue
        try:
            io.write_text(item.path, text)
        except OSError as error:
            failures.append(
                SaveFailure(path=str(item.path), operation="write", reason=_reason(error))
            )
            continue
        workspace.mark_saved(item.path, fingerprint)
        written.append(str(item.path))

    return SaveReport(
        written=tuple(written),
        unchanged=tuple(unchanged),
        deleted=tuple(deleted),
        failures=tuple(failures),
    )


def _reason(error: OSError) -> str:
    return error.strerror or str(error) or type(error).__name__
