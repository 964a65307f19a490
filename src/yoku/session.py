"""Interactive session: one workspace driven by discrete user commands."""

from __future__ import annotations

import uuid
from pathlib import Path

from yoku.commands import CommandDispatchError, CommandRegistry, register_builtin_commands
from yoku.config import AppConfig
from yoku.document import Note, NoteState, Section
from yoku.logging import (
    AuditEvent,
    JsonlAuditLogger,
    NullAuditLogger,
    sanitize_metadata,
    utc_timestamp,
)
from yoku.navigation import EditController, EditMode, FocusLevel, Navigator
from yoku.security import PathBlockedError
from yoku.workspace import FileWriter, ListFile, SaveReport, Workspace, save_all

AuditLogger = JsonlAuditLogger | NullAuditLogger


class TodoSession:
    """Owns the workspace, the navigator and the edit controller.

    Navigation and structural commands are ignored while an input mode is
    open; only text entry, backspace, confirm and cancel reach the editor.
    """

    def __init__(
        self,
        workspace: Workspace,
        audit_logger: AuditLogger | None = None,
        writer: FileWriter | None = None,
        session_id: str | None = None,
    ) -> None:
        self._workspace = workspace
        self._navigator = Navigator(workspace)
        self._editor = EditController(self._navigator)
        self._audit_logger: AuditLogger = audit_logger or NullAuditLogger()
        self._writer = writer
        self._session_id = session_id or uuid.uuid4().hex[:12]
        self._registry = CommandRegistry()
        register_builtin_commands(self._registry, self)
        self.status_message: str | None = None
        self._log("session.start", ok=True, metadata={"file_count": len(workspace)})

    @property
    def workspace(self) -> Workspace:
        return self._workspace

    @property
    def navigator(self) -> Navigator:
        return self._navigator

    @property
    def editor(self) -> EditController:
        return self._editor

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    @property
    def focus(self) -> FocusLevel:
        return self._navigator.focus

    @property
    def file_index(self) -> int:
        return self._navigator.file_index

    @property
    def section_index(self) -> int:
        return self._navigator.section_index

    @property
    def note_index(self) -> int:
        return self._navigator.note_index

    @property
    def mode(self) -> EditMode:
        return self._editor.mode

    @property
    def buffer(self) -> str:
        return self._editor.buffer

    def current_file(self) -> ListFile | None:
        return self._navigator.current_file()

    def current_section(self) -> Section | None:
        return self._navigator.current_section()

    def dispatch(self, name: str) -> dict[str, object]:
        """Run a named command and record it in the audit log."""
        try:
            result = self._registry.dispatch(name)
        except CommandDispatchError as error:
            self._log("command", ok=False, error_code=error.code, metadata={"command": name})
            raise
        error_code = result.pop("error_code", None)
        metadata: dict[str, object] = {"command": name, "level": self.focus.value}
        metadata.update(result)
        self._log(
            "command",
            ok=error_code is None,
            error_code=error_code if isinstance(error_code, str) else None,
            metadata=metadata,
        )
        return result

    def descend(self) -> dict[str, object]:
        if not self._editor.session.active:
            self._navigator.descend()
        return {}

    def ascend(self) -> dict[str, object]:
        if not self._editor.session.active:
            self._navigator.ascend()
        return {}

    def next_sibling(self) -> dict[str, object]:
        if not self._editor.session.active:
            self._navigator.next_sibling()
        return {}

    def previous_sibling(self) -> dict[str, object]:
        if not self._editor.session.active:
            self._navigator.previous_sibling()
        return {}

    def leave_notes(self) -> dict[str, object]:
        if not self._editor.session.active:
            self._navigator.leave_notes()
        return {}

    def cycle_note_state(self) -> dict[str, object]:
        note = self._focused_note()
        if note is None:
            return {"changed": False}
        note.cycle_state()
        return {"changed": True, "state": note.state.value}

    def set_note_state(self, state: NoteState) -> dict[str, object]:
        note = self._focused_note()
        if note is None:
            return {"changed": False}
        changed = note.state is not state
        note.state = state
        return {"changed": changed, "state": state.value}

    def set_note_done(self) -> dict[str, object]:
        return self.set_note_state(NoteState.DONE)

    def set_note_rejected(self) -> dict[str, object]:
        return self.set_note_state(NoteState.REJECTED)

    def create_file(self) -> dict[str, object]:
        return {"opened": self._editor.begin_create_file()}

    def create_section(self) -> dict[str, object]:
        return {"opened": self._editor.begin_create_section()}

    def create_note(self) -> dict[str, object]:
        return {"opened": self._editor.begin_create_note()}

    def rename(self) -> dict[str, object]:
        return {"opened": self._editor.begin_rename()}

    def edit_description(self) -> dict[str, object]:
        return {"opened": self._editor.begin_edit_description()}

    def remove(self) -> dict[str, object]:
        """Remove the focused file, section or note and re-clamp focus."""
        if self._editor.session.active:
            return {"removed": False}
        nav = self._navigator
        level = nav.focus
        removed = False
        if level is FocusLevel.FILE:
            if nav.current_file() is not None:
                self._workspace.remove_file(nav.file_index)
                removed = True
        elif level is FocusLevel.SECTION:
            item = nav.current_file()
            if item is not None and nav.current_section() is not None:
                item.document.remove_section(nav.section_index)
                removed = True
        else:
            section = nav.current_section()
            if section is not None and nav.current_note() is not None:
                section.remove_note(nav.note_index)
                removed = True
        nav.reclamp()
        return {"removed": removed}

    def type_text(self, text: str) -> None:
        self._editor.type_text(text)

    def backspace(self) -> dict[str, object]:
        self._editor.backspace()
        return {}

    def confirm(self) -> dict[str, object]:
        mode = self._editor.mode
        try:
            changed = self._editor.confirm()
        except PathBlockedError as error:
            self.status_message = f"{error.reason} {error.hint}"
            return {"mode": mode.value, "changed": False, "error_code": "NAME_BLOCKED"}
        self.status_message = None
        return {"mode": mode.value, "changed": changed}

    def cancel(self) -> dict[str, object]:
        mode = self._editor.mode
        self._editor.cancel()
        self.status_message = None
        return {"mode": mode.value}

    def save(self) -> SaveReport:
        """Delete pending files and rewrite changed documents."""
        report = save_all(self._workspace, writer=self._writer)
        self._log(
            "save",
            ok=report.ok,
            error_code=None if report.ok else "SAVE_INCOMPLETE",
            metadata={
                "written": len(report.written),
                "unchanged": len(report.unchanged),
                "deleted": len(report.deleted),
                "failed": len(report.failures),
            },
        )
        for failure in report.failures:
            self._log(
                "save.failure",
                ok=False,
                error_code="IO_ERROR",
                metadata={"path": failure.path, "operation": failure.operation},
            )
        if report.failures:
            self.status_message = f"{len(report.failures)} file(s) could not be saved."
        return report

    def save_all(self) -> dict[str, object]:
        report = self.save()
        result: dict[str, object] = {
            "written": len(report.written),
            "deleted": len(report.deleted),
            "failed": len(report.failures),
        }
        if not report.ok:
            result["error_code"] = "SAVE_INCOMPLETE"
        return result

    def _focused_note(self) -> Note | None:
        if self._editor.session.active or self._navigator.focus is not FocusLevel.NOTE:
            return None
        return self._navigator.current_note()

    def _log(
        self,
        action: str,
        ok: bool,
        metadata: dict[str, object],
        error_code: str | None = None,
    ) -> None:
        self._audit_logger.append(
            AuditEvent(
                timestamp=utc_timestamp(),
                session_id=self._session_id,
                action=action,
                ok=ok,
                error_code=error_code,
                metadata=sanitize_metadata(metadata),
            )
        )


def create_session(
    config: AppConfig, workspace: Workspace, writer: FileWriter | None = None
) -> TodoSession:
    """Build a session wired to the configured audit log."""
    audit_logger: AuditLogger
    if config.audit.enabled:
        audit_logger = JsonlAuditLogger(path=Path(config.audit.path))
    else:
        audit_logger = NullAuditLogger()
    return TodoSession(workspace=workspace, audit_logger=audit_logger, writer=writer)
