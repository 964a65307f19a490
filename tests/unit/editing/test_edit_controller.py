from __future__ import annotations

from pathlib import Path

import pytest

from yoku.document import NoteState, parse_text
from yoku.navigation import EditController, EditMode, FocusLevel, Navigator
from yoku.security import PathBlockedError
from yoku.workspace import Workspace


def _controller(tmp_path: Path, *texts: str) -> tuple[EditController, Navigator]:
    workspace = Workspace(data_dir=tmp_path)
    for index, text in enumerate(texts):
        path = workspace.data_dir / f"f{index}.md"
        workspace.add_loaded(path, f"f{index}", parse_text(text))
    nav = Navigator(workspace)
    return EditController(nav), nav


def _type(editor: EditController, text: str) -> None:
    for char in text:
        editor.type_text(char)


def test_create_note_appends_open_note_and_returns_to_viewing(tmp_path: Path) -> None:
    editor, nav = _controller(tmp_path, "# Todo\n- [x] existing\n")
    nav.descend()

    assert editor.begin_create_note() is True
    assert editor.mode is EditMode.CREATE_NOTE
    assert editor.buffer == ""
    _type(editor, "buy milk")
    assert editor.confirm() is True

    notes = nav.current_section().notes
    assert [(n.content, n.state) for n in notes] == [
        ("existing", NoteState.DONE),
        ("buy milk", NoteState.OPEN),
    ]
    assert editor.mode is EditMode.VIEWING
    assert editor.buffer == ""


def test_rename_seeds_buffer_from_focused_entity(tmp_path: Path) -> None:
    editor, nav = _controller(tmp_path, "# Title\nAbout\n- [ ] content\n")

    editor.begin_rename()
    assert (editor.mode, editor.buffer) == (EditMode.RENAME_FILE, "f0")
    editor.cancel()

    nav.descend()
    editor.begin_rename()
    assert (editor.mode, editor.buffer) == (EditMode.RENAME_SECTION, "Title")
    editor.cancel()

    editor.begin_edit_description()
    assert (editor.mode, editor.buffer) == (EditMode.EDIT_DESCRIPTION, "About")
    editor.cancel()

    nav.descend()
    editor.begin_rename()
    assert (editor.mode, editor.buffer) == (EditMode.EDIT_NOTE_CONTENT, "content")


def test_backspace_removes_last_character(tmp_path: Path) -> None:
    editor, nav = _controller(tmp_path, "# Title\n")
    nav.descend()
    editor.begin_rename()

    editor.backspace()
    editor.backspace()
    _type(editor, "x")

    assert editor.buffer == "Titx"
    assert editor.confirm() is True
    assert nav.current_section().title == "Titx"


def test_backspace_on_empty_buffer_is_harmless(tmp_path: Path) -> None:
    editor, nav = _controller(tmp_path, "# Title\n")
    editor.begin_create_section()

    editor.backspace()

    assert editor.buffer == ""
    assert editor.mode is EditMode.CREATE_SECTION


def test_confirm_with_empty_buffer_changes_nothing(tmp_path: Path) -> None:
    editor, nav = _controller(tmp_path, "# Title\n- [ ] keep me\n")
    nav.descend()
    nav.descend()
    editor.begin_rename()
    for _ in range(len("keep me")):
        editor.backspace()

    assert editor.confirm() is False
    assert nav.current_note().content == "keep me"
    assert editor.mode is EditMode.VIEWING
    assert editor.buffer == ""


def test_cancel_discards_buffer_without_mutation(tmp_path: Path) -> None:
    editor, nav = _controller(tmp_path, "# Title\n")
    nav.descend()
    editor.begin_edit_description()
    _type(editor, "new description")

    editor.cancel()

    assert nav.current_section().description == ""
    assert editor.mode is EditMode.VIEWING
    assert editor.buffer == ""


def test_edit_note_content_keeps_state(tmp_path: Path) -> None:
    editor, nav = _controller(tmp_path, "# T\n- [-] old\n")
    nav.descend()
    nav.descend()
    editor.begin_rename()
    for _ in range(3):
        editor.backspace()
    _type(editor, "new")

    editor.confirm()

    note = nav.current_note()
    assert (note.content, note.state) == ("new", NoteState.REJECTED)


def test_create_section_appends_empty_section(tmp_path: Path) -> None:
    editor, nav = _controller(tmp_path, "# First\n- [ ] a\n")
    editor.begin_create_section()
    _type(editor, "Second")

    editor.confirm()

    sections = nav.current_file().document.sections
    assert [s.title for s in sections] == ["First", "Second"]
    assert sections[1].description == ""
    assert sections[1].notes == []
    assert nav.focus is FocusLevel.FILE


def test_create_file_appends_seeded_document(tmp_path: Path) -> None:
    editor, nav = _controller(tmp_path, "# First\n")
    editor.begin_create_file()
    _type(editor, "groceries")

    editor.confirm()

    workspace = nav.workspace
    assert workspace.names == ("f0", "groceries")
    created = workspace.files[1]
    assert created.path == workspace.data_dir / "groceries.md"
    section = created.document.sections[0]
    assert (section.title, section.description) == ("Todo", "This is a simple todo list")
    assert [(n.content, n.state) for n in section.notes] == [("you may check this", NoteState.OPEN)]


def test_create_file_works_on_empty_workspace(tmp_path: Path) -> None:
    editor, nav = _controller(tmp_path)

    assert editor.begin_create_file() is True
    _type(editor, "first")
    editor.confirm()

    assert nav.workspace.names == ("first",)
    assert nav.file_index == 0


def test_rename_file_schedules_old_path_for_deletion(tmp_path: Path) -> None:
    editor, nav = _controller(tmp_path, "# T\n")
    old_path = nav.current_file().path
    editor.begin_rename()
    for _ in range(2):
        editor.backspace()
    _type(editor, "renamed")

    editor.confirm()

    item = nav.current_file()
    assert item.name == "renamed"
    assert item.path == nav.workspace.data_dir / "renamed.md"
    assert nav.workspace.pending_deletions == (old_path,)


def test_blocked_file_name_keeps_mode_and_buffer(tmp_path: Path) -> None:
    editor, nav = _controller(tmp_path, "# T\n", "# U\n")
    editor.begin_create_file()
    _type(editor, "../escape")

    with pytest.raises(PathBlockedError, match="path separators"):
        editor.confirm()

    assert editor.mode is EditMode.CREATE_FILE
    assert editor.buffer == "../escape"
    assert len(nav.workspace) == 2


def test_rename_onto_existing_file_is_blocked(tmp_path: Path) -> None:
    editor, nav = _controller(tmp_path, "# T\n", "# U\n")
    editor.begin_rename()
    editor.backspace()
    _type(editor, "1")

    with pytest.raises(PathBlockedError, match="already exists"):
        editor.confirm()

    assert nav.workspace.names == ("f0", "f1")
    assert nav.workspace.pending_deletions == ()


def test_modes_requiring_a_target_do_not_open_without_one(tmp_path: Path) -> None:
    editor, nav = _controller(tmp_path)

    assert editor.begin_create_section() is False
    assert editor.begin_create_note() is False
    assert editor.begin_rename() is False
    assert editor.begin_edit_description() is False
    assert editor.mode is EditMode.VIEWING


def test_second_mode_cannot_open_while_one_is_active(tmp_path: Path) -> None:
    editor, nav = _controller(tmp_path, "# T\n")
    editor.begin_create_section()
    _type(editor, "abc")

    assert editor.begin_create_file() is False
    assert (editor.mode, editor.buffer) == (EditMode.CREATE_SECTION, "abc")


def test_typing_while_viewing_is_ignored(tmp_path: Path) -> None:
    editor, _ = _controller(tmp_path, "# T\n")

    editor.type_text("x")
    editor.backspace()

    assert editor.buffer == ""
    assert editor.confirm() is False
