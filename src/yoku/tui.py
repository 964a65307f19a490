"""curses front end: draws the session and maps keys to commands."""

from __future__ import annotations

import curses
from dataclasses import dataclass
from enum import Enum

from yoku.document import Note, format_note
from yoku.navigation import EditMode, FocusLevel
from yoku.session import TodoSession

CTRL_C = "\x03"
CTRL_E = "\x05"
CTRL_Q = "\x11"
ESCAPE = "\x1b"

PROMPT_TITLES = {
    EditMode.CREATE_FILE: "Create New File",
    EditMode.CREATE_SECTION: "Create New List",
    EditMode.CREATE_NOTE: "Create New Note",
    EditMode.RENAME_FILE: "Change File Name",
    EditMode.RENAME_SECTION: "Change List Name",
    EditMode.EDIT_DESCRIPTION: "Change List Description",
    EditMode.EDIT_NOTE_CONTENT: "Change Note Content",
}

HELP_LINE = "u/i/o new  e edit  ^E describe  r remove  x/+/- state  q save+quit  ^Q quit"

VIEWING_KEYS: dict[str | int, str] = {
    "o": "create_note",
    "u": "create_file",
    "i": "create_section",
    "r": "remove",
    "e": "rename",
    CTRL_E: "edit_description",
    curses.KEY_RIGHT: "next_sibling",
    curses.KEY_LEFT: "previous_sibling",
    curses.KEY_UP: "ascend",
    curses.KEY_DOWN: "descend",
    "d": "next_sibling",
    "a": "previous_sibling",
    "w": "ascend",
    "s": "descend",
    "l": "next_sibling",
    "h": "previous_sibling",
    "k": "ascend",
    "j": "descend",
    ESCAPE: "leave_notes",
    "\n": "cycle_note_state",
    "\r": "cycle_note_state",
    curses.KEY_ENTER: "cycle_note_state",
    " ": "cycle_note_state",
    "x": "set_note_done",
    "+": "set_note_done",
    "-": "set_note_rejected",
}

INPUT_KEYS: dict[str | int, str] = {
    "\n": "confirm",
    "\r": "confirm",
    curses.KEY_ENTER: "confirm",
    ESCAPE: "cancel",
    "\x7f": "backspace",
    "\x08": "backspace",
    curses.KEY_BACKSPACE: "backspace",
}


class KeyKind(Enum):
    COMMAND = "command"
    TEXT = "text"
    QUIT_SAVE = "quit_save"
    QUIT_DISCARD = "quit_discard"
    IGNORE = "ignore"


@dataclass(slots=True, frozen=True)
class KeyAction:
    kind: KeyKind
    value: str = ""


def resolve_key(key: str | int, mode: EditMode) -> KeyAction:
    """Translate one key from ``get_wch`` into an action for the given mode."""
    if key in (CTRL_C, CTRL_Q):
        return KeyAction(KeyKind.QUIT_DISCARD)
    if mode is EditMode.VIEWING:
        if key == "q":
            return KeyAction(KeyKind.QUIT_SAVE)
        command = VIEWING_KEYS.get(key)
        if command is None:
            return KeyAction(KeyKind.IGNORE)
        return KeyAction(KeyKind.COMMAND, command)
    command = INPUT_KEYS.get(key)
    if command is not None:
        return KeyAction(KeyKind.COMMAND, command)
    if isinstance(key, str) and key.isprintable():
        return KeyAction(KeyKind.TEXT, key)
    return KeyAction(KeyKind.IGNORE)


def run(session: TodoSession) -> bool:
    """Run the interactive loop; returns True when the user asked to save."""
    return curses.wrapper(_loop, session)


def _loop(stdscr: curses.window, session: TodoSession) -> bool:
    curses.raw()
    curses.set_escdelay(25)
    stdscr.keypad(True)
    while True:
        draw(stdscr, session)
        try:
            key = stdscr.get_wch()
        except curses.error:
            continue
        action = resolve_key(key, session.mode)
        if action.kind is KeyKind.QUIT_SAVE:
            return True
        if action.kind is KeyKind.QUIT_DISCARD:
            return False
        if action.kind is KeyKind.TEXT:
            session.type_text(action.value)
        elif action.kind is KeyKind.COMMAND:
            if action.value == "backspace":
                session.backspace()
            else:
                session.dispatch(action.value)


def draw(stdscr: curses.window, session: TodoSession) -> None:
    stdscr.erase()
    height, width = stdscr.getmaxyx()
    if height < 8 or width < 20:
        _put(stdscr, 0, 0, "window too small", width)
        stdscr.refresh()
        return

    focus = session.focus
    _draw_tabs(stdscr, 0, "Files", list(session.workspace.names), session.file_index,
               focus is FocusLevel.FILE, width)
    section = session.current_section()
    item = session.current_file()
    titles = [entry.title for entry in item.document.sections] if item is not None else []
    _draw_tabs(stdscr, 2, "Lists", titles, session.section_index,
               focus is FocusLevel.SECTION, width)

    description = section.description if section is not None else ""
    _put(stdscr, 4, 0, description, width, curses.A_UNDERLINE)
    notes: list[Note] = section.notes if section is not None else []
    rows = max(0, height - 8)
    start = scroll_offset(session.note_index, rows) if focus is FocusLevel.NOTE else 0
    for offset, note in enumerate(notes[start : start + rows]):
        selected = focus is FocusLevel.NOTE and start + offset == session.note_index
        text = format_note(note)
        if selected:
            text = ">" + text[1:]
        _put(stdscr, 5 + offset, 2, text, width - 2, curses.A_REVERSE if selected else 0)

    mode = session.mode
    if mode is not EditMode.VIEWING:
        _put(stdscr, height - 2, 0, PROMPT_TITLES[mode], width, curses.A_BOLD)
        _put(stdscr, height - 1, 0, f"> {session.buffer}", width)
    else:
        _put(stdscr, height - 2, 0, session.status_message or "", width, curses.A_BOLD)
        _put(stdscr, height - 1, 0, HELP_LINE, width, curses.A_DIM)
    stdscr.refresh()


def scroll_offset(selected: int, rows: int) -> int:
    """Return the first visible note row so that ``selected`` stays on screen."""
    if rows <= 0:
        return 0
    return max(0, selected - rows + 1)


def _draw_tabs(
    stdscr: curses.window,
    row: int,
    label: str,
    names: list[str],
    selected: int,
    focused: bool,
    width: int,
) -> None:
    _put(stdscr, row, 0, f"{label}:", width, curses.A_BOLD)
    col = len(label) + 2
    for index, name in enumerate(names):
        # An empty title is the parser's placeholder, not a real section.
        if not name:
            continue
        attrs = 0
        if index == selected:
            attrs = curses.A_REVERSE | (curses.A_BOLD if focused else 0)
        if col >= width - 1:
            break
        _put(stdscr, row, col, name, width - col, attrs)
        col += len(name) + 2


def _put(stdscr: curses.window, row: int, col: int, text: str, limit: int, attrs: int = 0) -> None:
    if limit <= 0:
        return
    try:
        stdscr.addnstr(row, col, text, limit - 1, attrs)
    except curses.error:
        pass
