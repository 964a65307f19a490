"""Built-in command table exposed to the terminal shell."""

from __future__ import annotations

from typing import TYPE_CHECKING

from yoku.commands.registry import CommandRegistry

if TYPE_CHECKING:
    from yoku.session import TodoSession

BUILTIN_COMMANDS: tuple[str, ...] = (
    "descend",
    "ascend",
    "next_sibling",
    "previous_sibling",
    "leave_notes",
    "cycle_note_state",
    "set_note_done",
    "set_note_rejected",
    "create_file",
    "create_section",
    "create_note",
    "rename",
    "edit_description",
    "remove",
    "confirm",
    "cancel",
    "backspace",
    "save_all",
)


def register_builtin_commands(registry: CommandRegistry, session: TodoSession) -> None:
    """Register every session entry point under its command name."""
    for name in BUILTIN_COMMANDS:
        registry.register(name, getattr(session, name))
