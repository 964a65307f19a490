"""Command interfaces and registrations."""

from .builtin import BUILTIN_COMMANDS, register_builtin_commands
from .registry import CommandDispatchError, CommandHandler, CommandRegistry

__all__ = [
    "BUILTIN_COMMANDS",
    "CommandDispatchError",
    "CommandHandler",
    "CommandRegistry",
    "register_builtin_commands",
]
