"""Sandboxing primitives for list file paths."""

from .paths import PathBlockedError, display_name, resolve_list_path

__all__ = ["PathBlockedError", "display_name", "resolve_list_path"]
