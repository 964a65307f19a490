"""Focus navigation and modal editing over a workspace."""

from .editing import VIEWING, EditController, EditMode, EditSession, EditTarget
from .navigator import FocusLevel, Navigator

__all__ = [
    "EditController",
    "EditMode",
    "EditSession",
    "EditTarget",
    "FocusLevel",
    "Navigator",
    "VIEWING",
]
