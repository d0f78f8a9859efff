"""Selection state, validation, and undo/redo history."""

from .history import HistoryEntry, HistoryMode, HistorySnapshot, HistoryStack
from .state import EditKind, Selection
from .validation import SelectionError, ensure_selection

__all__ = [
    "EditKind",
    "HistoryEntry",
    "HistoryMode",
    "HistorySnapshot",
    "HistoryStack",
    "Selection",
    "SelectionError",
    "ensure_selection",
]
