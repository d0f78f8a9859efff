"""Validation helpers for host supplied selections."""

from __future__ import annotations

from .state import Selection


class SelectionError(ValueError):
    """Raised when a host provides a selection outside the value buffer."""

    def __init__(self, message: str, *, selection: Selection | None = None) -> None:
        super().__init__(message)
        self.selection = selection


def ensure_selection(selection: Selection, length: int) -> Selection:
    if selection.start < 0 or selection.end < 0:
        raise SelectionError("Selection offsets must be non-negative", selection=selection)
    if selection.start > selection.end:
        raise SelectionError("Selection start is after its end", selection=selection)
    if selection.end > length:
        raise SelectionError(
            f"Selection end {selection.end} exceeds pattern length {length}",
            selection=selection,
        )
    return selection
