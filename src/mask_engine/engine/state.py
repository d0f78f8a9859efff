"""Owned mutable state of a single mask engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from mask_engine.buffer import EditKind, HistorySnapshot, HistoryStack, Selection
from mask_engine.formatting import Pattern, ValueBuffer


class StateSnapshot(NamedTuple):
    buffer: tuple[Optional[str], ...]
    selection: Selection
    last_op: EditKind
    last_selection: Optional[Selection]
    history: HistorySnapshot


@dataclass(slots=True)
class MaskState:
    pattern: Pattern
    buffer: ValueBuffer
    selection: Selection = Selection()
    history: HistoryStack = field(default_factory=HistoryStack)
    last_op: EditKind = EditKind.NONE
    last_selection: Optional[Selection] = None
    empty_value: str = ""

    def capture(self) -> StateSnapshot:
        return StateSnapshot(
            buffer=tuple(self.buffer),
            selection=self.selection,
            last_op=self.last_op,
            last_selection=self.last_selection,
            history=self.history.snapshot(),
        )

    def rewind(self, snapshot: StateSnapshot) -> None:
        self.buffer = list(snapshot.buffer)
        self.selection = snapshot.selection
        self.last_op = snapshot.last_op
        self.last_selection = snapshot.last_selection
        self.history.restore(snapshot.history)

    def reset_history(self) -> None:
        self.history.clear()
        self.last_op = EditKind.NONE
        self.last_selection = self.selection


__all__ = ["MaskState", "StateSnapshot"]
