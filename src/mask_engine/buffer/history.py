"""Undo/redo history for mask edits.

The stack is a two-state machine. While ``LIVE`` edits append (or coalesce
into) the trailing entry. ``undo`` switches to ``REPLAYING`` at an index; the
next edit truncates everything from that index on and returns to ``LIVE``,
as does a ``redo`` that reaches the final entry.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Tuple

from .state import EditKind, Selection


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    buffer: Tuple[Optional[str], ...]
    selection: Selection
    last_op: EditKind = EditKind.NONE
    start_undo: bool = False

    @property
    def value(self) -> str:
        return "".join(char for char in self.buffer if char is not None)

    def same_state(self, other: "HistoryEntry") -> bool:
        return self.buffer == other.buffer and self.selection == other.selection


class HistoryMode(str, Enum):
    LIVE = "live"
    REPLAYING = "replaying"


HistorySnapshot = Tuple[Tuple[HistoryEntry, ...], HistoryMode, int]


class HistoryStack:
    """Linear undo/redo log with a replay cursor."""

    def __init__(self) -> None:
        self._entries: List[HistoryEntry] = []
        self._mode = HistoryMode.LIVE
        self._replay_index = -1

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> Tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    @property
    def mode(self) -> HistoryMode:
        return self._mode

    @property
    def replay_index(self) -> Optional[int]:
        if self._mode is HistoryMode.REPLAYING:
            return self._replay_index
        return None

    def clear(self) -> None:
        self._entries.clear()
        self._go_live()

    def record(self, entry: HistoryEntry, *, coalesce: bool) -> bool:
        """Log the pre-edit state ``entry``; returns whether it was appended.

        ``coalesce`` lets a contiguous run of the same edit share the trailing
        entry. An edit made while replaying discards the replayed entry and
        everything after it, then always starts a fresh entry.
        """

        if self._mode is HistoryMode.REPLAYING:
            del self._entries[self._replay_index :]
            self._go_live()
            coalesce = False
        if coalesce and self._entries:
            return False
        self._entries.append(entry)
        return True

    def undo(self, current: HistoryEntry) -> Optional[HistoryEntry]:
        """Step back one entry; ``current`` is the live state before undoing."""

        if not self._entries:
            return None
        if self._mode is HistoryMode.REPLAYING:
            if self._replay_index == 0:
                return None
            self._replay_index -= 1
            return self._entries[self._replay_index]

        index = len(self._entries) - 1
        if self._entries[index].same_state(current):
            if index == 0:
                return None
            index -= 1
        else:
            self._entries.append(replace(current, start_undo=True))
        self._mode = HistoryMode.REPLAYING
        self._replay_index = index
        return self._entries[index]

    def redo(self) -> Optional[HistoryEntry]:
        if not self._entries or self._mode is not HistoryMode.REPLAYING:
            return None
        self._replay_index += 1
        entry = self._entries[self._replay_index]
        if self._replay_index == len(self._entries) - 1:
            self._go_live()
            if entry.start_undo:
                self._entries.pop()
        return entry

    def snapshot(self) -> HistorySnapshot:
        return tuple(self._entries), self._mode, self._replay_index

    def restore(self, snapshot: HistorySnapshot) -> None:
        entries, mode, replay_index = snapshot
        self._entries = list(entries)
        self._mode = mode
        self._replay_index = replay_index

    def _go_live(self) -> None:
        self._mode = HistoryMode.LIVE
        self._replay_index = -1


__all__ = ["HistoryEntry", "HistoryMode", "HistorySnapshot", "HistoryStack"]
