"""Selection and edit-kind primitives shared by the engine and history."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Sequence


class EditKind(str, Enum):
    """Kind of the last applied operation, used for history coalescing."""

    NONE = "none"
    INPUT = "input"
    BACKSPACE = "backspace"


@dataclass(frozen=True, slots=True)
class Selection:
    """Caret (``start == end``) or replace-range over the value buffer."""

    start: int = 0
    end: int = 0

    @property
    def collapsed(self) -> bool:
        return self.start == self.end

    @classmethod
    def caret(cls, index: int) -> "Selection":
        return cls(index, index)

    @classmethod
    def coerce(cls, value: Any) -> "Selection":
        """Accept a ``Selection``, ``{start, end}`` mapping, or ``(start, end)`` pair."""

        if isinstance(value, Selection):
            return value
        if value is None:
            return cls()
        if isinstance(value, Mapping):
            start = int(value.get("start", 0))
            return cls(start, int(value.get("end", start)))
        if isinstance(value, Sequence) and len(value) == 2:
            return cls(int(value[0]), int(value[1]))
        raise TypeError(f"Cannot interpret {value!r} as a selection")

    def as_dict(self) -> dict[str, int]:
        return {"start": self.start, "end": self.end}
