"""Pure formatting of raw characters into a fixed-length value buffer."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .pattern import Pattern

ValueBuffer = List[Optional[str]]


def format_value(pattern: Pattern, raw: Iterable[str]) -> ValueBuffer:
    """Lay ``raw`` characters over ``pattern``.

    The result always has ``pattern.length`` slots. Static slots hold the
    pattern literal; a raw character equal to that literal is consumed so raw
    input may already contain the mask's separators. Editable slots hold the
    transformed raw character, or the placeholder when it is missing or
    invalid. A raw placeholder character is consumed as an empty slot.

    With ``pattern.revealing_mask`` formatting stops at the first missing or
    invalid character and the remaining slots stay ``None`` (unset).
    """

    chars: Sequence[str] = raw if isinstance(raw, (str, list, tuple)) else list(raw)
    buffer: ValueBuffer = [None] * pattern.length
    placeholder = pattern.placeholder_char
    value_index = 0
    for index in range(pattern.length):
        current = chars[value_index] if value_index < len(chars) else None
        if pattern.is_editable(index):
            valid = current is not None and pattern.is_valid_at(current, index)
            if pattern.revealing_mask and not valid:
                break
            if valid:
                buffer[index] = pattern.transform(current, index)  # type: ignore[arg-type]
                value_index += 1
            else:
                buffer[index] = placeholder
                if current is not None and placeholder and current == placeholder:
                    value_index += 1
        else:
            literal = pattern.literal_at(index)
            buffer[index] = literal
            if current == literal:
                value_index += 1
    return buffer


def join_buffer(buffer: Iterable[Optional[str]]) -> str:
    """Render a buffer, skipping unset slots."""

    return "".join(char for char in buffer if char is not None)


__all__ = ["ValueBuffer", "format_value", "join_buffer"]
