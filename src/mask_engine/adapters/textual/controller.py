"""Adapter that translates host key/paste/selection events into mask calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional

from mask_engine.buffer import Selection
from mask_engine.engine import InputMask


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


UNDO_KEYS = frozenset({"z"})
REDO_KEYS = frozenset({"y"})
COMMAND_MODIFIERS = frozenset({"CTRL", "META", "SUPER", "CMD"})


@dataclass(slots=True)
class MaskUIHooks:
    """Callbacks the adapter uses to write state back into the host field."""

    update_value: Callable[[str], None]
    update_selection: Callable[[Selection], None] = _noop
    log: Callable[[str], None] = _noop


def is_undo(key: str, modifiers: Iterable[str]) -> bool:
    mods = {str(mod).upper() for mod in modifiers}
    if not mods & COMMAND_MODIFIERS:
        return False
    return key.lower() in (REDO_KEYS if "SHIFT" in mods else UNDO_KEYS)


def is_redo(key: str, modifiers: Iterable[str]) -> bool:
    mods = {str(mod).upper() for mod in modifiers}
    if not mods & COMMAND_MODIFIERS:
        return False
    return key.lower() in (UNDO_KEYS if "SHIFT" in mods else REDO_KEYS)


class TextualMaskAdapter:
    """Bridges host widget events to an :class:`InputMask`.

    The host owns the visible field; after every accepted operation the
    adapter pushes the display value and caret back through ``hooks``.
    """

    def __init__(self, mask: InputMask, hooks: MaskUIHooks) -> None:
        self.mask = mask
        self.hooks = hooks
        self._refresh()

    @property
    def display_value(self) -> str:
        value = self.mask.get_value()
        return "" if value == self.mask.empty_value else value

    @property
    def placeholder(self) -> str:
        return self.mask.empty_value

    @property
    def max_length(self) -> int:
        return self.mask.length

    def handle_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> bool:
        """Dispatch one key press; returns whether the mask changed."""

        mods = tuple(str(mod).upper() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=mods)
        if is_undo(key, mods):
            return self._after(self.mask.undo(), "undo")
        if is_redo(key, mods):
            return self._after(self.mask.redo(), "redo")
        if key.lower() == "backspace":
            return self._after(self.mask.backspace(), "backspace")
        if set(mods) - {"SHIFT"} or key.lower() in {"enter", "return"}:
            return False
        char = text if text is not None else key
        if len(char) != 1:
            return False
        return self._after(self.mask.input(char), "input")

    def handle_paste(self, text: str) -> bool:
        self._log_state("paste ->", length=len(text))
        return self._after(self.mask.paste(text), "paste")

    def handle_selection(self, start: int, end: Optional[int] = None) -> Selection:
        """Sync the host caret into the mask without snapping."""

        self.mask.selection = Selection(start, start if end is None else end)
        return self.mask.selection

    def handle_change(self, text: str, *, selection: Optional[Selection] = None) -> bool:
        """Adopt a natively edited field value wholesale."""

        if text == self.mask.get_value():
            return False
        if selection is not None:
            self.mask.selection = selection
        self.mask.set_value(text)
        return self._after(True, "change")

    def change_pattern(self, pattern: str, *, value: Optional[str] = None) -> None:
        """Install ``pattern`` keeping the typed content.

        ``value`` is only used while the field still shows its empty value.
        """

        if value is not None and self.mask.get_value() == self.mask.empty_value:
            carried = value
        else:
            carried = self.mask.get_raw_value()
        self.mask.set_pattern(pattern, value=carried)
        self._after(True, "pattern")

    def _after(self, changed: bool, operation: str) -> bool:
        self._log_state("result <-", operation=operation, changed=changed)
        if changed:
            self._refresh()
        return changed

    def _refresh(self) -> None:
        self.hooks.update_value(self.display_value)
        self.hooks.update_selection(self.mask.selection)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, Any]:
        selection = self.mask.selection
        return {
            "pattern": self.mask.pattern.source,
            "value": self.mask.get_value(),
            "selection": (selection.start, selection.end),
            "history": len(self.mask.history),
        }


__all__ = ["MaskUIHooks", "TextualMaskAdapter", "is_redo", "is_undo"]
