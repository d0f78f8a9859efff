"""The mask engine: selection-aware editing over a compiled pattern."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from mask_engine.buffer import (
    EditKind,
    HistoryEntry,
    HistoryStack,
    Selection,
    ensure_selection,
)
from mask_engine.formatting import (
    FormatCharacter,
    MaskConfigurationError,
    Pattern,
    format_value,
    join_buffer,
    merge_format_characters,
)
from mask_engine.runtime import telemetry

from .options import MaskOptions
from .state import MaskState, StateSnapshot

LOGGER_NAME = "mask_engine.engine"


class InputMask:
    """Constrains edits of a single text field to a fixed pattern.

    Edit operations return ``False`` when they are rejected and leave the
    engine untouched; construction problems raise
    :class:`~mask_engine.formatting.MaskConfigurationError`.
    """

    def __init__(self, options: MaskOptions | None = None, **kwargs: Any) -> None:
        try:
            if options is None:
                options = MaskOptions.from_mapping(kwargs)
            elif kwargs:
                raise TypeError("Pass either a MaskOptions instance or keyword options")
            self.placeholder_char = options.placeholder_char
            self.format_characters: Mapping[str, FormatCharacter] = (
                merge_format_characters(options.format_characters)
            )
            self._state = self._build_state(
                options.pattern,
                value=options.value,
                selection=options.selection,
                revealing_mask=options.revealing_mask,
            )
        except MaskConfigurationError as exc:
            telemetry.record_event(
                "mask.configuration_error",
                level="error",
                data={"reason": str(exc), "source": exc.source},
                logger_name=LOGGER_NAME,
            )
            raise

    @classmethod
    def from_options(cls, mapping: Mapping[str, Any]) -> "InputMask":
        return cls(MaskOptions.from_mapping(mapping))

    def __repr__(self) -> str:
        return (
            f"InputMask(pattern={self.pattern.source!r}, value={self.get_value()!r}, "
            f"selection=({self.selection.start}, {self.selection.end}))"
        )

    # Accessors

    @property
    def pattern(self) -> Pattern:
        return self._state.pattern

    @property
    def length(self) -> int:
        return self._state.pattern.length

    @property
    def empty_value(self) -> str:
        return self._state.empty_value

    @property
    def history(self) -> HistoryStack:
        return self._state.history

    @property
    def last_op(self) -> EditKind:
        return self._state.last_op

    @property
    def selection(self) -> Selection:
        return self._state.selection

    @selection.setter
    def selection(self, value: Any) -> None:
        """Adopt a host selection verbatim (no snapping)."""

        self._state.selection = ensure_selection(Selection.coerce(value), self.length)

    def get_value(self) -> str:
        state = self._state
        if state.pattern.revealing_mask:
            state.buffer = format_value(state.pattern, self.get_raw_value())
        return join_buffer(state.buffer)

    def get_raw_value(self) -> str:
        pattern = self._state.pattern
        return join_buffer(
            char
            for index, char in enumerate(self._state.buffer)
            if pattern.is_editable(index)
        )

    def set_value(self, value: Optional[str] = "") -> None:
        self._state.buffer = format_value(self._state.pattern, value or "")

    def set_pattern(
        self,
        pattern: str,
        *,
        value: Optional[str] = "",
        selection: Any = None,
        revealing_mask: Optional[bool] = None,
    ) -> None:
        """Install a new pattern; history does not survive a pattern change.

        ``revealing_mask=None`` keeps the current mode.
        """

        if revealing_mask is None:
            revealing_mask = self._state.pattern.revealing_mask
        with telemetry.span(
            "mask::set_pattern",
            logger_name=LOGGER_NAME,
            component="mask",
            metadata={"pattern": pattern},
        ):
            self._state = self._build_state(
                pattern,
                value=value or "",
                selection=Selection.coerce(selection),
                revealing_mask=revealing_mask,
            )

    def set_selection(self, selection: Any) -> bool:
        """Move the caret/selection, snapping a caret onto meaningful content.

        A caret before the first editable slot moves onto it; elsewhere it
        moves back to just after the nearest filled editable slot, or to the
        first editable slot when there is none. Returns whether the requested
        selection was altered.
        """

        state = self._state
        pattern = state.pattern
        requested = ensure_selection(Selection.coerce(selection), pattern.length)
        if not requested.collapsed:
            state.selection = requested
            return False

        first = pattern.first_editable
        target = first
        if requested.start > first:
            for index in range(requested.start, first, -1):
                if pattern.is_editable(index - 1) and self._is_filled(index - 1):
                    target = index
                    break
        state.selection = Selection.caret(target)
        return target != requested.start

    # Editing

    def input(self, char: str) -> bool:
        """Apply one typed character at the caret or over the selection."""

        with telemetry.span("mask::input", logger_name=LOGGER_NAME, component="mask"):
            accepted = self._input(char)
            if not accepted:
                self._reject("input", char)
            return accepted

    def backspace(self) -> bool:
        """Clear the slot before the caret, or every editable slot in the selection."""

        with telemetry.span("mask::backspace", logger_name=LOGGER_NAME, component="mask"):
            state = self._state
            pattern = state.pattern
            selection = state.selection
            if selection.start == 0 and selection.end == 0:
                return False

            before = self._history_entry()
            if selection.collapsed:
                target = selection.start - 1
                if pattern.is_editable(target):
                    if pattern.revealing_mask:
                        for index in range(target, pattern.length):
                            state.buffer[index] = None
                    else:
                        state.buffer[target] = pattern.placeholder_char
                state.selection = Selection.caret(target)
            else:
                self._clear_range(selection.start, selection.end)
                state.selection = Selection.caret(selection.start)

            self._record(before, EditKind.BACKSPACE)
            return True

    def paste(self, text: str) -> bool:
        """Apply ``text`` as a run of inputs, all or nothing.

        Pasted text may contain the pattern's own separators. Any other
        rejected character restores value, selection, and history.
        """

        with telemetry.span(
            "mask::paste",
            logger_name=LOGGER_NAME,
            component="mask",
            metadata={"length": len(text)},
        ):
            state = self._state
            pattern = state.pattern
            initial = state.capture()
            selection = state.selection
            first = pattern.first_editable

            if selection.start < first:
                prefix = "".join(pattern.compiled[selection.start : first])
                if not text.startswith(prefix):
                    return self._rollback(initial, "static_prefix_mismatch", text)
                text = text[len(prefix) :]
                state.selection = Selection(first, max(selection.end, first))

            for char in text:
                if state.selection.start > pattern.last_editable:
                    break
                if self._input(char):
                    continue
                behind = state.selection.start - 1
                if (
                    behind >= 0
                    and not pattern.is_editable(behind)
                    and char == pattern.literal_at(behind)
                ):
                    continue
                return self._rollback(initial, "invalid_character", char)
            return True

    # History

    def undo(self) -> bool:
        with telemetry.span("mask::undo", logger_name=LOGGER_NAME, component="mask"):
            entry = self._state.history.undo(self._history_entry())
            if entry is None:
                return False
            self._restore(entry)
            return True

    def redo(self) -> bool:
        with telemetry.span("mask::redo", logger_name=LOGGER_NAME, component="mask"):
            entry = self._state.history.redo()
            if entry is None:
                return False
            self._restore(entry)
            return True

    # Internals

    def _build_state(
        self,
        source: str,
        *,
        value: str,
        selection: Selection,
        revealing_mask: bool,
    ) -> MaskState:
        pattern = Pattern.compile(
            source,
            self.format_characters,
            self.placeholder_char,
            revealing_mask,
        )
        state = MaskState(
            pattern=pattern,
            buffer=format_value(pattern, value),
            selection=ensure_selection(selection, pattern.length),
            empty_value=join_buffer(format_value(pattern, "")),
        )
        state.reset_history()
        return state

    def _input(self, char: str) -> bool:
        state = self._state
        pattern = state.pattern
        selection = state.selection
        if not isinstance(char, str) or len(char) != 1:
            return False
        if selection.collapsed and selection.start == pattern.length:
            return False

        before = self._history_entry()
        index = max(selection.start, pattern.first_editable)
        if pattern.is_editable(index):
            if not pattern.is_valid_at(char, index):
                return False
            state.buffer[index] = pattern.transform(char, index)

        self._clear_range(index + 1, selection.end)

        caret = index + 1
        while caret < pattern.length and not pattern.is_editable(caret):
            caret += 1
        state.selection = Selection.caret(caret)

        self._record(before, EditKind.INPUT)
        return True

    def _clear_range(self, start: int, end: int) -> None:
        state = self._state
        pattern = state.pattern
        for index in range(end - 1, start - 1, -1):
            if pattern.is_editable(index):
                state.buffer[index] = pattern.placeholder_char

    def _is_filled(self, index: int) -> bool:
        char = self._state.buffer[index]
        return char is not None and char != self._state.pattern.placeholder_char

    def _history_entry(self) -> HistoryEntry:
        state = self._state
        return HistoryEntry(
            buffer=tuple(state.buffer),
            selection=state.selection,
            last_op=state.last_op,
        )

    def _record(self, before: HistoryEntry, kind: EditKind) -> None:
        state = self._state
        coalesce = (
            state.last_op is kind
            and before.selection.collapsed
            and (
                state.last_selection is None
                or before.selection.start == state.last_selection.start
            )
        )
        state.history.record(before, coalesce=coalesce)
        state.last_op = kind
        state.last_selection = state.selection

    def _restore(self, entry: HistoryEntry) -> None:
        state = self._state
        state.buffer = list(entry.buffer)
        state.selection = entry.selection
        state.last_op = entry.last_op
        state.last_selection = entry.selection

    def _rollback(self, snapshot: StateSnapshot, reason: str, text: str) -> bool:
        self._state.rewind(snapshot)
        telemetry.record_event(
            "mask.paste_rollback",
            level="debug",
            data={"reason": reason, "text": text},
            logger_name=LOGGER_NAME,
        )
        return False

    def _reject(self, operation: str, char: Any) -> None:
        telemetry.record_event(
            "mask.rejected",
            level="debug",
            data={
                "operation": operation,
                "char": char,
                "selection": self._state.selection.as_dict(),
            },
            logger_name=LOGGER_NAME,
        )


__all__ = ["InputMask", "LOGGER_NAME"]
