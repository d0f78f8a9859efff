"""Executable Textual app hosting a single masked field."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use mask_engine.adapters.textual.app"
    ) from exc

from mask_engine.buffer import Selection
from mask_engine.engine import InputMask
from mask_engine.runtime import telemetry

from .controller import MaskUIHooks, TextualMaskAdapter

DEFAULT_PATTERN = "1111-1111-1111-1111"


@dataclass
class UIState:
    value_text: str = ""
    selection: Selection = Selection()
    status_text: str = ""


class MaskEngineApp(App[None]):
    """Minimal Textual UI embedding one input mask."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#field-view {
		height: 3;
		border: round $accent;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        pattern: str = DEFAULT_PATTERN,
        placeholder_char: str = "_",
        revealing_mask: bool = False,
    ) -> None:
        super().__init__()
        self._state = UIState()
        self._pattern = pattern
        self._placeholder_char = placeholder_char
        self._revealing_mask = revealing_mask
        self.adapter: TextualMaskAdapter | None = None
        self._field_widget: Static | None = None
        self._status_widget: Static | None = None
        self._log = telemetry.get_logger("mask_engine.adapters.textual")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="field-area"):
            self._field_widget = Static("", id="field-view")
            yield self._field_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        mask = InputMask(
            pattern=self._pattern,
            placeholder_char=self._placeholder_char,
            revealing_mask=self._revealing_mask,
        )
        hooks = MaskUIHooks(
            update_value=self._update_value,
            update_selection=self._update_selection,
            log=self._log.debug,
        )
        self.adapter = TextualMaskAdapter(mask, hooks)
        self._update_status(f"pattern {self._pattern!r}, max {self.adapter.max_length}")

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        if key in {"left", "right", "home", "end"}:
            self._move_caret(key)
        elif not self.adapter.handle_key(key, text=text, modifiers=modifiers):
            self._update_status(f"rejected {key!r}")
        event.stop()

    def on_paste(self, event: events.Paste) -> None:
        if not self.adapter:
            return
        if not self.adapter.handle_paste(event.text):
            self._update_status("paste rejected")
        event.stop()

    def _move_caret(self, key: str) -> None:
        assert self.adapter is not None
        caret = self.adapter.mask.selection.end
        if key == "left":
            caret = max(caret - 1, 0)
        elif key == "right":
            caret = min(caret + 1, self.adapter.max_length)
        elif key == "home":
            caret = 0
        else:
            caret = self.adapter.max_length
        self.adapter.mask.set_selection(Selection.caret(caret))
        self._update_selection(self.adapter.mask.selection)

    def _update_value(self, value: str) -> None:
        self._state.value_text = value
        self._render_field()

    def _update_selection(self, selection: Selection) -> None:
        self._state.selection = selection
        self._render_field()

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _render_field(self) -> None:
        if not self._field_widget or not self.adapter:
            return
        text = self._state.value_text or self.adapter.placeholder
        caret = min(self._state.selection.start, len(text))
        self._field_widget.update(f"{text[:caret]}|{text[caret:]}")

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        key = event.key
        if key in {"ctrl+c", "ctrl+q"}:
            return None
        parts = key.split("+")
        modifiers = tuple(part.upper() for part in parts[:-1])
        base = parts[-1]
        if event.character and len(event.character) == 1 and not modifiers:
            return (event.character, event.character, ())
        return (base, None, modifiers)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the input mask Textual demo.")
    parser.add_argument(
        "--pattern",
        default=os.environ.get("MASK_ENGINE_DEMO_PATTERN", DEFAULT_PATTERN),
        help=f"Mask pattern (default: {DEFAULT_PATTERN})",
    )
    parser.add_argument(
        "--placeholder-char",
        default="_",
        help="Placeholder for unfilled slots (single character or empty)",
    )
    parser.add_argument(
        "--revealing",
        action="store_true",
        help="Only reveal the pattern up to the last typed character",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    app = MaskEngineApp(
        pattern=args.pattern,
        placeholder_char=args.placeholder_char,
        revealing_mask=args.revealing,
    )
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
