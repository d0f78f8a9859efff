"""Textual host adapter; the demo app lives in ``app`` and needs ``textual``."""

from .controller import MaskUIHooks, TextualMaskAdapter, is_redo, is_undo

__all__ = ["MaskUIHooks", "TextualMaskAdapter", "is_redo", "is_undo"]
