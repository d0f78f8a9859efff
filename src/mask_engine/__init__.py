"""UI-agnostic input masking engine."""

from .engine import InputMask, MaskOptions
from .formatting import (
    DEFAULT_FORMAT_CHARACTERS,
    CharacterClass,
    FormatCharacter,
    MaskConfigurationError,
    Pattern,
    format_value,
    merge_format_characters,
)
from .buffer import Selection, SelectionError

__all__ = [
    "adapters",
    "buffer",
    "engine",
    "formatting",
    "runtime",
    "InputMask",
    "MaskOptions",
    "Pattern",
    "FormatCharacter",
    "CharacterClass",
    "DEFAULT_FORMAT_CHARACTERS",
    "MaskConfigurationError",
    "Selection",
    "SelectionError",
    "format_value",
    "merge_format_characters",
]

__version__ = "0.1.0"
