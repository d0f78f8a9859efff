"""Format characters, pattern compilation, and value formatting."""

from .characters import (
    DEFAULT_FORMAT_CHARACTERS,
    CharacterClass,
    FormatCharacter,
    coerce_format_character,
    merge_format_characters,
)
from .errors import MaskConfigurationError
from .formatter import ValueBuffer, format_value, join_buffer
from .pattern import DEFAULT_PLACEHOLDER_CHAR, ESCAPE_CHAR, Pattern

__all__ = [
    "CharacterClass",
    "DEFAULT_FORMAT_CHARACTERS",
    "DEFAULT_PLACEHOLDER_CHAR",
    "ESCAPE_CHAR",
    "FormatCharacter",
    "MaskConfigurationError",
    "Pattern",
    "ValueBuffer",
    "coerce_format_character",
    "format_value",
    "join_buffer",
    "merge_format_characters",
]
