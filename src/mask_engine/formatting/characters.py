"""Format character definitions and the registry merge rules."""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Protocol

from .errors import MaskConfigurationError


def _identity(char: str) -> str:
    return char


class FormatCharacter(Protocol):
    """Validation + transform pair governing one editable pattern symbol."""

    def validate(self, char: str) -> bool:
        ...

    def transform(self, char: str) -> str:
        ...


@dataclass(frozen=True, slots=True)
class CharacterClass:
    """Concrete ``FormatCharacter`` backed by plain callables."""

    validator: Callable[[str], bool]
    transformer: Callable[[str], str] = _identity
    description: str = ""

    def __post_init__(self) -> None:
        if not callable(self.validator):
            raise TypeError("validator must be callable")
        if not callable(self.transformer):
            raise TypeError("transformer must be callable")

    def validate(self, char: str) -> bool:
        return bool(self.validator(char))

    def transform(self, char: str) -> str:
        return self.transformer(char)

    @classmethod
    def regex(
        cls,
        expression: str,
        *,
        transform: Optional[Callable[[str], str]] = None,
        description: str = "",
    ) -> "CharacterClass":
        """Build a class accepting single characters that fully match ``expression``."""

        compiled = re.compile(expression)

        def _validate(char: str) -> bool:
            return isinstance(char, str) and compiled.fullmatch(char) is not None

        return cls(
            validator=_validate,
            transformer=transform or _identity,
            description=description or expression,
        )


def _upper(char: str) -> str:
    return char.upper()


DIGIT = CharacterClass.regex(r"[0-9]", description="digit")
LETTER = CharacterClass.regex(r"[A-Za-z]", description="letter")
ALPHANUMERIC = CharacterClass.regex(r"[0-9A-Za-z]", description="alphanumeric")

DEFAULT_FORMAT_CHARACTERS: Mapping[str, FormatCharacter] = MappingProxyType(
    {
        "*": ALPHANUMERIC,
        "1": DIGIT,
        "a": LETTER,
        "A": CharacterClass.regex(
            r"[A-Za-z]", transform=_upper, description="letter, uppercased"
        ),
        "#": CharacterClass.regex(
            r"[0-9A-Za-z]", transform=_upper, description="alphanumeric, uppercased"
        ),
    }
)


def coerce_format_character(symbol: str, value: object) -> FormatCharacter:
    """Normalise a user supplied registry value into a ``FormatCharacter``.

    Accepts a ``CharacterClass``, any object exposing a callable ``validate``
    (``transform`` optional), or a bare callable used as the validator.
    """

    if isinstance(value, CharacterClass):
        return value
    validate = getattr(value, "validate", None)
    if callable(validate):
        transform = getattr(value, "transform", None)
        if transform is not None and not callable(transform):
            raise MaskConfigurationError(
                f"Format character '{symbol}' has a non-callable transform"
            )
        return CharacterClass(validator=validate, transformer=transform or _identity)
    if callable(value):
        return CharacterClass(validator=value)
    raise MaskConfigurationError(
        f"Format character '{symbol}' must provide a callable validate()"
    )


def merge_format_characters(
    custom: Optional[Mapping[str, object]] = None,
) -> Mapping[str, FormatCharacter]:
    """Overlay ``custom`` on the defaults.

    A symbol mapped to ``None`` removes the default definition; any other
    value adds or overrides it. The result is read-only.
    """

    merged: Dict[str, FormatCharacter] = dict(DEFAULT_FORMAT_CHARACTERS)
    for symbol, value in (custom or {}).items():
        if len(symbol) != 1:
            raise MaskConfigurationError(
                f"Format character symbol '{symbol}' must be a single character"
            )
        if value is None:
            merged.pop(symbol, None)
        else:
            merged[symbol] = coerce_format_character(symbol, value)
    return MappingProxyType(merged)


__all__ = [
    "ALPHANUMERIC",
    "CharacterClass",
    "DEFAULT_FORMAT_CHARACTERS",
    "DIGIT",
    "FormatCharacter",
    "LETTER",
    "coerce_format_character",
    "merge_format_characters",
]
