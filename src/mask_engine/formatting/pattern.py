"""Pattern compilation: source strings become literal/editable slot lists."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Mapping, Optional

from .characters import DEFAULT_FORMAT_CHARACTERS, FormatCharacter
from .errors import MaskConfigurationError

ESCAPE_CHAR = "\\"
DEFAULT_PLACEHOLDER_CHAR = "_"


@dataclass(frozen=True, slots=True)
class Pattern:
    """Compiled, immutable mask pattern.

    ``compiled`` holds one character per slot: a literal at static slots and
    the registry symbol at editable ones. Use :meth:`compile` to build one
    from a source string.
    """

    source: str
    compiled: tuple[str, ...]
    editable_positions: FrozenSet[int]
    first_editable: int
    last_editable: int
    format_characters: Mapping[str, FormatCharacter] = field(
        default_factory=lambda: DEFAULT_FORMAT_CHARACTERS, repr=False, compare=False
    )
    placeholder_char: str = DEFAULT_PLACEHOLDER_CHAR
    revealing_mask: bool = False

    @classmethod
    def compile(
        cls,
        source: str,
        format_characters: Optional[Mapping[str, FormatCharacter]] = None,
        placeholder_char: str = DEFAULT_PLACEHOLDER_CHAR,
        revealing_mask: bool = False,
    ) -> "Pattern":
        registry = (
            DEFAULT_FORMAT_CHARACTERS if format_characters is None else format_characters
        )
        compiled: list[str] = []
        editable: set[int] = set()
        index = 0
        length = len(source)
        while index < length:
            char = source[index]
            if char == ESCAPE_CHAR:
                if index == length - 1:
                    raise MaskConfigurationError(
                        f"Pattern ends with a raw {ESCAPE_CHAR}", source=source
                    )
                index += 1
                char = source[index]
            elif char in registry:
                editable.add(len(compiled))
            compiled.append(char)
            index += 1

        if not editable:
            raise MaskConfigurationError(
                f'Pattern "{source}" does not contain any editable characters',
                source=source,
            )

        return cls(
            source=source,
            compiled=tuple(compiled),
            editable_positions=frozenset(editable),
            first_editable=min(editable),
            last_editable=max(editable),
            format_characters=registry,
            placeholder_char=placeholder_char,
            revealing_mask=bool(revealing_mask),
        )

    @property
    def length(self) -> int:
        return len(self.compiled)

    def __len__(self) -> int:
        return len(self.compiled)

    def is_editable(self, index: int) -> bool:
        return index in self.editable_positions

    def literal_at(self, index: int) -> str:
        return self.compiled[index]

    def is_valid_at(self, char: str, index: int) -> bool:
        if not char:
            return False
        return self.format_characters[self.compiled[index]].validate(char)

    def transform(self, char: str, index: int) -> str:
        return self.format_characters[self.compiled[index]].transform(char)


__all__ = ["DEFAULT_PLACEHOLDER_CHAR", "ESCAPE_CHAR", "Pattern"]
