"""Construction options accepted by :class:`~mask_engine.engine.InputMask`."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from mask_engine.buffer import Selection
from mask_engine.formatting import DEFAULT_PLACEHOLDER_CHAR, MaskConfigurationError

_ALIASES = {
    "formatCharacters": "format_characters",
    "placeholderChar": "placeholder_char",
    "revealingMask": "revealing_mask",
    "isRevealingMask": "revealing_mask",
}


@dataclass(frozen=True, slots=True)
class MaskOptions:
    pattern: str
    format_characters: Optional[Mapping[str, object]] = None
    placeholder_char: str = DEFAULT_PLACEHOLDER_CHAR
    revealing_mask: bool = False
    selection: Selection = Selection()
    value: str = ""

    def __post_init__(self) -> None:
        if self.pattern is None:
            raise MaskConfigurationError("You must provide a pattern")
        if not isinstance(self.pattern, str):
            raise MaskConfigurationError(
                f"Pattern must be a string, got {type(self.pattern).__name__}"
            )
        if not isinstance(self.placeholder_char, str) or len(self.placeholder_char) > 1:
            raise MaskConfigurationError(
                "placeholder_char should be a single character or an empty string"
            )
        object.__setattr__(self, "selection", Selection.coerce(self.selection))
        object.__setattr__(self, "value", self.value or "")
        object.__setattr__(self, "revealing_mask", bool(self.revealing_mask))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "MaskOptions":
        """Build options from snake_case or camelCase keys."""

        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in mapping.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise MaskConfigurationError(f"Unknown mask option '{key}'")
            kwargs[name] = value
        if kwargs.get("pattern") is None:
            raise MaskConfigurationError("You must provide a pattern")
        if "placeholder_char" in kwargs and kwargs["placeholder_char"] is None:
            kwargs.pop("placeholder_char")
        return cls(**kwargs)


__all__ = ["MaskOptions"]
