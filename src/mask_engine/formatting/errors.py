"""Construction-time failures raised while building masks."""

from __future__ import annotations


class MaskConfigurationError(ValueError):
    """Raised when a pattern or mask option cannot produce a usable mask."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


__all__ = ["MaskConfigurationError"]
