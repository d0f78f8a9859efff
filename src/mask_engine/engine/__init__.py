"""Mask engine and its construction options."""

from .mask import InputMask
from .options import MaskOptions
from .state import MaskState, StateSnapshot

__all__ = ["InputMask", "MaskOptions", "MaskState", "StateSnapshot"]
