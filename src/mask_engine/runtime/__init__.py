"""Runtime services (telemetry) shared by the masking engine."""

from . import telemetry

__all__ = ["telemetry"]
