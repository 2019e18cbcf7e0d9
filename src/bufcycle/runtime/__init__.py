"""Runtime services shared by every bufcycle component."""

from . import telemetry

__all__ = ["telemetry"]
