"""Context and result types shared by command handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from bufcycle.navigation import BufferNavigator


@dataclass(slots=True)
class CommandResult:
    """Returned by every command handler."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class CommandContext:
    """Services a command handler may use."""

    navigator: BufferNavigator
    extras: Dict[str, object] = field(default_factory=dict)


__all__ = ["CommandContext", "CommandResult"]
