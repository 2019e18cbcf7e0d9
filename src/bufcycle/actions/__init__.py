"""Commands the key-binding layer can trigger."""

from .base import CommandContext, CommandResult
from .buffer import (
    close_and_navigate,
    navigate_first,
    navigate_last,
    navigate_next,
    navigate_previous,
)

__all__ = [
    "CommandContext",
    "CommandResult",
    "navigate_next",
    "navigate_previous",
    "navigate_first",
    "navigate_last",
    "close_and_navigate",
]
