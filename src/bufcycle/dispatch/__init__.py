"""Key dispatch from host key events to buffer commands."""

from .dispatcher import KeyDispatcher, PendingTimeout
from .keys import LEADER_TOKEN, KeyInput, key_to_token

__all__ = [
    "KeyDispatcher",
    "KeyInput",
    "LEADER_TOKEN",
    "PendingTimeout",
    "key_to_token",
]
