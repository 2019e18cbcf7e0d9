"""Key events as delivered by host adapters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

LEADER_TOKEN = "LEADER"


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to the dispatcher."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


def key_to_token(key: KeyInput, *, leader: str | None = "\\") -> str:
    if key.modifiers:
        modifier = "+".join(sorted(m.upper() for m in key.modifiers))
        return f"{modifier}+{key.key}"
    if leader is not None and key.key == leader:
        return LEADER_TOKEN
    return key.key


__all__ = ["KeyInput", "key_to_token", "LEADER_TOKEN"]
