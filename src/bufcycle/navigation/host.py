"""Host-facing types: buffer ids, directions, and the collaborator protocols."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Protocol, runtime_checkable

BufferId = int

NO_BUFFER: BufferId = 0


class Direction(IntEnum):
    """Scan step applied to buffer ids."""

    FORWARD = 1
    BACKWARD = -1

    @classmethod
    def coerce(cls, value: int | "Direction") -> "Direction":
        if isinstance(value, Direction):
            return value
        if value > 0:
            return cls.FORWARD
        if value < 0:
            return cls.BACKWARD
        raise ValueError("direction cannot be zero")


@dataclass(frozen=True, slots=True)
class BufferInfo:
    """Point-in-time view of a host buffer, rebuilt on every query."""

    id: BufferId
    exists: bool
    loaded: bool = False
    listed: bool = False
    filetype: str = ""


class HostError(RuntimeError):
    """Raised by hosts when an activation or deletion is refused."""

    def __init__(
        self,
        message: str,
        *,
        buffer_id: BufferId | None = None,
        operation: str | None = None,
    ) -> None:
        super().__init__(message)
        self.buffer_id = buffer_id
        self.operation = operation


@runtime_checkable
class BufferQuery(Protocol):
    """Read-only questions the navigator asks the host editor."""

    def exists(self, buffer_id: BufferId) -> bool:
        ...

    def is_loaded(self, buffer_id: BufferId) -> bool:
        ...

    def is_listed(self, buffer_id: BufferId) -> bool:
        ...

    def filetype(self, buffer_id: BufferId) -> str:
        ...

    def current_buffer_id(self) -> BufferId:
        ...

    def highest_buffer_id(self) -> BufferId:
        ...


@runtime_checkable
class BufferActivator(Protocol):
    """Side effects the navigator may request from the host editor."""

    def activate(self, buffer_id: BufferId) -> None:
        """Make ``buffer_id`` current; raise ``HostError`` if it does not exist."""
        ...

    def delete_buffer(self, buffer_id: BufferId) -> None:
        """Drop ``buffer_id``; raise ``HostError`` if the host refuses."""
        ...


__all__ = [
    "BufferId",
    "NO_BUFFER",
    "Direction",
    "BufferInfo",
    "HostError",
    "BufferQuery",
    "BufferActivator",
]
