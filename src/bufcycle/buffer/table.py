"""In-memory buffer table implementing the navigator's host protocols."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterator, List, Optional

from bufcycle.navigation.host import NO_BUFFER, BufferId, HostError
from bufcycle.runtime import telemetry


class BufferTableError(HostError):
    """Raised when the table refuses an activation or deletion."""


@dataclass(frozen=True, slots=True)
class BufferRecord:
    """One slot in the buffer table."""

    id: BufferId
    name: str = ""
    filetype: str = ""
    loaded: bool = True
    listed: bool = True
    modified: bool = False

    @property
    def display_name(self) -> str:
        return self.name or "[No Name]"


class BufferTable:
    """Owns buffer records, the current buffer, and deletion policy.

    Ids are handed out in increasing order and never reused, so deleting a
    buffer leaves a gap in ``1..highest_buffer_id()``.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._records: Dict[BufferId, BufferRecord] = {}
        self._next_id: BufferId = 1
        self._current: BufferId = NO_BUFFER
        self._logger_name = logger_name

    # -- mutation -------------------------------------------------------

    def add(
        self,
        name: str = "",
        *,
        filetype: str = "",
        loaded: bool = True,
        listed: bool = True,
        modified: bool = False,
        activate: bool = False,
    ) -> BufferRecord:
        record = BufferRecord(
            id=self._next_id,
            name=name,
            filetype=filetype,
            loaded=loaded,
            listed=listed,
            modified=modified,
        )
        self._records[record.id] = record
        self._next_id += 1
        if activate or self._current == NO_BUFFER:
            self._current = record.id
        return record

    def update(self, buffer_id: BufferId, **changes: object) -> BufferRecord:
        record = self._require(buffer_id, operation="update")
        if "id" in changes:
            raise ValueError("buffer id cannot be changed")
        updated = replace(record, **changes)
        self._records[buffer_id] = updated
        return updated

    def wipe(self, buffer_id: BufferId) -> Optional[BufferRecord]:
        """Remove ``buffer_id`` without policy checks."""

        record = self._records.pop(buffer_id, None)
        if record is not None and self._current == buffer_id:
            self._current = NO_BUFFER
        return record

    # -- BufferQuery ----------------------------------------------------

    def exists(self, buffer_id: BufferId) -> bool:
        return buffer_id in self._records

    def is_loaded(self, buffer_id: BufferId) -> bool:
        record = self._records.get(buffer_id)
        return bool(record and record.loaded)

    def is_listed(self, buffer_id: BufferId) -> bool:
        record = self._records.get(buffer_id)
        return bool(record and record.listed)

    def filetype(self, buffer_id: BufferId) -> str:
        record = self._records.get(buffer_id)
        return record.filetype if record else ""

    def current_buffer_id(self) -> BufferId:
        return self._current

    def highest_buffer_id(self) -> BufferId:
        return max(self._records, default=NO_BUFFER)

    # -- BufferActivator -----------------------------------------------

    def activate(self, buffer_id: BufferId) -> None:
        self._require(buffer_id, operation="activate")
        self._current = buffer_id

    def delete_buffer(self, buffer_id: BufferId, *, force: bool = False) -> None:
        record = self._require(buffer_id, operation="delete")
        if record.modified and not force:
            raise BufferTableError(
                f"Buffer {buffer_id} has unsaved changes",
                buffer_id=buffer_id,
                operation="delete",
            )
        if buffer_id == self._current:
            raise BufferTableError(
                f"Buffer {buffer_id} is still current",
                buffer_id=buffer_id,
                operation="delete",
            )
        del self._records[buffer_id]
        telemetry.record_event(
            "buffer.delete",
            level="debug",
            data={"buffer": buffer_id, "force": force},
            logger_name=self._logger_name,
        )

    # -- inspection -----------------------------------------------------

    def get(self, buffer_id: BufferId) -> Optional[BufferRecord]:
        return self._records.get(buffer_id)

    def current(self) -> Optional[BufferRecord]:
        return self._records.get(self._current)

    def __iter__(self) -> Iterator[BufferRecord]:
        for buffer_id in sorted(self._records):
            yield self._records[buffer_id]

    def __len__(self) -> int:
        return len(self._records)

    def listing(self, *, include_unlisted: bool = False) -> List[str]:
        lines: List[str] = []
        for record in self:
            if not record.listed and not include_unlisted:
                continue
            marker = ">" if record.id == self._current else " "
            modified = "+" if record.modified else " "
            filetype = f" [{record.filetype}]" if record.filetype else ""
            lines.append(
                f"{marker}{record.id:3d} {record.display_name}{filetype} {modified}".rstrip()
            )
        return lines

    def _require(self, buffer_id: BufferId, *, operation: str) -> BufferRecord:
        record = self._records.get(buffer_id)
        if record is None:
            raise BufferTableError(
                f"Buffer {buffer_id} does not exist",
                buffer_id=buffer_id,
                operation=operation,
            )
        return record


__all__ = ["BufferRecord", "BufferTable", "BufferTableError"]
