from __future__ import annotations

from typing import Callable, Iterable, List, Tuple

import pytest

from bufcycle.buffer import BufferTable
from bufcycle.navigation import HostError


class RecordingTable(BufferTable):
    """BufferTable that remembers every side effect and can refuse them."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: List[Tuple[str, int]] = []
        self.probes: List[int] = []
        self.fail_activate: set[int] = set()
        self.fail_delete: set[int] = set()

    def exists(self, buffer_id: int) -> bool:
        self.probes.append(buffer_id)
        return super().exists(buffer_id)

    def activate(self, buffer_id: int) -> None:
        self.calls.append(("activate", buffer_id))
        if buffer_id in self.fail_activate:
            raise HostError("refused", buffer_id=buffer_id, operation="activate")
        super().activate(buffer_id)

    def delete_buffer(self, buffer_id: int, *, force: bool = False) -> None:
        self.calls.append(("delete", buffer_id))
        if buffer_id in self.fail_delete:
            raise HostError("refused", buffer_id=buffer_id, operation="delete")
        super().delete_buffer(buffer_id, force=force)


@pytest.fixture
def make_table() -> Callable[..., RecordingTable]:
    def build(filetypes: Iterable[str], *, current: int = 1) -> RecordingTable:
        table = RecordingTable()
        for index, filetype in enumerate(filetypes, start=1):
            table.add(f"buffer{index}", filetype=filetype)
        table.activate(current)
        table.calls.clear()
        table.probes.clear()
        return table

    return build


class StrictHost:
    """Host whose property queries raise for ids it does not hold."""

    def __init__(self, filetypes: dict[int, str], *, current: int = 0) -> None:
        self.filetypes = dict(filetypes)
        self.current = current
        self.queries: List[Tuple[str, int]] = []
        self.calls: List[Tuple[str, int]] = []

    def _require(self, name: str, buffer_id: int) -> None:
        self.queries.append((name, buffer_id))
        if buffer_id not in self.filetypes:
            raise HostError(f"no buffer {buffer_id}", buffer_id=buffer_id)

    def exists(self, buffer_id: int) -> bool:
        self.queries.append(("exists", buffer_id))
        return buffer_id in self.filetypes

    def is_loaded(self, buffer_id: int) -> bool:
        self._require("is_loaded", buffer_id)
        return True

    def is_listed(self, buffer_id: int) -> bool:
        self._require("is_listed", buffer_id)
        return True

    def filetype(self, buffer_id: int) -> str:
        self._require("filetype", buffer_id)
        return self.filetypes[buffer_id]

    def current_buffer_id(self) -> int:
        return self.current

    def highest_buffer_id(self) -> int:
        return max(self.filetypes, default=0)

    def activate(self, buffer_id: int) -> None:
        self._require("activate", buffer_id)
        self.calls.append(("activate", buffer_id))
        self.current = buffer_id

    def delete_buffer(self, buffer_id: int) -> None:
        self._require("delete", buffer_id)
        self.calls.append(("delete", buffer_id))
        del self.filetypes[buffer_id]


@pytest.fixture
def make_strict_host() -> Callable[..., StrictHost]:
    return StrictHost
