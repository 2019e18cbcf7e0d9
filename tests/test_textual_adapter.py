from __future__ import annotations

from typing import List

from bufcycle.adapters.textual import TextualBufferAdapter, TextualUIHooks
from bufcycle.buffer import BufferTable
from bufcycle.dispatch import KeyDispatcher
from bufcycle.navigation import BufferNavigator


def make_adapter(hooks: TextualUIHooks) -> tuple[BufferTable, TextualBufferAdapter]:
    table = BufferTable()
    table.add("a.txt", filetype="text")
    table.add("NERD_tree_1", filetype="nerdtree")
    table.add("b.txt", filetype="text")
    dispatcher = KeyDispatcher(BufferNavigator(table))
    return table, TextualBufferAdapter(dispatcher, table, hooks)


def test_adapter_pushes_initial_listing() -> None:
    listings: List[List[str]] = []

    make_adapter(TextualUIHooks(update_buffers=listings.append))

    assert listings
    assert listings[0][0].startswith(">")


def test_adapter_updates_listing_and_status() -> None:
    listings: List[List[str]] = []
    statuses: List[str] = []
    pending: List[str] = []
    hooks = TextualUIHooks(
        update_buffers=listings.append,
        update_status=statuses.append,
        show_pending=pending.append,
    )
    table, adapter = make_adapter(hooks)

    adapter.handle_textual_key("]", text="]")
    adapter.handle_textual_key("b", text="b")

    assert table.current_buffer_id() == 3
    assert statuses == ["pending", "next:1->3"]
    assert pending[-2:] == ["]", ""]
    assert listings[-1][2].startswith(">")


def test_adapter_surfaces_timeouts() -> None:
    statuses: List[str] = []
    hooks = TextualUIHooks(update_buffers=lambda _: None, update_status=statuses.append)
    _, adapter = make_adapter(hooks)

    adapter.handle_textual_key("[", text="[")
    result = adapter.dispatcher.force_timeout()

    assert result is not None and result.status == "timeout"
    assert adapter.process_timeouts() is None


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    hooks = TextualUIHooks(update_buffers=lambda _: None, log=logs.append)
    _, adapter = make_adapter(hooks)

    adapter.handle_textual_key("x", text="x")

    assert any(line.startswith("key ->") for line in logs)
    assert any(line.startswith("result <-") for line in logs)
