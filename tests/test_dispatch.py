from __future__ import annotations

from typing import List

import pytest

from bufcycle.actions import CommandResult
from bufcycle.buffer import BufferTable
from bufcycle.dispatch import KeyDispatcher, KeyInput, key_to_token
from bufcycle.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapRegistry,
    WhenClause,
    load_default_keymaps,
)
from bufcycle.navigation import BufferNavigator


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def make_table(*filetypes: str, current: int = 1) -> BufferTable:
    table = BufferTable()
    for index, filetype in enumerate(filetypes, start=1):
        table.add(f"buffer{index}", filetype=filetype)
    table.activate(current)
    return table


def make_dispatcher(table: BufferTable, **kwargs) -> KeyDispatcher:
    return KeyDispatcher(BufferNavigator(table), **kwargs)


def type_keys(dispatcher: KeyDispatcher, *keys: str) -> List[CommandResult]:
    return [dispatcher.handle_key(KeyInput(key=key, text=key)) for key in keys]


def test_next_binding_switches_buffer() -> None:
    table = make_table("text", "text", "text", current=1)
    dispatcher = make_dispatcher(table)

    pending, result = type_keys(dispatcher, "]", "b")

    assert pending.status == "pending"
    assert result.status == "activated"
    assert result.message == "next:1->2"
    assert table.current_buffer_id() == 2
    assert dispatcher.pending_tokens == ()


def test_previous_first_and_last_bindings() -> None:
    table = make_table("text", "qf", "text", "text", current=3)
    dispatcher = make_dispatcher(table)

    type_keys(dispatcher, "[", "b")
    assert table.current_buffer_id() == 1

    type_keys(dispatcher, "]", "B")
    assert table.current_buffer_id() == 4

    type_keys(dispatcher, "[", "B")
    assert table.current_buffer_id() == 1


def test_leader_close_binding() -> None:
    table = make_table("text", "text", "text", current=2)
    dispatcher = make_dispatcher(table)

    *_, result = type_keys(dispatcher, "\\", "b", "d")

    assert result.status == "closed"
    assert table.current_buffer_id() == 1
    assert table.exists(2) is False


def test_unknown_key_is_not_consumed() -> None:
    table = make_table("text", "text")
    dispatcher = make_dispatcher(table)

    result = dispatcher.handle_key(KeyInput(key="x"))

    assert result.consumed is False
    assert result.status == "miss"
    assert dispatcher.pending_tokens == ()


def test_broken_sequence_resets_pending_keys() -> None:
    table = make_table("text", "text")
    dispatcher = make_dispatcher(table)

    type_keys(dispatcher, "]", "x")
    results = type_keys(dispatcher, "]", "b")

    assert results[-1].status == "activated"


def test_pending_sequence_times_out() -> None:
    clock = FakeClock()
    table = make_table("text", "text")
    dispatcher = make_dispatcher(table, clock=clock)

    type_keys(dispatcher, "]")
    assert dispatcher.process_timeouts() is None

    clock.now += 1.5
    result = dispatcher.process_timeouts()

    assert result is not None
    assert result.status == "timeout"
    assert dispatcher.pending_tokens == ()
    assert dispatcher.handle_key(KeyInput(key="b")).status == "miss"


def test_force_timeout_without_pending_is_noop() -> None:
    dispatcher = make_dispatcher(make_table("text"))

    assert dispatcher.force_timeout() is None


def test_special_buffer_blocks_commands_through_dispatcher() -> None:
    table = make_table("text", "nerdtree", "text", current=2)
    dispatcher = make_dispatcher(table)

    *_, result = type_keys(dispatcher, "]", "b")

    assert result.status == "skipped"
    assert table.current_buffer_id() == 2


def test_flags_reflect_current_buffer() -> None:
    table = make_table("text", "help", "tagbar", current=2)
    dispatcher = make_dispatcher(table)

    assert dispatcher.flags() == {"help_buffer": True, "special_buffer": False}

    table.activate(3)
    assert dispatcher.flags() == {"help_buffer": False, "special_buffer": True}


def test_custom_registry_with_direction_metadata() -> None:
    from bufcycle.actions import navigate_next

    registry = KeymapRegistry()
    registry.register_action(
        ActionRef(id="buffers.back", handler=navigate_next, metadata={"direction": -1})
    )
    registry.register_binding(
        Binding(
            id="help.back",
            sequence=KeySequence.parse("<C-o>"),
            action_id="buffers.back",
            when=(WhenClause("help_buffer"),),
        )
    )
    table = make_table("help", "text", "help", current=3)
    dispatcher = make_dispatcher(table, keymap_registry=registry)

    result = dispatcher.handle_key(KeyInput(key="o", modifiers=("ctrl",)))

    assert result.status == "activated"
    assert table.current_buffer_id() == 1


def test_action_must_return_command_result() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    registry.register_action(ActionRef(id="broken", handler=lambda *_: "nope"))
    registry.register_binding(
        Binding(id="broken", sequence=KeySequence.parse("Q"), action_id="broken")
    )
    dispatcher = make_dispatcher(make_table("text"), keymap_registry=registry)

    with pytest.raises(TypeError):
        dispatcher.handle_key(KeyInput(key="Q"))


def test_key_to_token() -> None:
    assert key_to_token(KeyInput(key="\\")) == "LEADER"
    assert key_to_token(KeyInput(key="\\"), leader=None) == "\\"
    assert key_to_token(KeyInput(key="n", modifiers=("shift", "ctrl"))) == "CTRL+SHIFT+n"
