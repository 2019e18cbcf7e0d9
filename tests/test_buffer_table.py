from __future__ import annotations

import pytest

from bufcycle.buffer import BufferTable, BufferTableError
from bufcycle.navigation import BufferActivator, BufferQuery, HostError


def make_table() -> BufferTable:
    table = BufferTable()
    table.add("a.txt", filetype="text")
    table.add("b.txt", filetype="text")
    table.add("c.txt", filetype="text")
    return table


def test_table_satisfies_host_protocols() -> None:
    table = BufferTable()

    assert isinstance(table, BufferQuery)
    assert isinstance(table, BufferActivator)


def test_first_buffer_becomes_current() -> None:
    table = make_table()

    assert table.current_buffer_id() == 1
    assert table.highest_buffer_id() == 3


def test_ids_are_not_reused_after_wipe() -> None:
    table = make_table()
    table.wipe(3)

    record = table.add("d.txt")

    assert record.id == 4
    assert table.exists(3) is False
    assert table.highest_buffer_id() == 4


def test_empty_table_has_no_current_buffer() -> None:
    table = BufferTable()

    assert table.current_buffer_id() == 0
    assert table.highest_buffer_id() == 0
    assert table.filetype(1) == ""


def test_activate_missing_buffer_raises_host_error() -> None:
    table = make_table()

    with pytest.raises(HostError) as info:
        table.activate(9)

    assert info.value.buffer_id == 9
    assert info.value.operation == "activate"


def test_delete_refuses_modified_buffer_unless_forced() -> None:
    table = make_table()
    table.update(2, modified=True)

    with pytest.raises(BufferTableError):
        table.delete_buffer(2)

    table.delete_buffer(2, force=True)
    assert table.exists(2) is False


def test_delete_refuses_current_buffer() -> None:
    table = make_table()

    with pytest.raises(BufferTableError):
        table.delete_buffer(1)

    table.activate(2)
    table.delete_buffer(1)
    assert table.exists(1) is False


def test_update_cannot_change_id() -> None:
    table = make_table()

    with pytest.raises(ValueError):
        table.update(1, id=5)


def test_listing_marks_current_and_modified() -> None:
    table = make_table()
    table.add("help.txt", filetype="help", modified=True)
    table.add("hidden", listed=False)
    table.activate(2)

    lines = table.listing()

    assert lines == [
        "   1 a.txt [text]",
        ">  2 b.txt [text]",
        "   3 c.txt [text]",
        "   4 help.txt [help] +",
    ]
    assert len(table.listing(include_unlisted=True)) == 5
