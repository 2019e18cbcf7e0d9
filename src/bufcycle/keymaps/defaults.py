"""Built-in buffer commands and the keys they are bound to."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from bufcycle.actions import buffer as buffer_actions

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="buffers.next",
        handler=buffer_actions.navigate_next,
        description="Go to the next buffer",
        metadata={"direction": 1},
    ),
    ActionRef(
        id="buffers.previous",
        handler=buffer_actions.navigate_previous,
        description="Go to the previous buffer",
    ),
    ActionRef(
        id="buffers.first",
        handler=buffer_actions.navigate_first,
        description="Go to the first buffer",
    ),
    ActionRef(
        id="buffers.last",
        handler=buffer_actions.navigate_last,
        description="Go to the last buffer",
    ),
    ActionRef(
        id="buffers.close",
        handler=buffer_actions.close_and_navigate,
        description="Close the buffer and show a neighbour",
    ),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding(
        id="buffers.next",
        sequence=KeySequence.parse("]b"),
        action_id="buffers.next",
        description="Next buffer",
    ),
    Binding(
        id="buffers.previous",
        sequence=KeySequence.parse("[b"),
        action_id="buffers.previous",
        description="Previous buffer",
    ),
    Binding(
        id="buffers.first",
        sequence=KeySequence.parse("[B"),
        action_id="buffers.first",
        description="First buffer",
    ),
    Binding(
        id="buffers.last",
        sequence=KeySequence.parse("]B"),
        action_id="buffers.last",
        description="Last buffer",
    ),
    Binding(
        id="buffers.close",
        sequence=KeySequence.parse("<Leader>bd"),
        action_id="buffers.close",
        description="Close buffer",
    ),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    default_sequence_timeout_ms: int | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register the buffer actions and their default key bindings."""

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    include = set(include_bindings) if include_bindings else None
    exclude = set(exclude_bindings or ())
    for binding in DEFAULT_BINDINGS:
        if include is not None and binding.id not in include:
            continue
        if binding.id in exclude:
            continue
        registry.register_binding(
            _with_timeout(binding, default_sequence_timeout_ms), replace=replace
        )

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=replace)


def _with_timeout(binding: Binding, timeout_ms: int | None) -> Binding:
    if timeout_ms is None:
        return binding
    return replace(
        binding, sequence=KeySequence(binding.sequence.strokes, timeout_ms=timeout_ms)
    )


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
