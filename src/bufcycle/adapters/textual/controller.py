"""Textual-facing controller wiring key events to the buffer commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from bufcycle.actions import CommandResult
from bufcycle.buffer import BufferTable
from bufcycle.dispatch import KeyDispatcher, KeyInput


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the controller uses to refresh Textual widgets."""

    update_buffers: Callable[[List[str]], None]
    update_status: Callable[[str], None] = _noop
    show_pending: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualBufferAdapter:
    """Bridges Textual key events, the dispatcher and the buffer table."""

    def __init__(
        self, dispatcher: KeyDispatcher, table: BufferTable, hooks: TextualUIHooks
    ) -> None:
        self.dispatcher = dispatcher
        self.table = table
        self.hooks = hooks
        self._refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> CommandResult:
        """Translate a Textual key into a ``KeyInput`` and dispatch it."""

        normalized = tuple(str(mod).upper() for mod in modifiers)
        self.hooks.log(f"key -> key={key!r} mods={normalized!r}")
        result = self.dispatcher.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized)
        )
        self.hooks.log(
            f"result <- status={result.status!r} message={result.message!r}"
        )
        self._after_result(result)
        return result

    def process_timeouts(self) -> Optional[CommandResult]:
        result = self.dispatcher.process_timeouts()
        if result is not None:
            self.hooks.log(f"timeout -> status={result.status!r}")
            self._after_result(result)
        return result

    def _after_result(self, result: CommandResult) -> None:
        self.hooks.update_status(result.message or result.status)
        self._refresh()

    def _refresh(self) -> None:
        self.hooks.update_buffers(self.table.listing())
        self.hooks.show_pending(" ".join(self.dispatcher.pending_tokens))


__all__ = ["TextualBufferAdapter", "TextualUIHooks"]
