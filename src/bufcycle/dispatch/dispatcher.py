"""Feeds key presses through the keymap resolver into buffer commands."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from bufcycle.actions import CommandContext, CommandResult
from bufcycle.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from bufcycle.navigation import BufferNavigator
from bufcycle.runtime import telemetry

from .keys import KeyInput, key_to_token


@dataclass
class PendingTimeout:
    deadline: float
    timeout_ms: int


class KeyDispatcher:
    """Accumulates key tokens and runs the command they resolve to."""

    def __init__(
        self,
        navigator: BufferNavigator,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
        leader: str | None = "\\",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.context = CommandContext(navigator=navigator)
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="bufcycle.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="bufcycle.keymaps"
        )
        self.leader = leader
        self._clock = clock
        self._tokens: list[str] = []
        self._pending: Optional[PendingTimeout] = None

    @property
    def navigator(self) -> BufferNavigator:
        return self.context.navigator

    @property
    def pending_tokens(self) -> tuple[str, ...]:
        return tuple(self._tokens)

    def flags(self) -> Dict[str, bool]:
        """Keymap ``when`` flags describing the current buffer."""

        navigator = self.context.navigator
        current = navigator.query.current_buffer_id()
        return {
            "help_buffer": navigator.classifier.is_help(current),
            "special_buffer": navigator.classifier.is_skippable(current),
        }

    def handle_key(self, key: KeyInput) -> CommandResult:
        self._tokens.append(key_to_token(key, leader=self.leader))
        with telemetry.span(
            "dispatch::key",
            component="dispatch",
            metadata={"key": key.key, "pending": len(self._tokens)},
        ) as handle:
            resolution = self.keymap_resolver.resolve(
                self._tokens, context=self.flags()
            )
            handle.add_metadata("status", resolution.status)

            if resolution.status == "pending":
                timeout_ms = resolution.timeout_ms or 1000
                self._pending = PendingTimeout(
                    deadline=self._clock() + timeout_ms / 1000.0,
                    timeout_ms=timeout_ms,
                )
                return CommandResult(consumed=True, status="pending")

            self.reset()
            if resolution.status == "miss" or resolution.match is None:
                return CommandResult(consumed=False, status="miss")

            match = resolution.match
            handle.add_metadata("action", match.action.id)
            result = match.action(self.context, match)
            if not isinstance(result, CommandResult):
                raise TypeError(
                    f"Action '{match.action.id}' returned {type(result).__name__}"
                )
            return result

    def process_timeouts(self) -> Optional[CommandResult]:
        if self._pending is None or self._pending.deadline > self._clock():
            return None
        return self.force_timeout()

    def force_timeout(self) -> Optional[CommandResult]:
        if self._pending is None:
            return None
        telemetry.record_event(
            "dispatch.timeout",
            level="debug",
            data={"tokens": " ".join(self._tokens)},
        )
        self.reset()
        return CommandResult(consumed=False, status="timeout")

    def reset(self) -> None:
        self._tokens.clear()
        self._pending = None


__all__ = ["KeyDispatcher", "PendingTimeout"]
