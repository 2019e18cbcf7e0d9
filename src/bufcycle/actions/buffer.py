"""Buffer cycling commands exposed to the key-binding layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bufcycle.navigation import Direction, NavigationOutcome

from .base import CommandContext, CommandResult

if TYPE_CHECKING:  # pragma: no cover
    from bufcycle.keymaps import ResolutionMatch


def _to_result(outcome: NavigationOutcome) -> CommandResult:
    if outcome.target is not None:
        message = f"{outcome.command}:{outcome.origin}->{outcome.target}"
    else:
        message = f"{outcome.command}:{outcome.origin}"
    return CommandResult(consumed=True, status=outcome.status, message=message)


def navigate_next(context: CommandContext, match: "ResolutionMatch") -> CommandResult:
    direction = match.action.metadata.get("direction", Direction.FORWARD)
    return _to_result(context.navigator.next(Direction.coerce(int(direction))))


def navigate_previous(
    context: CommandContext, match: "ResolutionMatch"
) -> CommandResult:
    del match
    return _to_result(context.navigator.previous())


def navigate_first(context: CommandContext, match: "ResolutionMatch") -> CommandResult:
    del match
    return _to_result(context.navigator.first())


def navigate_last(context: CommandContext, match: "ResolutionMatch") -> CommandResult:
    del match
    return _to_result(context.navigator.last())


def close_and_navigate(
    context: CommandContext, match: "ResolutionMatch"
) -> CommandResult:
    del match
    return _to_result(context.navigator.close())


__all__ = [
    "navigate_next",
    "navigate_previous",
    "navigate_first",
    "navigate_last",
    "close_and_navigate",
]
