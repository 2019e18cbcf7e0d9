"""Buffer cycling: next/previous/first/last and close-then-navigate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from bufcycle.runtime import telemetry

from .classify import BufferClassifier
from .config import NavigatorConfig
from .host import BufferActivator, BufferId, BufferQuery, Direction, HostError
from .scan import ascending, circular_scan, descending, linear_scan

OutcomeStatus = Literal["activated", "closed", "noop", "skipped", "failed"]


@dataclass(frozen=True, slots=True)
class NavigationOutcome:
    """What a navigator command did to the host."""

    command: str
    status: OutcomeStatus
    origin: BufferId
    target: Optional[BufferId] = None
    reason: Optional[str] = None

    @property
    def changed(self) -> bool:
        return self.status in ("activated", "closed")


class BufferNavigator:
    """Selects the next eligible buffer and asks the host to switch to it.

    Every command reads the current buffer fresh from the host, performs
    one bounded scan, and issues at most one activation (plus one deletion
    for ``close``). Host failures are logged and reported as ``failed``
    outcomes; they never escape.
    """

    def __init__(
        self,
        query: BufferQuery,
        activator: Optional[BufferActivator] = None,
        *,
        config: Optional[NavigatorConfig] = None,
        classifier: Optional[BufferClassifier] = None,
        logger_name: str | None = None,
    ) -> None:
        if activator is None:
            if not isinstance(query, BufferActivator):
                raise TypeError("activator is required when query cannot activate")
            activator = query
        self.query = query
        self.activator = activator
        self.classifier = classifier or BufferClassifier(query, config)
        self._logger_name = logger_name

    @property
    def config(self) -> NavigatorConfig:
        return self.classifier.config

    def next(self, direction: Direction | int = Direction.FORWARD) -> NavigationOutcome:
        """Activate the next selectable buffer in ``direction``.

        A lone selectable buffer is never re-activated; the outcome is ``noop``.
        """

        step = Direction.coerce(direction)
        command = "next" if step is Direction.FORWARD else "previous"
        with self._span(command) as handle:
            current = self.query.current_buffer_id()
            if self.classifier.is_skippable(current):
                return self._finish(handle, NavigationOutcome(command, "skipped", current))
            want_help = self.classifier.is_help(current)
            target = circular_scan(
                current,
                step,
                self.query.highest_buffer_id(),
                lambda candidate: self.classifier.is_selectable(candidate, want_help),
            )
            return self._finish(handle, self._switch(command, current, target))

    def previous(self) -> NavigationOutcome:
        return self.next(Direction.BACKWARD)

    def first(self) -> NavigationOutcome:
        return self._edge("first", ascending)

    def last(self) -> NavigationOutcome:
        return self._edge("last", descending)

    def close(self) -> NavigationOutcome:
        with self._span("close") as handle:
            current = self.query.current_buffer_id()
            if self.classifier.is_skippable(current):
                return self._finish(handle, NavigationOutcome("close", "skipped", current))

            step = Direction.BACKWARD if current > 1 else Direction.FORWARD
            want_help = self.classifier.is_help(current)
            replacement = circular_scan(
                current,
                step,
                self.query.highest_buffer_id(),
                lambda candidate: candidate != current
                and self.classifier.is_selectable(candidate, want_help),
            )
            if replacement is None:
                return self._finish(
                    handle,
                    NavigationOutcome("close", "noop", current, reason="last_buffer"),
                )

            try:
                self.activator.activate(replacement)
            except HostError as exc:
                return self._finish(
                    handle, self._host_failure("close", current, replacement, exc)
                )

            try:
                self.activator.delete_buffer(current)
            except HostError as exc:
                outcome = self._host_failure("close", current, replacement, exc)
                self._restore(current)
                return self._finish(handle, outcome)

            telemetry.record_event(
                "navigator.close",
                data={"closed": current, "replacement": replacement},
                logger_name=self._logger_name,
            )
            return self._finish(
                handle, NavigationOutcome("close", "closed", current, replacement)
            )

    def _edge(self, command: str, order) -> NavigationOutcome:
        with self._span(command) as handle:
            current = self.query.current_buffer_id()
            if self.classifier.is_skippable(current):
                return self._finish(handle, NavigationOutcome(command, "skipped", current))
            want_help = self.classifier.is_help(current)
            target = linear_scan(
                order(self.query.highest_buffer_id()),
                lambda candidate: self.classifier.is_selectable(candidate, want_help),
            )
            return self._finish(handle, self._switch(command, current, target))

    def _switch(
        self, command: str, current: BufferId, target: Optional[BufferId]
    ) -> NavigationOutcome:
        if target is None:
            return NavigationOutcome(command, "noop", current, reason="no_candidate")
        try:
            self.activator.activate(target)
        except HostError as exc:
            return self._host_failure(command, current, target, exc)
        telemetry.record_event(
            "navigator.activate",
            level="debug",
            data={"command": command, "from": current, "to": target},
            logger_name=self._logger_name,
        )
        return NavigationOutcome(command, "activated", current, target)

    def _restore(self, origin: BufferId) -> None:
        """Make ``origin`` current again after a refused close."""

        try:
            self.activator.activate(origin)
        except HostError as exc:
            telemetry.record_event(
                "navigator.restore_failed",
                level="error",
                data={"origin": origin, "error": str(exc)},
                logger_name=self._logger_name,
            )

    def _host_failure(
        self, command: str, current: BufferId, target: BufferId, exc: HostError
    ) -> NavigationOutcome:
        telemetry.record_event(
            "navigator.host_error",
            level="warning",
            data={
                "command": command,
                "origin": current,
                "target": target,
                "target_filetype": self.classifier.info(target).filetype,
                "operation": exc.operation or "?",
                "error": str(exc),
            },
            logger_name=self._logger_name,
        )
        return NavigationOutcome(command, "failed", current, target, reason=str(exc))

    def _span(self, command: str):
        return telemetry.span(
            f"navigator::{command}",
            logger_name=self._logger_name,
            component="navigator",
        )

    @staticmethod
    def _finish(
        handle: telemetry.SpanHandle, outcome: NavigationOutcome
    ) -> NavigationOutcome:
        handle.add_metadata("status", outcome.status)
        if outcome.target is not None:
            handle.add_metadata("target", outcome.target)
        return outcome


__all__ = ["BufferNavigator", "NavigationOutcome"]
