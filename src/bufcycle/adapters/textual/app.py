"""Executable Textual demo for the buffer cycling commands."""

from __future__ import annotations

import argparse
from typing import List, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use bufcycle.adapters.textual.app"
    ) from exc

from bufcycle.buffer import BufferTable
from bufcycle.dispatch import KeyDispatcher
from bufcycle.navigation import BufferNavigator, NavigatorConfig
from bufcycle.runtime import telemetry

from .controller import TextualBufferAdapter, TextualUIHooks

DEMO_BUFFERS: tuple[tuple[str, str], ...] = (
    ("README.md", "markdown"),
    ("NERD_tree_1", "nerdtree"),
    ("main.py", "python"),
    ("help.txt", "help"),
    ("__Tagbar__", "tagbar"),
    ("config.toml", "toml"),
    ("options.txt", "help"),
    ("[Quickfix List]", "qf"),
    ("notes.txt", "text"),
)


def create_demo_table() -> BufferTable:
    table = BufferTable(logger_name="bufcycle.demo")
    for name, filetype in DEMO_BUFFERS:
        table.add(name, filetype=filetype, modified=name == "notes.txt")
    return table


class BufferCycleApp(App[None]):
    """Buffer list driven by ``]b``/``[b``/``[B``/``]B``/``\\bd``."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-list {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#pending-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, config: Optional[NavigatorConfig] = None) -> None:
        super().__init__()
        self._config = config
        self.table: BufferTable | None = None
        self.adapter: TextualBufferAdapter | None = None
        self._list_widget: Static | None = None
        self._status_widget: Static | None = None
        self._pending_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._list_widget = Static("", id="buffer-list")
        self._status_widget = Static("", id="status-line")
        self._pending_widget = Static("", id="pending-line")
        yield self._list_widget
        yield self._status_widget
        yield self._pending_widget
        yield Footer()

    def on_mount(self) -> None:
        self.table = create_demo_table()
        navigator = BufferNavigator(self.table, config=self._config)
        hooks = TextualUIHooks(
            update_buffers=self._update_buffers,
            update_status=self._update_status,
            show_pending=self._show_pending,
            log=self.log.debug,
        )
        self.adapter = TextualBufferAdapter(KeyDispatcher(navigator), self.table, hooks)
        self.set_interval(0.1, self._process_timeouts)

    def _process_timeouts(self) -> None:
        if self.adapter:
            self.adapter.process_timeouts()

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def _update_buffers(self, lines: List[str]) -> None:
        if self._list_widget:
            self._list_widget.update("\n".join(lines) or "(no buffers)")

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _show_pending(self, pending: str) -> None:
        if self._pending_widget:
            self._pending_widget.update(pending)

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        if event.key in {"ctrl+c", "ctrl+q"}:
            return None
        if event.character and event.is_printable:
            return (event.character, event.character, ())
        if event.key.startswith("ctrl+"):
            return (event.key.split("+", 1)[1], None, ("CTRL",))
        if event.key == "escape":
            return ("ESC", None, ())
        return (event.key.upper(), None, ())


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the bufcycle Textual demo.")
    parser.add_argument(
        "--skip",
        action="append",
        default=[],
        metavar="FILETYPE",
        help="Extra filetype to treat as a plugin window (repeatable)",
    )
    parser.add_argument(
        "--log-preset",
        choices=sorted(telemetry.PRESETS),
        default=None,
        help="telelog preset to use instead of the BUFCYCLE_* environment",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    config = NavigatorConfig.from_env().with_skip_filetypes(*args.skip)
    BufferCycleApp(config=config).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
