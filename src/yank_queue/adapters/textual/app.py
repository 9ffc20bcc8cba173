"""Executable Textual app demonstrating the paste queue."""

from __future__ import annotations

import argparse
import os
from dataclasses import replace
from typing import Hashable, Iterator, Optional, Sequence, Tuple

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Static, TextArea
from textual.widgets.text_area import Selection

from yank_queue.config import QueueSettings, load_settings
from yank_queue.host import KillRing
from yank_queue.runtime import telemetry

from .controller import QueueController, QueueUIHooks, connect_session

SAMPLE_TEXT = """\
Select some text and press F2 to copy it (Shift+F2 appends to the last copy).
Press F5 to start a queue, copy a few fragments, then press F6 to paste them
back in the order they were copied. Ctrl+U before F5 seeds the queue from
earlier copies.
"""


class TextAreaSurface:
    """Single-cursor editor surface backed by a Textual ``TextArea``."""

    def __init__(self, area: TextArea, app: App) -> None:
        self.area = area
        self.app = app

    def multi_context_active(self) -> bool:
        return False

    def current_context(self) -> Hashable:
        return self.area.id or "editor"

    def contexts(self) -> Tuple[Hashable, ...]:
        return (self.current_context(),)

    def each_context(self) -> Iterator[Hashable]:
        yield self.current_context()

    def insert_retrieved(self, text: str, *, extend_selection: bool = False) -> None:
        start = self.area.cursor_location
        result = self.area.insert(text, start)
        end = result.end_location
        if extend_selection:
            self.area.selection = Selection(end, start)
        else:
            self.area.selection = Selection(start, end)

    def message(self, text: str) -> None:
        self.app.notify(text)


class YankQueueApp(App[None]):
    """Minimal Textual UI embedding a paste queue."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        Binding("f2", "queue_copy", "Copy", priority=True),
        Binding("shift+f2", "queue_copy(True)", "Append copy", priority=True),
        Binding("ctrl+u", "bump_prefix", "Prefix", priority=True),
        Binding("f5", "queue_key('f5')", "Queue", priority=True),
        Binding("f6", "queue_key('f6')", "Paste next", priority=True),
        Binding("shift+f6", "queue_key('shift+f6')", "Paste next (point first)", priority=True),
        Binding("f7", "queue_key('f7')", "Stop", priority=True),
        Binding("f8", "queue_key('f8')", "Toggle", priority=True),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        *,
        text: str = SAMPLE_TEXT,
        settings: Optional[QueueSettings] = None,
    ) -> None:
        super().__init__()
        self._initial_text = text
        self._settings = settings or load_settings()
        self.kill_ring = KillRing()
        self.controller: QueueController | None = None
        self._queue_prefix: Optional[int] = None
        self._lighter = ""
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield TextArea(self._initial_text, id="editor")
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        area = self.query_one("#editor", TextArea)
        surface = TextAreaSurface(area, self)
        session = connect_session(surface, self.kill_ring)
        hooks = QueueUIHooks(
            update_status=self._update_status,
            log=self._log_line,
        )
        self.controller = QueueController(
            session, surface, settings=self._settings, hooks=hooks
        )
        area.focus()

    def action_queue_copy(self, append: bool = False) -> None:
        area = self.query_one("#editor", TextArea)
        text = area.selected_text
        if not text:
            self.notify("Nothing selected")
            return
        self.kill_ring.copy(text, append=append)

    def action_bump_prefix(self) -> None:
        self._queue_prefix = (self._queue_prefix or 0) + 1
        self._render_status()

    def action_queue_key(self, key: str) -> None:
        if self.controller is None:
            return
        prefix, self._queue_prefix = self._queue_prefix, None
        self.controller.handle_key(key, prefix=prefix)
        self._render_status()

    def _update_status(self, lighter: str) -> None:
        self._lighter = lighter
        self._render_status()

    def _render_status(self) -> None:
        if self._status_widget is None:
            return
        parts = [self._lighter.strip() or "queue off"]
        if self._queue_prefix is not None:
            parts.append(f"prefix {self._queue_prefix}")
        self._status_widget.update(" | ".join(parts))

    def _log_line(self, line: str) -> None:
        self.log(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the paste queue Textual demo.")
    parser.add_argument(
        "file",
        nargs="?",
        help="Optional text file to load into the editor",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Default number of earlier copies to seed a new queue with",
    )
    parser.add_argument(
        "--log-preset",
        default=os.environ.get("YANK_QUEUE_LOG_PRESET"),
        choices=("development", "production", "performance"),
        help="Telemetry preset (default: environment-driven configuration)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    else:
        # console lines would draw over the TUI
        os.environ.setdefault("YANK_QUEUE_DISABLE_CONSOLE", "1")
        telemetry.configure()
    settings = load_settings()
    if args.seed is not None:
        settings = replace(settings, default_seed=args.seed)
    text = SAMPLE_TEXT
    if args.file:
        with open(args.file, encoding="utf-8") as handle:
            text = handle.read()
    YankQueueApp(text=text, settings=settings).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
