"""Controller that wires key presses and host copies into a QueueSession."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from yank_queue.commands import (
    Command,
    CommandContext,
    CommandRegistry,
    CommandRequest,
    CommandResult,
    load_default_commands,
)
from yank_queue.config import QueueSettings
from yank_queue.display import format_lighter
from yank_queue.host import EditorSurface, KillRing, TextSurface
from yank_queue.runtime import telemetry
from yank_queue.session import QueueSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class QueueUIHooks:
    """Callbacks invoked by the controller to update Textual widgets."""

    update_status: Callable[[str], None] = _noop
    show_message: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


def connect_session(
    surface: EditorSurface,
    history: KillRing,
    *,
    session: Optional[QueueSession] = None,
) -> QueueSession:
    """Build (or reuse) a session subscribed to ``history`` copies.

    The history merges an append-copy into its own latest entry even when the
    active queue buffer has nothing to merge into; such copies reach the
    session as plain inserts. A ``TextSurface`` also reports cursor teardown so
    per-cursor buffers are dropped together with their cursor.
    """

    session = session or QueueSession(history=history, contexts=surface)

    def forward_copy(text: str, replace: bool) -> bool:
        if replace and session.active and session.scope.resolve_active_buffer().is_empty:
            replace = False
        return session.on_copy(text, replace)

    history.subscribe(forward_copy)
    if isinstance(surface, TextSurface):
        surface.on_cursor_removed(session.on_context_removed)
    return session


class QueueController:
    """Bridges key presses, the command registry and the editor surface."""

    def __init__(
        self,
        session: QueueSession,
        surface: EditorSurface,
        *,
        registry: Optional[CommandRegistry] = None,
        settings: Optional[QueueSettings] = None,
        hooks: Optional[QueueUIHooks] = None,
    ) -> None:
        self.session = session
        self.surface = surface
        self.settings = settings or QueueSettings()
        self.hooks = hooks or QueueUIHooks()
        if registry is None:
            registry = CommandRegistry(logger_name="yank_queue.commands")
            load_default_commands(registry)
        self.registry = registry
        self.context = CommandContext(session=session, settings=self.settings)
        self.logger = telemetry.get_logger("yank_queue.controller")
        self._subscribe_events()
        self._refresh_status()

    def handle_key(self, key: str, *, prefix: Optional[int] = None) -> Optional[CommandResult]:
        """Resolve ``key`` against the registry and run the bound command."""

        command = self.registry.resolve(key, active=self.session.active)
        self._log_state("key ->", key=key, prefix=prefix)
        if command is None:
            self._log_state("miss <-", key=key)
            return None
        return self.run_command(command.id, prefix=prefix)

    def run_command(self, command_id: str, *, prefix: Optional[int] = None) -> CommandResult:
        command = self.registry.get_command(command_id)
        request = CommandRequest(prefix=prefix)
        with telemetry.span(
            "commands::execute",
            component="commands",
            metadata={"command": command.id, "per_context": command.per_context},
        ):
            if command.per_context:
                result = self._run_per_context(command, request)
            else:
                result = command(self.context, request)
        self._after_result(result)
        self._log_state(
            "result <-",
            command=command.id,
            status=result.status,
            message=result.message,
            delivered=len(result.delivered),
        )
        return result

    def _run_per_context(self, command: Command, request: CommandRequest) -> CommandResult:
        results: List[CommandResult] = []
        for _context_id in self.surface.each_context():
            result = command(self.context, request)
            for outcome in result.outcomes:
                if outcome.delivered and outcome.text is not None:
                    self.surface.insert_retrieved(
                        outcome.text, extend_selection=outcome.extend_selection
                    )
            results.append(result)
        return _merge_results(results)

    def _after_result(self, result: CommandResult) -> None:
        if result.message:
            self.surface.message(result.message)
            self.hooks.show_message(result.message)
        self._refresh_status()

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        for event in (
            "queue.activate",
            "queue.copy",
            "queue.deliver",
            "queue.empty",
            "queue.exhausted",
            "queue.deactivate",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == "queue.copy":
            self._refresh_status()

    def _refresh_status(self) -> None:
        self.hooks.update_status(format_lighter(self.session, self.settings))

    def _log_state(self, label: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [label]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        return {
            "active": self.session.active,
            "pending": self.session.pending_count(),
            "context": self.surface.current_context(),
            "multi_context": self.surface.multi_context_active(),
        }


def _merge_results(results: List[CommandResult]) -> CommandResult:
    if not results:
        return CommandResult(consumed=False, status="noop")
    outcomes = tuple(outcome for result in results for outcome in result.outcomes)
    if any(outcome.delivered for outcome in outcomes):
        return CommandResult(consumed=True, status="delivered", outcomes=outcomes)
    last = results[-1]
    return CommandResult(
        consumed=any(result.consumed for result in results),
        status=last.status,
        message=last.message,
        outcomes=outcomes,
    )


__all__ = ["QueueController", "QueueUIHooks", "connect_session"]
