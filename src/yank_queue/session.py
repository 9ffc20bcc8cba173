"""Paste-queue session: the object every host event is routed through."""

from __future__ import annotations

from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, Literal, Optional, Sequence, Tuple

from yank_queue.host.protocols import ContextProvider, CopyHistory
from yank_queue.queue import EMPTY, CursorScope, InvalidSeedError
from yank_queue.runtime import telemetry


@dataclass(frozen=True, slots=True)
class SeedMode:
    """How the global buffer is filled when a session starts."""

    count: int = 0
    values: Optional[Tuple[str, ...]] = None

    def __post_init__(self) -> None:
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            raise InvalidSeedError(f"Seed count must be an integer, got {self.count!r}")

    @classmethod
    def empty(cls) -> "SeedMode":
        return cls()

    @classmethod
    def last_n(cls, count: int) -> "SeedMode":
        return cls(count=count)

    @classmethod
    def of(cls, values: Sequence[str]) -> "SeedMode":
        return cls(values=tuple(values))

    @property
    def kind(self) -> Literal["empty", "last_n", "explicit"]:
        if self.values is not None:
            return "explicit"
        return "last_n" if self.count > 0 else "empty"


SEED_EMPTY = SeedMode.empty()


@dataclass(frozen=True, slots=True)
class RetrieveOutcome:
    """Result of one paste-next request."""

    status: Literal["delivered", "empty"]
    text: Optional[str] = None
    session_exhausted: bool = False
    extend_selection: bool = False

    @property
    def delivered(self) -> bool:
        return self.status == "delivered"


class EventBus:
    """Minimal event bus letting hosts observe session transitions."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class QueueSession:
    """Owns the queue state between activation and deactivation.

    Copies go to the head of the active insertion point's buffer, paste-next
    requests drain its tail, and the first retrieval that leaves every live
    buffer empty ends the session.
    """

    def __init__(
        self,
        *,
        history: Optional[CopyHistory] = None,
        contexts: Optional[ContextProvider] = None,
        lock: Optional[AbstractContextManager] = None,
        logger_name: str | None = None,
    ) -> None:
        self.scope = CursorScope(contexts=contexts, history=history)
        self.bus = EventBus()
        self._active = False
        self._lock: AbstractContextManager = lock if lock is not None else nullcontext()
        self._logger_name = logger_name or "yank_queue.session"
        self.logger = telemetry.get_logger(self._logger_name)

    @property
    def active(self) -> bool:
        return self._active

    def pending_count(self) -> int:
        if not self._active:
            return 0
        return self.scope.pending_count()

    def on_activate(self, seed: SeedMode = SEED_EMPTY) -> None:
        with self._lock, telemetry.span(
            "queue::activate",
            logger_name=self._logger_name,
            component="session",
            metadata={"seed": seed.kind, "count": seed.count},
        ) as handle:
            self.scope.reset(seed.values if seed.values is not None else seed.count)
            self._active = True
            pending = self.scope.pending_count()
            handle.add_metadata("pending", pending)
        telemetry.record_event(
            "queue.activate",
            data={"seed": seed.kind, "pending": pending},
            logger_name=self._logger_name,
        )
        self.bus.emit("queue.activate", {"seed": seed.kind, "pending": pending})

    def on_copy(self, text: str, replace: bool = False) -> bool:
        """Record a committed host copy; ignored while the session is inactive."""

        with self._lock:
            if not self._active:
                self.logger.debug("copy::ignored", reason="inactive", replace=replace)
                return False
            with telemetry.span(
                "queue::copy",
                logger_name=self._logger_name,
                component="session",
                metadata={"replace": replace, "length": len(text)},
            ):
                buffer = self.scope.resolve_active_buffer()
                if replace:
                    buffer.replace_head(text)
                else:
                    buffer.insert(text)
        self.bus.emit("queue.copy", {"text": text, "replace": replace})
        return True

    def on_retrieve_next(self, extend_selection: bool = False) -> RetrieveOutcome:
        with self._lock:
            if not self._active:
                self.logger.debug("retrieve::inactive")
                return RetrieveOutcome(
                    status="empty",
                    session_exhausted=True,
                    extend_selection=extend_selection,
                )
            with telemetry.span(
                "queue::retrieve",
                logger_name=self._logger_name,
                component="session",
                metadata={"extend_selection": extend_selection},
            ) as handle:
                value = self.scope.resolve_active_buffer().remove_tail()
                exhausted = self.scope.is_session_exhausted()
                handle.add_metadata("exhausted", exhausted)

            if value is EMPTY:
                outcome = RetrieveOutcome(
                    status="empty",
                    session_exhausted=exhausted,
                    extend_selection=extend_selection,
                )
                self.bus.emit("queue.empty", None)
            else:
                outcome = RetrieveOutcome(
                    status="delivered",
                    text=value,
                    session_exhausted=exhausted,
                    extend_selection=extend_selection,
                )
                self.bus.emit("queue.deliver", {"text": value})

            if exhausted:
                self._deactivate(reason="exhausted")
            return outcome

    def on_deactivate(self) -> None:
        with self._lock:
            if self._active:
                self._deactivate(reason="explicit")
            else:
                self.scope.clear()

    def on_context_removed(self, context_id: Hashable) -> None:
        with self._lock:
            if self.scope.discard_context(context_id):
                self.logger.debug("context::discarded", context=str(context_id))

    def _deactivate(self, *, reason: str) -> None:
        self.scope.clear()
        self._active = False
        telemetry.record_event(
            "queue.deactivate",
            data={"reason": reason},
            logger_name=self._logger_name,
        )
        if reason == "exhausted":
            self.bus.emit("queue.exhausted", None)
        self.bus.emit("queue.deactivate", {"reason": reason})


__all__ = [
    "EventBus",
    "QueueSession",
    "RetrieveOutcome",
    "SEED_EMPTY",
    "SeedMode",
]
