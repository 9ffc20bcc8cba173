"""Dataclasses describing queue commands, key bindings and their results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple

from yank_queue.config import QueueSettings
from yank_queue.session import QueueSession, RetrieveOutcome


def normalize_key(key: str) -> str:
    """Lower-case ``key`` and sort its modifiers: ``"Shift+Ctrl+Y"`` -> ``"ctrl+shift+y"``."""

    parts = [part.strip().lower() for part in key.split("+") if part.strip()]
    if not parts:
        raise ValueError("key cannot be empty")
    *modifiers, name = parts
    ordered = sorted(dict.fromkeys(modifiers))
    return "+".join([*ordered, name])


@dataclass(slots=True)
class CommandContext:
    """Shared services every command handler can access."""

    session: QueueSession
    settings: QueueSettings = field(default_factory=QueueSettings)


@dataclass(frozen=True, slots=True)
class CommandRequest:
    prefix: Optional[int] = None
    extend_selection: bool = False


@dataclass(slots=True)
class CommandResult:
    """Result returned from a command handler."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    outcomes: Tuple[RetrieveOutcome, ...] = ()

    @property
    def delivered(self) -> Tuple[str, ...]:
        return tuple(
            outcome.text
            for outcome in self.outcomes
            if outcome.delivered and outcome.text is not None
        )


CommandHandler = Callable[[CommandContext, CommandRequest], CommandResult]


@dataclass(frozen=True, slots=True)
class Command:
    """Named handler executed through key bindings.

    ``per_context`` commands run once for every insertion point of the editor
    surface; the others run once globally.
    """

    id: str
    handler: CommandHandler
    description: str = ""
    per_context: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Command id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")

    def __call__(self, context: CommandContext, request: CommandRequest) -> CommandResult:
        return self.handler(context, request)


@dataclass(frozen=True, slots=True)
class KeyBinding:
    """Associates a key with a command, optionally gated on the session state.

    ``when_active`` of ``None`` applies in both states.
    """

    id: str
    key: str
    command_id: str
    when_active: Optional[bool] = None
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.command_id:
            raise ValueError("binding command_id cannot be empty")
        object.__setattr__(self, "key", normalize_key(self.key))

    def allows(self, active: bool) -> bool:
        return self.when_active is None or self.when_active is active

    def overlaps(self, other: "KeyBinding") -> bool:
        if self.key != other.key:
            return False
        if self.when_active is None or other.when_active is None:
            return True
        return self.when_active is other.when_active


__all__ = [
    "Command",
    "CommandContext",
    "CommandHandler",
    "CommandRequest",
    "CommandResult",
    "KeyBinding",
    "normalize_key",
]
