"""Built-in commands and the keys they are bound to out of the box."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Mapping, Sequence

from . import handlers
from .models import Command, KeyBinding
from .registry import CommandRegistry

DEFAULT_COMMANDS: tuple[Command, ...] = (
    Command(
        id="queue.start",
        handler=handlers.start_queue,
        description="Start a paste queue (prefix: seed from the last N copies)",
    ),
    Command(
        id="queue.paste_next",
        handler=handlers.paste_next,
        description="Paste the oldest queued entry",
        per_context=True,
    ),
    Command(
        id="queue.paste_next_extend",
        handler=handlers.paste_next_extend,
        description="Paste the oldest queued entry, leaving point before it",
        per_context=True,
    ),
    Command(
        id="queue.stop",
        handler=handlers.stop_queue,
        description="Discard the queue",
    ),
    Command(
        id="queue.toggle",
        handler=handlers.toggle_queue,
        description="Start or discard the queue",
    ),
)

DEFAULT_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(
        id="start",
        key="f5",
        command_id="queue.start",
        when_active=False,
        description="Start the queue",
    ),
    KeyBinding(
        id="restart",
        key="f5",
        command_id="queue.start",
        when_active=True,
        description="Restart the queue",
    ),
    KeyBinding(
        id="paste_next",
        key="f6",
        command_id="queue.paste_next",
        when_active=True,
        description="Paste next",
    ),
    KeyBinding(
        id="paste_next_extend",
        key="shift+f6",
        command_id="queue.paste_next_extend",
        when_active=True,
        description="Paste next, point before",
    ),
    KeyBinding(
        id="stop",
        key="f7",
        command_id="queue.stop",
        when_active=True,
        description="Stop the queue",
    ),
    KeyBinding(
        id="toggle",
        key="f8",
        command_id="queue.toggle",
        description="Toggle the queue",
    ),
)


def load_default_commands(
    registry: CommandRegistry,
    *,
    replace: bool = False,
    include_commands: Sequence[str] | None = None,
    exclude_commands: Sequence[str] | None = None,
    key_overrides: Mapping[str, str] | None = None,
    extra_bindings: Iterable[KeyBinding] | None = None,
) -> None:
    """Register built-in commands and their bindings.

    ``key_overrides`` maps a default binding id to a different key. Bindings
    whose command is filtered out are skipped.
    """

    include = set(include_commands) if include_commands else None
    exclude = set(exclude_commands or ())
    overrides = dict(key_overrides or {})

    registered: set[str] = set()
    for command in DEFAULT_COMMANDS:
        if include is not None and command.id not in include:
            continue
        if command.id in exclude:
            continue
        registry.register_command(command, replace=replace)
        registered.add(command.id)

    unknown = set(overrides) - {binding.id for binding in DEFAULT_BINDINGS}
    if unknown:
        raise KeyError(f"Unknown default bindings: {sorted(unknown)}")

    for binding in DEFAULT_BINDINGS:
        if binding.command_id not in registered:
            continue
        if binding.id in overrides:
            binding = _rebind(binding, overrides[binding.id])
        registry.register_binding(binding, replace=replace)

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=replace)


def _rebind(binding: KeyBinding, key: str) -> KeyBinding:
    return replace(binding, key=key)


__all__ = ["DEFAULT_BINDINGS", "DEFAULT_COMMANDS", "load_default_commands"]
