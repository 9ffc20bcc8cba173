"""Command registry responsible for storing commands and key bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from yank_queue.runtime.telemetry import span

from .models import Command, KeyBinding, normalize_key


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    command_count: int
    binding_count: int
    keys: tuple[str, ...]


class BindingConflictError(RuntimeError):
    """Raised when a new binding conflicts with existing entries."""

    def __init__(self, binding: KeyBinding, conflicts: Iterable[KeyBinding]):
        conflicts_tuple = tuple(conflicts)
        message = (
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        super().__init__(message)
        self.binding = binding
        self.conflicts = conflicts_tuple


class CommandRegistry:
    """Owns queue commands and the keys bound to them."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._commands: Dict[str, Command] = {}
        self._bindings: Dict[str, KeyBinding] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_command(self, command_id: str) -> Command:
        try:
            return self._commands[command_id]
        except KeyError as exc:
            raise KeyError(f"Command '{command_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> KeyBinding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_command(self, command: Command, *, replace: bool = False) -> Command:
        with span(
            "commands::register_command",
            logger_name=self._logger_name,
            component="commands",
            metadata={"command_id": command.id},
        ):
            if not replace and command.id in self._commands:
                raise ValueError(f"Command '{command.id}' already registered")
            self._commands[command.id] = command
            return command

    def register_binding(
        self, binding: KeyBinding, *, replace: bool = False
    ) -> KeyBinding:
        with span(
            "commands::register_binding",
            logger_name=self._logger_name,
            component="commands",
            metadata={"binding_id": binding.id, "key": binding.key},
        ) as handle:
            if binding.command_id not in self._commands:
                handle.add_metadata("missing_command", binding.command_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown command "
                    f"'{binding.command_id}'"
                )

            conflicts = [
                existing
                for existing in self._bindings.values()
                if existing.id != binding.id and existing.overlaps(binding)
            ]
            if conflicts and not replace:
                handle.add_metadata(
                    "conflicts", ",".join(conflict.id for conflict in conflicts)
                )
                raise BindingConflictError(binding, conflicts)
            if binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            for conflict in conflicts:
                self._bindings.pop(conflict.id, None)
            self._bindings[binding.id] = binding
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[KeyBinding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is not None:
            self._revision += 1
        return binding

    def resolve(self, key: str, *, active: bool) -> Optional[Command]:
        token = normalize_key(key)
        for binding in self._bindings.values():
            if binding.key == token and binding.allows(active):
                return self._commands[binding.command_id]
        return None

    def iter_bindings(self, command_id: Optional[str] = None) -> Iterator[KeyBinding]:
        for binding in self._bindings.values():
            if command_id is None or binding.command_id == command_id:
                yield binding

    def stats(self) -> RegistryStats:
        return RegistryStats(
            command_count=len(self._commands),
            binding_count=len(self._bindings),
            keys=tuple(sorted({binding.key for binding in self._bindings.values()})),
        )


__all__ = [
    "BindingConflictError",
    "CommandRegistry",
    "RegistryStats",
]
