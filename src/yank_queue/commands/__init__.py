"""Queue commands, key bindings, and the registry resolving one to the other."""

from .models import (
    Command,
    CommandContext,
    CommandRequest,
    CommandResult,
    KeyBinding,
    normalize_key,
)
from .registry import BindingConflictError, CommandRegistry, RegistryStats
from .defaults import DEFAULT_BINDINGS, DEFAULT_COMMANDS, load_default_commands

__all__ = [
    "Command",
    "CommandContext",
    "CommandRequest",
    "CommandResult",
    "KeyBinding",
    "normalize_key",
    "BindingConflictError",
    "CommandRegistry",
    "RegistryStats",
    "DEFAULT_BINDINGS",
    "DEFAULT_COMMANDS",
    "load_default_commands",
]
