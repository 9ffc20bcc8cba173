"""Ordered copy buffers and per-cursor routing."""

from .errors import InvalidSeedError, QueueProtocolError, ReplaceWithoutEntryError
from .ordered import EMPTY, OrderedBuffer
from .scope import CursorScope, Seed

__all__ = [
    "EMPTY",
    "OrderedBuffer",
    "CursorScope",
    "Seed",
    "QueueProtocolError",
    "ReplaceWithoutEntryError",
    "InvalidSeedError",
]
