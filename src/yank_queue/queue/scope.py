"""Routing of queue operations to the buffer of the active insertion point."""

from __future__ import annotations

from typing import Dict, Hashable, Iterable, Optional, Sequence, Union

from yank_queue.host.protocols import ContextProvider, CopyHistory

from .errors import InvalidSeedError
from .ordered import OrderedBuffer

Seed = Union[int, Sequence[str]]


class CursorScope:
    """One global buffer plus a private buffer per insertion point.

    When no context provider is attached, or the provider reports a single
    insertion point, every operation goes to the global buffer.
    """

    def __init__(
        self,
        *,
        contexts: Optional[ContextProvider] = None,
        history: Optional[CopyHistory] = None,
    ) -> None:
        self.contexts = contexts
        self.history = history
        self.global_buffer = OrderedBuffer()
        self._per_context: Dict[Hashable, OrderedBuffer] = {}

    @property
    def multi_context(self) -> bool:
        return self.contexts is not None and self.contexts.multi_context_active()

    def resolve_active_buffer(self) -> OrderedBuffer:
        if not self.multi_context:
            return self.global_buffer
        assert self.contexts is not None
        context_id = self.contexts.current_context()
        buffer = self._per_context.get(context_id)
        if buffer is None:
            buffer = self._per_context[context_id] = OrderedBuffer()
        return buffer

    def buffer_for(self, context_id: Hashable) -> Optional[OrderedBuffer]:
        return self._per_context.get(context_id)

    def is_session_exhausted(self) -> bool:
        return all(buffer.is_empty for buffer in self._live_buffers())

    def pending_count(self) -> int:
        return sum(len(buffer) for buffer in self._live_buffers())

    def reset(self, seed: Seed = 0) -> None:
        """Clear every context and reseed the global buffer.

        ``seed`` is either an explicit sequence of strings, oldest first, or a
        count of entries to take from the host copy history.
        """

        self._per_context.clear()
        self.global_buffer = OrderedBuffer(self._seed_values(seed))

    def discard_context(self, context_id: Hashable) -> bool:
        return self._per_context.pop(context_id, None) is not None

    def clear(self) -> None:
        self._per_context.clear()
        self.global_buffer.clear()

    def _live_buffers(self) -> Iterable[OrderedBuffer]:
        if not self.multi_context:
            return (self.global_buffer,)
        assert self.contexts is not None
        return tuple(
            self._per_context[context_id]
            for context_id in self.contexts.contexts()
            if context_id in self._per_context
        )

    def _seed_values(self, seed: Seed) -> Sequence[str]:
        if isinstance(seed, bool):
            raise InvalidSeedError(f"Unsupported seed {seed!r}")
        if isinstance(seed, int):
            if seed <= 0:
                return ()
            if self.history is None:
                raise InvalidSeedError("Seeding by count needs a copy history")
            # history is most recent first; the buffer wants oldest first
            return tuple(reversed(tuple(self.history.recent(seed))))
        if isinstance(seed, str):
            raise InvalidSeedError("Seed with a sequence of strings, not a string")
        values = tuple(seed)
        for value in values:
            if not isinstance(value, str):
                raise InvalidSeedError(f"Seed entries must be strings, got {value!r}")
        return values


__all__ = ["CursorScope", "Seed"]
