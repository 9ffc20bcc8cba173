"""First-in/first-out text buffer fed at the head and drained from the tail."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, Optional, Sequence

from .errors import ReplaceWithoutEntryError

EMPTY = None


class OrderedBuffer:
    """Copied strings in copy order.

    The head is the most recent insert and the tail is the oldest entry that
    has not been handed out yet. ``remove_tail`` always takes the tail, so
    entries come back in the order they were copied.
    """

    __slots__ = ("_entries",)

    def __init__(self, values: Iterable[str] = ()) -> None:
        # index 0 is the tail, index -1 the head
        self._entries: Deque[str] = deque()
        self.extend(values)

    def insert(self, value: str) -> None:
        self._entries.append(value)

    def extend(self, values: Iterable[str]) -> None:
        """Insert ``values`` oldest first, so the last one becomes the head."""

        for value in values:
            self.insert(value)

    def replace_head(self, value: str) -> None:
        if not self._entries:
            raise ReplaceWithoutEntryError(
                "replace_head called on an empty buffer", value=value
            )
        self._entries[-1] = value

    def remove_tail(self) -> Optional[str]:
        """Pop the oldest entry, or return ``EMPTY`` when nothing is queued."""

        if not self._entries:
            return EMPTY
        return self._entries.popleft()

    def peek_head(self) -> Optional[str]:
        return self._entries[-1] if self._entries else EMPTY

    def peek_tail(self) -> Optional[str]:
        return self._entries[0] if self._entries else EMPTY

    def clear(self) -> None:
        self._entries.clear()

    def snapshot(self) -> Sequence[str]:
        """Return the queued entries in retrieval order."""

        return tuple(self._entries)

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __repr__(self) -> str:
        return f"OrderedBuffer({list(self._entries)!r})"


__all__ = ["EMPTY", "OrderedBuffer"]
