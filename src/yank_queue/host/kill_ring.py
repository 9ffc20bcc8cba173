"""Copy history that announces every committed copy to its listeners."""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence

CopyListener = Callable[[str, bool], object]


class KillRing:
    """Tracks copied text, oldest first.

    Consecutive copies can accumulate into the latest entry (``append=True``).
    Listeners receive ``(stored_text, replace)`` synchronously, once per
    commit, after the ring has been updated; ``replace`` is true when the
    latest entry was rewritten instead of a new one being added.
    """

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._entries: List[str] = list(entries)
        self._listeners: List[CopyListener] = []

    def subscribe(self, listener: CopyListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def copy(self, text: str, *, append: bool = False, prepend: bool = False) -> str:
        """Commit ``text`` and return the string actually stored.

        Args:
            text: The copied text.
            append: Merge with the latest entry instead of adding a new one.
            prepend: When merging, put ``text`` before the latest entry.
        """

        replace = append and bool(self._entries)
        if replace:
            latest = self._entries[-1]
            stored = text + latest if prepend else latest + text
            self._entries[-1] = stored
        else:
            stored = text
            self._entries.append(stored)

        for listener in tuple(self._listeners):
            listener(stored, replace)
        return stored

    def recent(self, count: int) -> Sequence[str]:
        if count <= 0:
            return ()
        return tuple(reversed(self._entries[-count:]))

    def latest(self) -> Optional[str]:
        return self._entries[-1] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["CopyListener", "KillRing"]
