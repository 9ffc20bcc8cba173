"""Boundary protocols describing what the queue needs from its host editor."""

from __future__ import annotations

from typing import Hashable, Iterable, Iterator, Protocol, Sequence


class CopyHistory(Protocol):
    """The host's existing record of copied text."""

    def recent(self, count: int) -> Sequence[str]:
        """Return up to ``count`` entries, most recent first."""
        ...


class ContextProvider(Protocol):
    """Multi-cursor subsystem exposing independent insertion points."""

    def multi_context_active(self) -> bool:
        """Return whether more than one insertion point is being edited."""
        ...

    def current_context(self) -> Hashable:
        """Return the stable identity of the insertion point being served."""
        ...

    def contexts(self) -> Iterable[Hashable]:
        """Return the identities of every live insertion point."""
        ...


class EditorSurface(ContextProvider, Protocol):
    """Editor-side operations the controller drives after a retrieval."""

    def each_context(self) -> Iterator[Hashable]:
        """Make every live insertion point current in turn."""
        ...

    def insert_retrieved(self, text: str, *, extend_selection: bool = False) -> None:
        """Insert ``text`` at point.

        By default the anchor stays at the start of the inserted text and the
        point ends up after it; ``extend_selection`` swaps the two.
        """
        ...

    def message(self, text: str) -> None:
        """Show an informational message to the user."""
        ...


__all__ = ["CopyHistory", "ContextProvider", "EditorSurface"]
