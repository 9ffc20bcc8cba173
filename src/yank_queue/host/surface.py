"""Plain-text editor model with several cursors, used as the reference host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Hashable, Iterator, List, Optional, Tuple

from .kill_ring import KillRing

Region = Tuple[int, int]


@dataclass(slots=True)
class CursorState:
    """Point and optional mark (selection anchor) of one insertion point."""

    point: int = 0
    mark: Optional[int] = None

    @property
    def region(self) -> Optional[Region]:
        if self.mark is None:
            return None
        return (min(self.mark, self.point), max(self.mark, self.point))


class SurfaceValidationError(RuntimeError):
    """Raised when a cursor position or identity does not fit the text."""

    def __init__(self, message: str, *, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position


class TextSurface:
    """Text plus cursors; every cursor is an independent insertion context."""

    def __init__(self, text: str = "", *, kill_ring: Optional[KillRing] = None) -> None:
        self.text = text
        self.kill_ring = kill_ring if kill_ring is not None else KillRing()
        self.messages: List[str] = []
        self._cursors: Dict[int, CursorState] = {0: CursorState()}
        self._current = 0
        self._next_id = 1
        self._removal_listeners: List[Callable[[Hashable], object]] = []

    # Context provider -------------------------------------------------------

    def multi_context_active(self) -> bool:
        return len(self._cursors) > 1

    def current_context(self) -> Hashable:
        return self._current

    def contexts(self) -> Tuple[int, ...]:
        return tuple(self._cursors)

    def each_context(self) -> Iterator[Hashable]:
        original = self._current
        try:
            for cursor_id in tuple(self._cursors):
                if cursor_id not in self._cursors:
                    continue
                self._current = cursor_id
                yield cursor_id
        finally:
            self._current = original if original in self._cursors else self._first()

    # Cursors ------------------------------------------------------------------

    @property
    def cursor(self) -> CursorState:
        return self._cursors[self._current]

    def cursor_state(self, cursor_id: int) -> CursorState:
        try:
            return self._cursors[cursor_id]
        except KeyError as exc:
            raise SurfaceValidationError(f"Unknown cursor {cursor_id}") from exc

    def add_cursor(self, point: int, *, mark: Optional[int] = None) -> int:
        self._ensure_position(point)
        if mark is not None:
            self._ensure_position(mark)
        cursor_id = self._next_id
        self._next_id += 1
        self._cursors[cursor_id] = CursorState(point=point, mark=mark)
        return cursor_id

    def remove_cursor(self, cursor_id: int) -> None:
        self.cursor_state(cursor_id)
        if len(self._cursors) == 1:
            raise SurfaceValidationError("Cannot remove the last cursor")
        del self._cursors[cursor_id]
        if self._current == cursor_id:
            self._current = self._first()
        for listener in tuple(self._removal_listeners):
            listener(cursor_id)

    def on_cursor_removed(self, listener: Callable[[Hashable], object]) -> None:
        self._removal_listeners.append(listener)

    def switch_to(self, cursor_id: int) -> None:
        self.cursor_state(cursor_id)
        self._current = cursor_id

    def set_point(self, position: int) -> None:
        self.cursor.point = self._ensure_position(position)

    def set_mark(self, position: Optional[int]) -> None:
        self.cursor.mark = None if position is None else self._ensure_position(position)

    # Editing ------------------------------------------------------------------

    def copy_region(self, *, append: bool = False) -> str:
        """Copy the current cursor's region into the kill ring."""

        region = self.cursor.region
        if region is None:
            raise SurfaceValidationError("The mark is not set", position=self.cursor.point)
        start, end = region
        return self.kill_ring.copy(self.text[start:end], append=append)

    def insert(self, text: str) -> Region:
        cursor = self.cursor
        start = cursor.point
        self.text = self.text[:start] + text + self.text[start:]
        offset = len(text)
        for cursor_id, other in self._cursors.items():
            if cursor_id == self._current:
                continue
            if other.point >= start:
                other.point += offset
            if other.mark is not None and other.mark >= start:
                other.mark += offset
        if cursor.mark is not None and cursor.mark > start:
            cursor.mark += offset
        cursor.point = start + offset
        return (start, cursor.point)

    def insert_retrieved(self, text: str, *, extend_selection: bool = False) -> None:
        start, end = self.insert(text)
        if extend_selection:
            self.cursor.point, self.cursor.mark = start, end
        else:
            self.cursor.mark, self.cursor.point = start, end

    def message(self, text: str) -> None:
        self.messages.append(text)

    def _first(self) -> int:
        return next(iter(self._cursors))

    def _ensure_position(self, position: int) -> int:
        if position < 0 or position > len(self.text):
            raise SurfaceValidationError("Position out of range", position=position)
        return position


__all__ = ["CursorState", "Region", "SurfaceValidationError", "TextSurface"]
