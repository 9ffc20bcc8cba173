from __future__ import annotations

from typing import Hashable, List, Tuple

import pytest

from yank_queue.host import KillRing, SurfaceValidationError, TextSurface


def test_kill_ring_recent_is_most_recent_first() -> None:
    ring = KillRing(["x", "y", "z"])

    assert ring.recent(2) == ("z", "y")
    assert ring.recent(10) == ("z", "y", "x")
    assert ring.recent(0) == ()
    assert ring.latest() == "z"


def test_kill_ring_notifies_once_per_commit() -> None:
    ring = KillRing()
    calls: List[Tuple[str, bool]] = []
    ring.subscribe(lambda text, replace: calls.append((text, replace)))

    ring.copy("foo")
    ring.copy("bar", append=True)
    ring.copy("<", append=True, prepend=True)

    assert calls == [("foo", False), ("foobar", True), ("<foobar", True)]
    assert len(ring) == 1


def test_kill_ring_append_without_entries_adds_new_entry() -> None:
    ring = KillRing()
    calls: List[Tuple[str, bool]] = []
    ring.subscribe(lambda text, replace: calls.append((text, replace)))

    ring.copy("first", append=True)

    assert calls == [("first", False)]


def test_kill_ring_unsubscribe() -> None:
    ring = KillRing()
    calls: List[str] = []
    unsubscribe = ring.subscribe(lambda text, replace: calls.append(text))

    unsubscribe()
    ring.copy("ignored")

    assert calls == []


def test_surface_copy_region_uses_kill_ring() -> None:
    surface = TextSurface("hello world")
    surface.set_mark(0)
    surface.set_point(5)

    stored = surface.copy_region()

    assert stored == "hello"
    assert surface.kill_ring.latest() == "hello"


def test_surface_copy_without_mark_raises() -> None:
    surface = TextSurface("hello")

    with pytest.raises(SurfaceValidationError):
        surface.copy_region()


def test_insert_retrieved_places_mark_at_start_by_default() -> None:
    surface = TextSurface("ab")
    surface.set_point(1)

    surface.insert_retrieved("XYZ")

    assert surface.text == "aXYZb"
    assert surface.cursor.mark == 1
    assert surface.cursor.point == 4


def test_insert_retrieved_extend_selection_leaves_point_at_start() -> None:
    surface = TextSurface("ab")
    surface.set_point(1)

    surface.insert_retrieved("XYZ", extend_selection=True)

    assert surface.cursor.point == 1
    assert surface.cursor.mark == 4


def test_insert_shifts_cursors_after_point() -> None:
    surface = TextSurface("0123")
    later = surface.add_cursor(3, mark=2)

    surface.insert("ab")

    other = surface.cursor_state(later)
    assert surface.text == "ab0123"
    assert (other.point, other.mark) == (5, 4)


def test_each_context_visits_every_cursor_and_restores_current() -> None:
    surface = TextSurface("....")
    second = surface.add_cursor(2)
    visited: List[Hashable] = []

    for context_id in surface.each_context():
        visited.append(context_id)
        assert surface.current_context() == context_id

    assert visited == [0, second]
    assert surface.current_context() == 0
    assert surface.multi_context_active() is True


def test_remove_cursor_notifies_listeners() -> None:
    surface = TextSurface("....")
    second = surface.add_cursor(1)
    removed: List[Hashable] = []
    surface.on_cursor_removed(removed.append)
    surface.switch_to(second)

    surface.remove_cursor(second)

    assert removed == [second]
    assert surface.current_context() == 0
    assert surface.multi_context_active() is False


def test_remove_last_cursor_is_rejected() -> None:
    surface = TextSurface("")

    with pytest.raises(SurfaceValidationError):
        surface.remove_cursor(0)


def test_positions_are_validated() -> None:
    surface = TextSurface("abc")

    with pytest.raises(SurfaceValidationError) as excinfo:
        surface.add_cursor(9)

    assert excinfo.value.position == 9
