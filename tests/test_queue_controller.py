from __future__ import annotations

from typing import List, Tuple

from yank_queue.adapters.textual import QueueController, QueueUIHooks, connect_session
from yank_queue.config import QueueSettings
from yank_queue.host import TextSurface


def make_controller(
    text: str = "",
    *,
    hooks: QueueUIHooks | None = None,
    settings: QueueSettings | None = None,
) -> Tuple[QueueController, TextSurface]:
    surface = TextSurface(text)
    session = connect_session(surface, surface.kill_ring)
    controller = QueueController(session, surface, hooks=hooks, settings=settings)
    return controller, surface


def copy_span(surface: TextSurface, start: int, end: int, *, append: bool = False) -> None:
    surface.set_mark(start)
    surface.set_point(end)
    surface.copy_region(append=append)


def test_copies_then_pastes_in_order() -> None:
    controller, surface = make_controller("foo bar baz ")
    controller.handle_key("f5")
    copy_span(surface, 0, 4)
    copy_span(surface, 4, 8)
    surface.set_mark(None)
    surface.set_point(len(surface.text))

    first = controller.handle_key("f6")
    second = controller.handle_key("f6")

    assert first is not None and first.delivered == ("foo ",)
    assert second is not None and second.delivered == ("bar ",)
    assert surface.text == "foo bar baz foo bar "
    assert controller.session.active is False


def test_append_copy_replaces_latest_entry() -> None:
    controller, surface = make_controller("foo bar z")
    controller.handle_key("f5")
    copy_span(surface, 0, 3)
    copy_span(surface, 4, 7)
    copy_span(surface, 8, 9, append=True)

    assert controller.session.scope.global_buffer.snapshot() == ("foo", "barz")


def test_paste_key_is_unbound_while_inactive() -> None:
    controller, _surface = make_controller()

    assert controller.handle_key("f6") is None


def test_empty_queue_surfaces_message() -> None:
    messages: List[str] = []
    hooks = QueueUIHooks(show_message=messages.append)
    controller, surface = make_controller(hooks=hooks)
    controller.handle_key("f5")

    result = controller.handle_key("f6")

    assert result is not None and result.status == "empty"
    assert messages[-1] == "Queue is empty"
    assert surface.messages[-1] == "Queue is empty"
    assert controller.session.active is False


def test_status_shows_lighter_and_count() -> None:
    statuses: List[str] = []
    hooks = QueueUIHooks(update_status=statuses.append)
    controller, surface = make_controller("abc", hooks=hooks)

    controller.handle_key("f5")
    copy_span(surface, 0, 1)
    copy_span(surface, 1, 2)
    controller.handle_key("f6")

    assert statuses[0] == ""
    assert " Q[0]" in statuses
    assert " Q[2]" in statuses
    assert statuses[-1] == " Q[1]"


def test_prefix_seeds_from_kill_ring() -> None:
    controller, surface = make_controller("")
    for text in ("x", "y", "z"):
        surface.kill_ring.copy(text)

    result = controller.handle_key("f5", prefix=2)

    assert result is not None and result.message == "Queue started with 2 entries"
    controller.handle_key("f6")
    assert surface.text == "y"


def test_extend_paste_leaves_point_before_text() -> None:
    controller, surface = make_controller("ab")
    controller.run_command("queue.start")
    copy_span(surface, 0, 1)
    surface.set_mark(None)
    surface.set_point(2)

    controller.handle_key("shift+f6")

    assert surface.text == "aba"
    assert (surface.cursor.point, surface.cursor.mark) == (2, 3)


def test_paste_runs_once_per_cursor() -> None:
    controller, surface = make_controller("1\n2\n")
    second = surface.add_cursor(4)
    controller.handle_key("f5")

    surface.switch_to(0)
    copy_span(surface, 0, 1)
    surface.switch_to(second)
    copy_span(surface, 2, 3)
    surface.switch_to(0)
    surface.set_mark(None)
    surface.set_point(1)
    surface.switch_to(second)
    surface.set_mark(None)
    surface.set_point(4)

    result = controller.handle_key("f6")

    assert result is not None and result.delivered == ("1", "2")
    assert surface.text == "11\n2\n2"
    assert controller.session.active is False


def test_cursor_removal_drops_its_queue() -> None:
    controller, surface = make_controller("abcd")
    second = surface.add_cursor(2)
    controller.handle_key("f5")
    surface.switch_to(second)
    copy_span(surface, 2, 3)

    surface.remove_cursor(second)

    assert controller.session.pending_count() == 0


def test_events_and_logs_reach_hooks() -> None:
    events: List[Tuple[str, object | None]] = []
    logs: List[str] = []
    hooks = QueueUIHooks(
        handle_event=lambda name, payload: events.append((name, payload)),
        log=logs.append,
    )
    controller, surface = make_controller("abc", hooks=hooks)

    controller.handle_key("f5")
    copy_span(surface, 0, 2)
    controller.handle_key("f7")

    names = [name for name, _ in events]
    assert names == ["queue.activate", "queue.copy", "queue.deactivate"]
    assert any(line.startswith("key ->") for line in logs)
    assert any("command='queue.stop'" in line for line in logs)


def test_custom_settings_change_lighter() -> None:
    statuses: List[str] = []
    settings = QueueSettings(lighter=" PQ", show_count=False)
    controller, _surface = make_controller(
        hooks=QueueUIHooks(update_status=statuses.append), settings=settings
    )

    controller.handle_key("f8")

    assert statuses[-1] == " PQ"


def test_append_copy_right_after_start_adds_an_entry() -> None:
    controller, surface = make_controller("abc")
    copy_span(surface, 0, 1)
    controller.handle_key("f5")

    copy_span(surface, 1, 2, append=True)

    assert surface.kill_ring.latest() == "ab"
    assert controller.session.scope.global_buffer.snapshot() == ("ab",)
    result = controller.handle_key("f6")
    assert result is not None and result.delivered == ("ab",)


def test_append_copy_in_fresh_cursor_adds_an_entry() -> None:
    controller, surface = make_controller("abcdef")
    second = surface.add_cursor(2)
    controller.handle_key("f5")
    surface.switch_to(0)
    copy_span(surface, 0, 1)

    surface.switch_to(second)
    copy_span(surface, 2, 3, append=True)
    copy_span(surface, 3, 4, append=True)

    scope = controller.session.scope
    assert scope.buffer_for(0).snapshot() == ("a",)
    assert scope.buffer_for(second).snapshot() == ("acd",)
    assert controller.session.pending_count() == 2


def test_every_default_key_runs_without_error() -> None:
    controller, surface = make_controller("abc")

    for key in ("f5", "f7", "f8", "f8", "f5"):
        result = controller.handle_key(key, prefix=1)
        assert result is not None and result.consumed
    copy_span(surface, 0, 1)
    assert controller.handle_key("shift+f6") is not None
