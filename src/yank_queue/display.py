"""Mode-line text shown while a queue session is running."""

from __future__ import annotations

from typing import Optional

from yank_queue.config import QueueSettings
from yank_queue.session import QueueSession


def format_lighter(session: QueueSession, settings: Optional[QueueSettings] = None) -> str:
    settings = settings or QueueSettings()
    if not session.active:
        return ""
    if not settings.show_count:
        return settings.lighter
    return f"{settings.lighter}[{session.pending_count()}]"


__all__ = ["format_lighter"]
