"""Host-side collaborators: protocols plus an in-memory reference editor."""

from .kill_ring import CopyListener, KillRing
from .protocols import ContextProvider, CopyHistory, EditorSurface
from .surface import CursorState, SurfaceValidationError, TextSurface

__all__ = [
    "CopyHistory",
    "ContextProvider",
    "EditorSurface",
    "CopyListener",
    "KillRing",
    "CursorState",
    "SurfaceValidationError",
    "TextSurface",
]
