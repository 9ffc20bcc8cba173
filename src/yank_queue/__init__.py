"""Sequential paste queue: copy several fragments, paste them back in order."""

__all__ = [
    "adapters",
    "commands",
    "config",
    "display",
    "host",
    "queue",
    "runtime",
    "session",
]

__version__ = "0.1.0"
