"""Environment-driven settings for the paste queue glue."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "YANK_QUEUE_"


def _env(
    name: str, default: Optional[str] = None, *, environ: Mapping[str, str] | None = None
) -> Optional[str]:
    source = os.environ if environ is None else environ
    return source.get(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool, *, environ: Mapping[str, str] | None = None) -> bool:
    raw = _env(name, environ=environ)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int, *, environ: Mapping[str, str] | None = None) -> int:
    raw = _env(name, environ=environ)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True, slots=True)
class QueueSettings:
    lighter: str = " Q"
    show_count: bool = True
    default_seed: int = 0
    empty_message: str = "Queue is empty"


def load_settings(environ: Mapping[str, str] | None = None) -> QueueSettings:
    """Build ``QueueSettings`` from ``YANK_QUEUE_*`` variables."""

    defaults = QueueSettings()
    return QueueSettings(
        lighter=_env("LIGHTER", defaults.lighter, environ=environ) or "",
        show_count=_env_flag("SHOW_COUNT", defaults.show_count, environ=environ),
        default_seed=_env_int("DEFAULT_SEED", defaults.default_seed, environ=environ),
        empty_message=_env("EMPTY_MESSAGE", defaults.empty_message, environ=environ)
        or defaults.empty_message,
    )


__all__ = ["QueueSettings", "load_settings"]
