"""Telemetry services built on structlog.

This module exposes a narrow surface area for the rest of the package:

``configure(...)`` -- override or preset the structlog configuration
``get_logger(name)`` -- fetch (and cache) a bound logger
``record_event(name, ...)`` -- emit structured events at a chosen level
``span(name, ...)`` -- context manager timing a block and binding its metadata
"""

from __future__ import annotations

import atexit
import os
import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, MutableMapping, Optional, TextIO

import structlog

ENV_PREFIX = "YANK_QUEUE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "yank_queue")
DEFAULT_LOG_FILE = os.getenv(f"{ENV_PREFIX}LOG_FILE", "")

_LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_PRESET: Optional[str] = None
_LOG_STREAM: Optional[TextIO] = None


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _resolve_level(name: Optional[str] = None) -> int:
    key = (name or _env("LOG_LEVEL") or "INFO").upper()
    if key not in _LEVELS:
        raise ValueError(f"Unknown log level '{key}'.")
    return _LEVELS[key]


def _close_log_file() -> None:
    global _LOG_STREAM
    if _LOG_STREAM is not None and not _LOG_STREAM.closed:
        _LOG_STREAM.close()
    _LOG_STREAM = None


def _open_log_file(path: str) -> TextIO:
    global _LOG_STREAM
    _close_log_file()
    _LOG_STREAM = open(path, "a", encoding="utf-8")
    return _LOG_STREAM


atexit.register(_close_log_file)


def _processors(*, json_format: bool, colors: bool) -> List[Any]:
    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colors))
    return processors


def _apply(
    *,
    level: int,
    json_format: bool,
    colors: bool,
    console: bool,
    log_file: str,
) -> None:
    if log_file:
        factory: Any = structlog.PrintLoggerFactory(_open_log_file(log_file))
    elif console:
        _close_log_file()
        factory = structlog.PrintLoggerFactory(sys.stderr)
    else:
        _close_log_file()
        factory = structlog.ReturnLoggerFactory()

    structlog.configure(
        processors=_processors(json_format=json_format, colors=colors),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=factory,
        cache_logger_on_first_use=False,
    )


def _apply_preset(preset: str) -> None:
    key = preset.lower()

    if key == "development":
        _apply(
            level=_LEVELS["DEBUG"],
            json_format=False,
            colors=True,
            console=True,
            log_file="",
        )
    elif key == "production":
        _apply(
            level=_LEVELS["INFO"],
            json_format=True,
            colors=False,
            console=False,
            log_file=_env("LOG_FILE", DEFAULT_LOG_FILE) or "yank_queue.log",
        )
    elif key in {"performance", "performance_analysis"}:
        _apply(
            level=_LEVELS["DEBUG"],
            json_format=True,
            colors=False,
            console=False,
            log_file=_env("LOG_FILE", DEFAULT_LOG_FILE)
            or "yank_queue-performance.log",
        )
    else:
        raise ValueError(f"Unknown preset '{preset}'.")


def _apply_default() -> None:
    _apply(
        level=_resolve_level(),
        json_format=_env_flag("LOG_JSON", False),
        colors=not _env_flag("NO_COLOR", False),
        console=not _env_flag("DISABLE_CONSOLE", False),
        log_file=_env("LOG_FILE") or DEFAULT_LOG_FILE,
    )


def configure(*, preset: Optional[str] = None, level: Optional[str] = None) -> None:
    """Override the active structlog configuration.

    Parameters
    ----------
    preset:
        Named preset (``"development"``, ``"production"``, ``"performance"``).
    level:
        Minimum level for the environment-driven default configuration.
        ``preset`` and ``level`` are mutually exclusive.
    """

    global _ACTIVE_PRESET
    if preset and level:
        raise ValueError("Provide either `preset` or `level`, not both.")

    if preset:
        _apply_preset(preset)
    elif level:
        _apply(
            level=_resolve_level(level),
            json_format=_env_flag("LOG_JSON", False),
            colors=not _env_flag("NO_COLOR", False),
            console=not _env_flag("DISABLE_CONSOLE", False),
            log_file=_env("LOG_FILE") or DEFAULT_LOG_FILE,
        )
    else:
        _apply_default()

    _ACTIVE_PRESET = preset
    _LOGGER_CACHE.clear()


def active_preset() -> Optional[str]:
    return _ACTIVE_PRESET


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached structlog logger bound to ``name``."""

    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = structlog.get_logger(logger_name).bind(
            logger=logger_name
        )
    return _LOGGER_CACHE[logger_name]


def _resolve_level_method(logger: Any, level: Any) -> Any:
    name = str(level).upper()
    method = getattr(logger, name.lower(), None)
    if name not in _LEVELS or method is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return method


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit a structured ``event::<name>`` line with ``data`` as key/values."""

    log = get_logger(logger_name)
    method = _resolve_level_method(log, level)
    payload = {key: _stringify(value) for key, value in (data or {}).items()}
    method(f"event::{name}", **{"name": name, **payload})


@dataclass
class SpanHandle:
    """Handle returned from ``span`` for optional metadata updates."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    failed: bool = False

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _emit(
        self, level: str, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        payload = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})

        method = _resolve_level_method(self.logger, level)
        method(message, **payload)

    def fail(self, reason: str) -> None:
        self.failed = True
        self._emit("error", "span::fail", {"reason": reason})

    def cancel(self, reason: str | None = None) -> None:
        extra = {"reason": reason} if reason else None
        self._emit("warning", "span::cancel", extra)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Time a code block and bind its metadata to every line logged inside it.

    Parameters
    ----------
    name:
        Operation name reported as ``span`` on the closing log line.
    logger_name:
        Target logger; defaults to the package logger.
    component:
        If ``True`` use the same name as the span; if a string, use it as the
        component identifier.
    metadata:
        Optional key/values bound as context variables for the duration of the
        block and repeated on the closing line.
    """

    log = get_logger(logger_name)
    component_name = None
    if component is True:
        component_name = name
    elif isinstance(component, str):
        component_name = component

    metadata_payload = {
        key: _stringify(value) for key, value in (metadata or {}).items()
    }
    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=component_name,
        metadata=dict(metadata_payload),
    )

    started = time.perf_counter()
    with structlog.contextvars.bound_contextvars(**metadata_payload):
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000.0
            handle._emit("debug", "span::end", {"duration_ms": f"{elapsed_ms:.3f}"})


# Initialize the module-level logger once the config is ready.
configure()
logger = get_logger()

__all__ = [
    "SpanHandle",
    "active_preset",
    "configure",
    "get_logger",
    "record_event",
    "span",
    "logger",
]
