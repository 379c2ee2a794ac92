"""Structured logging for gstring on top of telelog.

Buffer mutations, encoding conversions and validation of external bytes run
inside :func:`span`; cache resets go through :func:`record_event`. Read paths
are not instrumented.

Settings are read once from ``GSTRING_*`` environment variables:

==========================  =========================================
``GSTRING_LOGGER``          logger name (``gstring``)
``GSTRING_LOG_LEVEL``       minimum level (``INFO``)
``GSTRING_LOG_FILE``        also write to this file
``GSTRING_LOG_JSON``        JSON lines instead of text
``GSTRING_DISABLE_CONSOLE`` no console output
``GSTRING_NO_COLOR``        plain console output
``GSTRING_LOG_BUFFER_SIZE`` buffer writes, flushing every N records
``GSTRING_PROFILE``         time spans with ``logger.profile`` (on)
==========================  =========================================
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "GSTRING_"
_TRUE = frozenset({"1", "true", "yes", "on"})


def _flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(ENV_PREFIX + name)
    return default if raw is None else raw.strip().lower() in _TRUE


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    return str(value)


@dataclass(frozen=True)
class Settings:
    """Logger settings resolved from the environment."""

    logger_name: str = "gstring"
    level: str = "INFO"
    console: bool = True
    color: bool = True
    json: bool = False
    log_file: str = ""
    buffer_size: int = 0
    profile: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            logger_name=os.getenv(ENV_PREFIX + "LOGGER") or "gstring",
            level=(os.getenv(ENV_PREFIX + "LOG_LEVEL") or "INFO").upper(),
            console=not _flag("DISABLE_CONSOLE"),
            color=not _flag("NO_COLOR"),
            json=_flag("LOG_JSON"),
            log_file=os.getenv(ENV_PREFIX + "LOG_FILE") or "",
            buffer_size=int(os.getenv(ENV_PREFIX + "LOG_BUFFER_SIZE") or 0),
            profile=_flag("PROFILE", True),
        )

    def to_config(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.color)
        config.with_json_format(self.json)
        if self.log_file:
            config.with_file_output(self.log_file)
        if self.buffer_size > 0:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        config.with_profiling(self.profile)
        return config


_SETTINGS = Settings.from_env()
_CONFIG: Optional[Any] = None
_LOGGERS: MutableMapping[str, Any] = {}


def configure(*, settings: Optional[Settings] = None, config: Optional[Any] = None) -> None:
    """Replace the active configuration and drop cached loggers.

    ``config`` is a ready ``telelog.Config``; ``settings`` is turned into one.
    With neither, the environment is read again.
    """

    global _SETTINGS, _CONFIG
    if settings is not None and config is not None:
        raise ValueError("Pass either `settings` or `config`, not both.")
    if config is None:
        _SETTINGS = settings or Settings.from_env()
        config = _SETTINGS.to_config()
    _CONFIG = config
    _LOGGERS.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _SETTINGS.to_config()
    key = name or _SETTINGS.logger_name
    if key not in _LOGGERS:
        _LOGGERS[key] = tl.Logger.with_config(key, _CONFIG)
    return _LOGGERS[key]


def _log(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    level = level.lower()
    pairs = [(key, _stringify(value)) for key, value in payload.items()]
    with_data = getattr(log, f"{level}_with", None)
    if with_data is not None:
        with_data(message, pairs)
        return
    plain = getattr(log, level, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {dict(pairs)}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` attached as key/value pairs."""

    _log(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    logger: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.name, **self.metadata}
        if self.component:
            payload["component"] = self.component
        payload["reason"] = reason
        _log(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> Iterator[SpanHandle]:
    """Profile the block as ``name``, tracked under ``component`` if given.

    ``metadata`` is attached as logger context while the block runs. An
    exception escaping the block is logged as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    handle = SpanHandle(logger=log, name=name, component=component)
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)

    with ExitStack() as stack:
        for key, value in handle.metadata.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(f"{type(exc).__name__}: {exc}")
            raise


__all__ = [
    "Settings",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
