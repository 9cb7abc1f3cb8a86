"""Engine logging and profiling on top of telelog.

Everything the engine logs goes through here: ``record_event`` for one-off
structured lines and ``span`` for profiled blocks (registry writes, edits,
search steps). Console output stays off unless ``KILO_ENGINE_CONSOLE`` is
set. The telelog configuration is built on the first ``get_logger`` call.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

from kilo_engine.config import ENV_PREFIX, ConfigError

tl = cast(Any, telelog)

DEFAULT_LOGGER_NAME = "kilo_engine"
LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_LOGGERS: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _flag(environ: Mapping[str, str], name: str) -> bool:
    raw = environ.get(f"{ENV_PREFIX}{name}", "")
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


@dataclass(frozen=True, slots=True)
class TelemetrySettings:
    """Where engine logs go and how much of them is kept."""

    level: str = "INFO"
    console: bool = False
    log_file: str = ""
    json: bool = False

    def __post_init__(self) -> None:
        level = self.level.strip().upper()
        if level not in LEVELS:
            raise ConfigError(
                f"{ENV_PREFIX}LOG_LEVEL must be one of {', '.join(LEVELS)}, "
                f"got {self.level!r}",
                setting="LOG_LEVEL",
            )
        object.__setattr__(self, "level", level)

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "TelemetrySettings":
        env = os.environ if environ is None else environ
        return cls(
            level=env.get(f"{ENV_PREFIX}LOG_LEVEL") or "INFO",
            console=_flag(env, "CONSOLE"),
            log_file=env.get(f"{ENV_PREFIX}LOG_FILE", ""),
            json=_flag(env, "LOG_JSON"),
        )

    def build(self) -> Any:
        """Translate these settings into a ``telelog.Config``."""

        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.json:
            config.with_json_format(True)
        if self.log_file:
            config.with_file_output(self.log_file)
        # ``span`` relies on ``logger.profile``.
        config.with_profiling(True)
        return config


def configure(
    settings: Optional[TelemetrySettings] = None, *, config: Optional[Any] = None
) -> None:
    """Replace the active telelog configuration and drop cached loggers.

    ``settings`` and an explicit ``tl.Config`` are mutually exclusive. With
    neither, settings are read from the ``KILO_ENGINE_*`` environment.
    """

    global _ACTIVE_CONFIG
    if settings is not None and config is not None:
        raise ValueError("Provide either `settings` or `config`, not both.")

    if config is None:
        config = (settings or TelemetrySettings.from_env()).build()
    else:
        config.with_profiling(True)

    _ACTIVE_CONFIG = config
    _LOGGERS.clear()


def reset() -> None:
    """Forget the active configuration; the next logger re-reads the environment."""

    global _ACTIVE_CONFIG
    _ACTIVE_CONFIG = None
    _LOGGERS.clear()


def get_logger(name: Optional[str] = None) -> Any:
    logger_name = name or DEFAULT_LOGGER_NAME
    if _ACTIVE_CONFIG is None:
        configure()
    if logger_name not in _LOGGERS:
        _LOGGERS[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGERS[logger_name]


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method_name = str(level).lower()
    structured = getattr(log, f"{method_name}_with", None)
    if structured is not None:
        structured(message, [(str(key), _text(value)) for key, value in payload.items()])
        return
    plain = getattr(log, method_name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` as key/value pairs."""

    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by ``span``; collects metadata reported if the block fails."""

    logger: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: Any) -> None:
        payload: Dict[str, Any] = {"span": self.name, **self.metadata}
        if self.component:
            payload["component"] = self.component
        payload["reason"] = _text(reason)
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block as ``name``.

    ``component=True`` also tracks the block as a component of the same name;
    a string names the component explicitly. ``metadata`` is attached as
    logger context while the block runs. An exception escaping the block is
    logged through :meth:`SpanHandle.fail` and re-raised.
    """

    log = get_logger(logger_name)
    tracked = name if component is True else (component or None)
    handle = SpanHandle(
        logger=log,
        name=name,
        component=tracked,
        metadata={key: _text(value) for key, value in (metadata or {}).items()},
    )

    with ExitStack() as stack:
        for key, value in list(handle.metadata.items()):
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if tracked:
            stack.enter_context(log.track_component(tracked))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(exc)
            raise


__all__ = [
    "LEVELS",
    "SpanHandle",
    "TelemetrySettings",
    "configure",
    "get_logger",
    "record_event",
    "reset",
    "span",
]
