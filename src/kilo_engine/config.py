"""Engine-wide settings and their environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "KILO_ENGINE_"

DEFAULT_TAB_STOP = 4
DEFAULT_QUERY_MAX_LEN = 256


class ConfigError(ValueError):
    """Raised when a setting cannot be parsed or is out of range."""

    def __init__(self, message: str, *, setting: str | None = None) -> None:
        super().__init__(message)
        self.setting = setting


def _positive_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(f"{ENV_PREFIX}{name}")
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(
            f"{ENV_PREFIX}{name} must be an integer, got {raw!r}", setting=name
        ) from exc
    if value <= 0:
        raise ConfigError(f"{ENV_PREFIX}{name} must be positive", setting=name)
    return value


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Settings consumed by documents, the highlighter and search."""

    tab_stop: int = DEFAULT_TAB_STOP
    query_max_len: int = DEFAULT_QUERY_MAX_LEN

    def __post_init__(self) -> None:
        if self.tab_stop <= 0:
            raise ConfigError("tab_stop must be positive", setting="TAB_STOP")
        if self.query_max_len <= 0:
            raise ConfigError(
                "query_max_len must be positive", setting="QUERY_MAX_LEN"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        env = os.environ if environ is None else environ
        return cls(
            tab_stop=_positive_int(env, "TAB_STOP", DEFAULT_TAB_STOP),
            query_max_len=_positive_int(env, "QUERY_MAX_LEN", DEFAULT_QUERY_MAX_LEN),
        )


__all__ = [
    "ConfigError",
    "EngineConfig",
    "DEFAULT_TAB_STOP",
    "DEFAULT_QUERY_MAX_LEN",
]
