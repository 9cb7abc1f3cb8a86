from __future__ import annotations

import pytest

from kilo_engine.runtime import telemetry

TELEMETRY_ENV = ("CONSOLE", "LOG_LEVEL", "LOG_FILE", "LOG_JSON")


@pytest.fixture(autouse=True)
def default_telemetry(monkeypatch: pytest.MonkeyPatch):
    for name in TELEMETRY_ENV:
        monkeypatch.delenv(f"KILO_ENGINE_{name}", raising=False)
    telemetry.reset()
    yield
    telemetry.reset()
