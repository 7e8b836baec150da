from __future__ import annotations

import pytest

_ENV_VARS = [
    "DIAGNOSTICS_SINK",
    "DIAGNOSTICS_DB_PATH",
    "DIAGNOSTICS_TABLE",
    "DIAGNOSTICS_MAX_CAUSE_DEPTH",
    "DIAGNOSTICS_RECORD_SKIPPED",
]


@pytest.fixture(autouse=True)
def _clean_diagnostics_env(monkeypatch: pytest.MonkeyPatch):
    """Start every unit test without any DIAGNOSTICS_* overrides."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
