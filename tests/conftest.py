"""Pytest configuration for test isolation.

Makes ``packages/`` importable without an editable install and keeps the
environment-driven defaults (``ACTIVITY_EXPORT_*``) and the package logger
from leaking between tests.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
# Ensure `packages/` precedes the repo root on sys.path so local packages resolve first.
sys.path[:0] = [p for p in [str(_PKG_DIR), str(_ROOT)] if p not in sys.path]

_ENV_VARS = (
    "ACTIVITY_EXPORT_LOG_LEVEL",
    "ACTIVITY_EXPORT_ORG",
    "ACTIVITY_EXPORT_FID",
    "ACTIVITY_EXPORT_DEFAULT_CURRENCY",
    "ACTIVITY_EXPORT_FILENAME_PREFIX",
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test from the built-in defaults."""

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Mark logging as configured so CLI runs don't bind a handler to a
    short-lived captured stream."""

    import activity_export.logging_setup as logging_setup

    monkeypatch.setattr(logging_setup, "_CONFIGURED", True)
