"""Environment-driven defaults for exports.

Values are read at call time so a ``.env`` loaded by the CLI (or a test's
``monkeypatch.setenv``) takes effect without re-importing the package.
Explicit arguments passed by callers always win over these defaults.
"""

from __future__ import annotations

import os

DEFAULT_ORG = "WEALTHSIMPLE"
DEFAULT_FID = "1001"
DEFAULT_CURRENCY = "CAD"
DEFAULT_FILENAME_PREFIX = "wealthsimple"


def _env(name: str, default: str) -> str:
    val = os.getenv(name)
    if val is None:
        return default
    val = val.strip()
    return val or default


def default_org() -> str:
    return _env("ACTIVITY_EXPORT_ORG", DEFAULT_ORG)


def default_fid() -> str:
    return _env("ACTIVITY_EXPORT_FID", DEFAULT_FID)


def default_currency() -> str:
    """Currency assigned to activities that carry none."""

    return _env("ACTIVITY_EXPORT_DEFAULT_CURRENCY", DEFAULT_CURRENCY)


def filename_prefix() -> str:
    return _env("ACTIVITY_EXPORT_FILENAME_PREFIX", DEFAULT_FILENAME_PREFIX)


__all__ = [
    "DEFAULT_CURRENCY",
    "DEFAULT_FID",
    "DEFAULT_FILENAME_PREFIX",
    "DEFAULT_ORG",
    "default_currency",
    "default_fid",
    "default_org",
    "filename_prefix",
]
