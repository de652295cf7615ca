"""Logging for ``activity_export``.

Modules log under the ``activity_export`` namespace via :func:`get_logger` and
are silent until an entrypoint opts in. The CLI calls :func:`configure_logging`
once, which sends those records to stderr at the level chosen by
``--log-level`` or ``ACTIVITY_EXPORT_LOG_LEVEL``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_ROOT_NAME = "activity_export"
_LEVEL_ENV = "ACTIVITY_EXPORT_LOG_LEVEL"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_CONFIGURED = False


def resolve_level(level: int | str | None) -> int:
    """Explicit level, else the environment, else INFO.

    Names are case-insensitive and numeric strings are accepted; an
    unrecognised name resolves to INFO.
    """

    if level is None:
        level = os.getenv(_LEVEL_ENV) or logging.INFO
    if isinstance(level, int):
        return level
    token = level.strip().upper()
    if token.isdigit():
        return int(token)
    return logging.getLevelNamesMapping().get(token, logging.INFO)


def configure_logging(level: int | str | None = None, *, stream: IO[str] | None = None) -> None:
    """Route package records to ``stream`` (stderr by default); later calls are no-ops."""

    global _CONFIGURED
    if _CONFIGURED:
        return

    root = logging.getLogger(_ROOT_NAME)
    for h in [h for h in root.handlers if isinstance(h, logging.NullHandler)]:
        root.removeHandler(h)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)
    root.setLevel(resolve_level(level))
    root.propagate = False
    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    root = logging.getLogger(_ROOT_NAME)
    if not _CONFIGURED and not root.handlers:
        root.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "resolve_level"]
