"""Exception types raised at the edges of the export pipeline.

The normalization and codec functions are total and never raise these; they
belong to orchestration (:mod:`activity_export.api`) and input loading
(:mod:`activity_export.cli`).
"""

from __future__ import annotations


class ExportError(Exception):
    """Base class for export failures surfaced to callers."""


class NoTransactionsError(ExportError):
    """Nothing remained to export after filtering and incremental slicing."""


class ActivityLoadError(ExportError):
    """An input file of activities or accounts was missing or malformed."""


__all__ = ["ActivityLoadError", "ExportError", "NoTransactionsError"]
