"""Export codecs and the format dispatcher."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import assert_never

from ..logging_setup import get_logger
from ..models import ExportFile, ExportFormat, ExportOptions, NormalizedTransaction
from .csv_codec import generate_csv
from .ofx import generate_fitid, generate_ofx, generate_qfx

_logger = get_logger("activity_export.exporters")

MIME_TYPES: dict[ExportFormat, str] = {
    ExportFormat.CSV: "text/csv;charset=utf-8",
    ExportFormat.OFX: "application/x-ofx",
    ExportFormat.QFX: "application/x-ofx",
}


def generate_export_file(
    transactions: Sequence[NormalizedTransaction],
    fmt: ExportFormat,
    options: ExportOptions,
    *,
    now: datetime | None = None,
) -> ExportFile:
    """Serialize ``transactions`` in ``fmt`` and describe the resulting file.

    ``options`` is only consulted for OFX/QFX; ``now`` pins the OFX clock
    fields for reproducible output.
    """

    match fmt:
        case ExportFormat.CSV:
            content = generate_csv(transactions)
        case ExportFormat.OFX:
            content = generate_ofx(transactions, options, now=now)
        case ExportFormat.QFX:
            content = generate_qfx(transactions, options, now=now)
        case _:
            assert_never(fmt)

    _logger.info("generated %s export with %d transactions", fmt.value, len(transactions))
    return ExportFile(content=content, extension=fmt.value, mime_type=MIME_TYPES[fmt])


__all__ = [
    "MIME_TYPES",
    "generate_csv",
    "generate_export_file",
    "generate_fitid",
    "generate_ofx",
    "generate_qfx",
]
