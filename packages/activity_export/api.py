"""Public orchestration for ``activity_export``.

:func:`export_activities` is the one-call path used by the CLI: filter and
normalize a fetched batch, optionally drop everything already exported, and
serialize the rest. The building blocks are re-exported from the package root
for callers that need finer control.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime

from .config import filename_prefix
from .derive import AccountNameResolver
from .errors import NoTransactionsError
from .exporters import generate_export_file
from .logging_setup import get_logger
from .models import ExportFile, ExportFormat, ExportOptions, NormalizedTransaction, RawActivity
from .normalizers import normalize_activities

_logger = get_logger("activity_export.api")

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9\-_]")


@dataclass(frozen=True, slots=True)
class ExportResult:
    """An export artifact plus the bookkeeping a caller may persist.

    ``last_transaction_id`` is the id of the newest exported transaction;
    passing it back as ``last_transaction_id`` on the next run exports only
    what happened since.
    """

    file: ExportFile
    transactions: tuple[NormalizedTransaction, ...]
    last_transaction_id: str | None
    start_date: date | None
    end_date: date | None

    @property
    def transaction_count(self) -> int:
        return len(self.transactions)


def transactions_since(
    transactions: Sequence[NormalizedTransaction], last_transaction_id: str | None
) -> list[NormalizedTransaction]:
    """Keep only transactions newer than ``last_transaction_id``.

    ``transactions`` must be newest-first, as the provider's feed is. When the
    id is not present (e.g., it aged out of the fetched window) the whole batch
    is returned: duplicates in the importer are recoverable, gaps are not.
    """

    if not last_transaction_id:
        return list(transactions)
    for idx, t in enumerate(transactions):
        if t.id == last_transaction_id:
            return list(transactions[:idx])
    _logger.warning(
        "last exported transaction %s not found; exporting the full batch", last_transaction_id
    )
    return list(transactions)


def export_filename(
    account_name: str, end_date: date, extension: str, *, prefix: str | None = None
) -> str:
    """``{prefix}-{account}-{YYYY-MM-DD}.{ext}`` with filesystem-unsafe chars as ``-``."""

    safe = _UNSAFE_FILENAME_CHARS.sub("-", account_name)
    return f"{prefix or filename_prefix()}-{safe}-{end_date.isoformat()}.{extension}"


def export_activities(
    activities: Iterable[RawActivity],
    fmt: ExportFormat,
    options: ExportOptions,
    *,
    resolve_account_name: AccountNameResolver | None = None,
    is_credit_card: bool = False,
    last_transaction_id: str | None = None,
    now: datetime | None = None,
) -> ExportResult:
    """Filter, normalize, slice and serialize one fetched batch.

    Raises
    ------
    NoTransactionsError
        When nothing is left to export.
    """

    transactions = normalize_activities(
        activities, resolve_account_name=resolve_account_name, is_credit_card=is_credit_card
    )
    transactions = transactions_since(transactions, last_transaction_id)
    if not transactions:
        if last_transaction_id:
            raise NoTransactionsError(
                f"no new transactions for {options.account_id} since {last_transaction_id}"
            )
        raise NoTransactionsError(f"no transactions to export for {options.account_id}")

    export_file = generate_export_file(transactions, fmt, options, now=now)
    dates = [t.date for t in transactions]
    return ExportResult(
        file=export_file,
        transactions=tuple(transactions),
        last_transaction_id=transactions[0].id,
        start_date=min(dates),
        end_date=max(dates),
    )


__all__ = ["ExportResult", "export_activities", "export_filename", "transactions_since"]
