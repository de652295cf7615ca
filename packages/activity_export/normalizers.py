"""Raw activity → :class:`~activity_export.models.NormalizedTransaction`.

Pipeline per batch:

1. Exclusion filter: activities whose status is ``rejected``, ``cancelled``
   or ``expired`` (case-insensitive), or whose type is ``LEGACY_TRANSFER``,
   never reach normalization.
2. Each remaining activity is mapped 1:1, preserving input order, through the
   amount resolver and the description/category/action deriver.

Nothing here performs I/O or reads the clock; the only non-argument input is
the default currency from :mod:`activity_export.config`.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .amounts import parse_decimal, resolve_amount
from .config import default_currency
from .derive import (
    AccountNameResolver,
    derive_action,
    derive_category,
    derive_description,
    derive_price,
)
from .logging_setup import get_logger
from .models import NormalizedTransaction, RawActivity, calendar_date

_logger = get_logger("activity_export.normalizers")

EXCLUDED_STATUSES = frozenset({"rejected", "cancelled", "expired"})
EXCLUDED_TYPES = frozenset({"LEGACY_TRANSFER"})


def is_excluded(activity: RawActivity) -> bool:
    status = (activity.status or "").strip().lower()
    type_ = (activity.type or "").strip().upper()
    return status in EXCLUDED_STATUSES or type_ in EXCLUDED_TYPES


def filter_activities(activities: Iterable[RawActivity]) -> Iterator[RawActivity]:
    """Yield the activities that survive the exclusion filter, in order."""

    for a in activities:
        if is_excluded(a):
            _logger.debug(
                "excluding activity %s (type=%s status=%s)", a.canonical_id, a.type, a.status
            )
            continue
        yield a


def normalize_activity(
    activity: RawActivity,
    *,
    resolve_account_name: AccountNameResolver | None = None,
    is_credit_card: bool = False,
) -> NormalizedTransaction:
    """Normalize one activity.

    Parameters
    ----------
    activity:
        The raw provider record.
    resolve_account_name:
        Optional ``account_id -> display name`` lookup used to name the other
        side of internal transfers; the raw id is used when it yields nothing.
    is_credit_card:
        Whether the activity's owning account is a credit card. Only affects
        card payments and refunds without an explicit ``amountSign``.
    """

    quantity = parse_decimal(activity.asset_quantity)
    return NormalizedTransaction(
        id=activity.canonical_id,
        date=calendar_date(activity.occurred_at),
        description=derive_description(activity, resolve_account_name=resolve_account_name),
        amount=resolve_amount(activity, is_credit_card=is_credit_card),
        currency=activity.currency if activity.currency is not None else default_currency(),
        category=derive_category(activity),
        account_id=activity.account_id,
        symbol=activity.asset_symbol,
        action=derive_action(activity),
        quantity=quantity,
        price=derive_price(activity, quantity),
    )


def normalize_activities(
    activities: Iterable[RawActivity],
    *,
    resolve_account_name: AccountNameResolver | None = None,
    is_credit_card: bool = False,
) -> list[NormalizedTransaction]:
    """Filter and normalize a batch, preserving input order."""

    items = list(activities)
    kept = [
        normalize_activity(
            a, resolve_account_name=resolve_account_name, is_credit_card=is_credit_card
        )
        for a in filter_activities(items)
    ]
    _logger.info(
        "normalized %d activities (%d excluded)", len(kept), len(items) - len(kept)
    )
    return kept


__all__ = [
    "EXCLUDED_STATUSES",
    "EXCLUDED_TYPES",
    "filter_activities",
    "is_excluded",
    "normalize_activities",
    "normalize_activity",
]
