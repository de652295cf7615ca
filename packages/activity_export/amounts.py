"""Amount parsing, sign resolution and money formatting.

All arithmetic is done on :class:`decimal.Decimal`. Parsing never raises:
absent or malformed provider numbers become ``Decimal(0)`` (amounts) or
``None`` (optional quantities), because a bad value in one record must not
abort an export of hundreds.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

from .kinds import ActivityKind as K
from .kinds import classify
from .logging_setup import get_logger
from .models import AmountSign, RawActivity

_logger = get_logger("activity_export.amounts")

_ZERO = Decimal(0)

_OUTFLOW_KINDS = frozenset(
    {
        K.BUY,
        K.WITHDRAWAL,
        K.FEE,
        K.NON_RESIDENT_TAX,
        K.TAX,
        K.CARD_PURCHASE,
        K.TRANSFER_OUT,
        K.P2P_SEND,
    }
)
_INFLOW_KINDS = frozenset(
    {
        K.SELL,
        K.DEPOSIT,
        K.DIVIDEND,
        K.INTEREST,
        K.STOCK_LENDING_INTEREST,
        K.REIMBURSEMENT,
        K.REFUND,
        K.TRANSFER_FEE_REFUND,
        K.BONUS,
        K.TRANSFER_IN,
        K.P2P_RECEIVE,
    }
)
# Positive inside a credit-card account (debt goes down), negative when seen
# from the cash account that paid the card.
_CARD_CONTEXT_KINDS = frozenset({K.CARD_PAYMENT, K.CARD_REFUND})


def parse_decimal(raw: str | None) -> Decimal | None:
    """Parse provider decimal text; return ``None`` when absent or invalid."""

    if raw is None:
        return None
    s = str(raw).strip()
    if not s:
        return None
    try:
        d = Decimal(s)
    except InvalidOperation:
        return None
    # Decimal accepts "NaN"/"Infinity", which are no more usable than garbage.
    if not d.is_finite():
        return None
    return d


def unsigned_zero(d: Decimal) -> Decimal:
    """Return ``d`` with the sign of a zero value dropped (``-0`` -> ``0``)."""

    return d.copy_abs() if d.is_zero() else d


def resolve_amount(activity: RawActivity, *, is_credit_card: bool = False) -> Decimal:
    """Return the signed amount of ``activity`` (negative = outflow).

    Priority: explicit ``amountSign`` first, then inference from the activity
    kind. When neither applies the raw value is returned unchanged; inventing
    a sign there would silently flip the meaning of a transaction.
    """

    raw = parse_decimal(activity.amount)
    if raw is None:
        return _ZERO

    if activity.amount_sign is AmountSign.DEBIT:
        return unsigned_zero(-abs(raw))
    if activity.amount_sign is AmountSign.CREDIT:
        return abs(raw)

    kind = classify(activity.type, activity.sub_type)
    if kind in _OUTFLOW_KINDS:
        return unsigned_zero(-abs(raw))
    if kind in _INFLOW_KINDS:
        return abs(raw)
    if kind in _CARD_CONTEXT_KINDS:
        return abs(raw) if is_credit_card else unsigned_zero(-abs(raw))

    _logger.warning(
        "ambiguous sign for activity %s (type=%s subType=%s); passing amount through",
        activity.canonical_id,
        activity.type,
        activity.sub_type,
    )
    return unsigned_zero(raw)


def format_money(d: Decimal, places: int = 2) -> str:
    """Fixed-point text with ``places`` decimals, half-up, never ``-0.00``."""

    # quantize signals InvalidOperation once the result needs more digits than
    # the context precision, so widen it to fit.
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, d.adjusted() + places + 2)
        q = d.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    return f"{unsigned_zero(q):.{places}f}"


def format_number(d: Decimal) -> str:
    """Shortest plain-decimal text for ``d`` (``10.000`` -> ``10``, ``0.50`` -> ``0.5``)."""

    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(d.as_tuple().digits))
        text = f"{d.normalize():f}"
    return "0" if text in {"-0", "0"} else text


__all__ = [
    "format_money",
    "format_number",
    "parse_decimal",
    "resolve_amount",
    "unsigned_zero",
]
