"""Classification of provider ``(type, subType)`` pairs.

Every rule in the amount resolver and the description/category deriver is
keyed on an :class:`ActivityKind` rather than on raw strings. Lookup tries the
exact ``(type, subType)`` pair first, then the ``(type, None)`` wildcard for
that type, and finally falls back to :attr:`ActivityKind.OTHER`. Both
components are upper-cased before lookup.
"""

from __future__ import annotations

from enum import Enum, auto


class ActivityKind(Enum):
    BUY = auto()
    SELL = auto()
    DEPOSIT = auto()
    WITHDRAWAL = auto()
    CARD_PURCHASE = auto()
    CARD_HOLD = auto()
    CARD_REFUND = auto()
    CARD_PAYMENT = auto()
    TRANSFER_OUT = auto()
    TRANSFER_IN = auto()
    DIVIDEND = auto()
    INTEREST = auto()
    STOCK_LENDING_INTEREST = auto()
    REFUND = auto()
    TRANSFER_FEE_REFUND = auto()
    P2P_SEND = auto()
    P2P_RECEIVE = auto()
    FEE = auto()
    NON_RESIDENT_TAX = auto()
    TAX = auto()
    FUNDS_CONVERSION = auto()
    REIMBURSEMENT = auto()
    BONUS = auto()
    OTHER = auto()


K = ActivityKind

_KINDS: dict[tuple[str, str | None], ActivityKind] = {
    ("DIY_BUY", None): K.BUY,
    ("MANAGED_BUY", None): K.BUY,
    ("CRYPTO_BUY", None): K.BUY,
    ("DIY_SELL", None): K.SELL,
    ("MANAGED_SELL", None): K.SELL,
    ("CRYPTO_SELL", None): K.SELL,
    ("DEPOSIT", None): K.DEPOSIT,
    ("WITHDRAWAL", None): K.WITHDRAWAL,
    # CREDIT_CARD with any other subtype deliberately has no wildcard entry.
    ("CREDIT_CARD", "PURCHASE"): K.CARD_PURCHASE,
    ("CREDIT_CARD", "HOLD"): K.CARD_HOLD,
    ("CREDIT_CARD", "REFUND"): K.CARD_REFUND,
    ("CREDIT_CARD", "PAYMENT"): K.CARD_PAYMENT,
    ("CREDIT_CARD_PAYMENT", None): K.CARD_PAYMENT,
    ("INTERNAL_TRANSFER", "SOURCE"): K.TRANSFER_OUT,
    ("INTERNAL_TRANSFER", None): K.TRANSFER_IN,
    ("ASSET_MOVEMENT", "SOURCE"): K.TRANSFER_OUT,
    ("ASSET_MOVEMENT", None): K.TRANSFER_IN,
    ("DIVIDEND", None): K.DIVIDEND,
    ("INTEREST", "FPL_INTEREST"): K.STOCK_LENDING_INTEREST,
    ("INTEREST", None): K.INTEREST,
    ("REFUND", "TRANSFER_FEE_REFUND"): K.TRANSFER_FEE_REFUND,
    ("REFUND", None): K.REFUND,
    ("P2P_PAYMENT", "SEND"): K.P2P_SEND,
    ("P2P_PAYMENT", None): K.P2P_RECEIVE,
    ("FEE", None): K.FEE,
    ("NON_RESIDENT_TAX", None): K.NON_RESIDENT_TAX,
    ("TAX", None): K.TAX,
    ("FUNDS_CONVERSION", None): K.FUNDS_CONVERSION,
    ("REIMBURSEMENT", None): K.REIMBURSEMENT,
    ("PROMOTION", None): K.BONUS,
    ("REFERRAL", None): K.BONUS,
}


def _token(value: str | None) -> str:
    return (value or "").strip().upper()


def classify(type_: str | None, sub_type: str | None) -> ActivityKind:
    """Resolve a provider ``(type, subType)`` pair to its :class:`ActivityKind`."""

    t = _token(type_)
    s = _token(sub_type)
    kind = _KINDS.get((t, s)) if s else None
    if kind is None:
        kind = _KINDS.get((t, None), K.OTHER)
    return kind


__all__ = ["ActivityKind", "classify"]
