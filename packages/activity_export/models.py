"""Data models for ``activity_export``.

Raw provider records are validated with pydantic because they arrive as
untrusted JSON with camelCase keys; everything produced by this package is a
frozen dataclass so it can be hashed, compared and passed around freely.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Raw provider records
# ---------------------------------------------------------------------------


def calendar_date(occurred_at: str) -> date:
    """The ``YYYY-MM-DD`` part of a provider timestamp, with no timezone shift.

    Raises ``ValueError`` when that part is missing or not an ISO date.
    """

    parts = occurred_at.strip().split("T", 1)[0].split()
    if not parts:
        raise ValueError("occurredAt is empty")
    try:
        return date.fromisoformat(parts[0])
    except ValueError:
        raise ValueError(f"occurredAt has no ISO calendar date: {occurred_at!r}") from None


class AmountSign(StrEnum):
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class RawActivity(BaseModel):
    """One activity-feed record as returned by the provider.

    Keys are accepted in the provider's camelCase (``occurredAt``) or as the
    snake_case attribute names. Numeric fields (``amount``,
    ``asset_quantity``) stay text: parsing happens during normalization, where
    failures degrade to zero instead of raising. Unknown keys are kept so the
    full payload survives a round-trip through ``model_dump(by_alias=True)``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
        coerce_numbers_to_str=True,
    )

    canonical_id: str
    account_id: str
    type: str
    occurred_at: str
    sub_type: str | None = None
    status: str | None = None
    amount: str | None = None
    amount_sign: AmountSign | None = None
    currency: str | None = None
    opposing_account_id: str | None = None
    asset_symbol: str | None = None
    asset_quantity: str | None = None
    spend_merchant: str | None = None
    e_transfer_name: str | None = None
    aft_originator_name: str | None = None
    bill_pay_company_name: str | None = None
    # to_camel would produce "p2PHandle".
    p2p_handle: str | None = Field(default=None, alias="p2pHandle")

    @field_validator("occurred_at")
    @classmethod
    def _has_calendar_date(cls, v: str) -> str:
        calendar_date(v)
        return v.strip()

    @field_validator("amount_sign", mode="before")
    @classmethod
    def _lenient_sign(cls, v: Any) -> AmountSign | None:
        # Anything other than DEBIT/CREDIT is treated as "no sign hint".
        if isinstance(v, AmountSign) or v is None:
            return v
        token = str(v).strip().upper()
        try:
            return AmountSign(token)
        except ValueError:
            return None


class CustodianAccount(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str


class AccountRecord(BaseModel):
    """Account metadata fetched alongside activities."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str
    nickname: str | None = None
    type: str | None = None
    unified_account_type: str | None = None
    currency: str | None = None
    status: str | None = None
    custodian_accounts: list[CustodianAccount] | None = None


# ---------------------------------------------------------------------------
# Canonical transactions
# ---------------------------------------------------------------------------


class Category(StrEnum):
    INVESTMENT_BUY = "Investment Buy"
    INVESTMENT_SELL = "Investment Sell"
    DEPOSIT = "Deposit"
    WITHDRAWAL = "Withdrawal"
    DIVIDEND = "Dividend"
    INTEREST = "Interest"
    TRANSFER = "Transfer"
    PURCHASE = "Purchase"
    CREDIT_CARD_PAYMENT = "Credit Card Payment"
    REFUND = "Refund"
    FEE = "Fee"
    TAX = "Tax"
    CURRENCY_CONVERSION = "Currency Conversion"
    P2P_PAYMENT = "P2P Payment"
    REIMBURSEMENT = "Reimbursement"
    BONUS = "Bonus"
    OTHER = "Other"


@dataclass(frozen=True, slots=True)
class NormalizedTransaction:
    """A sign-resolved, described and categorized activity.

    ``amount`` is negative for money leaving the account and positive for
    money arriving; zero is always unsigned. ``category`` is typed as ``str``
    so callers can build ad-hoc rows, but the normalizer only ever emits
    :class:`Category` members.
    """

    id: str
    date: date
    description: str
    amount: Decimal
    currency: str
    category: str
    account_id: str
    symbol: str | None = None
    action: str | None = None
    quantity: Decimal | None = None
    price: Decimal | None = None


# ---------------------------------------------------------------------------
# Export surface
# ---------------------------------------------------------------------------


class ExportFormat(StrEnum):
    CSV = "csv"
    OFX = "ofx"
    QFX = "qfx"


@dataclass(frozen=True, slots=True)
class ExportOptions:
    """Account-level metadata used by the OFX/QFX codec.

    ``org`` and ``fid`` fall back to the environment defaults in
    :mod:`activity_export.config` when left as ``None``; ``currency`` falls
    back to the first transaction's currency.
    """

    account_id: str
    account_type: str | None = None
    currency: str | None = None
    org: str | None = None
    fid: str | None = None
    intu_bid: str | None = None


@dataclass(frozen=True, slots=True)
class ExportFile:
    content: str
    extension: str
    mime_type: str


__all__ = [
    "AccountRecord",
    "AmountSign",
    "Category",
    "CustodianAccount",
    "ExportFile",
    "ExportFormat",
    "ExportOptions",
    "NormalizedTransaction",
    "RawActivity",
    "calendar_date",
]
