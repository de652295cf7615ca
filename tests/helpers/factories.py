"""Factories for raw activities and canonical transactions used across tests."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from activity_export.models import Category, NormalizedTransaction, RawActivity


def make_activity(**overrides: Any) -> RawActivity:
    """Build a settled CAD deposit activity, overridable by camelCase key."""

    payload: dict[str, Any] = {
        "canonicalId": "activity-123",
        "accountId": "account-123",
        "type": "DEPOSIT",
        "subType": None,
        "status": "settled",
        "amount": "100.00",
        "amountSign": "CREDIT",
        "currency": "CAD",
        "occurredAt": "2024-01-15T10:30:00Z",
        "opposingAccountId": None,
        "assetSymbol": None,
        "assetQuantity": None,
        "spendMerchant": None,
        "eTransferName": None,
        "aftOriginatorName": None,
        "billPayCompanyName": None,
        "p2pHandle": None,
    }
    payload.update(overrides)
    return RawActivity.model_validate(payload)


def make_transaction(**overrides: Any) -> NormalizedTransaction:
    fields: dict[str, Any] = {
        "id": "txn-123",
        "date": date(2024, 1, 15),
        "description": "Test transaction",
        "amount": Decimal("100.50"),
        "currency": "CAD",
        "category": Category.DEPOSIT,
        "account_id": "account-123",
    }
    fields.update(overrides)
    return NormalizedTransaction(**fields)
