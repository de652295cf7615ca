"""Description, category, action and price derivation for raw activities.

Each derivation dispatches on the :class:`~activity_export.kinds.ActivityKind`
of the activity and has an explicit default arm, so an unknown provider type
produces ``"{type}: {subType}"`` / ``Other`` rather than an error.

The opposing-account name used by transfer descriptions comes from an injected
``resolve_account_name`` callable; see
:func:`activity_export.accounts.account_name_lookup` for the usual adapter.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal

from .amounts import format_number, parse_decimal
from .kinds import ActivityKind as K
from .kinds import classify
from .models import Category, RawActivity

type AccountNameResolver = Callable[[str], str | None]

_CATEGORY_BY_KIND: dict[K, Category] = {
    K.BUY: Category.INVESTMENT_BUY,
    K.SELL: Category.INVESTMENT_SELL,
    K.DEPOSIT: Category.DEPOSIT,
    K.WITHDRAWAL: Category.WITHDRAWAL,
    K.DIVIDEND: Category.DIVIDEND,
    K.INTEREST: Category.INTEREST,
    K.STOCK_LENDING_INTEREST: Category.INTEREST,
    K.TRANSFER_OUT: Category.TRANSFER,
    K.TRANSFER_IN: Category.TRANSFER,
    K.CARD_PURCHASE: Category.PURCHASE,
    K.CARD_PAYMENT: Category.CREDIT_CARD_PAYMENT,
    K.CARD_REFUND: Category.REFUND,
    K.CARD_HOLD: Category.REFUND,
    K.REFUND: Category.REFUND,
    K.TRANSFER_FEE_REFUND: Category.REFUND,
    K.FEE: Category.FEE,
    K.NON_RESIDENT_TAX: Category.TAX,
    K.FUNDS_CONVERSION: Category.CURRENCY_CONVERSION,
    K.P2P_SEND: Category.P2P_PAYMENT,
    K.P2P_RECEIVE: Category.P2P_PAYMENT,
    K.REIMBURSEMENT: Category.REIMBURSEMENT,
    K.BONUS: Category.BONUS,
}

# Exact provider types with a fixed trading action; BUY/SELL are matched as
# substrings before this table is consulted.
_ACTION_BY_TYPE: dict[str, str] = {
    "DIVIDEND": "Dividend",
    "DEPOSIT": "Deposit",
    "WITHDRAWAL": "Withdrawal",
    "FEE": "Fee",
    "INTEREST": "Interest",
    "INTERNAL_TRANSFER": "Transfer",
    "FUNDS_CONVERSION": "Conversion",
}

_FIXED_DESCRIPTIONS: dict[K, str] = {
    K.CARD_PAYMENT: "Credit card payment",
    K.INTEREST: "Interest",
    K.STOCK_LENDING_INTEREST: "Stock Lending Earnings",
    K.REFUND: "Refund",
    K.TRANSFER_FEE_REFUND: "Reimbursement: transfer fee",
    K.FEE: "Management fee",
    K.NON_RESIDENT_TAX: "Non-resident tax",
    K.REIMBURSEMENT: "Reimbursement",
    K.BONUS: "Bonus",
}


def _with_suffix(label: str, value: str | None) -> str:
    return f"{label} {value}" if value else label


def _cash_movement_description(a: RawActivity, direction: str) -> str:
    sub = (a.sub_type or "").strip().upper()
    match sub:
        case "E_TRANSFER" | "E_TRANSFER_FUNDING":
            return f"{direction}: " + _with_suffix("e-Transfer", a.e_transfer_name)
        case "EFT":
            return f"{direction}: EFT"
        case "AFT":
            return f"{direction}: " + _with_suffix("AFT", a.aft_originator_name)
        case "BILL_PAY":
            return f"{direction}: " + _with_suffix("Bill pay", a.bill_pay_company_name)
        case "PAYMENT_CARD_TRANSACTION":
            return f"{direction}: Debit card funding"
        case _:
            return a.spend_merchant or direction


def _trade_description(a: RawActivity, action: str) -> str:
    symbol = a.asset_symbol if a.asset_symbol is not None else "Unknown"
    qty = parse_decimal(a.asset_quantity)
    if qty is not None and qty > 0:
        return f"{action} {format_number(qty)} x {symbol}"
    return f"{action} {symbol}"


def _transfer_description(
    a: RawActivity, preposition: str, resolve_account_name: AccountNameResolver | None
) -> str:
    opposing = a.opposing_account_id
    name = None
    if opposing and resolve_account_name is not None:
        name = resolve_account_name(opposing)
    return f"Transfer {preposition} {name or opposing or 'unknown'}"


def derive_description(
    a: RawActivity, *, resolve_account_name: AccountNameResolver | None = None
) -> str:
    """Human-readable description of ``a``."""

    kind = classify(a.type, a.sub_type)
    fixed = _FIXED_DESCRIPTIONS.get(kind)
    if fixed is not None:
        return fixed

    match kind:
        case K.BUY:
            return _trade_description(a, "Buy")
        case K.SELL:
            return _trade_description(a, "Sell")
        case K.DEPOSIT:
            return _cash_movement_description(a, "Deposit")
        case K.WITHDRAWAL:
            return _cash_movement_description(a, "Withdrawal")
        case K.CARD_PURCHASE:
            return a.spend_merchant or "Credit card purchase"
        case K.CARD_HOLD:
            return f"{a.spend_merchant} (Hold)" if a.spend_merchant else "Credit card hold"
        case K.CARD_REFUND:
            return f"{a.spend_merchant} (Refund)" if a.spend_merchant else "Refund"
        case K.TRANSFER_OUT:
            return _transfer_description(a, "to", resolve_account_name)
        case K.TRANSFER_IN:
            return _transfer_description(a, "from", resolve_account_name)
        case K.DIVIDEND:
            symbol = a.asset_symbol if a.asset_symbol is not None else "Unknown"
            return f"Dividend: {symbol}"
        case K.P2P_SEND:
            return _with_suffix("Cash sent to", a.p2p_handle)
        case K.P2P_RECEIVE:
            return _with_suffix("Cash received from", a.p2p_handle)
        case K.FUNDS_CONVERSION:
            return f"Funds converted: {a.currency if a.currency is not None else 'N/A'}"
        case _:
            sub = a.sub_type if a.sub_type is not None else "N/A"
            return f"{a.type}: {sub}"


def derive_category(a: RawActivity) -> Category:
    return _CATEGORY_BY_KIND.get(classify(a.type, a.sub_type), Category.OTHER)


def derive_action(a: RawActivity) -> str:
    """Trading-CSV action label; falls back to the category label."""

    t = (a.type or "").strip().upper()
    if "BUY" in t:
        return "Buy"
    if "SELL" in t:
        return "Sell"
    action = _ACTION_BY_TYPE.get(t)
    if action is not None:
        return action
    return derive_category(a).value


def derive_price(a: RawActivity, quantity: Decimal | None) -> Decimal | None:
    """Per-unit price as ``abs(amount) / quantity`` when both are usable."""

    if quantity is None or quantity.is_zero():
        return None
    amount = parse_decimal(a.amount)
    if amount is None:
        return None
    return abs(amount) / quantity


__all__ = [
    "AccountNameResolver",
    "derive_action",
    "derive_category",
    "derive_description",
    "derive_price",
]
