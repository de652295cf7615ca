"""CSV export in a budgeting or a trading layout.

The layout is chosen once per batch: any transaction carrying a security
symbol (other than a bare ``CAD``/``USD`` cash symbol), a positive quantity,
or a ``Buy``/``Sell`` action makes the whole file a trading export.

Rows are joined with ``\\n`` and there is no trailing newline. Quoting follows
RFC 4180: a field is quoted, with inner quotes doubled, only when it contains
a comma, a double quote, or a line break.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..amounts import format_money, format_number
from ..models import NormalizedTransaction
from ..payee import derive_payee

BUDGETING_HEADERS = ("Date", "Payee", "Memo", "Outflow", "Inflow")
TRADING_HEADERS = (
    "Date",
    "Action",
    "Symbol",
    "Description",
    "Quantity",
    "Price",
    "Amount",
    "Currency",
    "Exchange Rate",
)

_CASH_SYMBOLS = frozenset({"CAD", "USD"})
_TRADE_ACTIONS = frozenset({"Buy", "Sell"})
_CASH_ACTIONS = frozenset({"Deposit", "Withdrawal", "Transfer"})
_NEEDS_QUOTING = (",", '"', "\n", "\r")


def escape_field(field: str) -> str:
    if any(ch in field for ch in _NEEDS_QUOTING):
        return '"' + field.replace('"', '""') + '"'
    return field


def memo_for(t: NormalizedTransaction) -> str:
    """``"{category} | {account_id}"``, skipping whichever part is empty."""

    return " | ".join(part for part in (str(t.category), t.account_id) if part)


def is_trading_batch(transactions: Sequence[NormalizedTransaction]) -> bool:
    return any(
        (bool(t.symbol) and t.symbol not in _CASH_SYMBOLS)
        or (t.quantity is not None and t.quantity > 0)
        or (t.action in _TRADE_ACTIONS)
        for t in transactions
    )


def _budgeting_row(t: NormalizedTransaction) -> str:
    negative = t.amount < 0
    fields = (
        t.date.isoformat(),
        escape_field(derive_payee(t.description)),
        escape_field(memo_for(t)),
        format_money(abs(t.amount)) if negative else "",
        "" if negative else format_money(t.amount),
    )
    return ",".join(fields)


def _trading_row(t: NormalizedTransaction) -> str:
    cash_like = t.action in _CASH_ACTIONS
    symbol = "" if cash_like else (t.symbol or "")
    quantity = (
        "" if cash_like or t.quantity is None or t.quantity.is_zero() else format_number(t.quantity)
    )
    price = "" if cash_like or t.price is None else format_money(t.price, places=4)
    fields = (
        t.date.isoformat(),
        escape_field(t.action or str(t.category)),
        escape_field(symbol),
        escape_field(t.description),
        quantity,
        price,
        format_money(t.amount),
        t.currency,
        "",  # exchange rate
    )
    return ",".join(fields)


def generate_budgeting_csv(transactions: Sequence[NormalizedTransaction]) -> str:
    lines = [",".join(BUDGETING_HEADERS)]
    lines.extend(_budgeting_row(t) for t in transactions)
    return "\n".join(lines)


def generate_trading_csv(transactions: Sequence[NormalizedTransaction]) -> str:
    lines = [",".join(TRADING_HEADERS)]
    lines.extend(_trading_row(t) for t in transactions)
    return "\n".join(lines)


def generate_csv(transactions: Sequence[NormalizedTransaction]) -> str:
    if is_trading_batch(transactions):
        return generate_trading_csv(transactions)
    return generate_budgeting_csv(transactions)


__all__ = [
    "BUDGETING_HEADERS",
    "TRADING_HEADERS",
    "escape_field",
    "generate_budgeting_csv",
    "generate_csv",
    "generate_trading_csv",
    "is_trading_batch",
    "memo_for",
]
