"""OFX 1.0.2 (SGML) bank statement export, plus the QFX variant.

QFX is OFX with an Intuit ``<INTU.BID>`` tag after the ``<FI>`` block, which
Quicken requires before it will import a file.

Transaction identity
--------------------
Importers de-duplicate on ``<FITID>``. A normal transaction uses its provider
id verbatim. An internal transfer is recorded once per account under the same
provider id, so each leg gets ``"{id}-{hash32(id|account|direction)}"``:
stable across re-exports, and different for the two legs.

Only ``NEWFILEUID``, ``DTSERVER`` and ``DTASOF`` depend on the clock; pass
``now`` to make the output fully reproducible.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import replace
from datetime import UTC, date, datetime
from decimal import Decimal

from ..amounts import format_money
from ..config import default_currency, default_fid, default_org
from ..models import Category, ExportOptions, NormalizedTransaction
from ..payee import derive_payee

OFX_HEADER_LINES = (
    "OFXHEADER:100",
    "DATA:OFXSGML",
    "VERSION:102",
    "SECURITY:NONE",
    "ENCODING:USASCII",
    "CHARSET:1252",
    "COMPRESSION:NONE",
    "OLDFILEUID:NONE",
)

PLACEHOLDER_BANK_ID = "000000000"
NAME_MAX_LEN = 96
MEMO_MAX_LEN = 255

_DEPOSIT_CATEGORIES = frozenset(
    {
        Category.DEPOSIT,
        Category.DIVIDEND,
        Category.INTEREST,
        Category.REFUND,
        Category.REIMBURSEMENT,
        Category.BONUS,
    }
)
_WITHDRAWAL_CATEGORIES = frozenset(
    {Category.WITHDRAWAL, Category.FEE, Category.TAX, Category.PURCHASE}
)

_LINE_BREAK_RE = re.compile(r"\r?\n")


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def hash32(text: str) -> str:
    """DJB2-xor hash over UTF-16 code units, as 8 lowercase hex digits.

    Not cryptographic; it only needs to be deterministic and short.
    """

    h = 5381
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        code_unit = data[i] | (data[i + 1] << 8)
        h = (((h << 5) + h) & 0xFFFFFFFF) ^ code_unit
    return f"{h:08x}"


def sanitize(value: str) -> str:
    """Escape SGML metacharacters and fold line breaks into spaces."""

    value = value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    return _LINE_BREAK_RE.sub(" ", value).strip()


def format_timestamp(moment: datetime) -> str:
    """``YYYYMMDDHHMMSS`` in UTC."""

    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC)
    return moment.strftime("%Y%m%d%H%M%S")


def format_posted(d: date) -> str:
    # Dates carry no time of day; noon keeps them on the same day in any zone.
    return d.strftime("%Y%m%d") + "120000"


def is_internal_transfer(t: NormalizedTransaction) -> bool:
    return (
        t.category == Category.TRANSFER
        or t.action == "Transfer"
        or t.description.lower().startswith("transfer ")
    )


def generate_fitid(t: NormalizedTransaction) -> str:
    if not is_internal_transfer(t):
        return sanitize(t.id)
    direction = "OUT" if t.amount < 0 else "IN"
    return f"{sanitize(t.id)}-{hash32(f'{t.id}|{t.account_id}|{direction}')}"


def map_trntype(t: NormalizedTransaction) -> str:
    if t.category in _DEPOSIT_CATEGORIES:
        return "DEP"
    if t.category in _WITHDRAWAL_CATEGORIES:
        return "WITHDRAWAL"
    return "DEBIT" if t.amount < 0 else "CREDIT"


def map_account_type(account_type: str | None) -> str:
    normalized = (account_type or "").lower()
    if "savings" in normalized:
        return "SAVINGS"
    if "credit" in normalized:
        return "CREDITLINE"
    return "CHECKING"


# ---------------------------------------------------------------------------
# Document assembly
# ---------------------------------------------------------------------------


def _transaction_block(t: NormalizedTransaction) -> list[str]:
    name = sanitize(derive_payee(t.description))[:NAME_MAX_LEN] or t.id
    memo = sanitize(f"{t.category} | {t.account_id}")[:MEMO_MAX_LEN]
    return [
        "<STMTTRN>",
        f"<TRNTYPE>{map_trntype(t)}",
        f"<DTPOSTED>{format_posted(t.date)}",
        f"<TRNAMT>{format_money(t.amount)}",
        f"<FITID>{generate_fitid(t)}",
        f"<NAME>{name}",
        f"<MEMO>{memo}",
        "</STMTTRN>",
    ]


def _fi_block(org: str, fid: str, intu_bid: str | None) -> list[str]:
    lines = ["<FI>", f"<ORG>{org}", f"<FID>{fid}", "</FI>"]
    if intu_bid is not None:
        lines.append(f"<INTU.BID>{sanitize(intu_bid)}")
    return lines


def _build_body(
    transactions: Sequence[NormalizedTransaction],
    options: ExportOptions,
    now: datetime,
    *,
    include_intu_bid: bool,
) -> str:
    currency = options.currency or (transactions[0].currency if transactions else "")
    currency = currency or default_currency()
    # sorted() is stable, so same-day transactions keep their input order.
    ordered = sorted(transactions, key=lambda t: t.date)
    today = now.astimezone(UTC).date() if now.tzinfo is not None else now.date()
    start = ordered[0].date if ordered else today
    end = ordered[-1].date if ordered else today
    ledger = sum((t.amount for t in transactions), Decimal(0))
    org = sanitize(options.org or default_org())
    fid = sanitize(options.fid or default_fid())
    intu_bid = (options.intu_bid or fid) if include_intu_bid else None
    stamp = format_timestamp(now)

    lines = [
        "<OFX>",
        "<SIGNONMSGSRSV1>",
        "<SONRS>",
        "<STATUS>",
        "<CODE>0",
        "<SEVERITY>INFO",
        "</STATUS>",
        f"<DTSERVER>{stamp}",
        "<LANGUAGE>ENG",
        *_fi_block(org, fid, intu_bid),
        "</SONRS>",
        "</SIGNONMSGSRSV1>",
        "<BANKMSGSRSV1>",
        "<STMTTRNRS>",
        "<TRNUID>1",
        "<STATUS>",
        "<CODE>0",
        "<SEVERITY>INFO",
        "</STATUS>",
        "<STMTRS>",
        f"<CURDEF>{sanitize(currency)}",
        "<BANKACCTFROM>",
        f"<BANKID>{PLACEHOLDER_BANK_ID}",
        f"<ACCTID>{sanitize(options.account_id)}",
        f"<ACCTTYPE>{map_account_type(options.account_type)}",
        "</BANKACCTFROM>",
        "<BANKTRANLIST>",
        f"<DTSTART>{format_posted(start)}",
        f"<DTEND>{format_posted(end)}",
    ]
    for t in ordered:
        lines.extend(_transaction_block(t))
    lines.extend(
        [
            "</BANKTRANLIST>",
            "<LEDGERBAL>",
            f"<BALAMT>{format_money(ledger)}",
            f"<DTASOF>{stamp}",
            "</LEDGERBAL>",
            "</STMTRS>",
            "</STMTTRNRS>",
            "</BANKMSGSRSV1>",
            "</OFX>",
        ]
    )
    return "\n".join(lines)


def generate_ofx(
    transactions: Sequence[NormalizedTransaction],
    options: ExportOptions,
    *,
    include_intu_bid: bool = False,
    now: datetime | None = None,
) -> str:
    """Render ``transactions`` as an OFX SGML document.

    Parameters
    ----------
    transactions:
        Batch to export; re-sorted ascending by date (stable).
    options:
        Account metadata for the ``<FI>`` and ``<BANKACCTFROM>`` blocks.
    include_intu_bid:
        Emit ``<INTU.BID>`` (the QFX extension), defaulting to the FID when
        ``options.intu_bid`` is not set.
    now:
        Generation time for ``NEWFILEUID``/``DTSERVER``/``DTASOF``; defaults
        to the current UTC time.
    """

    now = now or datetime.now(UTC)
    new_file_uid = f"{format_timestamp(now)}-{hash32(f'{options.account_id}:{len(transactions)}')}"
    header = "\n".join([*OFX_HEADER_LINES, f"NEWFILEUID:{new_file_uid}", ""])
    body = _build_body(transactions, options, now, include_intu_bid=include_intu_bid)
    return f"{header}\n{body}"


def generate_qfx(
    transactions: Sequence[NormalizedTransaction],
    options: ExportOptions,
    *,
    now: datetime | None = None,
) -> str:
    """OFX with the Intuit bank-id tag, defaulting the bank id to the FID."""

    intu_bid = options.intu_bid or options.fid or default_fid()
    return generate_ofx(
        transactions, replace(options, intu_bid=intu_bid), include_intu_bid=True, now=now
    )


__all__ = [
    "OFX_HEADER_LINES",
    "format_posted",
    "format_timestamp",
    "generate_fitid",
    "generate_ofx",
    "generate_qfx",
    "hash32",
    "is_internal_transfer",
    "map_account_type",
    "map_trntype",
    "sanitize",
]
