"""Helpers that turn fetched account metadata into normalizer/codec inputs."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .config import default_fid, default_org
from .derive import AccountNameResolver
from .models import AccountRecord, ExportOptions

_CREDIT_CARD_TYPES = frozenset({"credit_card", "credit-card"})


def display_name(account: AccountRecord) -> str:
    """Nickname, else the account type upper-cased with ``_`` as spaces."""

    if account.nickname:
        return account.nickname
    raw_type = account.unified_account_type or account.type or ""
    return raw_type.upper().replace("_", " ")


def build_account_names(accounts: Iterable[AccountRecord]) -> dict[str, str]:
    """Map every account id, and each custodian sub-account id, to a display name."""

    names: dict[str, str] = {}
    for account in accounts:
        name = display_name(account)
        names[account.id] = name
        for custodian in account.custodian_accounts or ():
            names[custodian.id] = name
    return names


def account_name_lookup(names: Mapping[str, str]) -> AccountNameResolver:
    """Adapt a name mapping to the ``resolve_account_name`` callable."""

    return names.get


def is_credit_card_account(account_type: str | None, account_id: str = "") -> bool:
    # The type is not always populated, so the id convention is checked too.
    return (account_type or "").strip().lower() in _CREDIT_CARD_TYPES or "credit-card" in (
        account_id or ""
    )


def find_account(accounts: Iterable[AccountRecord], account_id: str) -> AccountRecord | None:
    """Find by account id first, then by custodian sub-account id."""

    candidates = list(accounts)
    for account in candidates:
        if account.id == account_id:
            return account
    for account in candidates:
        if any(c.id == account_id for c in account.custodian_accounts or ()):
            return account
    return None


def account_type_of(account: AccountRecord) -> str | None:
    return account.unified_account_type or account.type


def export_options_for(
    account: AccountRecord, *, org: str | None = None, fid: str | None = None
) -> ExportOptions:
    return ExportOptions(
        account_id=account.id,
        account_type=account_type_of(account),
        currency=account.currency,
        org=org or default_org(),
        fid=fid or default_fid(),
    )


__all__ = [
    "account_name_lookup",
    "account_type_of",
    "build_account_names",
    "display_name",
    "export_options_for",
    "find_account",
    "is_credit_card_account",
]
