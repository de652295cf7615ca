"""Payee cleanup shared by the budgeting CSV and the OFX ``<NAME>`` field."""

from __future__ import annotations

import re

# Applied in order; each pattern strips at most one leading occurrence.
_PRIMARY_PREFIXES = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"^Withdrawal:\s*",
        r"^Deposit:\s*",
        r"^Credit card purchase:\s*",
        r"^Credit card hold:\s*",
        r"^Credit card refund:\s*",
    )
)
_SECONDARY_PREFIXES = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"^AFT\s+",
        r"^e-Transfer\s+",
        r"^EFT\s+",
        r"^Bill pay\s+",
    )
)


def derive_payee(description: str) -> str:
    """Strip provider prefixes (``"Deposit: e-Transfer "``) from ``description``.

    Returns the trimmed original when stripping would leave nothing, so a bare
    ``"Deposit:"`` stays a usable payee.
    """

    original = description.strip()
    payee = original
    for pattern in (*_PRIMARY_PREFIXES, *_SECONDARY_PREFIXES):
        payee = pattern.sub("", payee, count=1)
    payee = payee.strip()
    return payee or original


__all__ = ["derive_payee"]
