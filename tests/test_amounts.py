from decimal import Decimal

import pytest

from activity_export.amounts import format_money, format_number, parse_decimal, resolve_amount
from tests.helpers.factories import make_activity


@pytest.mark.parametrize(
    ("type_", "sub_type", "expected"),
    [
        ("DIY_BUY", None, Decimal("-25.00")),
        ("CRYPTO_BUY", None, Decimal("-25.00")),
        ("WITHDRAWAL", "E_TRANSFER", Decimal("-25.00")),
        ("FEE", None, Decimal("-25.00")),
        ("NON_RESIDENT_TAX", None, Decimal("-25.00")),
        ("TAX", None, Decimal("-25.00")),
        ("CREDIT_CARD", "PURCHASE", Decimal("-25.00")),
        ("INTERNAL_TRANSFER", "SOURCE", Decimal("-25.00")),
        ("ASSET_MOVEMENT", "SOURCE", Decimal("-25.00")),
        ("P2P_PAYMENT", "SEND", Decimal("-25.00")),
        ("DIY_SELL", None, Decimal("25.00")),
        ("DEPOSIT", None, Decimal("25.00")),
        ("DIVIDEND", None, Decimal("25.00")),
        ("INTEREST", None, Decimal("25.00")),
        ("INTEREST", "FPL_INTEREST", Decimal("25.00")),
        ("REIMBURSEMENT", None, Decimal("25.00")),
        ("REFUND", "TRANSFER_FEE_REFUND", Decimal("25.00")),
        ("PROMOTION", None, Decimal("25.00")),
        ("REFERRAL", None, Decimal("25.00")),
        ("INTERNAL_TRANSFER", "DESTINATION", Decimal("25.00")),
        ("P2P_PAYMENT", "RECEIVE", Decimal("25.00")),
    ],
)
def test_sign_inferred_from_kind_without_sign_hint(type_, sub_type, expected):
    for raw in ("25.00", "-25.00"):
        a = make_activity(type=type_, subType=sub_type, amount=raw, amountSign=None)
        assert resolve_amount(a) == expected


def test_explicit_sign_wins_over_kind():
    # A deposit flagged as DEBIT is an outflow regardless of its type.
    debit = make_activity(type="DEPOSIT", amount="10", amountSign="DEBIT")
    credit = make_activity(type="DIY_BUY", amount="-10", amountSign="CREDIT")

    assert resolve_amount(debit) == Decimal("-10")
    assert resolve_amount(credit) == Decimal("10")


def test_unknown_sign_value_is_ignored():
    a = make_activity(type="FEE", amount="3.50", amountSign="sideways")

    assert a.amount_sign is None
    assert resolve_amount(a) == Decimal("-3.50")


@pytest.mark.parametrize("raw", [None, "", "   ", "abc", "NaN", "Infinity"])
def test_missing_or_invalid_amount_is_zero(raw):
    a = make_activity(amount=raw, amountSign=None)
    assert resolve_amount(a) == Decimal(0)


def test_negative_zero_never_leaks():
    a = make_activity(type="FEE", amount="0.00", amountSign="DEBIT")

    amount = resolve_amount(a)
    assert amount == 0
    assert not amount.is_signed()
    assert format_money(amount) == "0.00"


@pytest.mark.parametrize(
    ("type_", "sub_type"),
    [("CREDIT_CARD_PAYMENT", None), ("CREDIT_CARD", "PAYMENT"), ("CREDIT_CARD", "REFUND")],
)
def test_card_payment_sign_depends_on_account_context(type_, sub_type):
    a = make_activity(type=type_, subType=sub_type, amount="200.00", amountSign=None)

    assert resolve_amount(a, is_credit_card=True) == Decimal("200.00")
    assert resolve_amount(a, is_credit_card=False) == Decimal("-200.00")


def test_ambiguous_kind_passes_raw_amount_through(caplog):
    a = make_activity(type="MYSTERY", amount="-12.34", amountSign=None)

    with caplog.at_level("WARNING", logger="activity_export.amounts"):
        assert resolve_amount(a) == Decimal("-12.34")
    assert any("ambiguous sign" in r.getMessage() for r in caplog.records)


def test_lowercase_type_is_classified():
    a = make_activity(type="diy_buy", amount="5", amountSign=None)
    assert resolve_amount(a) == Decimal("-5")


def test_parse_decimal():
    assert parse_decimal(" 1.50 ") == Decimal("1.50")
    assert parse_decimal("1e2") == Decimal("100")
    assert parse_decimal("12abc") is None
    assert parse_decimal(None) is None


@pytest.mark.parametrize(
    ("value", "places", "expected"),
    [
        (Decimal("1.005"), 2, "1.01"),
        (Decimal("-1.005"), 2, "-1.01"),
        (Decimal("-0.001"), 2, "0.00"),
        (Decimal("100"), 2, "100.00"),
        (Decimal("152.123456"), 4, "152.1235"),
    ],
)
def test_format_money_rounds_half_up(value, places, expected):
    assert format_money(value, places=places) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (Decimal("10.000"), "10"),
        (Decimal("0.50"), "0.5"),
        (Decimal("1E+2"), "100"),
        (Decimal("-0.0"), "0"),
        (Decimal("0.00012"), "0.00012"),
    ],
)
def test_format_number_shortest_form(value, expected):
    assert format_number(value) == expected


def test_format_money_beyond_default_precision():
    assert format_money(Decimal("1E+30")) == "1" + "0" * 30 + ".00"
    assert format_money(Decimal("-123456789012345678901234567.885")) == (
        "-123456789012345678901234567.89"
    )
    assert format_number(Decimal("1234567890123456789012345678901.5")) == (
        "1234567890123456789012345678901.5"
    )
