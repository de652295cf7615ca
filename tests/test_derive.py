from decimal import Decimal

import pytest

from activity_export.derive import derive_action, derive_category, derive_description, derive_price
from activity_export.kinds import ActivityKind, classify
from activity_export.models import Category
from tests.helpers.factories import make_activity


def test_classify_prefers_exact_pair_then_wildcard():
    assert classify("INTERNAL_TRANSFER", "SOURCE") is ActivityKind.TRANSFER_OUT
    assert classify("INTERNAL_TRANSFER", "DESTINATION") is ActivityKind.TRANSFER_IN
    assert classify("INTERNAL_TRANSFER", None) is ActivityKind.TRANSFER_IN
    assert classify("CREDIT_CARD", "SOMETHING_NEW") is ActivityKind.OTHER
    assert classify("NOT_A_TYPE", None) is ActivityKind.OTHER


@pytest.mark.parametrize(
    ("overrides", "expected"),
    [
        ({"type": "DIY_BUY", "assetSymbol": "AAPL", "assetQuantity": "10"}, "Buy 10 x AAPL"),
        ({"type": "DIY_SELL", "assetSymbol": "VFV", "assetQuantity": "2.50"}, "Sell 2.5 x VFV"),
        ({"type": "MANAGED_BUY", "assetSymbol": "XEQT"}, "Buy XEQT"),
        ({"type": "CRYPTO_BUY", "assetQuantity": "0"}, "Buy Unknown"),
        (
            {"type": "DEPOSIT", "subType": "E_TRANSFER", "eTransferName": "John Doe"},
            "Deposit: e-Transfer John Doe",
        ),
        ({"type": "DEPOSIT", "subType": "E_TRANSFER"}, "Deposit: e-Transfer"),
        ({"type": "DEPOSIT", "subType": "EFT"}, "Deposit: EFT"),
        (
            {"type": "DEPOSIT", "subType": "AFT", "aftOriginatorName": "Payroll Inc"},
            "Deposit: AFT Payroll Inc",
        ),
        (
            {"type": "WITHDRAWAL", "subType": "BILL_PAY", "billPayCompanyName": "Hydro"},
            "Withdrawal: Bill pay Hydro",
        ),
        (
            {"type": "WITHDRAWAL", "subType": "PAYMENT_CARD_TRANSACTION"},
            "Withdrawal: Debit card funding",
        ),
        ({"type": "WITHDRAWAL", "spendMerchant": "Coffee Shop"}, "Coffee Shop"),
        ({"type": "WITHDRAWAL"}, "Withdrawal"),
        (
            {"type": "CREDIT_CARD", "subType": "PURCHASE", "spendMerchant": "Grocer"},
            "Grocer",
        ),
        ({"type": "CREDIT_CARD", "subType": "PURCHASE"}, "Credit card purchase"),
        ({"type": "CREDIT_CARD", "subType": "HOLD", "spendMerchant": "Hotel"}, "Hotel (Hold)"),
        ({"type": "CREDIT_CARD", "subType": "HOLD"}, "Credit card hold"),
        ({"type": "CREDIT_CARD", "subType": "REFUND", "spendMerchant": "Shop"}, "Shop (Refund)"),
        ({"type": "CREDIT_CARD", "subType": "REFUND"}, "Refund"),
        ({"type": "CREDIT_CARD", "subType": "PAYMENT"}, "Credit card payment"),
        ({"type": "CREDIT_CARD_PAYMENT"}, "Credit card payment"),
        ({"type": "DIVIDEND", "assetSymbol": "XIU"}, "Dividend: XIU"),
        ({"type": "DIVIDEND"}, "Dividend: Unknown"),
        ({"type": "INTEREST"}, "Interest"),
        ({"type": "INTEREST", "subType": "FPL_INTEREST"}, "Stock Lending Earnings"),
        ({"type": "REFUND"}, "Refund"),
        ({"type": "REFUND", "subType": "TRANSFER_FEE_REFUND"}, "Reimbursement: transfer fee"),
        ({"type": "P2P_PAYMENT", "subType": "SEND", "p2pHandle": "$friend"}, "Cash sent to $friend"),
        ({"type": "P2P_PAYMENT", "subType": "RECEIVE"}, "Cash received from"),
        ({"type": "FEE"}, "Management fee"),
        ({"type": "NON_RESIDENT_TAX"}, "Non-resident tax"),
        ({"type": "FUNDS_CONVERSION", "currency": "USD"}, "Funds converted: USD"),
        ({"type": "REIMBURSEMENT"}, "Reimbursement"),
        ({"type": "PROMOTION"}, "Bonus"),
        ({"type": "REFERRAL"}, "Bonus"),
        ({"type": "SOMETHING_NEW", "subType": "X"}, "SOMETHING_NEW: X"),
        ({"type": "SOMETHING_NEW"}, "SOMETHING_NEW: N/A"),
    ],
)
def test_description(overrides, expected):
    assert derive_description(make_activity(**overrides)) == expected


def test_transfer_description_uses_resolved_name():
    names = {"acct-b": "TFSA"}
    out = make_activity(type="INTERNAL_TRANSFER", subType="SOURCE", opposingAccountId="acct-b")
    incoming = make_activity(type="INTERNAL_TRANSFER", opposingAccountId="acct-b")

    assert derive_description(out, resolve_account_name=names.get) == "Transfer to TFSA"
    assert derive_description(incoming, resolve_account_name=names.get) == "Transfer from TFSA"


def test_transfer_description_falls_back_to_raw_id():
    a = make_activity(type="ASSET_MOVEMENT", subType="SOURCE", opposingAccountId="acct-z")
    none = make_activity(type="INTERNAL_TRANSFER", opposingAccountId=None)

    assert derive_description(a, resolve_account_name={}.get) == "Transfer to acct-z"
    assert derive_description(a) == "Transfer to acct-z"
    assert derive_description(none) == "Transfer from unknown"


@pytest.mark.parametrize(
    ("type_", "sub_type", "expected"),
    [
        ("DIY_BUY", None, Category.INVESTMENT_BUY),
        ("CRYPTO_SELL", None, Category.INVESTMENT_SELL),
        ("DEPOSIT", "EFT", Category.DEPOSIT),
        ("WITHDRAWAL", None, Category.WITHDRAWAL),
        ("DIVIDEND", None, Category.DIVIDEND),
        ("INTEREST", "FPL_INTEREST", Category.INTEREST),
        ("INTERNAL_TRANSFER", "SOURCE", Category.TRANSFER),
        ("ASSET_MOVEMENT", None, Category.TRANSFER),
        ("CREDIT_CARD", "PURCHASE", Category.PURCHASE),
        ("CREDIT_CARD", "HOLD", Category.REFUND),
        ("CREDIT_CARD", "REFUND", Category.REFUND),
        ("CREDIT_CARD", "PAYMENT", Category.CREDIT_CARD_PAYMENT),
        ("CREDIT_CARD_PAYMENT", None, Category.CREDIT_CARD_PAYMENT),
        ("REFUND", None, Category.REFUND),
        ("FEE", None, Category.FEE),
        ("NON_RESIDENT_TAX", None, Category.TAX),
        ("TAX", None, Category.OTHER),
        ("FUNDS_CONVERSION", None, Category.CURRENCY_CONVERSION),
        ("P2P_PAYMENT", "SEND", Category.P2P_PAYMENT),
        ("REIMBURSEMENT", None, Category.REIMBURSEMENT),
        ("PROMOTION", None, Category.BONUS),
        ("UNKNOWN", None, Category.OTHER),
    ],
)
def test_category(type_, sub_type, expected):
    assert derive_category(make_activity(type=type_, subType=sub_type)) is expected


@pytest.mark.parametrize(
    ("type_", "expected"),
    [
        ("DIY_BUY", "Buy"),
        ("CRYPTO_SELL", "Sell"),
        ("DIVIDEND", "Dividend"),
        ("DEPOSIT", "Deposit"),
        ("WITHDRAWAL", "Withdrawal"),
        ("FEE", "Fee"),
        ("INTEREST", "Interest"),
        ("INTERNAL_TRANSFER", "Transfer"),
        ("FUNDS_CONVERSION", "Conversion"),
        ("REIMBURSEMENT", "Reimbursement"),
        ("UNKNOWN", "Other"),
    ],
)
def test_action(type_, expected):
    assert derive_action(make_activity(type=type_)) == expected


def test_price_is_absolute_amount_over_quantity():
    a = make_activity(type="DIY_BUY", amount="-1000.00")

    assert derive_price(a, Decimal("10")) == Decimal("100")
    assert derive_price(a, Decimal("0")) is None
    assert derive_price(a, None) is None
    assert derive_price(make_activity(amount="oops"), Decimal("1")) is None
