"""Brokerage activity to budgeting CSV, trading CSV, OFX and QFX.

Most callers need :func:`export_activities`, which takes fetched
:class:`RawActivity` records plus :class:`ExportOptions` and returns the
file content. The normalization steps and codecs it chains are exported
alongside it for finer control.
"""

from .accounts import (
    account_name_lookup,
    build_account_names,
    export_options_for,
    find_account,
    is_credit_card_account,
)
from .amounts import resolve_amount
from .api import ExportResult, export_activities, export_filename, transactions_since
from .derive import derive_action, derive_category, derive_description, derive_price
from .errors import ActivityLoadError, ExportError, NoTransactionsError
from .exporters import (
    generate_csv,
    generate_export_file,
    generate_fitid,
    generate_ofx,
    generate_qfx,
)
from .models import (
    AccountRecord,
    AmountSign,
    Category,
    ExportFile,
    ExportFormat,
    ExportOptions,
    NormalizedTransaction,
    RawActivity,
)
from .normalizers import filter_activities, is_excluded, normalize_activities, normalize_activity
from .payee import derive_payee

__all__ = [
    # API
    "export_activities",
    "export_filename",
    "transactions_since",
    "ExportResult",
    # Normalization
    "filter_activities",
    "is_excluded",
    "normalize_activity",
    "normalize_activities",
    "resolve_amount",
    "derive_action",
    "derive_category",
    "derive_description",
    "derive_price",
    "derive_payee",
    # Accounts
    "account_name_lookup",
    "build_account_names",
    "export_options_for",
    "find_account",
    "is_credit_card_account",
    # Export codecs
    "generate_csv",
    "generate_export_file",
    "generate_fitid",
    "generate_ofx",
    "generate_qfx",
    # Models / types
    "AccountRecord",
    "AmountSign",
    "Category",
    "ExportFile",
    "ExportFormat",
    "ExportOptions",
    "NormalizedTransaction",
    "RawActivity",
    # Errors
    "ActivityLoadError",
    "ExportError",
    "NoTransactionsError",
]
