"""Command line interface for ``activity_export``.

Reads activity (and optionally account) JSON saved from the provider's API,
writes one export file, and prints the id a caller should remember for the
next incremental export. Environment defaults (see
:mod:`activity_export.config`) are loaded from a local ``.env`` first.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .accounts import (
    account_name_lookup,
    account_type_of,
    build_account_names,
    export_options_for,
    find_account,
    is_credit_card_account,
)
from .api import export_activities, export_filename
from .errors import ExportError
from .ingest import load_accounts, load_activities
from .logging_setup import configure_logging, get_logger
from .models import AccountRecord, ExportFormat, ExportOptions, RawActivity

_logger = get_logger("activity_export.cli")

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Export brokerage activity as budgeting/trading CSV, OFX or QFX.",
)
console = Console()
err_console = Console(stderr=True)


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    return typer.Exit(1)


def _activities_for(
    activities: list[RawActivity], account_id: str, account: AccountRecord | None
) -> list[RawActivity]:
    ids = {account_id}
    if account is not None:
        ids.add(account.id)
        ids.update(c.id for c in account.custodian_accounts or ())
    return [a for a in activities if a.account_id in ids]


@app.command("export")
def export_cmd(
    activities_path: Annotated[
        Path,
        typer.Option(
            "--activities", help="JSON file of activity records (list or GraphQL connection)."
        ),
    ],
    accounts_path: Annotated[
        Path | None,
        typer.Option("--accounts", help="Optional JSON file of account records."),
    ] = None,
    account_id: Annotated[
        str | None,
        typer.Option(help="Account to export; defaults to the first account found."),
    ] = None,
    fmt: Annotated[
        ExportFormat, typer.Option("--format", case_sensitive=False, help="Output format.")
    ] = ExportFormat.CSV,
    output_dir: Annotated[
        Path, typer.Option(file_okay=False, help="Directory to write the export into.")
    ] = Path("."),
    last_transaction_id: Annotated[
        str | None,
        typer.Option(help="Only export transactions newer than this previously exported id."),
    ] = None,
    credit_card: Annotated[
        bool | None,
        typer.Option(
            "--credit-card/--no-credit-card",
            help="Treat the account as a credit card (detected from account metadata if omitted).",
        ),
    ] = None,
    org: Annotated[str | None, typer.Option(help="OFX <ORG> override.")] = None,
    fid: Annotated[str | None, typer.Option(help="OFX <FID> override.")] = None,
) -> None:
    """Normalize activities for one account and write the export file."""

    try:
        activities = load_activities(activities_path)
        accounts = load_accounts(accounts_path) if accounts_path is not None else []
    except ExportError as e:
        raise _fail(str(e)) from e

    account: AccountRecord | None = None
    if account_id is not None:
        account = find_account(accounts, account_id)
        if account is None and accounts:
            raise _fail(f"account not found: {account_id}")
    elif accounts:
        account = accounts[0]

    target_id = account.id if account is not None else account_id
    if target_id is None:
        if not activities:
            raise _fail("no activities in input and no --account-id given")
        target_id = activities[0].account_id

    if account is not None:
        options = export_options_for(account, org=org, fid=fid)
        account_type = account_type_of(account)
        account_name = account.nickname or account.id
    else:
        options = ExportOptions(account_id=target_id, org=org, fid=fid)
        account_type = None
        account_name = target_id

    is_cc = (
        credit_card
        if credit_card is not None
        else is_credit_card_account(account_type, target_id)
    )
    names = build_account_names(accounts)

    try:
        result = export_activities(
            _activities_for(activities, target_id, account),
            fmt,
            options,
            resolve_account_name=account_name_lookup(names),
            is_credit_card=is_cc,
            last_transaction_id=last_transaction_id,
        )
    except ExportError as e:
        raise _fail(str(e)) from e

    output_dir.mkdir(parents=True, exist_ok=True)
    out_path = output_dir / export_filename(account_name, date.today(), result.file.extension)
    # newline="" keeps the codecs' "\n" line endings on every platform.
    with out_path.open("w", encoding="utf-8", newline="") as f:
        f.write(result.file.content)
    _logger.info("wrote %s (%s)", out_path, result.file.mime_type)

    table = Table(title="Export summary", show_header=False)
    table.add_row("Account", account_name)
    table.add_row("Format", fmt.value)
    table.add_row("Transactions", str(result.transaction_count))
    if result.start_date and result.end_date:
        table.add_row("Date range", f"{result.start_date} to {result.end_date}")
    table.add_row("Last transaction id", result.last_transaction_id or "")
    table.add_row("File", str(out_path))
    console.print(table)


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    log_level: Annotated[
        str | None,
        typer.Option(help="Log level (falls back to ACTIVITY_EXPORT_LOG_LEVEL, then INFO)."),
    ] = None,
) -> None:
    """Load ``.env`` from the working directory and configure logging."""

    # Existing environment wins over .env values.
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)

    if ctx.invoked_subcommand is None:
        typer.echo("No subcommand provided. Use --help to see available commands.")
        raise typer.Exit(1)


if __name__ == "__main__":  # pragma: no cover
    app()
