"""Statement import commands."""

import json

import click
from ledgerimport.cli.account_resolution import resolve_account_or_exit
from ledgerimport.cli.commands.transaction import format_transaction_line
from ledgerimport.cli.error_handling import handle_domain_error
from ledgerimport.domain.account import AccountService
from ledgerimport.domain.entities import ImportRecord, format_money
from ledgerimport.domain.errors import DomainError
from ledgerimport.domain.statement_import import StatementImportService
from ledgerimport.utils.amount_parser import parse_amount
from ledgerimport.utils.date_parser import get_statement_period, parse_date


@click.group()
def statement_group():
    """Create and process statement imports."""
    pass


def _echo_import(record: ImportRecord) -> None:
    period = ""
    if record.statement_start_date or record.statement_end_date:
        start = record.statement_start_date.isoformat() if record.statement_start_date else "?"
        end = record.statement_end_date.isoformat() if record.statement_end_date else "?"
        period = f" | {start}..{end}"
    click.echo(
        f"ID: {record.id:3d} | account {record.account_id} | {record.status.value:10s} | "
        f"imported {record.transactions_imported}, duplicates {record.transactions_duplicates}, "
        f"failed {record.transactions_failed}{period}"
    )


@statement_group.command("create")
@click.argument("account", metavar="ACCOUNT")
@click.option("--filename", help="Name of the statement file")
@click.option(
    "--file-type",
    type=click.Choice(["csv", "ofx", "qfx", "pdf", "xls", "xlsx"], case_sensitive=False),
    help="Statement file type",
)
@click.option("--start", "start_date", help="Statement start date")
@click.option("--end", "end_date", help="Statement end date")
@click.option(
    "--period",
    type=click.Choice(["this-month", "last-month", "this-year", "last-year"]),
    help="Statement period shortcut (sets --start and --end)",
)
@click.option("--opening", "opening_balance", help="Opening balance reported on the statement")
@click.option("--closing", "closing_balance", help="Closing balance reported on the statement")
@click.pass_context
def create_import(
    ctx,
    account: str,
    filename: str | None,
    file_type: str | None,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    opening_balance: str | None,
    closing_balance: str | None,
):
    """Create a statement import for ACCOUNT (name or ID).

    Examples:
        ledgerimport statement create Cheque --period last-month --opening 10000 --closing 8500
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    payload = {"accountId": account_id, "filename": filename, "fileType": file_type}
    try:
        if period is not None:
            start, end = get_statement_period(period)
            payload["statementStartDate"] = start.isoformat()
            payload["statementEndDate"] = end.isoformat()
        if start_date is not None:
            payload["statementStartDate"] = parse_date(start_date).isoformat()
        if end_date is not None:
            payload["statementEndDate"] = parse_date(end_date).isoformat()
        if opening_balance is not None:
            payload["openingBalance"] = format_money(parse_amount(opening_balance))
        if closing_balance is not None:
            payload["closingBalance"] = format_money(parse_amount(closing_balance))

        record = StatementImportService(db).create_import(user_id, payload)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created statement import {record.id} for account {record.account_id}")


@statement_group.command("list")
@click.option("--account", "account", help="Only imports for this account (name or ID)")
@click.pass_context
def list_imports(ctx, account: str | None):
    """List statement imports."""
    db = ctx.obj["db"]
    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    records = StatementImportService(db).list_imports(ctx.obj["user_id"], account_id=account_id)
    if not records:
        click.echo("No statement imports found.")
        return

    for record in records:
        _echo_import(record)


@statement_group.command("show")
@click.argument("import_id", type=int)
@click.pass_context
def show_import(ctx, import_id: int):
    """Show one statement import."""
    try:
        record = StatementImportService(ctx.obj["db"]).get_import(import_id, ctx.obj["user_id"])
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    _echo_import(record)
    if record.opening_balance is not None or record.closing_balance is not None:
        click.echo(
            f"  opening {format_money(record.opening_balance) or '-'}, "
            f"closing {format_money(record.closing_balance) or '-'}"
        )
    if record.error_message:
        click.echo(f"  {record.error_message}")


@statement_group.command("process")
@click.argument("import_id", type=int)
@click.argument("rows_file", type=click.File("r", encoding="utf-8"))
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def process_import(ctx, import_id: int, rows_file, as_json: bool):
    """Process IMPORT_ID with parsed statement rows from ROWS_FILE.

    ROWS_FILE is JSON: either {"transactions": [...]} or a bare list of rows
    with transactionDate, amount, description, transactionType and optional
    merchantOriginal, externalId and postedDate.
    """
    try:
        payload = json.load(rows_file)
    except json.JSONDecodeError as e:
        click.echo(f"Error: {rows_file.name} is not valid JSON: {e}", err=True)
        ctx.exit(1)
        return

    if isinstance(payload, list):
        payload = {"transactions": payload}

    try:
        result = StatementImportService(ctx.obj["db"]).process(
            import_id, ctx.obj["user_id"], payload
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.echo(f"\nImport {result.import_record.status.value}:")
    click.echo(f"  Imported: {result.imported} transactions")
    click.echo(f"  Duplicates: {result.duplicates} skipped")
    click.echo(f"  Failed: {result.failed}")
    for error in result.errors:
        click.echo(f"    {error}", err=True)

    check = result.balance_check
    if check is not None:
        state = "reconciled" if check.is_reconciled else f"off by {check.difference}"
        click.echo(
            f"  Balance: opening {check.opening_balance}, closing {check.closing_balance}, "
            f"computed {check.computed_closing} ({state})"
        )


@statement_group.command("transactions")
@click.argument("import_id", type=int)
@click.pass_context
def import_transactions(ctx, import_id: int):
    """List the transactions created by an import."""
    try:
        transactions = StatementImportService(ctx.obj["db"]).list_import_transactions(
            import_id, ctx.obj["user_id"]
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not transactions:
        click.echo("No transactions found.")
        return
    for txn in transactions:
        click.echo(format_transaction_line(txn))


def register_commands(cli):
    """Register statement commands with main CLI."""
    cli.add_command(statement_group, name="statement")
