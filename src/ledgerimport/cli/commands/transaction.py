"""Transaction listing command."""

import click
from ledgerimport.domain.entities import Transaction, format_money
from ledgerimport.domain.transaction import TransactionService


def format_transaction_line(txn: Transaction) -> str:
    """One-line rendering of a ledger transaction."""
    merchant = txn.merchant_normalized or txn.merchant_original or ""
    category = f" [cat {txn.category_id}]" if txn.category_id is not None else ""
    return (
        f"{txn.id:5d} | {txn.transaction_date.isoformat()} | "
        f"{format_money(txn.signed_amount):>12s} | {txn.description[:40]:40s} | "
        f"{merchant}{category}"
    )


@click.command("transactions")
@click.option("--account", "account_id", type=int, help="Only this account")
@click.option("--import", "import_id", type=int, help="Only rows created by this import")
@click.pass_context
def list_transactions(ctx, account_id: int | None, import_id: int | None):
    """List ledger transactions."""
    service = TransactionService(ctx.obj["db"])

    transactions = service.list_transactions(
        ctx.obj["user_id"], account_id=account_id, import_id=import_id
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    for txn in transactions:
        click.echo(format_transaction_line(txn))


def register_commands(cli):
    """Register transaction command with main CLI."""
    cli.add_command(list_transactions)
