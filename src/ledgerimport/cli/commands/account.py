"""Account management commands."""

import click
from ledgerimport.cli.account_resolution import resolve_account_or_exit
from ledgerimport.cli.error_handling import handle_domain_error
from ledgerimport.domain.account import AccountService
from ledgerimport.domain.entities import format_money
from ledgerimport.domain.errors import DomainError
from ledgerimport.utils.amount_parser import parse_amount


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--bank", help="Bank name (defaults to account name if not provided)")
@click.option("--currency", default="ZAR", show_default=True, help="ISO currency code")
@click.option("--balance", default="0", help="Current balance of the account")
@click.pass_context
def create_account(ctx, name: str, bank: str | None, currency: str, balance: str):
    """Create a new account.

    Examples:
        ledgerimport account create "Cheque"
        ledgerimport account create "Cheque" --bank "FNB" --balance 10000.00
    """
    service = AccountService(ctx.obj["db"])
    bank_name = bank if bank is not None else name

    try:
        opening = parse_amount(balance)
        account_id = service.create_account(
            user_id=ctx.obj["user_id"],
            name=name,
            bank_name=bank_name,
            currency=currency,
            opening_balance=opening,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created account '{name}' (ID: {account_id})")
    if bank is None:
        click.echo(f"Bank name set to '{bank_name}'")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    service = AccountService(ctx.obj["db"])

    accounts = service.list_accounts(ctx.obj["user_id"])
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 72)
    for acc in accounts:
        click.echo(
            f"ID: {acc.id:3d} | {acc.name:20s} | Bank: {acc.bank_name:15s} | "
            f"{acc.currency} {format_money(acc.current_balance):>12s}"
        )


@account_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_account(ctx, account: str):
    """Show an account and its current balance.

    ACCOUNT can be an account name or ID.
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    acc = service.require_account(account_id, ctx.obj["user_id"])

    click.echo(f"Account:  {acc.name} (ID: {acc.id})")
    click.echo(f"Bank:     {acc.bank_name}")
    click.echo(f"Balance:  {acc.currency} {format_money(acc.current_balance)}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
