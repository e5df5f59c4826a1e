"""Main CLI entry point."""

import logging

import click
from ledgerimport.database.factories import create_sqlite_database

# Import and register all commands at module level
from ledgerimport.cli.commands import (
    account,
    category,
    merchant,
    rule,
    statement,
    transaction,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERIMPORT_DB_PATH environment variable)",
    envvar="LEDGERIMPORT_DB_PATH",
)
@click.option(
    "--user",
    "user_id",
    default="default",
    show_default=True,
    envvar="LEDGERIMPORT_USER",
    help="User whose ledger to work on",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="LEDGERIMPORT_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, user_id: str, log_level: str):
    """Ledgerimport - commit parsed bank statements into a ledger.

    Imports are created for an account, then processed once with a JSON list
    of parsed statement rows. Duplicates are skipped, merchants normalized,
    rows categorized by rule and the result reconciled against the
    statement's balances.
    """
    ctx.ensure_object(dict)

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["user_id"] = user_id
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
category.register_commands(cli)
merchant.register_commands(cli)
rule.register_commands(cli)
statement.register_commands(cli)
transaction.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
