"""Main CLI entry point."""

import logging
from dataclasses import replace

import click
from pocketledger.config import load_settings
from pocketledger.database.factories import create_sqlite_database
from pocketledger.domain.errors import ValidationError
from pocketledger.logging_config import configure_logging

# Import and register all commands at module level
from pocketledger.cli.commands import (
    account,
    category,
    transaction,
    debt,
    income,
    investment,
    goal,
    settings as settings_commands,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides POCKETLEDGER_DB_PATH environment variable)",
    envvar="POCKETLEDGER_DB_PATH",
)
@click.option(
    "--owner",
    help="Owner whose records are used (overrides POCKETLEDGER_OWNER environment variable)",
    envvar="POCKETLEDGER_OWNER",
)
@click.option("--verbose", "-v", is_flag=True, help="Log balance postings to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, owner: str | None, verbose: bool):
    """pocketledger - Personal finance ledger.

    Track accounts, transactions, debts, income and investments while
    keeping every account balance consistent with its records.
    """
    ctx.ensure_object(dict)

    try:
        settings = load_settings()
    except ValidationError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    if db_path:
        settings = replace(settings, database_path=db_path)
    if owner:
        settings = replace(settings, owner_id=owner)
    if verbose:
        settings = replace(settings, log_level=min(settings.log_level, logging.INFO))
    configure_logging(settings.log_level)

    ctx.obj["settings"] = settings
    ctx.obj["owner"] = settings.owner_id

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=settings.database_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
category.register_commands(cli)
transaction.register_commands(cli)
debt.register_commands(cli)
income.register_commands(cli)
investment.register_commands(cli)
goal.register_commands(cli)
settings_commands.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
