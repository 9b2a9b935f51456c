"""Investment management commands."""

import click
from pocketledger.cli.account_resolution import resolve_account_or_exit
from pocketledger.cli.error_handling import (
    handle_domain_error,
    parse_amount_or_exit,
    parse_date_or_exit,
)
from pocketledger.domain.account import AccountService
from pocketledger.domain.entities import INVESTMENT_TYPES
from pocketledger.domain.errors import DomainError, investment_entry_not_found, investment_not_found
from pocketledger.domain.investment import InvestmentService


@click.group()
def investment_group():
    """Manage investments and their monthly values."""
    pass


@investment_group.command("create")
@click.argument("name")
@click.option("--type", "investment_type", type=click.Choice(INVESTMENT_TYPES), required=True)
@click.option("--initial", "initial_amount", required=True, help="Amount initially invested")
@click.option("--quantity", help="Units held")
@click.option("--ticker")
@click.pass_context
def create_investment(
    ctx,
    name: str,
    investment_type: str,
    initial_amount: str,
    quantity: str | None,
    ticker: str | None,
):
    """Create an investment.

    Examples:
        pocketledger investment create "Index fund" --type stock --initial 1000 --ticker VT
    """
    try:
        investment = InvestmentService(ctx.obj["db"]).create_investment(
            owner_id=ctx.obj["owner"],
            name=name,
            type=investment_type,
            initial_amount=parse_amount_or_exit(ctx, initial_amount),
            quantity=parse_amount_or_exit(ctx, quantity) if quantity is not None else None,
            ticker=ticker,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created investment '{investment.name}' (ID: {investment.id})")


@investment_group.command("list")
@click.pass_context
def list_investments(ctx):
    """List investments with their current values."""
    investments = InvestmentService(ctx.obj["db"]).list_investments(ctx.obj["owner"])
    if not investments:
        click.echo("No investments found.")
        return

    for inv in investments:
        ticker = f" ({inv.ticker})" if inv.ticker else ""
        click.echo(
            f"ID: {inv.id:3d} | {inv.name + ticker:24s} | {inv.type:11s} | "
            f"invested {inv.initial_amount} | value {inv.current_value}"
        )


@investment_group.command("entry-add")
@click.argument("investment_id", type=int)
@click.option("--year", type=int, required=True)
@click.option("--month", type=int, required=True)
@click.option("--value", required=True, help="Value added to the month's entry")
@click.pass_context
def add_entry(ctx, investment_id: int, year: int, month: int, value: str):
    """Record a monthly value. A second entry for the same month adds up."""
    try:
        entry = InvestmentService(ctx.obj["db"]).upsert_entry(
            owner_id=ctx.obj["owner"],
            investment_id=investment_id,
            year=year,
            month=month,
            value=parse_amount_or_exit(ctx, value),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    if entry is None:
        click.echo(f"Error: {investment_not_found(investment_id)}", err=True)
        ctx.exit(1)
    click.echo(f"Entry {entry.id} for {entry.year:04d}-{entry.month:02d} is now {entry.value}")


@investment_group.command("entry-update")
@click.argument("entry_id", type=int)
@click.option("--value", required=True, help="New value for the entry")
@click.pass_context
def update_entry(ctx, entry_id: int, value: str):
    """Overwrite the value of a monthly entry."""
    try:
        entry = InvestmentService(ctx.obj["db"]).update_entry(
            ctx.obj["owner"], entry_id, parse_amount_or_exit(ctx, value)
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    if entry is None:
        click.echo(f"Error: {investment_entry_not_found(entry_id)}", err=True)
        ctx.exit(1)
    click.echo(f"Updated entry {entry_id}")


@investment_group.command("entries")
@click.option("--year", type=int)
@click.option("--investment", "investment_id", type=int, help="Only entries of this investment")
@click.pass_context
def list_entries(ctx, year: int | None, investment_id: int | None):
    """List monthly investment entries."""
    try:
        entries = InvestmentService(ctx.obj["db"]).list_entries(
            ctx.obj["owner"], year=year, investment_id=investment_id
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    if not entries:
        click.echo("No investment entries found.")
        return

    for entry in entries:
        click.echo(
            f"ID: {entry.id:3d} | investment {entry.investment_id} | "
            f"{entry.year:04d}-{entry.month:02d} | {entry.value:>12}"
        )


@investment_group.command("apply")
@click.argument("investment_id", type=int)
@click.option("--account", required=True, help="Account the money comes from (name or ID)")
@click.option("--amount", required=True)
@click.option("--date", "date_str", default="today", show_default=True)
@click.option("--description")
@click.pass_context
def apply_investment(
    ctx, investment_id: int, account: str, amount: str, date_str: str, description: str | None
):
    """Move money from an account into an investment.

    Examples:
        pocketledger investment apply 2 --account Checking --amount 150
    """
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), owner_id, account)

    try:
        result = InvestmentService(db).apply_investment(
            owner_id=owner_id,
            investment_id=investment_id,
            account_id=account_id,
            amount=parse_amount_or_exit(ctx, amount),
            date=parse_date_or_exit(ctx, date_str),
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(
        f"Applied {result.transaction.amount} to '{result.investment.name}': "
        f"account balance {result.account.balance}, investment value {result.investment.current_value}"
    )


def register_commands(cli):
    """Register investment commands with main CLI."""
    cli.add_command(investment_group, name="investment")
