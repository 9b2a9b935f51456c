"""Account management commands."""

import click
from pocketledger.cli.account_resolution import resolve_account_or_exit
from pocketledger.cli.error_handling import handle_domain_error, parse_amount_or_exit
from pocketledger.domain.account import AccountService
from pocketledger.domain.entities import ACCOUNT_TYPES
from pocketledger.domain.errors import DomainError, account_not_found
from pocketledger.domain.settings import SettingsService


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type", "account_type", type=click.Choice(ACCOUNT_TYPES), default="checking", show_default=True
)
@click.option("--balance", default="0", help="Opening balance")
@click.option("--limit", help="Credit limit")
@click.option("--color", default="#000000", show_default=True, help="Display color")
@click.pass_context
def create_account(ctx, name: str, account_type: str, balance: str, limit: str | None, color: str):
    """Create a new account.

    The opening balance is the only time a balance is set directly; it then
    moves with the records posted against the account.

    Examples:
        pocketledger account create "Checking" --balance 1500
        pocketledger account create "Visa" --type credit --limit 5000
    """
    service = AccountService(ctx.obj["db"])
    opening = parse_amount_or_exit(ctx, balance)
    limit_value = parse_amount_or_exit(ctx, limit) if limit is not None else None

    try:
        acc = service.create_account(
            owner_id=ctx.obj["owner"],
            name=name,
            type=account_type,
            balance=opening,
            limit=limit_value,
            color=color,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account '{acc.name}' (ID: {acc.id})")


@account_group.command("list")
@click.option("--all", "include_archived", is_flag=True, help="Include archived accounts")
@click.pass_context
def list_accounts(ctx, include_archived: bool):
    """List accounts with their balances."""
    service = AccountService(ctx.obj["db"])
    owner_id = ctx.obj["owner"]

    accounts = service.list_accounts(owner_id, include_archived=include_archived)
    if not accounts:
        click.echo("No accounts found.")
        return

    currency = SettingsService(ctx.obj["db"]).get_currency(owner_id)
    click.echo(f"\nAccounts ({currency}):")
    click.echo("-" * 60)
    for acc in accounts:
        archived = " (archived)" if acc.is_archived else ""
        click.echo(f"ID: {acc.id:3d} | {acc.name:20s} | {acc.type:10s} | {acc.balance:>12}{archived}")
    click.echo("-" * 60)
    click.echo(f"Net worth: {service.total_balance(owner_id)}")


@account_group.command("rename")
@click.argument("account", metavar="ACCOUNT")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_account(ctx, account: str, new_name: str) -> None:
    """Rename an account.

    ACCOUNT can be an account name or ID.

    Examples:
        pocketledger account rename "Checking" "Main Checking"
        pocketledger account rename 1 "Main Checking"
    """
    service = AccountService(ctx.obj["db"])
    owner_id = ctx.obj["owner"]
    account_id = resolve_account_or_exit(ctx, service, owner_id, account)

    try:
        service.rename_account(account_id=account_id, owner_id=owner_id, name=new_name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed account to '{new_name}'")


@account_group.command("archive")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def archive_account(ctx, account: str) -> None:
    """Archive an account. Its records and balance are kept.

    ACCOUNT can be an account name or ID.
    """
    service = AccountService(ctx.obj["db"])
    owner_id = ctx.obj["owner"]
    account_id = resolve_account_or_exit(ctx, service, owner_id, account)

    if not service.archive_account(account_id, owner_id):
        click.echo(f"Error: {account_not_found(account_id)}", err=True)
        ctx.exit(1)
    click.echo(f"Archived account {account_id}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
