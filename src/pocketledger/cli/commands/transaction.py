"""Transaction management commands."""

import click
from pocketledger.cli.account_resolution import resolve_account_or_exit, resolve_category_or_exit
from pocketledger.cli.error_handling import (
    handle_domain_error,
    parse_amount_or_exit,
    parse_date_or_exit,
)
from pocketledger.domain.account import AccountService
from pocketledger.domain.category import CategoryService
from pocketledger.domain.entities import TRANSACTION_TYPES
from pocketledger.domain.errors import DomainError, transaction_not_found
from pocketledger.domain.transaction import TransactionService


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("add")
@click.option("--account", required=True, help="Account name or ID")
@click.option("--amount", required=True, help="Unsigned amount (e.g., 123.45)")
@click.option("--type", "txn_type", type=click.Choice(TRANSACTION_TYPES), required=True)
@click.option("--date", "date_str", default="today", show_default=True, help="Transaction date")
@click.option("--description", default="", help="Transaction description")
@click.option("--category", help="Category name or ID")
@click.pass_context
def add_transaction(
    ctx,
    account: str,
    amount: str,
    txn_type: str,
    date_str: str,
    description: str,
    category: str | None,
):
    """Add a transaction.

    Income credits the account, expense debits it and transfer only records
    the movement.

    Examples:
        pocketledger transaction add --account Checking --amount 42.50 --type expense --category Groceries
        pocketledger transaction add --account 1 --amount 3000 --type income --date 2026-03-05
    """
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), owner_id, account)
    category_id = None
    if category is not None:
        category_id = resolve_category_or_exit(ctx, CategoryService(db), owner_id, category)

    try:
        txn = TransactionService(db).create_transaction(
            owner_id=owner_id,
            account_id=account_id,
            amount=parse_amount_or_exit(ctx, amount),
            date=parse_date_or_exit(ctx, date_str),
            type=txn_type,
            description=description,
            category_id=category_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created transaction {txn.id}")


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--account", help="Account name or ID")
@click.option("--amount", help="Unsigned amount")
@click.option("--type", "txn_type", type=click.Choice(TRANSACTION_TYPES))
@click.option("--date", "date_str", help="Transaction date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--description", help="Transaction description")
@click.option("--category", help="Category name or ID, or empty string to clear")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    account: str | None,
    amount: str | None,
    txn_type: str | None,
    date_str: str | None,
    description: str | None,
    category: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided and moves the balance effect
    accordingly. Use --category "" to clear the category.

    Examples:
        pocketledger transaction update 1 --amount 75.00
        pocketledger transaction update 1 --account Savings --type income
    """
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner"]

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(db), owner_id, account)

    category_id = None
    clear_category = False
    if category is not None:
        if category == "":
            clear_category = True
        else:
            category_id = resolve_category_or_exit(ctx, CategoryService(db), owner_id, category)

    try:
        TransactionService(db).update_transaction(
            transaction_id=transaction_id,
            owner_id=owner_id,
            account_id=account_id,
            amount=parse_amount_or_exit(ctx, amount) if amount is not None else None,
            date=parse_date_or_exit(ctx, date_str) if date_str is not None else None,
            type=txn_type,
            description=description,
            category_id=category_id,
            clear_category=clear_category,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.pass_context
def delete_transaction(ctx, transaction_id: int) -> None:
    """Delete a transaction and revert its balance effect."""
    service = TransactionService(ctx.obj["db"])
    if not service.delete_transaction(transaction_id, ctx.obj["owner"]):
        click.echo(f"Error: {transaction_not_found(transaction_id)}", err=True)
        ctx.exit(1)
    click.echo(f"Deleted transaction {transaction_id}")


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--account", help="Account name or ID")
@click.option("--category", help="Category name or ID")
@click.option("--type", "txn_type", type=click.Choice(TRANSACTION_TYPES))
@click.option("--limit", type=int, help="Maximum number of transactions")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    account: str | None,
    category: str | None,
    txn_type: str | None,
    limit: int | None,
):
    """List transactions, newest first."""
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner"]

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(db), owner_id, account)
    category_id = None
    if category is not None:
        category_id = resolve_category_or_exit(ctx, CategoryService(db), owner_id, category)

    transactions = TransactionService(db).list_transactions(
        owner_id,
        start_date=parse_date_or_exit(ctx, start_date) if start_date else None,
        end_date=parse_date_or_exit(ctx, end_date) if end_date else None,
        account_id=account_id,
        category_id=category_id,
        type=txn_type,
        limit=limit,
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    for txn in transactions:
        click.echo(
            f"{txn.id:4d} | {txn.date} | {txn.type:8s} | {txn.amount:>12} | "
            f"account {txn.account_id} | {txn.description}"
        )


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
