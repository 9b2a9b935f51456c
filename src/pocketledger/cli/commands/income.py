"""Income management commands."""

import click
from pocketledger.cli.account_resolution import resolve_account_or_exit, resolve_category_or_exit
from pocketledger.cli.error_handling import handle_domain_error, parse_amount_or_exit
from pocketledger.domain.account import AccountService
from pocketledger.domain.category import CategoryService
from pocketledger.domain.errors import DomainError, fixed_income_not_found, income_entry_not_found
from pocketledger.domain.income import IncomeService


def _income_service(ctx) -> IncomeService:
    return IncomeService(ctx.obj["db"], ctx.obj["settings"].cutover)


def _references(ctx, account: str | None, category: str | None) -> tuple[int | None, int | None]:
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner"]
    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(db), owner_id, account)
    category_id = None
    if category is not None:
        category_id = resolve_category_or_exit(ctx, CategoryService(db), owner_id, category)
    return account_id, category_id


@click.group()
def income_group():
    """Manage income entries and fixed incomes."""
    pass


@income_group.command("add")
@click.argument("name")
@click.option("--amount", required=True)
@click.option("--year", type=int, required=True)
@click.option("--month", type=int, required=True, help="Month (1-12)")
@click.option("--account", required=True, help="Account credited (name or ID)")
@click.option("--category", help="Category name or ID")
@click.pass_context
def add_entry(ctx, name: str, amount: str, year: int, month: int, account: str, category: str | None):
    """Add an income entry for a month.

    Examples:
        pocketledger income add "Freelance" --amount 800 --year 2026 --month 4 --account Checking
    """
    account_id, category_id = _references(ctx, account, category)
    try:
        entry = _income_service(ctx).create_entry(
            owner_id=ctx.obj["owner"],
            name=name,
            amount=parse_amount_or_exit(ctx, amount),
            year=year,
            month=month,
            account_id=account_id,
            category_id=category_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created income entry {entry.id}")


@income_group.command("update")
@click.argument("entry_id", type=int)
@click.option("--name")
@click.option("--amount")
@click.option("--year", type=int)
@click.option("--month", type=int)
@click.option("--account", help="Account name or ID")
@click.option("--category", help="Category name or ID")
@click.pass_context
def update_entry(
    ctx,
    entry_id: int,
    name: str | None,
    amount: str | None,
    year: int | None,
    month: int | None,
    account: str | None,
    category: str | None,
) -> None:
    """Update an income entry."""
    account_id, category_id = _references(ctx, account, category)
    try:
        entry = _income_service(ctx).update_entry(
            owner_id=ctx.obj["owner"],
            entry_id=entry_id,
            name=name,
            amount=parse_amount_or_exit(ctx, amount) if amount is not None else None,
            year=year,
            month=month,
            account_id=account_id,
            category_id=category_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    if entry is None:
        click.echo(f"Error: {income_entry_not_found(entry_id)}", err=True)
        ctx.exit(1)
    click.echo(f"Updated income entry {entry_id}")


@income_group.command("delete")
@click.argument("entry_id", type=int)
@click.pass_context
def delete_entry(ctx, entry_id: int) -> None:
    """Delete an income entry, reverting its credit."""
    if not _income_service(ctx).delete_entry(ctx.obj["owner"], entry_id):
        click.echo(f"Error: {income_entry_not_found(entry_id)}", err=True)
        ctx.exit(1)
    click.echo(f"Deleted income entry {entry_id}")


@income_group.command("list")
@click.option("--year", type=int, help="Only entries of this year")
@click.pass_context
def list_entries(ctx, year: int | None):
    """List income entries."""
    try:
        entries = _income_service(ctx).list_entries(ctx.obj["owner"], year=year)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if not entries:
        click.echo("No income entries found.")
        return

    for entry in entries:
        click.echo(
            f"ID: {entry.id:3d} | {entry.year:04d}-{entry.month:02d} | {entry.name:20s} | "
            f"{entry.amount:>12} | account {entry.account_id}"
        )


@income_group.command("fixed-add")
@click.argument("name")
@click.option("--amount", required=True)
@click.option("--day", "day_of_month", type=int, required=True, help="Day of month received")
@click.option("--account", required=True, help="Account name or ID")
@click.option("--category", help="Category name or ID")
@click.pass_context
def add_fixed(ctx, name: str, amount: str, day_of_month: int, account: str, category: str | None):
    """Add a fixed monthly income, effective now.

    Examples:
        pocketledger income fixed-add "Salary" --amount 5000 --day 5 --account Checking
    """
    account_id, category_id = _references(ctx, account, category)
    try:
        fixed = _income_service(ctx).create_fixed(
            owner_id=ctx.obj["owner"],
            name=name,
            amount=parse_amount_or_exit(ctx, amount),
            day_of_month=day_of_month,
            account_id=account_id,
            category_id=category_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created fixed income '{fixed.name}' (ID: {fixed.id})")


@income_group.command("fixed-update")
@click.argument("fixed_id", type=int)
@click.option("--name")
@click.option("--amount")
@click.option("--day", "day_of_month", type=int)
@click.option("--account", help="Account name or ID")
@click.option("--category", help="Category name or ID")
@click.pass_context
def update_fixed(
    ctx,
    fixed_id: int,
    name: str | None,
    amount: str | None,
    day_of_month: int | None,
    account: str | None,
    category: str | None,
) -> None:
    """Change a fixed income from next month on. This month is unchanged."""
    account_id, category_id = _references(ctx, account, category)
    try:
        fixed = _income_service(ctx).update_fixed_future_only(
            owner_id=ctx.obj["owner"],
            fixed_id=fixed_id,
            name=name,
            amount=parse_amount_or_exit(ctx, amount) if amount is not None else None,
            day_of_month=day_of_month,
            account_id=account_id,
            category_id=category_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    if fixed is None:
        click.echo(f"Error: {fixed_income_not_found(fixed_id)}", err=True)
        ctx.exit(1)
    click.echo(f"Fixed income {fixed_id} changes from {fixed.starts_at:%Y-%m-%d} (ID: {fixed.id})")


@income_group.command("fixed-delete")
@click.argument("fixed_id", type=int)
@click.pass_context
def delete_fixed(ctx, fixed_id: int) -> None:
    """Stop a fixed income after the current month."""
    if not _income_service(ctx).delete_fixed_future_only(ctx.obj["owner"], fixed_id):
        click.echo(f"Error: {fixed_income_not_found(fixed_id)}", err=True)
        ctx.exit(1)
    click.echo(f"Fixed income {fixed_id} ends this month")


@income_group.command("fixed-list")
@click.pass_context
def list_fixed(ctx):
    """List running fixed incomes."""
    fixed_incomes = _income_service(ctx).list_fixed(ctx.obj["owner"])
    if not fixed_incomes:
        click.echo("No fixed incomes found.")
        return

    for fixed in fixed_incomes:
        ends = f" until {fixed.ends_at:%Y-%m-%d}" if fixed.ends_at is not None else ""
        click.echo(
            f"ID: {fixed.id:3d} | {fixed.name:20s} | {fixed.amount:>12} | day {fixed.day_of_month:2d} | "
            f"from {fixed.starts_at:%Y-%m-%d}{ends}"
        )


@income_group.command("annual")
@click.argument("year", type=int)
@click.pass_context
def annual_summary(ctx, year: int):
    """Show monthly fixed and variable income for a year."""
    try:
        summary = _income_service(ctx).annual_summary(ctx.obj["owner"], year)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nIncome {summary.year}:")
    click.echo("-" * 52)
    click.echo(f"{'Month':5s} | {'Fixed':>12s} | {'Variable':>12s} | {'Total':>12s}")
    for month in summary.months:
        click.echo(
            f"{month.month:5d} | {month.fixed_total:>12} | {month.variable_total:>12} | {month.total:>12}"
        )


def register_commands(cli):
    """Register income commands with main CLI."""
    cli.add_command(income_group, name="income")
