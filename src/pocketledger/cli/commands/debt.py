"""Debt management commands."""

import click
from pocketledger.cli.account_resolution import resolve_account_or_exit
from pocketledger.cli.error_handling import handle_domain_error, parse_amount_or_exit
from pocketledger.domain.account import AccountService
from pocketledger.domain.debt import DebtService
from pocketledger.domain.entities import DEBT_STATUSES
from pocketledger.domain.errors import DomainError, debt_not_found


def _debt_service(ctx) -> DebtService:
    return DebtService(ctx.obj["db"], ctx.obj["settings"].cutover)


def _optional_amount(ctx, value: str | None):
    return parse_amount_or_exit(ctx, value) if value is not None else None


@click.group()
def debt_group():
    """Manage debts."""
    pass


@debt_group.command("add")
@click.argument("name")
@click.option("--total", required=True, help="Total amount owed")
@click.option("--year", type=int, required=True, help="Competency year")
@click.option("--month", type=int, required=True, help="Competency month (1-12)")
@click.option("--payment-year", type=int, help="Payment year (defaults to --year)")
@click.option("--payment-month", type=int, help="Payment month (defaults to --month)")
@click.option("--remaining", help="Amount still owed (defaults to --total)")
@click.option("--status", type=click.Choice(DEBT_STATUSES), default="active", show_default=True)
@click.option("--account", help="Account the payment is drawn from (name or ID)")
@click.option("--interest-rate", help="Annual interest rate in percent")
@click.option("--due-date", type=int, help="Day of month the payment is due")
@click.option("--min-payment", help="Minimum payment")
@click.pass_context
def add_debt(
    ctx,
    name: str,
    total: str,
    year: int,
    month: int,
    payment_year: int | None,
    payment_month: int | None,
    remaining: str | None,
    status: str,
    account: str | None,
    interest_rate: str | None,
    due_date: int | None,
    min_payment: str | None,
):
    """Add a debt.

    A paid debt linked to an account debits that account once its payment
    month is within the tracked range.

    Examples:
        pocketledger debt add "Car loan" --total 1200 --year 2026 --month 3
        pocketledger debt add "Rent" --total 900 --year 2026 --month 3 --status paid --account Checking
    """
    owner_id = ctx.obj["owner"]
    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(ctx.obj["db"]), owner_id, account)

    try:
        debt = _debt_service(ctx).create_debt(
            owner_id=owner_id,
            name=name,
            total_amount=parse_amount_or_exit(ctx, total),
            year=year,
            month=month,
            payment_year=payment_year,
            payment_month=payment_month,
            remaining_amount=_optional_amount(ctx, remaining),
            status=status,
            account_id=account_id,
            interest_rate=_optional_amount(ctx, interest_rate),
            due_date=due_date,
            min_payment=_optional_amount(ctx, min_payment),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created debt '{debt.name}' (ID: {debt.id})")


@debt_group.command("update")
@click.argument("debt_id", type=int)
@click.option("--name")
@click.option("--total", help="Total amount owed")
@click.option("--remaining", help="Amount still owed")
@click.option("--year", type=int)
@click.option("--month", type=int)
@click.option("--payment-year", type=int)
@click.option("--payment-month", type=int)
@click.option("--status", type=click.Choice(DEBT_STATUSES))
@click.option("--account", help="Account name or ID, or empty string to unlink")
@click.option("--interest-rate")
@click.option("--due-date", type=int)
@click.option("--min-payment")
@click.pass_context
def update_debt(
    ctx,
    debt_id: int,
    name: str | None,
    total: str | None,
    remaining: str | None,
    year: int | None,
    month: int | None,
    payment_year: int | None,
    payment_month: int | None,
    status: str | None,
    account: str | None,
    interest_rate: str | None,
    due_date: int | None,
    min_payment: str | None,
) -> None:
    """Update a debt.

    Examples:
        pocketledger debt update 3 --status paid --account Checking
        pocketledger debt update 3 --payment-month 5
    """
    owner_id = ctx.obj["owner"]
    account_id = None
    clear_account = False
    if account == "":
        clear_account = True
    elif account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(ctx.obj["db"]), owner_id, account)

    try:
        _debt_service(ctx).update_debt(
            debt_id=debt_id,
            owner_id=owner_id,
            name=name,
            total_amount=_optional_amount(ctx, total),
            remaining_amount=_optional_amount(ctx, remaining),
            year=year,
            month=month,
            payment_year=payment_year,
            payment_month=payment_month,
            status=status,
            account_id=account_id,
            clear_account=clear_account,
            interest_rate=_optional_amount(ctx, interest_rate),
            due_date=due_date,
            min_payment=_optional_amount(ctx, min_payment),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated debt {debt_id}")


@debt_group.command("delete")
@click.argument("debt_id", type=int)
@click.pass_context
def delete_debt(ctx, debt_id: int) -> None:
    """Delete a debt, reverting its payment if it was posted."""
    if not _debt_service(ctx).delete_debt(debt_id, ctx.obj["owner"]):
        click.echo(f"Error: {debt_not_found(debt_id)}", err=True)
        ctx.exit(1)
    click.echo(f"Deleted debt {debt_id}")


@debt_group.command("list")
@click.pass_context
def list_debts(ctx):
    """List debts."""
    debts = _debt_service(ctx).list_debts(ctx.obj["owner"])
    if not debts:
        click.echo("No debts found.")
        return

    for debt in debts:
        account = f" | account {debt.account_id}" if debt.account_id is not None else ""
        click.echo(
            f"ID: {debt.id:3d} | {debt.year:04d}-{debt.month:02d} | {debt.name:20s} | "
            f"{debt.status:9s} | total {debt.total_amount} | remaining {debt.remaining_amount}{account}"
        )


def register_commands(cli):
    """Register debt commands with main CLI."""
    cli.add_command(debt_group, name="debt")
