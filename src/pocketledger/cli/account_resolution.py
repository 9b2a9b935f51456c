"""CLI helpers for resolving account and category references."""

from __future__ import annotations

import click
from pocketledger.domain.account import AccountService
from pocketledger.domain.category import CategoryService
from pocketledger.domain.errors import NotFoundError
from pocketledger.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, owner_id: str, account: str | int
) -> int:
    """Resolve account name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(account_service, owner_id, account)
    except NotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_category_or_exit(
    ctx: click.Context, category_service: CategoryService, owner_id: str, category: str
) -> int:
    """Resolve category name or ID, or exit with a CLI error."""
    if category.isdigit():
        found = category_service.get_category(int(category), owner_id)
    else:
        found = category_service.get_category_by_name(owner_id, category)
    if found is None:
        click.echo(f"Error: Category '{category}' not found", err=True)
        ctx.exit(1)
    return found.id
