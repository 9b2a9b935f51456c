"""Category management commands."""

import click
from pocketledger.cli.error_handling import handle_domain_error, parse_amount_or_exit
from pocketledger.domain.category import CategoryService
from pocketledger.domain.entities import CATEGORY_TYPES
from pocketledger.domain.errors import DomainError


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("create")
@click.argument("name")
@click.option("--type", "category_type", type=click.Choice(CATEGORY_TYPES), required=True)
@click.option("--budget", help="Monthly budget")
@click.pass_context
def create_category(ctx, name: str, category_type: str, budget: str | None):
    """Create a category.

    Examples:
        pocketledger category create "Salary" --type income
        pocketledger category create "Groceries" --type expense --budget 600
    """
    service = CategoryService(ctx.obj["db"])
    budget_value = parse_amount_or_exit(ctx, budget) if budget is not None else None

    try:
        category = service.create_category(
            owner_id=ctx.obj["owner"], name=name, type=category_type, budget=budget_value
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created category '{category.name}' (ID: {category.id})")


@category_group.command("list")
@click.option("--type", "category_type", type=click.Choice(CATEGORY_TYPES), help="Only this type")
@click.pass_context
def list_categories(ctx, category_type: str | None):
    """List categories."""
    service = CategoryService(ctx.obj["db"])
    categories = service.list_categories(ctx.obj["owner"])
    if category_type is not None:
        categories = [c for c in categories if c.type == category_type]

    if not categories:
        click.echo("No categories found.")
        return

    for category in categories:
        budget = f" | Budget: {category.budget}" if category.budget is not None else ""
        click.echo(f"ID: {category.id:3d} | {category.name:20s} | {category.type}{budget}")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
