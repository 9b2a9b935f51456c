"""Owner settings commands."""

import click
from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.domain.entities import CURRENCIES
from pocketledger.domain.errors import DomainError
from pocketledger.domain.settings import SettingsService


@click.group()
def settings_group():
    """Show or change preferences."""
    pass


@settings_group.command("currency")
@click.argument("currency", required=False, type=click.Choice(CURRENCIES, case_sensitive=False))
@click.pass_context
def show_or_set_currency(ctx, currency: str | None):
    """Show the display currency, or set it when CURRENCY is given.

    Examples:
        pocketledger settings currency
        pocketledger settings currency USD
    """
    service = SettingsService(ctx.obj["db"])
    owner_id = ctx.obj["owner"]
    if currency is None:
        click.echo(f"Currency: {service.get_currency(owner_id)}")
        return

    try:
        stored = service.set_currency(owner_id, currency)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Currency set to {stored}")


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group, name="settings")
