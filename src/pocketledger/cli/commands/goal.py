"""Savings goal commands."""

import click
from pocketledger.cli.error_handling import (
    handle_domain_error,
    parse_amount_or_exit,
    parse_date_or_exit,
)
from pocketledger.domain.errors import DomainError, goal_not_found
from pocketledger.domain.goal import GoalService


@click.group()
def goal_group():
    """Manage savings goals."""
    pass


@goal_group.command("create")
@click.argument("name")
@click.option("--target", required=True, help="Amount to reach")
@click.option("--current", default="0", show_default=True, help="Amount saved so far")
@click.option("--deadline", help="Target date (YYYY-MM-DD)")
@click.pass_context
def create_goal(ctx, name: str, target: str, current: str, deadline: str | None):
    """Create a savings goal.

    Examples:
        pocketledger goal create "Emergency fund" --target 10000
        pocketledger goal create "Trip" --target 4000 --current 500 --deadline 2025-12-01
    """
    service = GoalService(ctx.obj["db"])
    target_value = parse_amount_or_exit(ctx, target)
    current_value = parse_amount_or_exit(ctx, current)
    deadline_value = parse_date_or_exit(ctx, deadline) if deadline is not None else None

    try:
        goal = service.create_goal(
            owner_id=ctx.obj["owner"],
            name=name,
            target_amount=target_value,
            current_amount=current_value,
            deadline=deadline_value,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created goal '{goal.name}' (ID: {goal.id})")


@goal_group.command("list")
@click.pass_context
def list_goals(ctx):
    """List goals with their progress."""
    goals = GoalService(ctx.obj["db"]).list_goals(ctx.obj["owner"])
    if not goals:
        click.echo("No goals found.")
        return

    for goal in goals:
        deadline = f" | Until {goal.deadline.isoformat()}" if goal.deadline is not None else ""
        click.echo(
            f"ID: {goal.id:3d} | {goal.name:20s} | {goal.current_amount} / {goal.target_amount}"
            f" ({goal.progress:.0%}){deadline}"
        )


@goal_group.command("update")
@click.argument("goal_id", type=int)
@click.option("--name", help="New name")
@click.option("--target", help="New target amount")
@click.option("--current", help="New amount saved so far")
@click.option("--deadline", help="New target date (YYYY-MM-DD)")
@click.option("--clear-deadline", is_flag=True, help="Remove the deadline")
@click.pass_context
def update_goal(
    ctx,
    goal_id: int,
    name: str | None,
    target: str | None,
    current: str | None,
    deadline: str | None,
    clear_deadline: bool,
):
    """Update a savings goal."""
    service = GoalService(ctx.obj["db"])
    target_value = parse_amount_or_exit(ctx, target) if target is not None else None
    current_value = parse_amount_or_exit(ctx, current) if current is not None else None
    deadline_value = parse_date_or_exit(ctx, deadline) if deadline is not None else None

    try:
        goal = service.update_goal(
            goal_id,
            ctx.obj["owner"],
            name=name,
            target_amount=target_value,
            current_amount=current_value,
            deadline=deadline_value,
            clear_deadline=clear_deadline,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    if goal is None:
        click.echo(f"Error: {goal_not_found(goal_id)}", err=True)
        ctx.exit(1)
    click.echo(f"Updated goal {goal.id}: {goal.current_amount} / {goal.target_amount}")


def register_commands(cli):
    """Register goal commands with main CLI."""
    cli.add_command(goal_group, name="goal")
