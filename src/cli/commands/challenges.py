"""Challenge CLI commands."""

from datetime import datetime, timedelta

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components

console = Console()

_DEFAULT_DAYS = {"weekly": 7, "monthly": 30}


@click.group()
def challenges():
    """Weekly and monthly challenges."""
    pass


@challenges.command("list")
@click.option("-t", "--type", "challenge_type", type=click.Choice(["weekly", "monthly"]), default=None)
def challenges_list(challenge_type):
    """List active challenges with your progress."""
    from progress import completion_percent

    c = get_components()
    board = c["challenges"]
    items = board.active(challenge_type)
    if not items:
        console.print("[yellow]No active challenges.[/]")
        return

    table = Table(show_header=True, title="Challenges")
    table.add_column("ID", style="dim")
    table.add_column("", width=3)
    table.add_column("Challenge", style="cyan")
    table.add_column("Type")
    table.add_column("Target", justify="right")
    table.add_column("Progress", justify="right")
    table.add_column("Days left", justify="right")
    for ch in items:
        record = board.progress(ch.id)
        if record is None:
            status = "[dim]not joined[/]"
        elif record["is_completed"]:
            status = "[green]done[/]"
        else:
            status = f"{completion_percent(ch, record['current_value']):.0f}%"
        table.add_row(
            ch.id, ch.badge_icon, ch.challenge_name, ch.challenge_type,
            str(ch.target_value), status, str(ch.days_left()),
        )
    console.print(table)


@challenges.command("create")
@click.argument("name")
@click.option("-t", "--type", "challenge_type", type=click.Choice(["weekly", "monthly"]), default="weekly")
@click.option("--target", type=int, required=True, help="Value needed to complete")
@click.option("--days", type=int, default=None, help="Length in days (default by type)")
@click.option("-d", "--description", default="")
@click.option("--team", is_flag=True, help="Team challenge")
def challenges_create(name, challenge_type, target, days, description, team):
    """Create a challenge."""
    from progress import Challenge

    c = get_components()
    ends_at = datetime.now() + timedelta(days=days or _DEFAULT_DAYS[challenge_type])
    try:
        challenge = Challenge(
            challenge_name=name,
            challenge_type=challenge_type,
            target_value=target,
            ends_at=ends_at,
            description=description,
            is_team_challenge=team,
        )
    except ValueError as e:
        raise click.BadParameter(str(e))
    saved = c["challenges"].create(challenge)
    console.print(f"[green]Challenge created:[/] {saved.challenge_name} ({saved.id})")


@challenges.command("join")
@click.argument("challenge_id")
def challenges_join(challenge_id: str):
    """Join a challenge."""
    c = get_components()
    if c["challenges"].join(challenge_id) is None:
        console.print(f"[red]Challenge not found:[/] {challenge_id}")
        return
    console.print("[green]Joined![/]")


@challenges.command("advance")
@click.argument("challenge_id")
@click.option("-n", "--amount", type=int, default=1)
def challenges_advance(challenge_id: str, amount: int):
    """Add to your progress on a joined challenge."""
    c = get_components()
    record = c["challenges"].advance(challenge_id, amount)
    if record is None:
        console.print(f"[red]Not joined or unknown challenge:[/] {challenge_id}")
        return
    if record["is_completed"]:
        console.print("[green]Challenge complete![/]")
    else:
        console.print(f"Progress: {record['current_value']}")
