"""Progress, badges, history, leaderboard and points commands."""

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components
from shared_types import PointReason

console = Console()


@click.command()
def progress():
    """Show level, points and streak."""
    from units import format_percent, format_size

    c = get_components()
    view = c["service"].overview()
    p = view.progress

    table = Table(show_header=False, title="Your Progress")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Level", str(p.level))
    table.add_row("Total points", str(p.total_points))
    table.add_row(f"Progress to level {p.level + 1}", format_percent(view.level_progress))
    table.add_row("Points this week", f"{p.points_this_week} pts")
    table.add_row("Current streak", f"{view.current_streak} days")
    table.add_row("Longest streak", f"{p.longest_streak} days")
    table.add_row("Files cleaned", str(p.total_files_cleaned))
    table.add_row("Space freed", format_size(p.total_space_freed_mb))
    table.add_row("Badges", f"{view.badges_earned}/{view.badges_total}")
    console.print(table)


@click.command()
def badges():
    """List every badge and whether it is earned."""
    from progress import BADGE_RULES

    c = get_components()
    earned = {a.badge_name: a for a in c["progress_store"].achievements(c["user_id"])}

    table = Table(show_header=True, title=f"Badges ({len(earned)}/{len(BADGE_RULES)})")
    table.add_column("", width=3)
    table.add_column("Badge", style="bold")
    table.add_column("Category", style="green")
    table.add_column("Description")
    table.add_column("Earned", style="dim")
    for rule in BADGE_RULES:
        got = earned.get(rule.name)
        when = got.earned_at.strftime("%Y-%m-%d") if got else "[dim]locked[/]"
        table.add_row(rule.icon, rule.name, str(rule.category), rule.description, when)
    console.print(table)


@click.command()
@click.option("-n", "--limit", default=10, help="Max sessions to show")
def history(limit: int):
    """Show recent cleaning sessions and totals."""
    from progress import summarize_sessions
    from units import format_size

    c = get_components()
    rows = c["progress_store"].sessions(c["user_id"])
    if not rows:
        console.print("[yellow]No cleaning sessions yet. Run [bold]declutter scan[/].[/]")
        return

    table = Table(show_header=True, title="Cleaning Sessions")
    table.add_column("Date", style="cyan", width=10)
    table.add_column("Action")
    table.add_column("Files", justify="right")
    table.add_column("Freed", justify="right")
    table.add_column("Categories", max_width=40)
    for r in rows[:limit]:
        table.add_row(
            r["completed_at"][:10],
            r.get("bulk_action", ""),
            f"{r['files_cleaned']}/{r['files_scanned']}",
            format_size(r["space_freed_mb"]),
            ", ".join(r.get("categories_organized", [])),
        )
    console.print(table)

    summary = summarize_sessions(rows)
    console.print(
        f"{summary.sessions} sessions, {summary.files_cleaned} files, "
        f"{format_size(summary.space_freed_mb)} freed, avg {summary.avg_duration_minutes} min"
    )


@click.command()
@click.option("-n", "--limit", default=5, help="Number of places")
def leaderboard(limit: int):
    """Top users by points."""
    c = get_components()
    ranked = c["service"].leaderboard(limit)
    if not ranked:
        console.print("[yellow]Leaderboard is empty.[/]")
        return

    table = Table(show_header=True, title="Leaderboard")
    table.add_column("#", justify="right")
    table.add_column("User")
    table.add_column("Level", justify="right")
    table.add_column("Points", justify="right")
    for rank, p in enumerate(ranked, start=1):
        name = f"[bold]{p.user_id}[/]" if p.user_id == c["user_id"] else p.user_id
        table.add_row(str(rank), name, str(p.level), str(p.total_points))
    console.print(table)


@click.group()
def points():
    """Award points and manage weekly totals."""
    pass


@points.command("award")
@click.argument("reason", type=click.Choice([r.value for r in PointReason]))
def points_award(reason: str):
    """Award points for an action (e.g. share_folder)."""
    c = get_components()
    service = c["service"]
    if reason == PointReason.ORGANIZE_FOLDER:
        updated, unlocked = service.organize_folders(1)
        for a in unlocked:
            console.print(f"{a.badge_icon} [bold]{a.badge_name}[/] unlocked!")
    elif reason == PointReason.DAILY_LOGIN:
        updated = service.daily_login()
    else:
        updated = service.award(PointReason(reason))
    console.print(f"Total points: [bold]{updated.total_points}[/]")


@points.command("reset-week")
def points_reset_week():
    """Zero this week's points (run at the week boundary)."""
    c = get_components()
    c["service"].reset_week()
    console.print("[green]Weekly points reset.[/]")
