"""Cleaning rule CLI commands."""

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components
from shared_types import BulkAction

console = Console()


@click.group()
def rules():
    """Manage cleaning rules."""
    pass


@rules.command("list")
@click.option("--active", "only_active", is_flag=True, help="Only active rules")
def rules_list(only_active: bool):
    """List cleaning rules."""
    c = get_components()
    items = c["rules"].list(only_active=only_active)
    if not items:
        console.print("[yellow]No rules. Add one with [bold]declutter rules add[/].[/]")
        return

    table = Table(show_header=True, title="Cleaning Rules")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Match")
    table.add_column("Action", style="green")
    table.add_column("Active", justify="center")
    for r in items:
        match = r.file_extension
        if r.larger_than_mb:
            match += f" >= {r.larger_than_mb:g} MB"
        if r.older_than_days:
            match += f", {r.older_than_days}d+"
        table.add_row(r.id, r.name, match, str(r.action), "[green]✓[/]" if r.is_active else "[dim]-[/]")
    console.print(table)


@rules.command("add")
@click.argument("name")
@click.option("-e", "--extension", required=True, help="File suffix, or * for any")
@click.option(
    "-a", "--action", type=click.Choice([a.value for a in BulkAction]), default=BulkAction.DELETE.value
)
@click.option("--larger-than", "larger_than_mb", type=float, default=None, help="Minimum size in MB")
@click.option("--older-than", "older_than_days", type=int, default=None, help="Minimum age in days")
@click.option("--folder", "folder_path", default=None, help="Folder the rule applies to")
def rules_add(name, extension, action, larger_than_mb, older_than_days, folder_path):
    """Add a cleaning rule."""
    from scan import CleaningRule

    c = get_components()
    try:
        rule = CleaningRule(
            name=name,
            file_extension=extension,
            action=BulkAction(action),
            larger_than_mb=larger_than_mb,
            older_than_days=older_than_days,
            folder_path=folder_path,
        )
    except ValueError as e:
        raise click.BadParameter(str(e))
    saved = c["rules"].add(rule)
    console.print(f"[green]Rule added:[/] {saved.name} ({saved.id})")


@rules.command("toggle")
@click.argument("rule_id")
def rules_toggle(rule_id: str):
    """Flip a rule between active and inactive."""
    c = get_components()
    rule = c["rules"].get(rule_id)
    if rule is None:
        console.print(f"[red]Rule not found:[/] {rule_id}")
        return
    c["rules"].set_active(rule_id, not rule.is_active)
    state = "inactive" if rule.is_active else "active"
    console.print(f"[green]{rule.name} is now {state}[/]")


@rules.command("delete")
@click.argument("rule_id")
def rules_delete(rule_id: str):
    """Delete a rule."""
    c = get_components()
    if c["rules"].delete(rule_id):
        console.print(f"[green]Deleted rule {rule_id}[/]")
    else:
        console.print(f"[red]Rule not found:[/] {rule_id}")
