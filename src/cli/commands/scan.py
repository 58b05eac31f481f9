"""Scan and clean CLI command."""

import time

import click
from rich.console import Console
from rich.progress import Progress
from rich.table import Table

from cli.utils import get_components
from shared_types import BulkAction, ScanStage

console = Console()

POLL_SECONDS = 0.05


def _wait_for_scan(machine) -> None:
    """Render the scan bar until results are ready."""
    with Progress(console=console, transient=True) as bar:
        task = bar.add_task("Scanning", total=100)
        while machine.stage == ScanStage.SCANNING:
            bar.update(task, completed=machine.scan_progress)
            time.sleep(POLL_SECONDS)
        bar.update(task, completed=100)


def _wait_for_cleaning(machine) -> None:
    """Render the cleaning bar until the session has been recorded."""
    with Progress(console=console, transient=True) as bar:
        task = bar.add_task("Creating space", total=100)
        while not machine.wait_for_completion(POLL_SECONDS):
            bar.update(task, completed=machine.clean_progress)
        bar.update(task, completed=100)


@click.command()
@click.option(
    "-a",
    "--action",
    type=click.Choice([a.value for a in BulkAction]),
    default=None,
    help="Bulk action for the selection (defaults to config)",
)
@click.option("--rules/--no-rules", "use_rules", default=False, help="Limit results to active rules")
@click.option("-x", "--exclude", multiple=True, help="Item id to deselect (repeatable)")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def scan(action: str | None, use_rules: bool, exclude: tuple[str, ...], yes: bool):
    """Scan for clutter, then clean the selected items."""
    c = get_components()
    scheduler = c.get("scheduler")
    try:
        _scan_and_clean(c, action, use_rules, exclude, yes)
    finally:
        if scheduler is not None and scheduler.running:
            scheduler.shutdown()


def _scan_and_clean(c: dict, action, use_rules: bool, exclude: tuple[str, ...], yes: bool) -> None:
    from scan import ScanCleanMachine
    from units import format_size

    cfg = c["config_model"].scan
    service = c["service"]
    machine = ScanCleanMachine(
        c["catalog"],
        on_complete=service.handle_completion,
        on_item_action=c["recorder"].record_item_action,
        timer_factory=c["timer_factory"],
        scan_interval=cfg.scan_tick_seconds,
        clean_interval=cfg.clean_tick_seconds,
        scan_step=cfg.scan_step,
        clean_step=cfg.clean_step,
    )
    machine.set_bulk_action(BulkAction(action or cfg.default_action))

    rules = c["rules"].list(only_active=True) if use_rules else None
    started = machine.begin_scan(rules=rules)
    if not started:
        console.print(f"[yellow]Scan not started:[/] {started.reason}")
        return
    _wait_for_scan(machine)

    for item_id in exclude:
        if not machine.toggle(item_id):
            console.print(f"[yellow]Unknown item id:[/] {item_id}")

    table = Table(show_header=True, title=f"Found {len(machine.items)} items")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Category", style="green")
    table.add_column("Size", justify="right")
    table.add_column("Selected", justify="center")
    for item in machine.items:
        mark = "[green]✓[/]" if item.id in machine.selected_ids else ""
        table.add_row(item.id, item.name, str(item.category), format_size(item.size_mb), mark)
    console.print(table)

    verb = machine.bulk_action.value.capitalize()
    console.print(
        f"{len(machine.selection)} selected, {format_size(machine.selected_size_mb)} "
        f"(frees {format_size(machine.projected_space_freed_mb)})"
    )
    if not yes and not click.confirm(f"{verb} selected items?"):
        machine.reset()
        console.print("[yellow]Cancelled.[/]")
        return

    cleaning = machine.start_cleaning()
    if not cleaning:
        console.print(f"[yellow]Nothing to clean:[/] {cleaning.reason}")
        machine.reset()
        return
    _wait_for_cleaning(machine)

    event = machine.last_event
    console.print(
        f"[green]Done![/] {event.files_cleaned} files, {format_size(event.space_freed_mb)} freed"
    )
    outcome = service.last_outcome
    if outcome is not None:
        if outcome.points_awarded:
            console.print(f"+{outcome.points_awarded} pts")
        for achievement in outcome.achievements:
            console.print(f"{achievement.badge_icon} [bold]{achievement.badge_name}[/] unlocked!")
