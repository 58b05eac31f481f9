"""AI rule suggestion and preference-log commands."""

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components, get_llm

console = Console()

_RISK_STYLE = {"low": "green", "medium": "yellow", "high": "red"}


@click.command()
@click.option("--accept", "accept_all", is_flag=True, help="Save every convertible suggestion as a rule")
def suggest(accept_all: bool):
    """Ask the AI for cleaning rules based on your history."""
    from llm import LLMError
    from shared_types import PointReason
    from suggestions import RuleSuggester, RuleSuggestion

    c = get_components()
    config = c["config_model"]
    try:
        llm = get_llm(config)
    except LLMError as e:
        console.print(f"[red]{e}[/]")
        return

    suggester = RuleSuggester(
        llm, c["recorder"], max_tokens=config.llm.max_tokens, retry_config=config.retry
    )
    with console.status("Analyzing your habits..."):
        results = suggester.suggest()

    usable = [s for s in results if isinstance(s, RuleSuggestion)]
    if not usable:
        console.print("[yellow]No suggestions right now.[/]")
        return
    c["service"].award(PointReason.AI_ANALYSIS)

    table = Table(show_header=True, title="Suggested Rules")
    table.add_column("Rule", style="cyan")
    table.add_column("Type")
    table.add_column("Risk")
    table.add_column("Why", max_width=50)
    for s in usable:
        style = _RISK_STYLE.get(s.risk_level, "white")
        table.add_row(s.rule_name, s.rule_type, f"[{style}]{s.risk_level}[/]", s.reasoning or s.description)
    console.print(table)

    for s in usable:
        if accept_all or click.confirm(f"Save '{s.rule_name}' as a rule?", default=not s.requires_confirmation):
            saved = suggester.accept(s, c["rules"])
            if saved is None:
                console.print(f"[dim]{s.rule_name}: not convertible to a cleaning rule[/]")
            else:
                console.print(f"[green]Rule added:[/] {saved.name} ({saved.id})")


@click.command()
@click.option("-n", "--limit", default=20, help="Entries to show")
def prefs(limit: int):
    """Show the recorded preference log."""
    c = get_components()
    entries = c["recorder"].recent(limit)
    if not entries:
        console.print("[yellow]No recorded preferences yet.[/]")
        return

    table = Table(show_header=True, title="Learned Preferences")
    table.add_column("When", style="dim", width=16)
    table.add_column("Action", style="cyan")
    table.add_column("Details")
    for e in entries:
        details = ", ".join(f"{k}={v}" for k, v in e.items() if k not in ("action", "timestamp"))
        table.add_row(e.get("timestamp", "")[:16].replace("T", " "), e.get("action", ""), details)
    console.print(table)
