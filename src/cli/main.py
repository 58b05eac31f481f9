"""CLI entry point for declutter."""

import click

from cli.commands import badges, challenges, history, leaderboard, points, prefs, progress, rules, scan, suggest
from cli.config import load_config_model
from cli.logging_config import setup_logging


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """declutter - gentle digital decluttering with points and badges."""
    config = load_config_model()
    level = "DEBUG" if verbose else config.logging.level
    setup_logging(json_mode=config.logging.json_mode, level=level, log_file=config.paths.log_file)


for command in (scan, progress, badges, history, leaderboard, points, rules, challenges, suggest, prefs):
    cli.add_command(command)


if __name__ == "__main__":
    cli()
