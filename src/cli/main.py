"""CLI entry point for the notes feed."""

import sys
from pathlib import Path

import click
from rich.console import Console

from cli.commands import list_notes, parse_date
from cli.config import load_config_model
from cli.logging_config import setup_logging
from notes import __version__

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="notes")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON lines")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Config file (default: ./notes.yaml or ~/.notes/config.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, json_logs: bool, config_path: Path):
    """Browse and search remote notes."""
    try:
        config = load_config_model(config_path)
    except ValueError as e:
        console.print(f"[red]Config error:[/] {e}")
        sys.exit(1)

    level = "DEBUG" if verbose else config.logging.level
    setup_logging(json_mode=json_logs or config.logging.json_mode, level=level)
    ctx.obj = {"config": config}


cli.add_command(list_notes)
cli.add_command(parse_date)


if __name__ == "__main__":
    cli()
