"""Notes CLI commands."""

import asyncio
from typing import Optional
from zoneinfo import ZoneInfoNotFoundError

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components
from notes.formatting import resolve_zone
from notes.search import recognize_date
from observability import log_run_summary

console = Console()


async def _collect(c: dict, page_size: int, after: Optional[str], query: Optional[str], fresh: bool, all_pages: bool):
    """Fetch one page, or follow cursors to the end when all_pages is set."""
    manager = c["manager"]
    collected = []
    try:
        page = await manager.list_notes(
            page_size=page_size, after=after, search_query=query, force_fresh=fresh
        )
        collected.extend(page.notes)
        while all_pages and page.next_cursor:
            page = await manager.list_notes(
                page_size=page_size, after=page.next_cursor, search_query=query
            )
            collected.extend(page.notes)
    finally:
        await c["client"].close()
        log_run_summary()
    return collected, page.next_cursor


@click.command("list")
@click.option("-q", "--query", help="Text, date (3/15, 2024-03-15) or time (14:30) to search for")
@click.option("-n", "--page-size", type=int, help="Notes per page (default from config)")
@click.option("--after", help="Cursor printed by the previous page")
@click.option("--fresh", is_flag=True, help="Bypass the cache")
@click.option("--all", "all_pages", is_flag=True, help="Follow cursors to the last page")
@click.pass_obj
def list_notes(obj: dict, query: str, page_size: int, after: str, fresh: bool, all_pages: bool):
    """List notes, newest first."""
    config = obj["config"]
    page_size = page_size or config.display.page_size
    if page_size <= 0:
        raise click.BadParameter("must be positive", param_hint="--page-size")

    c = get_components(config)
    notes, next_cursor = asyncio.run(_collect(c, page_size, after, query, fresh, all_pages))

    if not notes:
        console.print("[yellow]No notes found.[/]")
        return

    table = Table(show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Created", style="cyan")
    table.add_column("Performed", style="cyan")
    table.add_column("Category", style="green")
    table.add_column("Author")
    table.add_column("Text")

    for n in notes:
        text = n.text.replace("\n", " ")
        table.add_row(
            n.public_id,
            n.occurred_on.formatted_date,
            n.performed_on,
            n.note_category or "Note",
            n.author_name,
            text[:60] + ("..." if len(text) > 60 else ""),
        )

    console.print(table)
    if next_cursor:
        console.print(f"[dim]More notes: --after {next_cursor}[/]")


@click.command("parse-date")
@click.argument("query")
@click.option("--tz", help="IANA timezone (default from config, else local)")
@click.pass_obj
def parse_date(obj: dict, query: str, tz: str):
    """Show how a search query is read as a date or time."""
    tz = tz or obj["config"].display.timezone
    try:
        resolve_zone(tz)
    except (ZoneInfoNotFoundError, ValueError):
        raise click.BadParameter(f"unknown timezone {tz}", param_hint="--tz")

    result = recognize_date(query, tz)
    if not result.is_date:
        console.print(f"[yellow]Not a date:[/] {query} (text search only)")
        return

    console.print(f"[green]Date:[/] {result.value.isoformat()}")
    console.print(f"Explicit year: {'yes' if result.has_year else 'no'}")
