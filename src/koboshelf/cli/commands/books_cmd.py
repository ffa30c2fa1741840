# ABOUTME: The `koboshelf books` command for listing books on the device.
# ABOUTME: Displays a Rich table with reading status, progress, and time spent.

import json as json_lib
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from koboshelf.cli.options import device_option, json_option, limit_option
from koboshelf.device.errors import KoboReaderError
from koboshelf.device.export import book_to_dict
from koboshelf.device.formatting import format_reading_time, read_status_label
from koboshelf.device.reader import get_books

console = Console()


@click.command("books")
@device_option
@json_option
@limit_option
def books(device_root: Path, json_output: bool, limit: int | None) -> None:
    """List books on the Kobo, most recently read first."""
    try:
        records = get_books(device_root)
    except KoboReaderError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    records = records[:limit] if limit else records

    if json_output:
        click.echo(json_lib.dumps([book_to_dict(b) for b in records], indent=2))
        return

    if not records:
        console.print("[yellow]No books on the device.[/yellow]")
        return

    table = Table()
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Status", no_wrap=True)
    table.add_column("Progress", justify="right", no_wrap=True)
    table.add_column("Time", justify="right", no_wrap=True)
    table.add_column("Last Read", style="dim")

    for book in records:
        table.add_row(
            escape(book.title),
            escape(book.author) if book.author else "[dim]unknown[/dim]",
            read_status_label(book.read_status),
            f"{book.percent_read:.0f}%",
            format_reading_time(book.time_spent_reading),
            escape(book.date_last_read or ""),
        )

    console.print(table)
    console.print(f"\n[dim]{len(records)} book(s)[/dim]")
