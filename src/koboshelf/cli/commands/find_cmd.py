# ABOUTME: The `koboshelf find` command for looking up one book's reading progress.
# ABOUTME: Matches by exact ISBN or case-sensitive title fragment.

import json as json_lib
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from koboshelf.cli.options import device_option, json_option
from koboshelf.device.errors import InvalidLookupArgsError, KoboReaderError
from koboshelf.device.export import book_to_dict
from koboshelf.device.formatting import format_reading_time, read_status_label
from koboshelf.device.reader import find_book

console = Console()


@click.command("find")
@device_option
@json_option
@click.option("--isbn", default=None, help="Exact ISBN to match.")
@click.option("--title", default=None, help="Case-sensitive fragment of the title.")
def find(device_root: Path, json_output: bool, isbn: str | None, title: str | None) -> None:
    """Show reading progress for a single book."""
    try:
        book = find_book(device_root, isbn=isbn, title=title)
    except InvalidLookupArgsError as exc:
        raise click.UsageError("Pass --isbn or --title.") from exc
    except KoboReaderError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    if book is None:
        console.print("[red]No matching book found.[/red]")
        raise SystemExit(1)

    if json_output:
        click.echo(json_lib.dumps(book_to_dict(book), indent=2))
        return

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=14)
    table.add_column("Value")

    table.add_row("Title", escape(book.title))
    table.add_row("Author", escape(book.author or "unknown"))
    if book.isbn:
        table.add_row("ISBN", escape(book.isbn))
    if book.publisher:
        table.add_row("Publisher", escape(book.publisher))
    table.add_row("Language", escape(book.language or "?"))
    table.add_row("Status", read_status_label(book.read_status))
    table.add_row("Progress", f"{book.percent_read:.0f}%")
    table.add_row("Time Read", format_reading_time(book.time_spent_reading))
    if book.date_last_read:
        table.add_row("Last Read", escape(book.date_last_read))
    table.add_row("Format", escape(book.mime_type))
    table.add_row("Content ID", escape(book.content_id))

    console.print(table)
