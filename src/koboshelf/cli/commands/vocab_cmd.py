# ABOUTME: The `koboshelf vocab` command for listing dictionary lookups.
# ABOUTME: Shows looked-up words and the book they were found in.

import json as json_lib
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from koboshelf.cli.options import device_option, json_option, limit_option
from koboshelf.device.errors import KoboReaderError
from koboshelf.device.export import vocabulary_to_dict
from koboshelf.device.reader import get_vocabulary

console = Console()


@click.command("vocab")
@device_option
@json_option
@limit_option
def vocab(device_root: Path, json_output: bool, limit: int | None) -> None:
    """List words looked up in the device dictionary."""
    try:
        records = get_vocabulary(device_root)
    except KoboReaderError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    records = records[:limit] if limit else records

    if json_output:
        click.echo(json_lib.dumps([vocabulary_to_dict(v) for v in records], indent=2))
        return

    if not records:
        console.print("[yellow]No vocabulary on the device.[/yellow]")
        return

    table = Table()
    table.add_column("Word", style="bold")
    table.add_column("Book")
    table.add_column("Looked Up", style="dim")
    for entry in records:
        table.add_row(escape(entry.text), escape(entry.volume_id), escape(entry.date_created))

    console.print(table)
    console.print(f"\n[dim]{len(records)} word(s)[/dim]")
