# ABOUTME: The `koboshelf snapshot` command for reading the whole device library at once.
# ABOUTME: Prints entity counts, or dumps the full snapshot as JSON.

import json as json_lib
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from koboshelf.cli.options import device_option, json_option
from koboshelf.device.errors import KoboReaderError
from koboshelf.device.export import snapshot_to_dict
from koboshelf.device.reader import get_library_snapshot

console = Console()


@click.command("snapshot")
@device_option
@json_option
def snapshot(device_root: Path, json_output: bool) -> None:
    """Read books, events, bookmarks, and vocabulary in one pass."""
    try:
        result = get_library_snapshot(device_root)
    except KoboReaderError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    if json_output:
        click.echo(json_lib.dumps(snapshot_to_dict(result), indent=2))
        return

    table = Table(title="Kobo Library")
    table.add_column("Collection", style="bold")
    table.add_column("Count", justify="right")
    table.add_column("Skipped", justify="right", style="dim")

    for name, items in (
        ("Books", result.books),
        ("Events", result.events),
        ("Bookmarks", result.bookmarks),
        ("Vocabulary", result.vocabulary),
    ):
        table.add_row(name, str(len(items)), str(result.dropped(name.lower())))

    console.print(table)
    console.print(f"\n[dim]Read at {result.last_sync.isoformat()}[/dim]")
