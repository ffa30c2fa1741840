# ABOUTME: The `koboshelf events` command for listing reading activity.
# ABOUTME: Shows the device's most recent reading events in a Rich table.

import json as json_lib
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from koboshelf.cli.options import device_option, json_option, limit_option
from koboshelf.device.errors import KoboReaderError
from koboshelf.device.export import event_to_dict
from koboshelf.device.reader import get_events

console = Console()


@click.command("events")
@device_option
@json_option
@limit_option
def events(device_root: Path, json_output: bool, limit: int | None) -> None:
    """List recent reading events, newest first."""
    try:
        records = get_events(device_root)
    except KoboReaderError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    records = records[:limit] if limit else records

    if json_output:
        click.echo(json_lib.dumps([event_to_dict(e) for e in records], indent=2))
        return

    if not records:
        console.print("[yellow]No reading events on the device.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim")
    table.add_column("Content")
    table.add_column("Event", no_wrap=True)
    table.add_column("Count", justify="right")
    table.add_column("Last Occurrence", style="dim")

    for event in records:
        kind = event.kind
        table.add_row(
            str(event.id),
            escape(event.content_id),
            kind.name.replace("_", " ").title() if kind else str(event.event_type),
            str(event.event_count),
            escape(event.last_occurrence),
        )

    console.print(table)
    console.print(f"\n[dim]{len(records)} event(s)[/dim]")
