# ABOUTME: The `koboshelf devices` command for finding mounted Kobo e-readers.
# ABOUTME: Lists each detected device with its book count and free space.

import json as json_lib
from pathlib import Path

import click
from rich.console import Console
from rich.filesize import decimal
from rich.markup import escape
from rich.table import Table

from koboshelf.cli.options import json_option
from koboshelf.device.discovery import describe_device, detect_devices
from koboshelf.device.export import device_to_dict

console = Console()


@click.command("devices")
@json_option
@click.option(
    "--search",
    "mount_roots",
    multiple=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory to search for mounted volumes (repeatable; default: /Volumes, /media).",
)
def devices(json_output: bool, mount_roots: tuple[Path, ...]) -> None:
    """Detect Kobo e-readers mounted on this computer."""
    found = [describe_device(root) for root in detect_devices(mount_roots or None)]

    if json_output:
        click.echo(json_lib.dumps([device_to_dict(d) for d in found], indent=2))
        return

    if not found:
        console.print("[yellow]No Kobo devices found.[/yellow]")
        return

    table = Table()
    table.add_column("Name", style="bold")
    table.add_column("Path")
    table.add_column("Books", justify="right", no_wrap=True)
    table.add_column("Free", justify="right", no_wrap=True)
    table.add_column("Total", justify="right", no_wrap=True)

    for device in found:
        table.add_row(
            escape(device.name),
            escape(str(device.path)),
            str(device.book_count) if device.book_count is not None else "?",
            decimal(device.free_space),
            decimal(device.total_space),
        )

    console.print(table)
    console.print(f"\n[dim]{len(found)} device(s)[/dim]")
