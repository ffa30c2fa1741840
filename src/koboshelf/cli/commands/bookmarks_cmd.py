# ABOUTME: The `koboshelf bookmarks` command for listing highlights and notes.
# ABOUTME: Prints visible bookmarks with their annotations, newest first.

import json as json_lib
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from koboshelf.cli.options import device_option, json_option, limit_option
from koboshelf.device.errors import KoboReaderError
from koboshelf.device.export import bookmark_to_dict
from koboshelf.device.reader import get_bookmarks

console = Console()


@click.command("bookmarks")
@device_option
@json_option
@limit_option
@click.option("--volume", "volume_id", default=None, help="Only show this book's bookmarks.")
def bookmarks(
    device_root: Path, json_output: bool, limit: int | None, volume_id: str | None
) -> None:
    """List highlights, annotations, and bookmarks."""
    try:
        records = get_bookmarks(device_root)
    except KoboReaderError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    if volume_id:
        records = [b for b in records if b.volume_id == volume_id]
    records = records[:limit] if limit else records

    if json_output:
        click.echo(json_lib.dumps([bookmark_to_dict(b) for b in records], indent=2))
        return

    if not records:
        console.print("[yellow]No bookmarks on the device.[/yellow]")
        return

    for bookmark in records:
        console.print(
            f"[bold]{escape(bookmark.bookmark_type)}[/bold] "
            f"[dim]{escape(bookmark.date_created)} "
            f"{escape(bookmark.volume_id)} ({bookmark.chapter_progress:.0%})[/dim]"
        )
        console.print(f"  {bookmark.text}", markup=False)
        if bookmark.annotation:
            console.print(f"  > {bookmark.annotation}", style="italic", markup=False)

    console.print(f"\n[dim]{len(records)} bookmark(s)[/dim]")
