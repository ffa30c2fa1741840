# ABOUTME: CLI package for Koboshelf, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.logging import RichHandler

from koboshelf.cli.commands import (
    bookmarks_cmd,
    books_cmd,
    devices_cmd,
    events_cmd,
    find_cmd,
    snapshot_cmd,
    vocab_cmd,
)

_LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


@click.group()
@click.version_option(package_name="koboshelf")
@click.option("-v", "--verbose", count=True, help="Increase log output (-vv for debug).")
def cli(verbose: int) -> None:
    """Koboshelf - read books, highlights, and reading stats from a Kobo e-reader."""
    logging.basicConfig(
        level=_LOG_LEVELS.get(verbose, logging.DEBUG),
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


cli.add_command(books_cmd.books)
cli.add_command(events_cmd.events)
cli.add_command(bookmarks_cmd.bookmarks)
cli.add_command(vocab_cmd.vocab)
cli.add_command(snapshot_cmd.snapshot)
cli.add_command(find_cmd.find)
cli.add_command(devices_cmd.devices)
