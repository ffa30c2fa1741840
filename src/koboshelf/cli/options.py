# ABOUTME: Shared Click options for Koboshelf CLI commands.
# ABOUTME: Provides reusable decorators for --device, --json, and --limit.

from pathlib import Path

import click

from koboshelf.device.discovery import detect_devices


def _device_or_detected(ctx: click.Context, param: click.Parameter, value: Path | None) -> Path:
    """Fall back to the first mounted Kobo when no device root was given."""
    if value is not None:
        return value
    devices = detect_devices()
    if not devices:
        raise click.UsageError(
            "No Kobo device found. Pass --device or set KOBOSHELF_DEVICE.", ctx=ctx
        )
    return devices[0]


device_option = click.option(
    "--device",
    "device_root",
    type=click.Path(path_type=Path),
    envvar="KOBOSHELF_DEVICE",
    default=None,
    show_envvar=True,
    callback=_device_or_detected,
    help="Mount point of the Kobo (default: first Kobo detected under /Volumes or /media).",
)

json_option = click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output results as JSON.",
)

limit_option = click.option(
    "--limit",
    type=click.IntRange(min=1),
    default=None,
    help="Show at most this many rows.",
)
