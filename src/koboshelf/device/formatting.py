# ABOUTME: Human-readable rendering of Kobo reading statistics.
# ABOUTME: Formats reading time and read-status codes for display.

from koboshelf.device.types import ReadStatus

_STATUS_LABELS = {
    ReadStatus.UNREAD: "Unread",
    ReadStatus.READING: "Reading",
    ReadStatus.FINISHED: "Finished",
}


def format_reading_time(minutes: int) -> str:
    """Render minutes as e.g. '45min', '2h 5min', '1d 3h'.

    Units below the largest two are dropped, as are zero remainders.
    """
    if minutes < 60:
        return f"{minutes}min"

    hours, mins = divmod(minutes, 60)
    if hours < 24:
        return f"{hours}h {mins}min" if mins else f"{hours}h"

    days, hours = divmod(hours, 24)
    return f"{days}d {hours}h" if hours else f"{days}d"


def read_status_label(status: int) -> str:
    """Label for a content.ReadStatus code; 'Unknown' for codes the device may add later."""
    try:
        return _STATUS_LABELS[ReadStatus(status)]
    except ValueError:
        return "Unknown"
