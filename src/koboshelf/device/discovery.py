# ABOUTME: Finds Kobo e-readers mounted on this host and summarizes them.
# ABOUTME: A mount is a Kobo when it holds .kobo/KoboReader.sqlite; nothing is written.

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from koboshelf.device.connection import check_device_root
from koboshelf.device.errors import KoboReaderError
from koboshelf.device.paths import default_mount_roots, resolve_db_path
from koboshelf.device.reader import get_books
from koboshelf.device.types import KoboDevice

logger = logging.getLogger(__name__)


def _has_kobo_db(candidate: Path) -> bool:
    try:
        return candidate.is_dir() and resolve_db_path(candidate).is_file()
    except OSError as exc:
        logger.debug("Cannot inspect %s: %s", candidate, exc)
        return False


def detect_devices(mount_roots: Iterable[str | Path] | None = None) -> list[Path]:
    """Return the roots of all mounted Kobos, in name order per mount root.

    Args:
        mount_roots: Directories whose children are mounted volumes. Defaults
            to default_mount_roots(). Missing or unreadable roots are skipped.
    """
    roots = default_mount_roots() if mount_roots is None else [Path(r) for r in mount_roots]
    found: list[Path] = []
    for mount_root in roots:
        try:
            candidates = sorted(mount_root.iterdir())
        except OSError as exc:
            logger.debug("Skipping mount root %s: %s", mount_root, exc)
            continue
        for candidate in candidates:
            if candidate not in found and _has_kobo_db(candidate):
                found.append(candidate)

    logger.debug("Detected %d Kobo device(s)", len(found))
    return found


def describe_device(device_root: str | Path) -> KoboDevice:
    """Summarize a mounted Kobo: disk space and number of books.

    Raises:
        InvalidDevicePathError: If device_root is not a usable directory.
    """
    root = check_device_root(device_root)
    usage = shutil.disk_usage(root)
    try:
        book_count: int | None = len(get_books(root))
    except KoboReaderError as exc:
        logger.warning("Could not count books on %s: %s", root, exc)
        book_count = None

    return KoboDevice(
        name=root.name,
        path=root,
        free_space=usage.free,
        total_space=usage.total,
        book_count=book_count,
    )
