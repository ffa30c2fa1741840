# ABOUTME: Read-only SQLite connection management for a Kobo device database.
# ABOUTME: Validates the device root, opens KoboReader.sqlite with mode=ro, and always closes it.

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from koboshelf.device.errors import DatabaseOpenError, InvalidDevicePathError
from koboshelf.device.paths import resolve_db_path

logger = logging.getLogger(__name__)


def check_device_root(device_root: str | Path) -> Path:
    """Reject device roots that cannot hold a Kobo filesystem."""
    # Path("") collapses to Path("."), so an empty str and an empty Path look alike.
    if not str(device_root).strip() or str(device_root) == ".":
        raise InvalidDevicePathError("Device path is empty")
    root = Path(device_root)
    if not root.is_dir():
        raise InvalidDevicePathError(f"Device path is not a directory: {root}")
    return root


def _connect_read_only(db_path: Path) -> sqlite3.Connection:
    """Open db_path read-only and confirm it really is an SQLite database.

    sqlite3.connect is lazy about validating the file header, so a check
    query against sqlite_master is run before handing the connection out.
    """
    uri = f"{db_path.resolve().as_uri()}?mode=ro"
    try:
        conn = sqlite3.connect(uri, uri=True)
    except sqlite3.Error as exc:
        raise DatabaseOpenError(f"Failed to open Kobo database {db_path}: {exc}") from exc

    try:
        conn.execute("SELECT name FROM sqlite_master LIMIT 1").fetchall()
    except sqlite3.Error as exc:
        conn.close()
        raise DatabaseOpenError(f"Failed to open Kobo database {db_path}: {exc}") from exc

    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def open_device_db(device_root: str | Path) -> Iterator[sqlite3.Connection]:
    """Open the library database of a mounted Kobo for the duration of a block.

    The connection is opened read-only with a sqlite3.Row factory and is
    closed on every exit path, including exceptions raised inside the block.

    Args:
        device_root: Mount point of the Kobo (the directory containing .kobo/).

    Yields:
        A read-only sqlite3.Connection.

    Raises:
        InvalidDevicePathError: If device_root is empty or not a directory.
        DatabaseOpenError: If KoboReader.sqlite is missing, locked, or corrupt.
    """
    root = check_device_root(device_root)
    db_path = resolve_db_path(root)
    if not db_path.is_file():
        raise DatabaseOpenError(f"Kobo database not found: {db_path}")

    conn = _connect_read_only(db_path)
    logger.debug("Opened Kobo database %s", db_path)
    try:
        yield conn
    finally:
        conn.close()
