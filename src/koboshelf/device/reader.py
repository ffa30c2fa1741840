# ABOUTME: Entity readers, snapshot aggregation, and book lookup for a Kobo device database.
# ABOUTME: Each public function opens its own read-only connection and closes it before returning.

import logging
import sqlite3
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, TypeVar

from koboshelf.device import schema
from koboshelf.device.connection import open_device_db
from koboshelf.device.errors import (
    InvalidLookupArgsError,
    QueryError,
    RowMappingError,
    SnapshotError,
)
from koboshelf.device.mapping import (
    row_to_book,
    row_to_bookmark,
    row_to_event,
    row_to_vocabulary,
)
from koboshelf.device.types import (
    Book,
    Bookmark,
    LibrarySnapshot,
    ReadingEvent,
    VocabularyEntry,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _map_rows(
    entity: str, rows: Iterable[Any], mapper: Callable[[Any], T]
) -> tuple[list[T], int]:
    """Map rows best-effort, dropping the ones that fail. Returns (items, dropped)."""
    items: list[T] = []
    dropped = 0
    for row in rows:
        try:
            items.append(mapper(row))
        except RowMappingError as exc:
            dropped += 1
            logger.debug("Dropped %s row: %s", entity, exc)
    if dropped:
        logger.warning("Skipped %d unreadable %s row(s)", dropped, entity)
    return items, dropped


class DeviceLibrary:
    """Typed reads over an open KoboReader.sqlite connection.

    Does not own the connection; use open_device_db() to get one, or the
    module-level get_* functions which handle that themselves.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def _columns(self, spec: schema.TableSpec) -> set[str]:
        """Lower-cased column names of spec.table, checked against the spec.

        Raises:
            QueryError: If the table or any column the read depends on is missing.
        """
        try:
            rows = self._conn.execute(f'PRAGMA table_info("{spec.table}")').fetchall()
        except sqlite3.Error as exc:
            raise QueryError(f"Failed to query {spec.entity}: {exc}", spec.entity) from exc

        if not rows:
            raise QueryError(
                f"Failed to query {spec.entity}: table {spec.table} not found", spec.entity
            )

        available = {row[1].lower() for row in rows}
        missing = [n for n in spec.required_names() if n.lower() not in available]
        if missing:
            raise QueryError(
                f"Failed to query {spec.entity}: {spec.table} is missing "
                f"column(s) {', '.join(missing)}",
                spec.entity,
            )
        return available

    def _fetch(self, spec: schema.TableSpec, sql: str, params: tuple) -> list[sqlite3.Row]:
        try:
            return self._conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            raise QueryError(f"Failed to query {spec.entity}: {exc}", spec.entity) from exc

    def _read(
        self, spec: schema.TableSpec, mapper: Callable[[Any], T]
    ) -> tuple[list[T], int]:
        available = self._columns(spec)
        rows = self._fetch(spec, schema.build_select(spec, available), spec.params)
        items, dropped = _map_rows(spec.entity, rows, mapper)
        logger.debug("Read %d %s (%d dropped)", len(items), spec.entity, dropped)
        return items, dropped

    def books(self) -> list[Book]:
        """Books and book parts, most recently read first (never-read last)."""
        return self._read(schema.BOOKS, row_to_book)[0]

    def events(self) -> list[ReadingEvent]:
        """The most recent reading events, newest first, at most EVENT_LIMIT."""
        return self._read(schema.EVENTS, row_to_event)[0]

    def bookmarks(self) -> list[Bookmark]:
        """Visible bookmarks and highlights, newest first."""
        return self._read(schema.BOOKMARKS, row_to_bookmark)[0]

    def vocabulary(self) -> list[VocabularyEntry]:
        """Looked-up words, newest first, at most VOCABULARY_LIMIT."""
        return self._read(schema.VOCABULARY, row_to_vocabulary)[0]

    def snapshot(self) -> LibrarySnapshot:
        """Read all four collections and stamp the result with the host clock.

        Raises:
            SnapshotError: If any single read fails. No partial snapshot is returned.
        """
        readers = (
            (schema.BOOKS, row_to_book),
            (schema.EVENTS, row_to_event),
            (schema.BOOKMARKS, row_to_bookmark),
            (schema.VOCABULARY, row_to_vocabulary),
        )
        results: dict[str, list] = {}
        dropped: dict[str, int] = {}
        for spec, mapper in readers:
            try:
                results[spec.entity], dropped[spec.entity] = self._read(spec, mapper)
            except QueryError as exc:
                raise SnapshotError(
                    f"Library snapshot failed while reading {spec.entity}: {exc}",
                    spec.entity,
                ) from exc

        return LibrarySnapshot(
            books=tuple(results["books"]),
            events=tuple(results["events"]),
            bookmarks=tuple(results["bookmarks"]),
            vocabulary=tuple(results["vocabulary"]),
            last_sync=datetime.now(timezone.utc),
            dropped_rows=tuple(dropped.items()),
        )

    def find_book(self, isbn: str | None = None, title: str | None = None) -> Book | None:
        """Find one content row by exact ISBN, or else by case-sensitive title substring.

        Caller values are bound as parameters. Rows are scanned in the table's
        natural order and the first one that maps cleanly is returned.

        Raises:
            InvalidLookupArgsError: If neither isbn nor title is given.
            QueryError: If the content table or the searched column is missing.
        """
        if isbn:
            where, value, column = '"ISBN" = ?', isbn, "ISBN"
        elif title:
            where, value, column = 'instr("Title", ?) > 0', title, "Title"
        else:
            raise InvalidLookupArgsError("Either ISBN or title must be provided")

        spec = schema.BOOKS
        available = self._columns(spec)
        if column.lower() not in available:
            raise QueryError(
                f"Failed to query {spec.entity}: {spec.table} has no {column} column",
                spec.entity,
            )

        sql = schema.build_select(spec, available, where=where, order_by="")
        try:
            cursor = self._conn.execute(sql, (value,))
            for row in cursor:
                try:
                    return row_to_book(row)
                except RowMappingError as exc:
                    logger.debug("Skipped unmappable match for %s=%r: %s", column, value, exc)
        except sqlite3.Error as exc:
            raise QueryError(f"Failed to query {spec.entity}: {exc}", spec.entity) from exc
        return None


def get_books(device_root: str | Path) -> list[Book]:
    """Read all books from the Kobo mounted at device_root."""
    with open_device_db(device_root) as conn:
        return DeviceLibrary(conn).books()


def get_events(device_root: str | Path) -> list[ReadingEvent]:
    """Read the most recent reading events from the Kobo at device_root."""
    with open_device_db(device_root) as conn:
        return DeviceLibrary(conn).events()


def get_bookmarks(device_root: str | Path) -> list[Bookmark]:
    """Read visible bookmarks and annotations from the Kobo at device_root."""
    with open_device_db(device_root) as conn:
        return DeviceLibrary(conn).bookmarks()


def get_vocabulary(device_root: str | Path) -> list[VocabularyEntry]:
    """Read dictionary lookups from the Kobo at device_root."""
    with open_device_db(device_root) as conn:
        return DeviceLibrary(conn).vocabulary()


def get_library_snapshot(device_root: str | Path) -> LibrarySnapshot:
    """Read books, events, bookmarks, and vocabulary over a single connection.

    Raises:
        InvalidDevicePathError: If device_root is not a usable directory.
        DatabaseOpenError: If the database cannot be opened.
        SnapshotError: If any of the four reads fails.
    """
    with open_device_db(device_root) as conn:
        return DeviceLibrary(conn).snapshot()


def find_book(
    device_root: str | Path, isbn: str | None = None, title: str | None = None
) -> Book | None:
    """Look up a single book on the Kobo at device_root.

    Argument validation happens before the device is touched.
    """
    if not isbn and not title:
        raise InvalidLookupArgsError("Either ISBN or title must be provided")
    with open_device_db(device_root) as conn:
        return DeviceLibrary(conn).find_book(isbn=isbn, title=title)
