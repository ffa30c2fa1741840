# ABOUTME: Public API for reading the library database of a connected Kobo.
# ABOUTME: Exports the readers, snapshot aggregation, lookup, data types, and errors.

from koboshelf.device.connection import open_device_db
from koboshelf.device.errors import (
    DatabaseOpenError,
    InvalidDevicePathError,
    InvalidLookupArgsError,
    KoboReaderError,
    QueryError,
    RowMappingError,
    SnapshotError,
)
from koboshelf.device.discovery import describe_device, detect_devices
from koboshelf.device.paths import default_mount_roots, resolve_db_path
from koboshelf.device.reader import (
    DeviceLibrary,
    find_book,
    get_bookmarks,
    get_books,
    get_events,
    get_library_snapshot,
    get_vocabulary,
)
from koboshelf.device.types import (
    Book,
    Bookmark,
    BookmarkType,
    EventType,
    KoboDevice,
    LibrarySnapshot,
    ReadingEvent,
    ReadStatus,
    VocabularyEntry,
)

__all__ = [
    "Book",
    "Bookmark",
    "BookmarkType",
    "DatabaseOpenError",
    "DeviceLibrary",
    "EventType",
    "InvalidDevicePathError",
    "InvalidLookupArgsError",
    "KoboDevice",
    "KoboReaderError",
    "LibrarySnapshot",
    "QueryError",
    "ReadStatus",
    "ReadingEvent",
    "RowMappingError",
    "SnapshotError",
    "VocabularyEntry",
    "default_mount_roots",
    "describe_device",
    "detect_devices",
    "find_book",
    "get_bookmarks",
    "get_books",
    "get_events",
    "get_library_snapshot",
    "get_vocabulary",
    "open_device_db",
    "resolve_db_path",
]
