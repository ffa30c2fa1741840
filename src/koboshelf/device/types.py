# ABOUTME: Immutable value types for data read from a Kobo device library.
# ABOUTME: Books, reading events, bookmarks, vocabulary, the LibrarySnapshot, and detected devices.

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from enum import Enum, IntEnum


class ReadStatus(IntEnum):
    """Progress phase stored in content.ReadStatus."""

    UNREAD = 0
    READING = 1
    FINISHED = 2


class EventType(IntEnum):
    """Known Event.Type codes. The device writes others; those stay raw integers."""

    START_READING_BOOK = 3
    FINISHED_READING_BOOK = 5
    PROGRESS_25 = 1011
    PROGRESS_50 = 1013
    PROGRESS_75 = 1014
    LEAVE_CONTENT = 1021


class BookmarkType(str, Enum):
    """Known Bookmark.Type tags."""

    HIGHLIGHT = "highlight"
    ANNOTATION = "annotation"
    BOOKMARK = "bookmark"
    DOGEAR = "dogear"


@dataclass(frozen=True)
class Book:
    """A book (or book part) from the device's content table.

    Optional columns are None when the device left them empty. Progress fields
    always carry a value: nulls read as 0 and percent_read is clamped to 0-100.
    """

    content_id: str
    title: str
    mime_type: str
    content_type: str
    isbn: str | None = None
    attribution: str | None = None
    description: str | None = None
    publisher: str | None = None
    language: str | None = None
    percent_read: float = 0.0
    read_status: ReadStatus = ReadStatus.UNREAD
    time_spent_reading: int = 0
    date_last_read: str | None = None
    user_id: str | None = None

    @property
    def author(self) -> str:
        """Display form of attribution."""
        return self.attribution or ""


@dataclass(frozen=True)
class ReadingEvent:
    """A row of the Event table. content_id is not checked against content."""

    id: int
    content_id: str
    event_type: int
    event_count: int
    last_occurrence: str
    extra_data: bytes | None = None

    @property
    def kind(self) -> EventType | None:
        try:
            return EventType(self.event_type)
        except ValueError:
            return None


@dataclass(frozen=True)
class Bookmark:
    """A highlight, annotation, or bookmark the user has not hidden."""

    bookmark_id: str
    volume_id: str
    content_id: str
    text: str
    date_created: str
    bookmark_type: str
    annotation: str | None = None
    chapter_progress: float = 0.0
    start_container_path: str | None = None
    start_offset: int | None = None
    end_container_path: str | None = None
    end_offset: int | None = None
    date_modified: str | None = None

    @property
    def kind(self) -> BookmarkType | None:
        try:
            return BookmarkType(self.bookmark_type)
        except ValueError:
            return None


@dataclass(frozen=True)
class VocabularyEntry:
    """A word looked up in the device dictionary."""

    text: str
    volume_id: str
    date_created: str


@dataclass(frozen=True)
class LibrarySnapshot:
    """All four entity collections read over one connection.

    last_sync is host wall-clock time (UTC) taken after the final read; the
    device clock is never used. dropped_rows holds (entity, count) pairs for
    rows that could not be mapped and were skipped.
    """

    books: tuple[Book, ...]
    events: tuple[ReadingEvent, ...]
    bookmarks: tuple[Bookmark, ...]
    vocabulary: tuple[VocabularyEntry, ...]
    last_sync: datetime
    dropped_rows: tuple[tuple[str, int], ...] = ()

    def dropped(self, entity: str) -> int:
        """Rows skipped while reading entity (e.g. "books")."""
        return dict(self.dropped_rows).get(entity, 0)

    @property
    def total_dropped(self) -> int:
        return sum(count for _, count in self.dropped_rows)


@dataclass(frozen=True)
class KoboDevice:
    """A mounted Kobo found on this host.

    book_count is None when the library database could not be read.
    """

    name: str
    path: Path
    free_space: int
    total_space: int
    book_count: int | None = None
