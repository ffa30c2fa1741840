# ABOUTME: Converts KoboReader.sqlite rows into immutable entity dataclasses.
# ABOUTME: Applies null fallbacks and clamping; raises RowMappingError for unusable rows.

import math
from typing import Any

from koboshelf.device.errors import RowMappingError
from koboshelf.device.types import Book, Bookmark, ReadingEvent, ReadStatus, VocabularyEntry

PERCENT_RANGE = (0.0, 100.0)
CHAPTER_PROGRESS_RANGE = (0.0, 1.0)


def _required_str(row: Any, name: str) -> str:
    value = row[name]
    if value is None:
        raise RowMappingError(f"{name} is NULL")
    if isinstance(value, bytes):
        raise RowMappingError(f"{name} holds binary data")
    return str(value)


def _optional_str(row: Any, name: str) -> str | None:
    value = row[name]
    if value is None or isinstance(value, bytes):
        return None
    return str(value)


def _as_int(value: Any) -> int | None:
    """Coerce an SQLite value to int, or None if it is not integral."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _required_int(row: Any, name: str) -> int:
    value = row[name]
    if value is None:
        raise RowMappingError(f"{name} is NULL")
    number = _as_int(value)
    if number is None:
        raise RowMappingError(f"{name} is not an integer: {value!r}")
    return number


def _optional_int(row: Any, name: str) -> int | None:
    value = row[name]
    return None if value is None else _as_int(value)


def _clamped_float(row: Any, name: str, bounds: tuple[float, float]) -> float:
    """Read a float column, treating NULL or garbage as the lower bound."""
    low, high = bounds
    value = row[name]
    if isinstance(value, bool) or not isinstance(value, int | float):
        return low
    number = float(value)
    if math.isnan(number):
        return low
    return min(max(number, low), high)


def _read_status(row: Any) -> ReadStatus:
    code = _optional_int(row, "ReadStatus")
    try:
        return ReadStatus(code)
    except ValueError:
        return ReadStatus.UNREAD


def row_to_book(row: Any) -> Book:
    """Convert a content row (see schema.BOOKS) to a Book."""
    return Book(
        content_id=_required_str(row, "ContentID"),
        isbn=_optional_str(row, "ISBN"),
        title=_required_str(row, "Title"),
        attribution=_optional_str(row, "Attribution"),
        description=_optional_str(row, "Description"),
        publisher=_optional_str(row, "Publisher"),
        language=_optional_str(row, "Language"),
        percent_read=_clamped_float(row, "___PercentRead", PERCENT_RANGE),
        read_status=_read_status(row),
        time_spent_reading=max(_optional_int(row, "TimeSpentReading") or 0, 0),
        date_last_read=_optional_str(row, "DateLastRead"),
        mime_type=_required_str(row, "MimeType"),
        content_type=_required_str(row, "ContentType"),
        user_id=_optional_str(row, "___UserID"),
    )


def row_to_event(row: Any) -> ReadingEvent:
    """Convert an Event row to a ReadingEvent. ExtraData is kept as raw bytes."""
    extra = row["ExtraData"]
    return ReadingEvent(
        id=_required_int(row, "Id"),
        content_id=_required_str(row, "ContentID"),
        event_type=_required_int(row, "Type"),
        event_count=_required_int(row, "Count"),
        last_occurrence=_required_str(row, "LastOccurrence"),
        extra_data=bytes(extra) if isinstance(extra, bytes | bytearray | memoryview) else None,
    )


def row_to_bookmark(row: Any) -> Bookmark:
    """Convert a Bookmark row to a Bookmark."""
    return Bookmark(
        bookmark_id=_required_str(row, "BookmarkID"),
        volume_id=_required_str(row, "VolumeID"),
        content_id=_required_str(row, "ContentID"),
        text=_required_str(row, "Text"),
        annotation=_optional_str(row, "Annotation"),
        chapter_progress=_clamped_float(row, "ChapterProgress", CHAPTER_PROGRESS_RANGE),
        start_container_path=_optional_str(row, "StartContainerPath"),
        start_offset=_optional_int(row, "StartOffset"),
        end_container_path=_optional_str(row, "EndContainerPath"),
        end_offset=_optional_int(row, "EndOffset"),
        date_created=_required_str(row, "DateCreated"),
        date_modified=_optional_str(row, "DateModified"),
        bookmark_type=_required_str(row, "Type"),
    )


def row_to_vocabulary(row: Any) -> VocabularyEntry:
    """Convert a WordList row to a VocabularyEntry."""
    return VocabularyEntry(
        text=_required_str(row, "Text"),
        volume_id=_required_str(row, "VolumeID"),
        date_created=_required_str(row, "DateCreated"),
    )
