# ABOUTME: JSON-ready serialization of Kobo entities and library snapshots.
# ABOUTME: Uses camelCase keys and base64 for binary event payloads.

import base64
from typing import Any

from koboshelf.device.types import (
    Book,
    Bookmark,
    KoboDevice,
    LibrarySnapshot,
    ReadingEvent,
    VocabularyEntry,
)


def book_to_dict(book: Book) -> dict[str, Any]:
    return {
        "contentId": book.content_id,
        "isbn": book.isbn,
        "title": book.title,
        "attribution": book.attribution,
        "description": book.description,
        "publisher": book.publisher,
        "language": book.language,
        "percentRead": book.percent_read,
        "readStatus": int(book.read_status),
        "timeSpentReading": book.time_spent_reading,
        "dateLastRead": book.date_last_read,
        "mimeType": book.mime_type,
        "contentType": book.content_type,
        "userId": book.user_id,
    }


def event_to_dict(event: ReadingEvent) -> dict[str, Any]:
    extra = event.extra_data
    return {
        "id": event.id,
        "contentId": event.content_id,
        "eventType": event.event_type,
        "eventCount": event.event_count,
        "lastOccurrence": event.last_occurrence,
        "extraData": base64.b64encode(extra).decode("ascii") if extra is not None else None,
    }


def bookmark_to_dict(bookmark: Bookmark) -> dict[str, Any]:
    return {
        "bookmarkId": bookmark.bookmark_id,
        "volumeId": bookmark.volume_id,
        "contentId": bookmark.content_id,
        "text": bookmark.text,
        "annotation": bookmark.annotation,
        "chapterProgress": bookmark.chapter_progress,
        "startContainerPath": bookmark.start_container_path,
        "startOffset": bookmark.start_offset,
        "endContainerPath": bookmark.end_container_path,
        "endOffset": bookmark.end_offset,
        "dateCreated": bookmark.date_created,
        "dateModified": bookmark.date_modified,
        "bookmarkType": bookmark.bookmark_type,
    }


def vocabulary_to_dict(entry: VocabularyEntry) -> dict[str, Any]:
    return {
        "text": entry.text,
        "volumeId": entry.volume_id,
        "dateCreated": entry.date_created,
    }


def snapshot_to_dict(snapshot: LibrarySnapshot) -> dict[str, Any]:
    """Serialize a whole snapshot; lastSync is an ISO 8601 UTC timestamp."""
    return {
        "books": [book_to_dict(b) for b in snapshot.books],
        "events": [event_to_dict(e) for e in snapshot.events],
        "bookmarks": [bookmark_to_dict(b) for b in snapshot.bookmarks],
        "vocabulary": [vocabulary_to_dict(v) for v in snapshot.vocabulary],
        "lastSync": snapshot.last_sync.isoformat(),
        "droppedRows": dict(snapshot.dropped_rows),
    }


def device_to_dict(device: KoboDevice) -> dict[str, Any]:
    return {
        "name": device.name,
        "path": str(device.path),
        "freeSpace": device.free_space,
        "totalSpace": device.total_space,
        "bookCount": device.book_count,
    }
