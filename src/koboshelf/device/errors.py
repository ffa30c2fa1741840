# ABOUTME: Exception hierarchy for reading a Kobo device library database.
# ABOUTME: Separates bad paths, open failures, query failures, and row-level mapping errors.


class KoboReaderError(Exception):
    """Base class for all errors raised while reading a Kobo device."""


class InvalidDevicePathError(KoboReaderError):
    """Raised when the device root does not resolve to a usable directory."""


class DatabaseOpenError(KoboReaderError):
    """Raised when KoboReader.sqlite is missing, locked, unreadable, or corrupt."""


class QueryError(KoboReaderError):
    """Raised when a read against the device database fails outright.

    Typically a schema mismatch: an expected table or required column is absent.
    """

    def __init__(self, message: str, entity: str | None = None) -> None:
        super().__init__(message)
        self.entity = entity


class SnapshotError(QueryError):
    """Raised when any of the reads behind a library snapshot fails."""


class RowMappingError(KoboReaderError):
    """Raised by a row mapper when a single row cannot become an entity.

    Readers catch this and drop the row; it never reaches callers.
    """


class InvalidLookupArgsError(KoboReaderError, ValueError):
    """Raised when find_book is called without an ISBN or a title."""
