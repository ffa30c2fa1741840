# ABOUTME: Documented layout of the KoboReader.sqlite tables this package reads.
# ABOUTME: Filtering constants, per-table column specs, and the SELECT builder live here only.

from dataclasses import dataclass

# content.ContentType codes for a whole book (6) and a book part (9).
BOOK_CONTENT_TYPES = (6, 9)

# Bookmark.Hidden is stored as the text 'true' / 'false'.
BOOKMARK_NOT_HIDDEN = "false"

EVENT_LIMIT = 1000
VOCABULARY_LIMIT = 500


@dataclass(frozen=True)
class Column:
    """A column read from a device table.

    Required columns must exist and be non-null for a row to map. Optional
    columns may be absent from the table altogether; they are then selected
    as NULL and every row gets the field's default.
    """

    name: str
    required: bool = False


@dataclass(frozen=True)
class TableSpec:
    """One fixed read against a device table."""

    entity: str
    table: str
    columns: tuple[Column, ...]
    where: str = ""
    params: tuple = ()
    order_by: str = ""
    limit: int | None = None
    # Columns the WHERE / ORDER BY clauses reference; they must exist.
    uses: tuple[str, ...] = ()

    def required_names(self) -> list[str]:
        names = [c.name for c in self.columns if c.required]
        names.extend(n for n in self.uses if n not in names)
        return names


BOOKS = TableSpec(
    entity="books",
    table="content",
    columns=(
        Column("ContentID", required=True),
        Column("ISBN"),
        Column("Title", required=True),
        Column("Attribution"),
        Column("Description"),
        Column("Publisher"),
        Column("Language"),
        Column("___PercentRead"),
        Column("ReadStatus"),
        Column("TimeSpentReading"),
        Column("DateLastRead"),
        Column("MimeType", required=True),
        Column("ContentType", required=True),
        Column("___UserID"),
    ),
    where="ContentType IN (?, ?)",
    params=BOOK_CONTENT_TYPES,
    order_by='"DateLastRead" IS NULL, "DateLastRead" DESC',
    uses=("DateLastRead",),
)

EVENTS = TableSpec(
    entity="events",
    table="Event",
    columns=(
        Column("Id", required=True),
        Column("ContentID", required=True),
        Column("Type", required=True),
        Column("Count", required=True),
        Column("LastOccurrence", required=True),
        Column("ExtraData"),
    ),
    order_by='"LastOccurrence" DESC',
    limit=EVENT_LIMIT,
)

BOOKMARKS = TableSpec(
    entity="bookmarks",
    table="Bookmark",
    columns=(
        Column("BookmarkID", required=True),
        Column("VolumeID", required=True),
        Column("ContentID", required=True),
        Column("Text", required=True),
        Column("Annotation"),
        Column("ChapterProgress"),
        Column("StartContainerPath"),
        Column("StartOffset"),
        Column("EndContainerPath"),
        Column("EndOffset"),
        Column("DateCreated", required=True),
        Column("DateModified"),
        Column("Type", required=True),
    ),
    where='"Hidden" = ?',
    params=(BOOKMARK_NOT_HIDDEN,),
    order_by='"DateCreated" DESC',
    uses=("Hidden",),
)

VOCABULARY = TableSpec(
    entity="vocabulary",
    table="WordList",
    columns=(
        Column("Text", required=True),
        Column("VolumeID", required=True),
        Column("DateCreated", required=True),
    ),
    order_by='"DateCreated" DESC',
    limit=VOCABULARY_LIMIT,
)


def select_list(spec: TableSpec, available: set[str]) -> str:
    """Render the column list, substituting NULL for absent optional columns.

    Args:
        spec: The table read being built.
        available: Lower-cased column names present in the table.
    """
    parts = []
    for column in spec.columns:
        if column.name.lower() in available:
            parts.append(f'"{column.name}"')
        else:
            parts.append(f'NULL AS "{column.name}"')
    return ", ".join(parts)


def build_select(
    spec: TableSpec,
    available: set[str],
    *,
    where: str | None = None,
    order_by: str | None = None,
    limit: int | None = None,
) -> str:
    """Build the SELECT statement for spec.

    Keyword arguments override the TableSpec clauses; pass an empty string
    to drop one. Only placeholders appear in WHERE, never caller values.
    """
    where = spec.where if where is None else where
    order_by = spec.order_by if order_by is None else order_by
    limit = spec.limit if limit is None else limit

    sql = f'SELECT {select_list(spec, available)} FROM "{spec.table}"'
    if where:
        sql += f" WHERE {where}"
    if order_by:
        sql += f" ORDER BY {order_by}"
    if limit is not None:
        sql += f" LIMIT {int(limit)}"
    return sql
