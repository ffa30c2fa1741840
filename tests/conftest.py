# ABOUTME: Shared pytest fixtures for Koboshelf tests.
# ABOUTME: Provides fake Kobo device roots (populated, empty, and broken).

from pathlib import Path

import pytest

from tests.fixtures.kobo_db import TABLES, build_device


@pytest.fixture
def kobo_device(tmp_path: Path) -> Path:
    """A mounted Kobo with the sample library."""
    return build_device(tmp_path / "KOBOeReader")


@pytest.fixture
def empty_device(tmp_path: Path) -> Path:
    """A Kobo whose tables exist but hold no rows."""
    return build_device(
        tmp_path / "KOBOeReader", books=[], events=[], bookmarks=[], words=[]
    )


@pytest.fixture
def device_without_wordlist(tmp_path: Path) -> Path:
    """A Kobo whose database lacks the WordList table."""
    tables = {name: ddl for name, ddl in TABLES.items() if name != "WordList"}
    return build_device(tmp_path / "KOBOeReader", tables=tables)


@pytest.fixture
def corrupt_device(tmp_path: Path) -> Path:
    """A Kobo whose KoboReader.sqlite is not an SQLite file."""
    root = tmp_path / "KOBOeReader"
    (root / ".kobo").mkdir(parents=True)
    (root / ".kobo" / "KoboReader.sqlite").write_text("this is not a database")
    return root
