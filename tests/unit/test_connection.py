# ABOUTME: Unit tests for opening the Kobo database read-only.
# ABOUTME: Covers bad device roots, missing and corrupt files, read-only mode, and cleanup.

import sqlite3
from pathlib import Path

import pytest

from koboshelf.device.connection import open_device_db
from koboshelf.device.errors import DatabaseOpenError, InvalidDevicePathError


class TestOpenDeviceDb:
    """Tests for the open_device_db context manager."""

    def test_yields_row_factory_connection(self, kobo_device: Path) -> None:
        """Rows support access by column name."""
        with open_device_db(kobo_device) as conn:
            row = conn.execute("SELECT Title FROM content WHERE ContentID = 'ISBN-A'").fetchone()
        assert row["Title"] == "Harry Potter and the Philosopher's Stone"

    def test_accepts_string_root(self, kobo_device: Path) -> None:
        """A str device root works as well as a Path."""
        with open_device_db(str(kobo_device)) as conn:
            assert conn.execute("SELECT COUNT(*) FROM WordList").fetchone()[0] == 3

    def test_connection_is_read_only(self, kobo_device: Path) -> None:
        """Writes are rejected by SQLite."""
        with open_device_db(kobo_device) as conn, pytest.raises(sqlite3.OperationalError):
            conn.execute("DELETE FROM WordList")

    def test_connection_closed_after_block(self, kobo_device: Path) -> None:
        """The connection cannot be used once the block exits."""
        with open_device_db(kobo_device) as conn:
            pass
        with pytest.raises(sqlite3.ProgrammingError):
            conn.execute("SELECT 1")

    def test_connection_closed_on_exception(self, kobo_device: Path) -> None:
        """An error inside the block still closes the connection."""
        with pytest.raises(RuntimeError), open_device_db(kobo_device) as conn:
            raise RuntimeError("boom")
        with pytest.raises(sqlite3.ProgrammingError):
            conn.execute("SELECT 1")

    def test_empty_root_rejected(self) -> None:
        """An empty device path is a path error, not an open error."""
        with pytest.raises(InvalidDevicePathError), open_device_db(""):
            pass

    @pytest.mark.parametrize("root", [Path(""), ".", "  "])
    def test_empty_root_never_means_cwd(
        self, kobo_device: Path, monkeypatch: pytest.MonkeyPatch, root: str | Path
    ) -> None:
        """An empty root is rejected even when the working directory is a Kobo."""
        monkeypatch.chdir(kobo_device)
        with pytest.raises(InvalidDevicePathError, match="empty"), open_device_db(root):
            pass

    def test_missing_root_rejected(self, tmp_path: Path) -> None:
        """A device root that does not exist is a path error."""
        with pytest.raises(InvalidDevicePathError), open_device_db(tmp_path / "nope"):
            pass

    def test_file_root_rejected(self, tmp_path: Path) -> None:
        """A device root that is a regular file is a path error."""
        target = tmp_path / "file.txt"
        target.write_text("x")
        with pytest.raises(InvalidDevicePathError), open_device_db(target):
            pass

    def test_missing_database(self, tmp_path: Path) -> None:
        """A directory without .kobo/KoboReader.sqlite cannot be opened."""
        with pytest.raises(DatabaseOpenError, match="not found"), open_device_db(tmp_path):
            pass

    def test_corrupt_database(self, corrupt_device: Path) -> None:
        """A file that is not SQLite is reported on open."""
        with pytest.raises(DatabaseOpenError), open_device_db(corrupt_device):
            pass

    def test_does_not_create_database(self, tmp_path: Path) -> None:
        """A failed open leaves no database file behind."""
        with pytest.raises(DatabaseOpenError), open_device_db(tmp_path):
            pass
        assert not (tmp_path / ".kobo").exists()
