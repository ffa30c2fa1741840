# ABOUTME: End-to-end tests for the Koboshelf CLI.
# ABOUTME: Runs each command via Click's CliRunner against a fake Kobo device.

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from koboshelf.cli import cli
from tests.fixtures.kobo_db import HOBBIT, build_device


def _run(*args: str, env: dict[str, str] | None = None):
    runner = CliRunner()
    return runner.invoke(cli, list(args), env=env)


class TestBooksCommand:
    """E2e tests for `koboshelf books`."""

    def test_lists_books(self, kobo_device: Path) -> None:
        """Books are shown with their status."""
        result = _run("books", "--device", str(kobo_device))
        assert result.exit_code == 0
        assert "Dune" in result.output
        assert "Finished" in result.output
        assert "4 book(s)" in result.output

    def test_json_output(self, kobo_device: Path) -> None:
        """--json emits the book list."""
        result = _run("books", "--device", str(kobo_device), "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [b["title"] for b in data][0] == "Dune"
        assert data[-1]["readStatus"] == 0

    def test_limit(self, kobo_device: Path) -> None:
        """--limit truncates the displayed rows."""
        result = _run("books", "--device", str(kobo_device), "--json", "--limit", "2")
        assert len(json.loads(result.output)) == 2

    def test_device_from_environment(self, kobo_device: Path) -> None:
        """KOBOSHELF_DEVICE supplies the device root."""
        result = _run("books", "--json", env={"KOBOSHELF_DEVICE": str(kobo_device)})
        assert result.exit_code == 0
        assert len(json.loads(result.output)) == 4

    def test_empty_library(self, empty_device: Path) -> None:
        """An empty device prints a notice."""
        result = _run("books", "--device", str(empty_device))
        assert result.exit_code == 0
        assert "No books" in result.output

    def test_missing_device(self, tmp_path: Path) -> None:
        """An unmounted device is reported with exit code 1."""
        result = _run("books", "--device", str(tmp_path / "not-mounted"))
        assert result.exit_code == 1
        assert "Error" in result.output


class TestOtherListings:
    """E2e tests for events, bookmarks, and vocab."""

    def test_events(self, kobo_device: Path) -> None:
        """Events show decoded event names."""
        result = _run("events", "--device", str(kobo_device))
        assert result.exit_code == 0
        assert "Progress 50" in result.output

    def test_bookmarks(self, kobo_device: Path) -> None:
        """Bookmarks print their text and notes."""
        result = _run("bookmarks", "--device", str(kobo_device))
        assert result.exit_code == 0
        assert "Fear is the mind-killer." in result.output
        assert "Great line" in result.output
        assert "Hidden highlight" not in result.output

    def test_bookmarks_by_volume(self, kobo_device: Path) -> None:
        """--volume keeps one book's bookmarks."""
        result = _run("bookmarks", "--device", str(kobo_device), "--volume", HOBBIT, "--json")
        assert [b["bookmarkId"] for b in json.loads(result.output)] == ["bm-5"]

    def test_vocab(self, kobo_device: Path) -> None:
        """Words are listed."""
        result = _run("vocab", "--device", str(kobo_device))
        assert result.exit_code == 0
        assert "melange" in result.output

    def test_vocab_missing_table(self, device_without_wordlist: Path) -> None:
        """A schema mismatch is an error, not an empty list."""
        result = _run("vocab", "--device", str(device_without_wordlist))
        assert result.exit_code == 1
        assert "Error" in result.output


class TestSnapshotCommand:
    """E2e tests for `koboshelf snapshot`."""

    def test_summary(self, kobo_device: Path) -> None:
        """The summary lists every collection."""
        result = _run("snapshot", "--device", str(kobo_device))
        assert result.exit_code == 0
        for name in ("Books", "Events", "Bookmarks", "Vocabulary"):
            assert name in result.output

    def test_json(self, kobo_device: Path) -> None:
        """--json dumps the full snapshot."""
        result = _run("snapshot", "--device", str(kobo_device), "--json")
        data = json.loads(result.output)
        assert len(data["books"]) == 4
        assert len(data["vocabulary"]) == 3
        assert data["events"][0]["extraData"] == "AAEC"
        assert "lastSync" in data

    def test_failed_read(self, device_without_wordlist: Path) -> None:
        """A failed read aborts the snapshot."""
        result = _run("snapshot", "--device", str(device_without_wordlist))
        assert result.exit_code == 1
        assert "vocabulary" in result.output


class TestFindCommand:
    """E2e tests for `koboshelf find`."""

    def test_find_by_isbn(self, kobo_device: Path) -> None:
        """Book detail is shown for a matching ISBN."""
        result = _run("find", "--device", str(kobo_device), "--isbn", "9780547928227")
        assert result.exit_code == 0
        assert "The Hobbit" in result.output
        assert "10h" in result.output

    def test_find_by_title_json(self, kobo_device: Path) -> None:
        """--json prints the matched book."""
        result = _run("find", "--device", str(kobo_device), "--title", "Harry", "--json")
        assert json.loads(result.output)["contentId"] == "ISBN-A"

    def test_not_found(self, kobo_device: Path) -> None:
        """No match exits with 1."""
        result = _run("find", "--device", str(kobo_device), "--title", "harry")
        assert result.exit_code == 1
        assert "No matching book" in result.output

    def test_requires_key(self, kobo_device: Path) -> None:
        """Neither --isbn nor --title is a usage error."""
        result = _run("find", "--device", str(kobo_device))
        assert result.exit_code == 2


@pytest.fixture
def bracketed_device(tmp_path: Path) -> Path:
    """A Kobo whose text columns contain Rich markup look-alikes."""
    return build_device(
        tmp_path / "KOBOeReader",
        books=[{
            "ContentID": "notes[1]", "ContentType": 6, "MimeType": "application/epub+zip",
            "Title": "Notes [/draft]", "Attribution": "[red]Anon", "ISBN": "[b]42",
            "DateLastRead": "2026-10-01T00:00:00Z",
        }],
        events=[{"Id": 1, "ContentID": "notes[/i]", "Type": 3, "Count": 1,
                 "LastOccurrence": "2026-10-01T00:00:00Z"}],
        bookmarks=[{"BookmarkID": "b1", "VolumeID": "notes[1]", "ContentID": "notes[1]",
                    "Text": "[bold]quoted", "DateCreated": "2026-10-01T00:00:00Z",
                    "Hidden": "false", "Type": "[/x]"}],
        words=[{"Text": "[/word]", "VolumeId": "notes[1]",
                "DateCreated": "2026-10-01T00:00:00Z"}],
    )


class TestDeviceTextIsLiteral:
    """Text from the device is printed as-is, never parsed as Rich markup."""

    def test_books(self, bracketed_device: Path) -> None:
        """Bracketed titles and authors neither crash nor lose text."""
        result = _run("books", "--device", str(bracketed_device))
        assert result.exit_code == 0, result.output
        assert "Notes [/draft]" in result.output
        assert "[red]Anon" in result.output

    def test_find(self, bracketed_device: Path) -> None:
        """The detail view keeps bracketed values intact."""
        result = _run("find", "--device", str(bracketed_device), "--title", "Notes")
        assert result.exit_code == 0, result.output
        assert "Notes [/draft]" in result.output
        assert "[b]42" in result.output

    def test_events(self, bracketed_device: Path) -> None:
        """Content IDs with brackets print literally."""
        result = _run("events", "--device", str(bracketed_device))
        assert result.exit_code == 0, result.output
        assert "notes[/i]" in result.output

    def test_bookmarks(self, bracketed_device: Path) -> None:
        """Bookmark types and text print literally."""
        result = _run("bookmarks", "--device", str(bracketed_device))
        assert result.exit_code == 0, result.output
        assert "[/x]" in result.output
        assert "[bold]quoted" in result.output

    def test_vocab(self, bracketed_device: Path) -> None:
        """Words print literally."""
        result = _run("vocab", "--device", str(bracketed_device))
        assert result.exit_code == 0, result.output
        assert "[/word]" in result.output


class TestDeviceOption:
    """E2e tests for how --device is resolved."""

    def test_empty_device_rejected(
        self, kobo_device: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """--device "" does not fall through to the working directory."""
        monkeypatch.chdir(kobo_device)
        result = _run("books", "--device", "")
        assert result.exit_code == 1
        assert "empty" in result.output

    def test_falls_back_to_detected_device(
        self, kobo_device: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without --device, the first detected Kobo is used."""
        monkeypatch.setattr("koboshelf.cli.options.detect_devices", lambda: [kobo_device])
        result = _run("books", "--json", env={"KOBOSHELF_DEVICE": None})
        assert result.exit_code == 0, result.output
        assert len(json.loads(result.output)) == 4

    def test_no_device_detected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """With nothing mounted and no --device, the command is a usage error."""
        monkeypatch.setattr("koboshelf.cli.options.detect_devices", lambda: [])
        result = _run("snapshot", env={"KOBOSHELF_DEVICE": None})
        assert result.exit_code == 2
        assert "No Kobo device found" in result.output


class TestDevicesCommand:
    """E2e tests for `koboshelf devices`."""

    def test_lists_detected_devices(self, tmp_path: Path) -> None:
        """Kobos under the search root are listed with their book counts."""
        volumes = tmp_path / "Volumes"
        build_device(volumes / "KOBOeReader")
        (volumes / "USBSTICK").mkdir()

        result = _run("devices", "--search", str(volumes), "--json")
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [d["name"] for d in data] == ["KOBOeReader"]
        assert data[0]["bookCount"] == 4
        assert data[0]["totalSpace"] > 0

    def test_table_output(self, tmp_path: Path) -> None:
        """The default view is a table with a device count."""
        volumes = tmp_path / "Volumes"
        build_device(volumes / "KOBOeReader")

        result = _run("devices", "--search", str(volumes))
        assert result.exit_code == 0, result.output
        assert "KOBOeReader" in result.output
        assert "1 device(s)" in result.output

    def test_none_found(self, tmp_path: Path) -> None:
        """An empty search root reports no devices."""
        result = _run("devices", "--search", str(tmp_path))
        assert result.exit_code == 0
        assert "No Kobo devices found" in result.output
