# ABOUTME: Unit tests for resolving the Kobo database path from a device root.
# ABOUTME: Validates the fixed .kobo/KoboReader.sqlite layout and that no I/O happens.

from pathlib import Path

from koboshelf.device.paths import resolve_db_path


class TestResolveDbPath:
    """Tests for resolve_db_path."""

    def test_resolves_mount_point(self) -> None:
        """A string mount point maps to .kobo/KoboReader.sqlite beneath it."""
        assert resolve_db_path("/mnt/kobo") == Path("/mnt/kobo/.kobo/KoboReader.sqlite")

    def test_resolves_exact_string(self) -> None:
        """The rendered path is exactly the documented location."""
        assert resolve_db_path("/mnt/kobo").as_posix() == "/mnt/kobo/.kobo/KoboReader.sqlite"

    def test_accepts_path_objects(self) -> None:
        """Path and str inputs give the same result."""
        assert resolve_db_path(Path("/Volumes/KOBOeReader")) == resolve_db_path(
            "/Volumes/KOBOeReader"
        )

    def test_nonexistent_root_is_not_an_error(self, tmp_path: Path) -> None:
        """Resolution does not touch the filesystem."""
        missing = tmp_path / "not-mounted"
        assert resolve_db_path(missing) == missing / ".kobo" / "KoboReader.sqlite"
        assert not missing.exists()
