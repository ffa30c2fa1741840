# ABOUTME: Maps a Kobo device mount point to the location of its library database.
# ABOUTME: Pure path arithmetic, no filesystem access.

import os
from pathlib import Path

KOBO_DIR = ".kobo"
KOBO_DB_NAME = "KoboReader.sqlite"


def default_mount_roots() -> list[Path]:
    """Directories under which removable volumes are usually mounted.

    macOS mounts under /Volumes; Linux desktops use /media/$USER or
    /run/media/$USER, with plain /media as a fallback.
    """
    roots = [Path("/Volumes")]
    user = os.environ.get("USER", "")
    if user:
        roots.extend([Path("/media") / user, Path("/run/media") / user])
    roots.append(Path("/media"))
    return roots


def resolve_db_path(device_root: str | Path) -> Path:
    """Return the path of KoboReader.sqlite under a device root.

    >>> resolve_db_path("/mnt/kobo").as_posix()
    '/mnt/kobo/.kobo/KoboReader.sqlite'
    """
    return Path(device_root) / KOBO_DIR / KOBO_DB_NAME
