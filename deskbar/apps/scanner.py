"""
Application Scanner - Build the catalog from XDG application directories.

Directories are scanned in a fixed order:
  1. /usr/share/applications
  2. /usr/local/share/applications
  3. $HOME/.local/share/applications (omitted when HOME is unset)

Every *.desktop file directly inside each directory is parsed. Anything
that cannot be read or decoded is skipped; a scan never fails.
"""

import os
from pathlib import Path
from typing import Iterable, Optional

from loguru import logger

from deskbar.apps.desktop_entry import (
    ApplicationEntry,
    DescriptorError,
    current_locale,
    parse_desktop_entry,
)

DESKTOP_SUFFIX = ".desktop"

SYSTEM_DIRS = [
    Path("/usr/share/applications"),
    Path("/usr/local/share/applications"),
]

Catalog = tuple[ApplicationEntry, ...]


def user_applications_dir() -> Optional[Path]:
    """
    Get the per-user applications directory.

    Returns:
        $HOME/.local/share/applications, or None if HOME is unset
    """
    home = os.environ.get("HOME", "")
    if not home:
        return None
    return Path(home) / ".local" / "share" / "applications"


def application_dirs() -> list[Path]:
    """Ordered list of directories the scanner reads."""
    dirs = list(SYSTEM_DIRS)
    user_dir = user_applications_dir()
    if user_dir is not None:
        dirs.append(user_dir)
    return dirs


def _desktop_files(directory: Path) -> list[Path]:
    """List .desktop files in a directory, sorted by filename."""
    try:
        with os.scandir(directory) as it:
            paths = [
                Path(item.path)
                for item in it
                if item.name.endswith(DESKTOP_SUFFIX) and item.is_file()
            ]
    except OSError as e:
        logger.debug(f"Skipping applications dir {directory}: {e}")
        return []

    return sorted(paths, key=lambda p: p.name)


def _load_entry(path: Path, locale: Optional[str]) -> Optional[ApplicationEntry]:
    """Read and parse one descriptor, returning None on any failure."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Skipping unreadable desktop file {path}: {e}")
        return None

    try:
        return parse_desktop_entry(path, content, locale)
    except DescriptorError as e:
        logger.debug(f"Skipping {path}: {e}")
        return None


def scan(directories: Optional[Iterable[Path]] = None, locale: Optional[str] = None) -> Catalog:
    """
    Scan application directories and build the catalog.

    Args:
        directories: Directories to read, in order. Defaults to
                     application_dirs().
        locale: Locale for Name[xx] lookup. Defaults to current_locale().

    Returns:
        Tuple of ApplicationEntry sorted case-insensitively by name.
        Duplicates from different directories are all kept.
    """
    if directories is None:
        directories = application_dirs()
    if locale is None:
        locale = current_locale()

    apps = []
    for directory in directories:
        for path in _desktop_files(Path(directory)):
            entry = _load_entry(path, locale)
            if entry is not None:
                apps.append(entry)

    # sorted() is stable: equal names keep directory scan order
    apps = sorted(apps, key=lambda app: app.name.lower())
    logger.debug(f"Scanned {len(apps)} applications")
    return tuple(apps)
