"""
Desktop Entry Parser - Decode one .desktop file into an ApplicationEntry.

Reads the [Desktop Entry] group of a freedesktop application descriptor:
  - Name (localized, with fallback to the plain key, then "Unknown")
  - Exec (required, entries without it are dropped)
  - Icon (optional)
  - Categories (semicolon-delimited, empty segments discarded)
  - NoDisplay (entries with NoDisplay=true are dropped)

Parsing is a pure transform over text that the caller has already read.
"""

import configparser
import os
from dataclasses import dataclass, field
from typing import Optional

DESKTOP_ENTRY_GROUP = "Desktop Entry"
UNKNOWN_NAME = "Unknown"


class DescriptorError(ValueError):
    """Raised when a descriptor cannot be decoded at all."""


@dataclass(frozen=True)
class ApplicationEntry:
    """A single launchable application from the catalog."""
    name: str
    exec: str
    icon: Optional[str] = None
    categories: tuple[str, ...] = ()
    path: str = field(default="", compare=False)


def current_locale() -> Optional[str]:
    """
    Get the message locale of the running process.

    Follows the usual precedence: LC_ALL, then LC_MESSAGES, then LANG.

    Returns:
        Locale string like "de_DE.UTF-8", or None for C/POSIX/unset
    """
    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var, "").strip()
        if value:
            if value in ("C", "POSIX") or value.startswith("C."):
                return None
            return value
    return None


def locale_variants(locale: Optional[str]) -> list[str]:
    """
    Expand a locale into the lookup keys for localized values.

    "sr_RS.UTF-8@latin" -> ["sr_RS@latin", "sr_RS", "sr@latin", "sr"]

    Encoding is never part of a localized key, so it is dropped first.
    """
    if not locale:
        return []

    base, _, modifier = locale.partition("@")
    base = base.split(".", 1)[0]
    lang, _, country = base.partition("_")
    if not lang:
        return []

    variants = []
    if country and modifier:
        variants.append(f"{lang}_{country}@{modifier}")
    if country:
        variants.append(f"{lang}_{country}")
    if modifier:
        variants.append(f"{lang}@{modifier}")
    variants.append(lang)
    return variants


def _new_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(
        interpolation=None,
        strict=False,
        delimiters=("=",),
        comment_prefixes=("#",),
        # A literal [DEFAULT] group must not leak keys into other groups
        default_section="\x00",
    )
    # Keys are case-sensitive in desktop files (Name vs name)
    parser.optionxform = str
    return parser


def _clean_lines(content: str) -> str:
    """
    Normalize desktop file text for configparser.

    Every line is stripped, so indentation never turns a line into a
    continuation of the previous value. Once the first group header has
    been seen, stray lines without "=" are dropped instead of failing the
    whole file. Content before any group header is left as is.
    """
    lines = []
    in_group = False
    for raw in content.splitlines():
        line = raw.strip()
        if line.startswith("[") and line.endswith("]"):
            in_group = True
        elif in_group and line and not line.startswith("#") and "=" not in line:
            continue
        lines.append(line)
    return "\n".join(lines)


def _localized_name(entry, locale: Optional[str]) -> str:
    for variant in locale_variants(locale):
        value = entry.get(f"Name[{variant}]", "").strip()
        if value:
            return value

    value = entry.get("Name", "").strip()
    return value or UNKNOWN_NAME


def parse_desktop_entry(path, content: str, locale: Optional[str] = None) -> Optional[ApplicationEntry]:
    """
    Parse desktop file contents into an ApplicationEntry.

    Args:
        path: Path of the descriptor (kept on the entry for reference)
        content: Full text of the descriptor
        locale: Locale used for Name[xx] lookup; None means unlocalized

    Returns:
        ApplicationEntry, or None if the entry is filtered out
        (NoDisplay=true, or no Exec key)

    Raises:
        DescriptorError: If the content does not start with a group header
    """
    parser = _new_parser()
    try:
        parser.read_string(_clean_lines(content), source=str(path))
    except configparser.Error as e:
        raise DescriptorError(f"Malformed desktop entry {path}: {e}") from e

    if not parser.has_section(DESKTOP_ENTRY_GROUP):
        return None

    entry = parser[DESKTOP_ENTRY_GROUP]

    exec_str = entry.get("Exec", "").strip()
    if not exec_str:
        return None

    if entry.get("NoDisplay", "").strip().lower() == "true":
        return None

    icon = entry.get("Icon", "").strip() or None
    categories = tuple(
        c for c in entry.get("Categories", "").split(";") if c
    )

    return ApplicationEntry(
        name=_localized_name(entry, locale),
        exec=exec_str,
        icon=icon,
        categories=categories,
        path=str(path),
    )
