# Deskbar Apps Package
"""
Application discovery and grouping.

Turns desktop files on disk into an immutable catalog and groups the
catalog into menu categories.
"""

from .desktop_entry import ApplicationEntry, DescriptorError, parse_desktop_entry
from .scanner import Catalog, application_dirs, scan
from .categories import CategoryIndex, categorize, get_policy, menu_sections

__all__ = [
    "ApplicationEntry",
    "DescriptorError",
    "parse_desktop_entry",
    "Catalog",
    "application_dirs",
    "scan",
    "CategoryIndex",
    "categorize",
    "get_policy",
    "menu_sections",
]
