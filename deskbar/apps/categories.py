"""
Categorizer - Group catalog entries into menu categories.

Two policies are available, selected by name:
  - "single": each app goes into the first of its categories found in
    CATEGORY_TABLE (translated to a display label), else "Other"
  - "multi": each app goes into every raw category it declares,
    apps without categories go into "Other"

Buckets keep catalog order. Every app lands in at least one bucket.
"""

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Mapping, Union

from deskbar.apps.desktop_entry import ApplicationEntry

OTHER = "Other"

# Raw freedesktop category -> display label, scanned in order
CATEGORY_TABLE = [
    ("Utility", "Utilities"),
    ("Development", "Development"),
    ("Graphics", "Graphics"),
    ("Network", "Internet"),
    ("Office", "Office"),
    ("AudioVideo", "Multimedia"),
    ("System", "System"),
    ("Game", "Games"),
    ("Settings", "Preferences"),
]

# Order in which sections appear in the browse menu
DISPLAY_ORDER = [label for _, label in CATEGORY_TABLE]

CategoryIndex = Mapping[str, tuple[ApplicationEntry, ...]]


class CategoryPolicy(ABC):
    """Base class for bucket assignment strategies."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Policy identifier used in settings."""
        ...

    @abstractmethod
    def buckets_for(self, app: ApplicationEntry) -> list[str]:
        """Return the bucket labels an app belongs to (never empty)."""
        ...


class SingleBucketPolicy(CategoryPolicy):
    """First declared category found in the table wins."""

    name = "single"

    def __init__(self, table=None):
        self.table = list(table if table is not None else CATEGORY_TABLE)

    def buckets_for(self, app: ApplicationEntry) -> list[str]:
        for raw in app.categories:
            for tag, label in self.table:
                if raw == tag:
                    return [label]
        return [OTHER]


class MultiBucketPolicy(CategoryPolicy):
    """One bucket per raw category tag, no translation."""

    name = "multi"

    def buckets_for(self, app: ApplicationEntry) -> list[str]:
        if not app.categories:
            return [OTHER]
        # dict.fromkeys drops repeated tags but keeps declaration order
        return list(dict.fromkeys(app.categories))


POLICIES = {
    SingleBucketPolicy.name: SingleBucketPolicy,
    MultiBucketPolicy.name: MultiBucketPolicy,
}


def get_policy(name: str) -> CategoryPolicy:
    """
    Look up a categorization policy by name.

    Raises:
        ValueError: If no policy has that name
    """
    try:
        return POLICIES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown category policy '{name}' (expected one of: {', '.join(POLICIES)})"
        ) from None


def categorize(catalog, policy: Union[str, CategoryPolicy] = "single") -> CategoryIndex:
    """
    Build the category index for a catalog.

    Args:
        catalog: Sequence of ApplicationEntry in catalog order
        policy: Policy name ("single" or "multi") or a CategoryPolicy

    Returns:
        Read-only mapping of bucket label -> tuple of entries in
        catalog order
    """
    if isinstance(policy, str):
        policy = get_policy(policy)

    buckets: dict[str, list[ApplicationEntry]] = {}
    for app in catalog:
        for label in policy.buckets_for(app):
            buckets.setdefault(label, []).append(app)

    return MappingProxyType({label: tuple(apps) for label, apps in buckets.items()})


def section_order(labels) -> list[str]:
    """
    Sort bucket labels for display.

    Known display labels come first in DISPLAY_ORDER, then any other
    labels alphabetically, with "Other" always last.
    """
    labels = set(labels)
    known = [label for label in DISPLAY_ORDER if label in labels]
    extra = sorted(
        (label for label in labels if label not in DISPLAY_ORDER and label != OTHER),
        key=str.lower,
    )
    tail = [OTHER] if OTHER in labels else []
    return known + extra + tail


def menu_sections(index: CategoryIndex, limit: int) -> list[tuple[str, tuple[ApplicationEntry, ...]]]:
    """
    Build browse-menu sections from a category index.

    Args:
        index: Category index from categorize()
        limit: Max entries shown per section

    Returns:
        List of (label, entries) in display order, empty buckets omitted
    """
    return [
        (label, index[label][:limit])
        for label in section_order(index)
        if index[label]
    ]
