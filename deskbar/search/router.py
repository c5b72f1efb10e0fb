"""
Menu Router - Turns the search entry text into what the menu shows.

A blank query means no search is active: the router returns the browse
view (category sections from the current snapshot) without touching the
ranker. Anything else is ranked against the catalog. A search with no
matches is flagged so the UI can show "nothing found".
"""

from dataclasses import dataclass

from deskbar.apps.categories import menu_sections
from deskbar.apps.desktop_entry import ApplicationEntry
from deskbar.search import ranker

DEFAULT_CATEGORY_LIMIT = 8

BROWSE = "browse"
SEARCH = "search"


@dataclass(frozen=True)
class MenuView:
    """Everything the presentation layer needs to render the menu."""
    mode: str  # browse, search
    query: str = ""
    sections: tuple[tuple[str, tuple[ApplicationEntry, ...]], ...] = ()
    results: tuple[ApplicationEntry, ...] = ()

    @property
    def is_empty_search(self) -> bool:
        return self.mode == SEARCH and not self.results


class MenuRouter:
    """Routes queries to the browse view or the ranked search."""

    def __init__(self, snapshot_source, category_limit: int = DEFAULT_CATEGORY_LIMIT,
                 max_results: int = ranker.DEFAULT_MAX_RESULTS):
        """
        Args:
            snapshot_source: Object with a `snapshot` attribute holding
                             `catalog` and `categories` (e.g. CatalogService)
            category_limit: Max entries per browse section
            max_results: Max search results
        """
        self.snapshot_source = snapshot_source
        self.category_limit = category_limit
        self.max_results = max_results

    @classmethod
    def from_settings(cls, snapshot_source, settings: dict) -> "MenuRouter":
        """Create a router with caps taken from load_settings() output."""
        return cls(
            snapshot_source,
            category_limit=settings["menu"]["category_limit"],
            max_results=settings["search"]["max_results"],
        )

    def route(self, query: str) -> MenuView:
        """
        Build the view for the current query.

        Args:
            query: Search entry text

        Returns:
            MenuView in browse mode for a blank query, search mode otherwise
        """
        # Read once so the whole view comes from a single snapshot
        snapshot = self.snapshot_source.snapshot

        if not query or not query.strip():
            sections = menu_sections(snapshot.categories, self.category_limit)
            return MenuView(mode=BROWSE, sections=tuple(sections))

        results = ranker.search(snapshot.catalog, query, self.max_results)
        return MenuView(
            mode=SEARCH,
            query=query.strip(),
            results=tuple(results),
        )
