"""
Search Ranker - Substring search over the catalog, ordered by relevance.

An app matches when its name contains the query (case-insensitive).
Ranking:
  - name starts with the query: rank 0
  - otherwise: index of the first occurrence in the lowercased name

Sorting is stable, so apps with equal rank keep catalog order.
"""

from deskbar.apps.desktop_entry import ApplicationEntry

DEFAULT_MAX_RESULTS = 20


def normalize_query(query: str) -> str:
    """Strip and lowercase a query; blank queries become ""."""
    return (query or "").strip().lower()


def rank(catalog, query: str) -> list[ApplicationEntry]:
    """
    Return every matching app, best match first.

    Args:
        catalog: Sequence of ApplicationEntry in catalog order
        query: Free-text query

    Returns:
        Ranked list of matches. A blank query is not a search and
        returns [].

    Note:
        The query is stripped before matching, so "fox " matches
        "Firefox". Inner whitespace is kept ("fire fox" does not).
    """
    q = normalize_query(query)
    if not q:
        return []

    scored = []
    for app in catalog:
        pos = app.name.lower().find(q)
        if pos >= 0:
            # A prefix hit is already position 0
            scored.append((pos, app))

    scored.sort(key=lambda item: item[0])
    return [app for _pos, app in scored]


def search(catalog, query: str, limit: int = DEFAULT_MAX_RESULTS) -> list[ApplicationEntry]:
    """
    Rank matches and keep the top `limit`.

    Raises:
        ValueError: If limit is not a positive integer
    """
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit!r}")

    return rank(catalog, query)[:limit]
