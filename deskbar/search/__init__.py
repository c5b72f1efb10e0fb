"""
Search package - Query ranking and menu routing.

The ranker orders catalog entries by how well their names match a query;
the router decides between the category browse view and search results.
"""

from .ranker import rank, search
from .router import MenuRouter, MenuView

__all__ = ["rank", "search", "MenuRouter", "MenuView"]
