"""
Background fuzzy search.
"""
from .fuzzy_index import FuzzySearchIndex, SearchResult
from .search_worker import SearchCoordinator

__all__ = ["FuzzySearchIndex", "SearchResult", "SearchCoordinator"]
