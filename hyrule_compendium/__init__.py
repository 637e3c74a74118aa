from .coordinator import Screen, ViewCoordinator
from .data import CATEGORY_OPTIONS, Entry, collect_categories, display_name
from .errors import ApplicationError, CompendiumError, NotFound, TransportError
from .live import CacheCell, CompendiumClient
from .navigation import (
    Categories,
    CategoryList,
    NavigationStack,
    SearchResults,
    SingleItem,
    ViewState,
    transition,
)
from .search import (
    SearchOutcome,
    find_exact_match,
    find_partial_matches,
    find_related,
    run_search,
    search_entries,
    sort_entries,
)

__all__ = [
    "ApplicationError",
    "CATEGORY_OPTIONS",
    "CacheCell",
    "Categories",
    "CategoryList",
    "CompendiumClient",
    "CompendiumError",
    "Entry",
    "NavigationStack",
    "NotFound",
    "Screen",
    "SearchOutcome",
    "SearchResults",
    "SingleItem",
    "TransportError",
    "ViewCoordinator",
    "ViewState",
    "collect_categories",
    "display_name",
    "find_exact_match",
    "find_partial_matches",
    "find_related",
    "run_search",
    "search_entries",
    "sort_entries",
    "transition",
]
