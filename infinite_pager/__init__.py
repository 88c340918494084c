from .advancer import PaginationAdvancer, advance_by_cursor, advance_by_offset, advance_by_page
from .config import PagerOptions
from .exceptions import FetchFailure, PagerConfigError, PagerError, PagerStateError
from .pagination import (
    PagedData,
    PageResult,
    compute_offset,
    compute_page,
    current_count,
    has_more_data,
    merge_pages,
    next_cursor,
    total_count,
)
from .state import FeedState, FeedStore

__all__ = [
    "PaginationAdvancer",
    "advance_by_offset",
    "advance_by_page",
    "advance_by_cursor",
    "PagerOptions",
    # Data shapes
    "PageResult",
    "PagedData",
    "FeedState",
    "FeedStore",
    # Accessors and page keys
    "merge_pages",
    "current_count",
    "total_count",
    "next_cursor",
    "has_more_data",
    "compute_offset",
    "compute_page",
    # Exceptions
    "PagerError",
    "FetchFailure",
    "PagerConfigError",
    "PagerStateError",
]
