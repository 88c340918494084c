"""
Pagination data shapes and page-key arithmetic for infinite_pager.

This module provides the structures a fetch function returns (PageResult) and the
accumulated data a feed grows over time (PagedData), together with plain accessor
functions that can be handed to the advancer as callbacks.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


@dataclass
class PageResult(Generic[T]):
    """
    Represents a single fetched page.

    Attributes:
        items: Items of this page
        total: Total number of items available on the server (offset/page APIs),
            None if the API does not report it
        next_cursor: Token for the next page (cursor APIs), None if there are no more pages
    """

    items: list[T] = field(default_factory=list)
    total: int | None = None
    next_cursor: Any | None = None

    @property
    def count(self) -> int:
        """Number of items in this page."""
        return len(self.items)

    @property
    def has_more(self) -> bool:
        """Returns True if there are more pages available."""
        return self.next_cursor is not None


class PagedData(BaseModel, Generic[T]):
    """
    Items accumulated across pages.

    Fields cannot be reassigned, and merging a page builds a new items list
    in a new instance. The items list itself is an ordinary list: callers
    must not mutate it in place, since earlier snapshots may share it.
    """

    model_config = ConfigDict(frozen=True)

    items: list[T] = Field(default_factory=list)
    total: int = 0
    next_cursor: Any | None = None
    # Only meaningful for cursor pagination; offset/page modes compare count to total.
    has_more: bool = True

    @classmethod
    def empty(cls, total: int = 0) -> "PagedData[T]":
        """Initial data for a feed that has not loaded anything yet."""
        return cls(items=[], total=total, next_cursor=None, has_more=True)

    @property
    def count(self) -> int:
        return len(self.items)

    def merged_with(self, incoming: "PageResult[T] | PagedData[T]") -> "PagedData[T]":
        """
        Returns a new PagedData with the incoming page appended.

        The total is taken from the incoming page when it reports one; the
        cursor and has_more always follow the most recent page.
        """
        total = incoming.total if incoming.total is not None else self.total
        return self.model_copy(
            update={
                "items": [*self.items, *incoming.items],
                "total": total,
                "next_cursor": incoming.next_cursor,
                "has_more": incoming.has_more,
            }
        )


# --- Accessors (usable directly as advancer callbacks) ---


def merge_pages(current: PagedData[T], incoming: "PageResult[T] | PagedData[T]") -> PagedData[T]:
    return current.merged_with(incoming)


def current_count(data: PagedData[Any]) -> int:
    return data.count


def total_count(data: PagedData[Any]) -> int:
    return data.total


def next_cursor(data: PagedData[Any]) -> Any | None:
    return data.next_cursor


def has_more_data(data: PagedData[Any]) -> bool:
    return data.has_more


# --- Page keys ---


def compute_offset(count: int) -> int:
    """The offset of the next page is the number of items already loaded."""
    return count


def compute_page(count: int, limit: int) -> int:
    """
    1-indexed page number of the next page: ceil(count / limit) + 1.

    count=20, limit=10 gives page 3; count=25, limit=10 gives page 4, so a
    partially filled last page counts as a whole one. Check your API's page
    indexing against this before relying on it.
    """
    return math.ceil(count / limit) + 1
