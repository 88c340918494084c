"""
Shared pytest fixtures and configuration for infinite_pager tests.

This module provides fake page sources and recorded callbacks used across
unit and integration tests.
"""

import asyncio
from unittest.mock import MagicMock

import pytest

from infinite_pager import PagedData, PageResult


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked callbacks")
    config.addinivalue_line("markers", "integration: Multi-page flows through a FeedStore")


class FakeOffsetSource:
    """
    Serves slices of a fixed list of items like an offset/limit API.

    Records every (offset, limit) it was asked for.
    """

    def __init__(self, total: int) -> None:
        self.rows = [f"item-{i}" for i in range(total)]
        self.calls: list[tuple[int, int]] = []

    async def fetch(self, offset: int, limit: int) -> PageResult[str]:
        self.calls.append((offset, limit))
        await asyncio.sleep(0)
        return PageResult(items=self.rows[offset : offset + limit], total=len(self.rows))


class FakeCursorSource:
    """
    Serves pages keyed by opaque string tokens like a cursor API.

    The first page is served for cursor None; the last page has no next cursor.
    """

    def __init__(self, pages: list[list[str]]) -> None:
        self.pages = pages
        self.calls: list[tuple[str | None, int]] = []

    def _token(self, index: int) -> str:
        return f"tok-{index}"

    async def fetch(self, cursor: str | None, limit: int) -> PageResult[str]:
        self.calls.append((cursor, limit))
        await asyncio.sleep(0)
        index = 0 if cursor is None else int(cursor.split("-")[1])
        next_index = index + 1
        token = self._token(next_index) if next_index < len(self.pages) else None
        return PageResult(items=self.pages[index], next_cursor=token)


@pytest.fixture
def update_state():
    """A recording update_state callback."""
    return MagicMock(name="update_state")


@pytest.fixture
def on_error():
    """A recording on_error callback."""
    return MagicMock(name="on_error")


@pytest.fixture
def empty_data():
    """Nothing loaded yet, 25 items available."""
    return PagedData.empty(total=25)


@pytest.fixture
def offset_source():
    return FakeOffsetSource(total=25)


@pytest.fixture
def cursor_source():
    return FakeCursorSource([["a", "b"], ["c", "d"], ["e"]])
