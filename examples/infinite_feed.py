"""
Infinite feed example

Simulates a product list that loads more rows as the user scrolls,
backed by a fake offset/limit API.
"""

import asyncio
import logging

from infinite_pager import (
    FeedState,
    FeedStore,
    PagedData,
    PageResult,
    PagerOptions,
    PaginationAdvancer,
    current_count,
    merge_pages,
    total_count,
)

PRODUCTS = [f"Product #{i}" for i in range(1, 24)]


async def get_products(skip: int, limit: int) -> PageResult[str]:
    """Fake API call"""
    await asyncio.sleep(0.05)
    return PageResult(items=PRODUCTS[skip : skip + limit], total=len(PRODUCTS))


class ProductFeed:
    """View model a list widget binds to"""

    def __init__(self) -> None:
        self.store = FeedStore(PagedData.empty(total=len(PRODUCTS)))
        self.advancer = PaginationAdvancer(PagerOptions(limit=10, on_error=self.report_error))

    def report_error(self, error: Exception) -> None:
        print(f"load failed: {error}")

    async def load_more(self) -> None:
        state = self.store.state
        await self.advancer.advance_by_offset(
            fetch=get_products,
            merge=merge_pages,
            get_current_count=current_count,
            get_total_count=total_count,
            update_state=self.store.update_state,
            current_data=state.data,
            is_currently_loading=state.is_loading_more,
        )

    async def refresh(self) -> None:
        self.store.reset()
        await self.load_more()


def render(state: FeedState) -> None:
    footer = "loading..." if state.is_loading_more else f"{len(state.items)} shown"
    print(f"[{footer}] last: {state.items[-1] if state.items else '-'}")


async def main() -> None:
    logging.basicConfig(level=logging.INFO)

    feed = ProductFeed()
    feed.store.subscribe(render)

    # Each "scroll to bottom" fires a few events in quick succession
    for _ in range(4):
        await asyncio.gather(feed.load_more(), feed.load_more())

    await feed.refresh()


if __name__ == "__main__":
    asyncio.run(main())
