"""
Guarded "load the next page" routines.

Each advance checks the caller's loading flag and whether more data exists,
reports the start of a fetch, awaits the caller's fetch function, merges the
result into the accumulated data and reports completion. All state lives with
the caller and is changed only through the update_state callback:

    IDLE --(guard passes)--> FETCHING --(success or failure)--> IDLE
         \\--(guard fails)--> IDLE (no callbacks at all)

The three strategies differ only in how the key for the next page is derived:
the running item count (offset), a 1-indexed page number (page) or an opaque
token stored with the data (cursor).
"""

import inspect
from collections.abc import Callable
from typing import Any, Literal

from ._logging import logger, redact_cursor
from .config import DEFAULT_LIMIT, PagerOptions, validate_limit
from .exceptions import FetchFailure
from .pagination import compute_offset, compute_page

Mode = Literal["offset", "page", "cursor"]

# fetch(page_key, limit) may return the page directly or an awaitable of it
FetchFn = Callable[[Any, int], Any]
MergeFn = Callable[[Any, Any], Any]
UpdateStateFn = Callable[[bool, Any, "str | None"], Any]
ErrorFn = Callable[[Exception], Any]


def _skip(mode: Mode, reason: str) -> None:
    logger.debug("Advance skipped", extra={"mode": mode, "reason": reason})


async def _fetch_and_merge(
    *,
    mode: Mode,
    request_key: Any,
    log_key: Any,
    fetch: FetchFn,
    merge: MergeFn,
    update_state: UpdateStateFn,
    current_data: Any,
    limit: int,
    on_error: ErrorFn | None,
) -> None:
    update_state(True, None, None)

    logger.info(
        "Fetching next page",
        extra={"mode": mode, "request_key": log_key, "limit": limit},
    )

    try:
        incoming = fetch(request_key, limit)
        if inspect.isawaitable(incoming):
            incoming = await incoming
        merged = merge(current_data, incoming)
    except Exception as e:
        failure = FetchFailure.from_error(e)
        logger.warning(
            "Page fetch failed",
            extra={
                "mode": mode,
                "request_key": log_key,
                "limit": limit,
                "error": failure.description,
            },
        )
        update_state(False, None, failure.description)
        if on_error is not None:
            on_error(e)
        return

    logger.info("Page merged", extra={"mode": mode, "request_key": log_key, "limit": limit})
    update_state(False, merged, None)


async def advance_by_offset(
    *,
    fetch: FetchFn,
    merge: MergeFn,
    get_current_count: Callable[[Any], int],
    get_total_count: Callable[[Any], int],
    update_state: UpdateStateFn,
    current_data: Any,
    is_currently_loading: bool,
    limit: int = DEFAULT_LIMIT,
    on_error: ErrorFn | None = None,
) -> None:
    """
    Fetch the next page by offset and merge it into current_data.

    Does nothing (no fetch, no callbacks) while is_currently_loading is True
    or once get_current_count(current_data) >= get_total_count(current_data).
    Otherwise calls fetch(offset, limit) with offset = current item count and
    reports update_state(True, None, None) followed by either
    update_state(False, merged, None) or update_state(False, None, error_text).

    Args:
        fetch: Returns (or awaits to) the next page for (offset, limit)
        merge: Combines current_data with the fetched page into new data
        get_current_count: Number of items already in current_data
        get_total_count: Number of items available in total
        update_state: Receives (is_loading, data, error) reports
        current_data: The caller's accumulated data
        is_currently_loading: The caller's loading flag
        limit: Items per page
        on_error: Called with the original exception after a failed fetch

    Raises:
        PagerConfigError: If limit is not a positive integer
    """
    validate_limit(limit)

    if is_currently_loading:
        _skip("offset", "loading")
        return

    count = get_current_count(current_data)
    if count >= get_total_count(current_data):
        _skip("offset", "exhausted")
        return

    offset = compute_offset(count)
    await _fetch_and_merge(
        mode="offset",
        request_key=offset,
        log_key=offset,
        fetch=fetch,
        merge=merge,
        update_state=update_state,
        current_data=current_data,
        limit=limit,
        on_error=on_error,
    )


async def advance_by_page(
    *,
    fetch: FetchFn,
    merge: MergeFn,
    get_current_count: Callable[[Any], int],
    get_total_count: Callable[[Any], int],
    update_state: UpdateStateFn,
    current_data: Any,
    is_currently_loading: bool,
    limit: int = DEFAULT_LIMIT,
    on_error: ErrorFn | None = None,
) -> None:
    """
    Same as advance_by_offset, but fetch receives (page, limit) where
    page = ceil(current_count / limit) + 1 (1-indexed).
    """
    validate_limit(limit)

    if is_currently_loading:
        _skip("page", "loading")
        return

    count = get_current_count(current_data)
    if count >= get_total_count(current_data):
        _skip("page", "exhausted")
        return

    page = compute_page(count, limit)
    await _fetch_and_merge(
        mode="page",
        request_key=page,
        log_key=page,
        fetch=fetch,
        merge=merge,
        update_state=update_state,
        current_data=current_data,
        limit=limit,
        on_error=on_error,
    )


async def advance_by_cursor(
    *,
    fetch: FetchFn,
    merge: MergeFn,
    get_next_cursor: Callable[[Any], Any],
    has_more_data: Callable[[Any], bool],
    update_state: UpdateStateFn,
    current_data: Any,
    is_currently_loading: bool,
    limit: int = DEFAULT_LIMIT,
    on_error: ErrorFn | None = None,
) -> None:
    """
    Fetch the next page by cursor and merge it into current_data.

    Does nothing while is_currently_loading is True or when
    has_more_data(current_data) is False. fetch receives
    (get_next_cursor(current_data), limit); the cursor is None before the
    first page. merge must keep the new page's cursor in the merged data so
    the next guard check and cursor lookup see it.
    """
    validate_limit(limit)

    if is_currently_loading:
        _skip("cursor", "loading")
        return

    if not has_more_data(current_data):
        _skip("cursor", "exhausted")
        return

    cursor = get_next_cursor(current_data)
    await _fetch_and_merge(
        mode="cursor",
        request_key=cursor,
        log_key=redact_cursor(cursor),
        fetch=fetch,
        merge=merge,
        update_state=update_state,
        current_data=current_data,
        limit=limit,
        on_error=on_error,
    )


class PaginationAdvancer:
    """
    Composable holder for the advance routines.

    Hold one as a field of a view model, store or controller and delegate
    "load more" to it. limit and on_error default to the PagerOptions values.

    The advancer counts the fetches it is running (in_flight). With
    PagerOptions(guard_in_flight=True) it also skips new advances while one of
    its own fetches is running, so correctness no longer depends on the caller
    threading its loading flag through every call.
    """

    def __init__(self, options: PagerOptions | None = None) -> None:
        self.options = options or PagerOptions()
        self._active = 0

    @property
    def in_flight(self) -> bool:
        return self._active > 0

    async def advance_by_offset(
        self,
        *,
        fetch: FetchFn,
        merge: MergeFn,
        get_current_count: Callable[[Any], int],
        get_total_count: Callable[[Any], int],
        update_state: UpdateStateFn,
        current_data: Any,
        is_currently_loading: bool,
        limit: int | None = None,
        on_error: ErrorFn | None = None,
    ) -> None:
        await self._run(
            "offset",
            advance_by_offset,
            update_state,
            limit,
            on_error,
            fetch=fetch,
            merge=merge,
            get_current_count=get_current_count,
            get_total_count=get_total_count,
            current_data=current_data,
            is_currently_loading=is_currently_loading,
        )

    async def advance_by_page(
        self,
        *,
        fetch: FetchFn,
        merge: MergeFn,
        get_current_count: Callable[[Any], int],
        get_total_count: Callable[[Any], int],
        update_state: UpdateStateFn,
        current_data: Any,
        is_currently_loading: bool,
        limit: int | None = None,
        on_error: ErrorFn | None = None,
    ) -> None:
        await self._run(
            "page",
            advance_by_page,
            update_state,
            limit,
            on_error,
            fetch=fetch,
            merge=merge,
            get_current_count=get_current_count,
            get_total_count=get_total_count,
            current_data=current_data,
            is_currently_loading=is_currently_loading,
        )

    async def advance_by_cursor(
        self,
        *,
        fetch: FetchFn,
        merge: MergeFn,
        get_next_cursor: Callable[[Any], Any],
        has_more_data: Callable[[Any], bool],
        update_state: UpdateStateFn,
        current_data: Any,
        is_currently_loading: bool,
        limit: int | None = None,
        on_error: ErrorFn | None = None,
    ) -> None:
        await self._run(
            "cursor",
            advance_by_cursor,
            update_state,
            limit,
            on_error,
            fetch=fetch,
            merge=merge,
            get_next_cursor=get_next_cursor,
            has_more_data=has_more_data,
            current_data=current_data,
            is_currently_loading=is_currently_loading,
        )

    async def _run(
        self,
        mode: Mode,
        advance: Callable[..., Any],
        update_state: UpdateStateFn,
        limit: int | None,
        on_error: ErrorFn | None,
        **kwargs: Any,
    ) -> None:
        limit = self.options.limit if limit is None else limit
        on_error = self.options.on_error if on_error is None else on_error
        validate_limit(limit)

        if self.options.guard_in_flight and self.in_flight:
            _skip(mode, "in_flight")
            return

        started = False
        finished = False

        def tracked(is_loading: bool, data: Any, error: str | None) -> None:
            nonlocal started, finished
            if is_loading:
                started = True
                self._active += 1
            elif started and not finished:
                finished = True
                self._active -= 1
            update_state(is_loading, data, error)

        try:
            await advance(update_state=tracked, limit=limit, on_error=on_error, **kwargs)
        finally:
            # Cancelled mid-fetch: no completion report was made
            if started and not finished:
                self._active -= 1
