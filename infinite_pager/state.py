from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ._logging import logger
from .exceptions import PagerStateError
from .pagination import PagedData

Listener = Callable[["FeedState"], Any]


class FeedState(BaseModel):
    """
    Snapshot of a feed as a list/grid widget renders it.

    Frozen: every change produces a new FeedState rather than assigning
    fields, so readers holding an older snapshot never observe a half-applied
    update. The items list is shared, not copied; treat it as read-only.
    """

    model_config = ConfigDict(frozen=True)

    data: PagedData = Field(default_factory=PagedData.empty)
    is_loading_more: bool = False
    error: str | None = None

    @property
    def items(self) -> list[Any]:
        return self.data.items

    @property
    def is_empty(self) -> bool:
        """True when nothing has been loaded and no load is running."""
        return not self.data.items and not self.is_loading_more


class FeedStore:
    """
    Caller-side state for one paginated feed.

    update_state has the (is_loading, data, error) signature the advancer
    reports through, and applies each report as a single state replacement.
    """

    def __init__(self, initial: PagedData | None = None) -> None:
        """
        Args:
            initial: Data to start from. Defaults to PagedData.empty(), whose
                total is 0: fine for cursor feeds, but offset and page feeds
                treat it as exhausted and never fetch. Seed those with
                PagedData.empty(total=...) from a first count or page request.
        """
        self._initial = initial if initial is not None else PagedData.empty()
        self._state = FeedState(data=self._initial)
        self._listeners: list[Listener] = []

    @property
    def state(self) -> FeedState:
        return self._state

    @property
    def data(self) -> PagedData:
        return self._state.data

    @property
    def is_loading_more(self) -> bool:
        return self._state.is_loading_more

    def update_state(self, is_loading: bool, data: Any | None, error: str | None) -> None:
        """
        Apply one advancer report.

        The loading flag and error are always overwritten. Data is replaced
        only when the report carries it, so a failed fetch keeps the items
        loaded so far.
        """
        update: dict[str, Any] = {"is_loading_more": is_loading, "error": error}
        if data is not None:
            update["data"] = data
        self._replace(self._state.model_copy(update=update))

    def reset(self, initial: PagedData | None = None) -> None:
        """
        Drop everything loaded so far, e.g. before a pull-to-refresh reload.

        Args:
            initial: Data to start from; defaults to the store's initial data

        Raises:
            PagerStateError: If a load is in progress
        """
        if self._state.is_loading_more:
            raise PagerStateError("Cannot reset a feed while a page is loading")

        if initial is not None:
            self._initial = initial

        logger.info(
            "Feed reset",
            extra={"dropped_items": len(self._state.data.items)},
        )
        self._replace(FeedState(data=self._initial))

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with the new state after every change.

        Exceptions raised by a listener are logged and do not interrupt the
        state change or the remaining listeners.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _replace(self, new_state: FeedState) -> None:
        self._state = new_state
        # A failing listener must not leave the feed stuck mid-transition
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.exception(
                    "Feed listener failed",
                    extra={
                        "listener": getattr(listener, "__name__", repr(listener)),
                        "is_loading_more": new_state.is_loading_more,
                    },
                )
