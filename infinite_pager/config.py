from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .exceptions import PagerConfigError

DEFAULT_LIMIT = 10


@dataclass
class PagerOptions:
    """
    Defaults for a PaginationAdvancer.

    Per-call arguments passed to the advancer methods take precedence
    over these values.
    """

    limit: int = DEFAULT_LIMIT
    on_error: Callable[[Exception], Any] | None = None

    # When True the advancer also refuses to start while one of its own
    # fetches is running, regardless of the caller's loading flag.
    guard_in_flight: bool = False

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        Check that the options are usable.

        Raises:
            PagerConfigError: If the limit is not a positive integer
        """
        validate_limit(self.limit)


def validate_limit(limit: int) -> None:
    """Raises PagerConfigError unless limit is a positive integer."""
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise PagerConfigError(
            f"limit must be a positive integer, got {limit!r}", option="limit", value=limit
        )
