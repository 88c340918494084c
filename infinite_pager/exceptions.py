class PagerError(Exception):
    """Base exception for all infinite_pager errors."""

    def __init__(self, message: str, original_error: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class FetchFailure(PagerError):
    """
    A failed page fetch (or merge), reduced to its textual description.

    This is the only failure kind the advancer reports. Timeouts, transport
    errors and parse errors raised by the caller's fetch function all end up here.
    """

    def __init__(self, description: str, original_error: BaseException | None = None) -> None:
        super().__init__(description, original_error)
        self.description = description

    @classmethod
    def from_error(cls, error: BaseException) -> "FetchFailure":
        """Builds a FetchFailure from the exception raised by fetch or merge."""
        # str() of a bare exception is empty; fall back to the class name
        description = str(error) or type(error).__name__
        return cls(description, original_error=error)


class PagerConfigError(PagerError, ValueError):
    """Raised for invalid pagination options (e.g. a non-positive limit)."""

    def __init__(
        self,
        message: str,
        option: str | None = None,
        value: object | None = None,
    ) -> None:
        super().__init__(message)
        self.option = option
        self.value = value


class PagerStateError(PagerError):
    """Raised when a FeedStore is used in a way its current state does not allow."""
