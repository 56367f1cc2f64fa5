"""Error taxonomy for the protein tracker."""


class TrackerError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TrackerError):
    """Input is malformed or out of range."""

    status_code = 400


class EntryNotFoundError(TrackerError):
    """The requested food entry is not part of today's log."""

    status_code = 404


class RateLimitError(TrackerError):
    """The caller exceeded the suggestion rate limit."""

    status_code = 429

    def __init__(self, retry_after: int) -> None:
        super().__init__("Too many requests. Please try again later.")
        self.retry_after = retry_after


class StoreError(TrackerError):
    """A store read or write failed."""


class ProviderError(TrackerError):
    """Suggestion generation failed."""
