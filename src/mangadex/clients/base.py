"""Exceptions raised by the MangaDex API clients."""


class MangaDexError(Exception):
    """Base exception for catalogue client errors."""

    pass


class APIError(MangaDexError):
    """The API answered with a non-success status (other than 429)."""

    def __init__(self, status: int, url: str | None = None):
        self.status = status
        self.url = url
        super().__init__(f"API Error: {status}")


class RateLimitError(MangaDexError):
    """The local rate-limit cooldown is active."""

    def __init__(self, reset_at_ms: int | None = None):
        self.reset_at_ms = reset_at_ms
        super().__init__("RATE_LIMITED")
