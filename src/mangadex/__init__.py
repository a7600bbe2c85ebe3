"""MangaDex catalogue extension.

Example:
    >>> from mangadex import get_extension
    >>>
    >>> with get_extension() as extension:
    ...     manga = extension.search("dungeon meshi", limit=1)[0]
    ...     chapters = extension.chapters(manga["id"], language="en")
    ...     pages = extension.reader(chapters[0]["id"])
"""

from .clients import APIError, ApiGateway, MangaDexError, RateLimitError, RateLimitGuard, RateLimitState
from .extension import MangaDexExtension, get_extension

__all__ = [
    # Facade
    "MangaDexExtension",
    "get_extension",
    # Transport
    "ApiGateway",
    "RateLimitGuard",
    "RateLimitState",
    # Exceptions
    "MangaDexError",
    "APIError",
    "RateLimitError",
]
