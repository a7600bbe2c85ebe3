"""HTTP access layer for the MangaDex API."""

from .base import APIError, MangaDexError, RateLimitError
from .gateway import ApiGateway
from .rate_limiter import RateLimitGuard, RateLimitState, now_ms
from .url_builder import build_url, encode_params

__all__ = [
    # Gateway
    "ApiGateway",
    "build_url",
    "encode_params",
    # Rate limiting
    "RateLimitGuard",
    "RateLimitState",
    "now_ms",
    # Exceptions
    "MangaDexError",
    "APIError",
    "RateLimitError",
]
