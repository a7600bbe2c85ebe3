"""HTTP gateway to the MangaDex API."""

from typing import Any

import requests

from common.env import env
from common.logger import get_logger

from .base import APIError, RateLimitError
from .rate_limiter import RateLimitGuard
from .url_builder import QueryParams, build_url

logger = get_logger(__name__)


class ApiGateway:
    """Client for the MangaDex REST API.

    Every request goes through a RateLimitGuard: while the guard is cooling
    down no network call is made. A 429 answer trips the guard.

    API Documentation: https://api.mangadex.org/docs/
    """

    def __init__(
        self,
        base_url: str | None = None,
        rate_limiter: RateLimitGuard | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        """Initialize the gateway.

        Args:
            base_url: API root (default: MANGADEX_BASE_URL or the public API)
            rate_limiter: Cooldown guard (default: one using MANGADEX_RATE_LIMIT_COOLDOWN)
            timeout: Request timeout in seconds (default: MANGADEX_TIMEOUT, unset means none)
            session: HTTP session to reuse
        """
        self.base_url = base_url or env.mangadex_base_url()
        self.rate_limiter = rate_limiter or RateLimitGuard(cooldown_ms=env.rate_limit_cooldown_ms())
        self.timeout = timeout if timeout is not None else env.request_timeout()
        if session is None:
            session = requests.Session()
            session.headers.update({"User-Agent": env.user_agent()})
        self.session = session

    def build_url(self, endpoint: str, params: QueryParams | None = None, url_suffix: str = "") -> str:
        """Build the request URL, appending url_suffix to the encoded query."""
        url = build_url(endpoint, params, base_url=self.base_url)
        if url_suffix.startswith("?") and "?" in url:
            url_suffix = "&" + url_suffix[1:]
        return url + url_suffix

    def call(self, endpoint: str, params: QueryParams | None = None, url_suffix: str = "") -> Any:
        """GET an endpoint and return its decoded JSON body.

        Args:
            endpoint: API path (e.g. '/manga/{id}')
            params: Query parameters, flattened by the URL builder
            url_suffix: Raw text appended after the query string

        Returns:
            Decoded JSON response

        Raises:
            RateLimitError: If the cooldown is active or the API answers 429
            APIError: If the API answers with any other non-success status
            requests.exceptions.RequestException: On transport failures
        """
        self.rate_limiter.check()

        url = self.build_url(endpoint, params, url_suffix)
        logger.debug(f"GET {url}")
        response = self.session.get(url, timeout=self.timeout)

        if response.status_code == 429:
            self.rate_limiter.trip()
            raise RateLimitError(self.rate_limiter.state.reset_at_ms)

        if not response.ok:
            logger.debug(f"{url} answered {response.status_code}")
            raise APIError(response.status_code, url)

        return response.json()

    def is_rate_limited(self) -> bool:
        """Return True once the API has answered 429 (the flag is never cleared by time)."""
        return self.rate_limiter.is_limited()

    def close(self):
        """Close the HTTP session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False
