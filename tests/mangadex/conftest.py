"""Shared fixtures for MangaDex extension tests."""

from unittest.mock import Mock

import pytest

from mangadex.clients.base import APIError
from mangadex.clients.gateway import ApiGateway
from mangadex.clients.rate_limiter import RateLimitGuard


class FakeClock:
    """Manually advanced epoch-millisecond clock."""

    def __init__(self, start_ms: int = 1_700_000_000_000):
        self.now = start_ms

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


def make_response(status_code: int = 200, json_data=None):
    """Build a mock requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = json_data if json_data is not None else {}
    return response


def manga(manga_id: str, cover_id: str | None = None, **attributes) -> dict:
    """Build a manga resource, optionally with a cover_art relationship."""
    relationships = [{"id": f"author-{manga_id}", "type": "author"}]
    if cover_id:
        relationships.append({"id": cover_id, "type": "cover_art"})
    return {
        "id": manga_id,
        "type": "manga",
        "attributes": {"title": {"en": attributes.pop("title", manga_id)}, **attributes},
        "relationships": relationships,
    }


def cover(file_name: str) -> dict:
    """Build a /cover/{id} response."""
    return {"result": "ok", "data": {"type": "cover_art", "attributes": {"fileName": file_name}}}


class RoutedGateway:
    """Stand-in gateway answering calls from a table keyed by endpoint.

    Values may be a JSON body, an exception instance (raised), or a callable
    receiving (params, url_suffix).
    """

    def __init__(self, routes: dict | None = None, rate_limited: bool = False):
        self.routes = routes or {}
        self.calls: list[tuple[str, dict | None, str]] = []
        self.rate_limited = rate_limited
        self.closed = False

    def call(self, endpoint, params=None, url_suffix=""):
        self.calls.append((endpoint, params, url_suffix))
        if endpoint not in self.routes:
            raise APIError(404, endpoint)
        answer = self.routes[endpoint]
        if isinstance(answer, Exception):
            raise answer
        if callable(answer):
            return answer(params, url_suffix)
        return answer

    def endpoints(self) -> list[str]:
        return [endpoint for endpoint, _, _ in self.calls]

    def is_rate_limited(self) -> bool:
        return self.rate_limited

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep local MANGADEX_* settings out of the tests."""
    for name in (
        "MANGADEX_BASE_URL",
        "MANGADEX_RATE_LIMIT_COOLDOWN",
        "MANGADEX_TIMEOUT",
        "MANGADEX_USER_AGENT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def clock():
    """A fake clock starting at a fixed instant."""
    return FakeClock()


@pytest.fixture
def guard(clock):
    """A rate-limit guard driven by the fake clock."""
    return RateLimitGuard(cooldown_ms=60_000, clock=clock)


@pytest.fixture
def gateway(guard):
    """A real gateway pointed at a test base URL."""
    gw = ApiGateway(base_url="https://api.test", rate_limiter=guard)
    yield gw
    gw.close()


@pytest.fixture
def response_factory():
    """Factory for mock HTTP responses."""
    return make_response


@pytest.fixture
def manga_factory():
    """Factory for manga resources."""
    return manga


@pytest.fixture
def cover_factory():
    """Factory for cover responses."""
    return cover


@pytest.fixture
def routed_gateway():
    """Factory for RoutedGateway stand-ins."""
    return RoutedGateway
