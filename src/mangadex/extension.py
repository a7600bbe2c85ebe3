"""MangaDex extension: search, details, chapters and page images."""

from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any

from common.constants import (
    COVER_ART,
    EXTENSION_ID,
    EXTENSION_NAME,
    EXTENSION_VERSION,
    LATEST_MANGA,
    MOST_FOLLOWED_MANGA,
    SAFE_CONTENT_RATINGS,
)
from common.logger import get_logger

from .clients.gateway import ApiGateway
from .clients.rate_limiter import Clock, now_ms
from .enrichment import attempt, enrich_all, enrich_with_cover
from .models import (
    AtHomeResponse,
    Chapter,
    ChapterFeedResponse,
    Manga,
    MangaListResponse,
    MangaResponse,
    safe_get,
    safe_list,
)

logger = get_logger(__name__)

DEFAULT_ORDER = {"relevance": "desc"}
LATEST_ORDER = {"latestUploadedChapter": "desc"}
MOST_FOLLOWED_ORDER = {"followedCount": "desc"}


class MangaDexExtension:
    """Extension exposing the MangaDex catalogue to a reader application.

    Primary fetches (search, informations, chapters, reader) raise
    RateLimitError, APIError or transport errors to the caller. Secondary
    work (cover enrichment, the explorer categories) degrades instead.

    Example:
        >>> with MangaDexExtension() as extension:
        ...     results = extension.search("frieren", limit=5)
        ...     pages = extension.reader(chapter_id)
    """

    id = EXTENSION_ID
    name = EXTENSION_NAME
    version = EXTENSION_VERSION

    def __init__(self, gateway: ApiGateway | None = None, clock: Clock = now_ms):
        """Initialize the extension.

        Args:
            gateway: API gateway (default: one configured from the environment)
            clock: Epoch-millisecond clock used for cache-busting
        """
        self.gateway = gateway or ApiGateway()
        self.clock = clock

    def search(
        self,
        query: str,
        limit: int = 10,
        mature_content: bool = True,
        order: Mapping[str, str] | None = None,
    ) -> list[Manga]:
        """Search manga by title.

        Args:
            query: Title to search for ('' lists everything)
            limit: Maximum number of results
            mature_content: When False, only 'safe' and 'suggestive' titles are returned
            order: Sort order, e.g. {'followedCount': 'desc'} (default: relevance)

        Returns:
            Matching manga with coverFileName attached where it could be resolved
        """
        params: dict[str, Any] = {
            "title": query,
            "limit": limit,
            "order": dict(order or DEFAULT_ORDER),
            "contentRating": [] if mature_content else list(SAFE_CONTENT_RATINGS),
            "includes": [COVER_ART],
        }
        data: MangaListResponse = self.gateway.call("/manga", params, url_suffix=f"?_={self.clock()}")
        mangas = safe_list(data, "data")
        logger.debug(f"Search '{query}' returned {len(mangas)} manga")
        return enrich_all(self.gateway, mangas)

    def explorer(self, limit: int = 10, mature_content: bool = True) -> dict[str, list[Manga]]:
        """Fetch the latest-updated and most-followed manga side by side.

        A failing category comes back as an empty list; it never affects the other.
        """
        categories = {LATEST_MANGA: LATEST_ORDER, MOST_FOLLOWED_MANGA: MOST_FOLLOWED_ORDER}

        def fetch_category(order: dict[str, str]) -> list[Manga]:
            return self.search("", limit=limit, mature_content=mature_content, order=order)

        with ThreadPoolExecutor(max_workers=len(categories), thread_name_prefix="explorer") as executor:
            futures = {
                category: executor.submit(
                    attempt, partial(fetch_category, order), [], f"Explorer category '{category}'"
                )
                for category, order in categories.items()
            }
            return {category: future.result() for category, future in futures.items()}

    def informations(self, manga_id: str) -> Manga | None:
        """Fetch a manga's details, with its cover file name when available.

        Returns:
            The manga, or None if the API returned no resource
        """
        data: MangaResponse = self.gateway.call(f"/manga/{manga_id}", {"includes": [COVER_ART]})
        manga = safe_get(data, "data")
        if not isinstance(manga, dict) or not manga:
            return None
        return enrich_with_cover(self.gateway, manga)

    def chapters(
        self,
        manga_id: str,
        language: str = "en",
        page: int = 1,
        limit: int = 100,
    ) -> list[Chapter]:
        """Fetch one page of a manga's chapter feed, ascending by chapter number.

        Args:
            manga_id: Manga UUID
            language: Translated language code
            page: 1-based page number
            limit: Chapters per page

        Raises:
            ValueError: If page or limit is below 1
        """
        if page < 1 or limit < 1:
            raise ValueError(f"page and limit must be positive (got page={page}, limit={limit})")

        data: ChapterFeedResponse = self.gateway.call(
            f"/manga/{manga_id}/feed",
            {
                "translatedLanguage": [language],
                "order": {"chapter": "asc"},
                "limit": limit,
                "offset": (page - 1) * limit,
            },
        )
        return safe_list(data, "data")

    def reader(self, chapter_id: str, data_saver: bool = False) -> list[str]:
        """Resolve the ordered page image URLs of a chapter.

        Args:
            chapter_id: Chapter UUID
            data_saver: Use the compressed data-saver images

        Returns:
            Absolute image URLs in reading order, or [] if the server gave nothing usable
        """
        data: AtHomeResponse = self.gateway.call(f"/at-home/server/{chapter_id}")
        base_url = safe_get(data, "baseUrl")
        chapter_hash = safe_get(data, "chapter", "hash")
        file_names = safe_list(data, "chapter", "dataSaver" if data_saver else "data")
        if not isinstance(base_url, str) or not base_url or not chapter_hash or not file_names:
            return []

        quality = "data-saver" if data_saver else "data"
        return [f"{base_url}/{quality}/{chapter_hash}/{file_name}" for file_name in file_names]

    def is_api_rate_limited(self) -> bool:
        """Return the rate-limit flag; it stays set once the API has answered 429."""
        return self.gateway.is_rate_limited()

    def close(self):
        """Close the underlying HTTP session."""
        self.gateway.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False


def get_extension() -> MangaDexExtension:
    """Create an extension configured from the environment."""
    return MangaDexExtension(ApiGateway())
