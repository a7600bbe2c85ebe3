"""Cover enrichment for manga resources.

Search and detail responses only reference a manga's cover through a
``cover_art`` relationship. Enrichment resolves that reference with a
second call to ``/cover/{id}`` and attaches the image file name as
``coverFileName``. Enrichment never fails the caller: when the lookup
fails the manga is returned as it was.
"""

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

import requests

from common.constants import COVER_ART
from common.logger import get_logger

from .clients.base import MangaDexError
from .clients.gateway import ApiGateway
from .models import CoverResponse, Manga, Relationship, safe_get, safe_list

logger = get_logger(__name__)

T = TypeVar("T")

# Failures a secondary lookup is allowed to degrade on; JSON decoding errors are ValueErrors
RECOVERABLE_ERRORS = (MangaDexError, requests.exceptions.RequestException, ValueError)


def attempt(func: Callable[[], T], fallback: T, description: str = "request") -> T:
    """Run func, substituting fallback if it fails with a recoverable error.

    Args:
        func: Zero-argument callable performing the lookup
        fallback: Value returned when func fails
        description: Label used in the log message

    Returns:
        func's result, or fallback
    """
    try:
        return func()
    except RECOVERABLE_ERRORS as e:
        logger.debug(f"{description} failed, using fallback: {e!r}")
        return fallback


def find_cover_relationship(manga: Manga) -> Relationship | None:
    """Return the first cover_art relationship of a manga, in API order."""
    for relationship in safe_list(manga, "relationships"):
        if isinstance(relationship, dict) and relationship.get("type") == COVER_ART:
            return relationship
    return None


def fetch_cover_file_name(gateway: ApiGateway, cover_id: str) -> str | None:
    """Look up a cover's image file name.

    Raises:
        RateLimitError, APIError: If the cover lookup is refused
    """
    cover: CoverResponse = gateway.call(f"/cover/{cover_id}")
    file_name = safe_get(cover, "data", "attributes", "fileName")
    return file_name if isinstance(file_name, str) else None


def enrich_with_cover(gateway: ApiGateway, manga: Manga) -> Manga:
    """Return a copy of manga with coverFileName set, or manga itself.

    The input is never modified. Without a cover relationship no request is
    made; a failed or empty lookup leaves the manga unchanged.
    """
    relationship = find_cover_relationship(manga)
    if relationship is None or not relationship.get("id"):
        return manga

    file_name = attempt(
        lambda: fetch_cover_file_name(gateway, relationship["id"]),
        None,
        description=f"Cover lookup for manga {manga.get('id')}",
    )
    if file_name is None:
        return manga

    return {**manga, "coverFileName": file_name}


def enrich_all(gateway: ApiGateway, mangas: Sequence[Manga]) -> list[Manga]:
    """Enrich every manga concurrently, keeping the input order."""
    if not mangas:
        return []

    # One worker per manga; map() yields results in submission order
    with ThreadPoolExecutor(max_workers=len(mangas), thread_name_prefix="cover") as executor:
        return list(executor.map(lambda manga: enrich_with_cover(gateway, manga), mangas))
