"""Typed records for MangaDex API responses.

Every field is optional: the API omits fields freely, so callers read them
with ``.get()`` and handle ``None`` explicitly.
"""

from typing import Any, TypedDict


class Relationship(TypedDict, total=False):
    id: str
    type: str
    related: str
    attributes: dict[str, Any]


class Manga(TypedDict, total=False):
    id: str
    type: str
    attributes: dict[str, Any]
    relationships: list[Relationship]
    coverFileName: str


class Chapter(TypedDict, total=False):
    id: str
    type: str
    attributes: dict[str, Any]
    relationships: list[Relationship]


class CoverAttributes(TypedDict, total=False):
    fileName: str
    volume: str | None
    locale: str | None
    description: str


class Cover(TypedDict, total=False):
    id: str
    type: str
    attributes: CoverAttributes


class MangaListResponse(TypedDict, total=False):
    result: str
    response: str
    data: list[Manga]
    limit: int
    offset: int
    total: int


class MangaResponse(TypedDict, total=False):
    result: str
    response: str
    data: Manga


class CoverResponse(TypedDict, total=False):
    result: str
    response: str
    data: Cover


class ChapterFeedResponse(TypedDict, total=False):
    result: str
    response: str
    data: list[Chapter]
    limit: int
    offset: int
    total: int


class AtHomeChapter(TypedDict, total=False):
    hash: str
    data: list[str]
    dataSaver: list[str]


class AtHomeResponse(TypedDict, total=False):
    result: str
    baseUrl: str
    chapter: AtHomeChapter


def safe_get(data: Any, *keys: str, default: Any = None) -> Any:
    """Safely navigate nested response keys.

    Any level that is not a dict (a list, a string, None) ends the walk and
    gives ``default``, so a malformed body never raises.

    Example:
        >>> safe_get({"data": {"attributes": {"fileName": "a.jpg"}}}, "data", "attributes", "fileName")
        'a.jpg'
        >>> safe_get({"data": {"attributes": "oops"}}, "data", "attributes", "fileName")
        >>> safe_get(["x"], "data") is None
        True
    """
    current = data
    for key in keys:
        if isinstance(current, dict) and key in current:
            current = current[key]
        else:
            return default
    return current


def safe_list(data: Any, *keys: str) -> list:
    """Return the list at a key path, or [] when it is missing or not a list."""
    value = safe_get(data, *keys)
    return value if isinstance(value, list) else []
