"""Query-string encoding for catalogue API requests.

The catalogue expects PHP-style flattening of list and mapping parameters::

    >>> build_url("/manga", {"title": "one piece", "includes": ["cover_art"],
    ...                      "order": {"relevance": "desc"}})
    'https://api.mangadex.org/manga?title=one%20piece&includes[]=cover_art&order%5Brelevance%5D=desc'
"""

import math
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from common.constants import BASE_URL

# Characters left alone by JavaScript's encodeURIComponent
_SAFE_CHARS = "-_.!~*'()"

Scalar = str | int | float | bool
QueryParams = Mapping[str, Any]


def _is_scalar(value: Any) -> bool:
    # inf and nan have no meaningful query representation
    if isinstance(value, float):
        return math.isfinite(value)
    return isinstance(value, (str, int, bool))


def _format_scalar(value: Scalar) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    # Match JavaScript Number formatting: integral below 1e21 prints without a fraction
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def encode_component(value: Scalar) -> str:
    """Percent-encode a single key or value."""
    return quote(_format_scalar(value), safe=_SAFE_CHARS)


def encode_params(params: QueryParams | None) -> str:
    """Serialize a parameter mapping into a query string (without '?').

    Scalars become ``key=value``, sequences become repeated ``key[]=value``
    pairs in order, and one-level mappings become ``key[nested]=value`` pairs.
    Anything that does not fit (deeper nesting, None) is left out.
    """
    if not params:
        return ""

    pairs: list[str] = []
    for key, value in params.items():
        if isinstance(value, (list, tuple)):
            pairs.extend(
                f"{encode_component(key)}[]={encode_component(item)}"
                for item in value
                if _is_scalar(item)
            )
        elif isinstance(value, Mapping):
            pairs.extend(
                f"{encode_component(f'{key}[{nested_key}]')}={encode_component(nested_value)}"
                for nested_key, nested_value in value.items()
                if _is_scalar(nested_value)
            )
        elif _is_scalar(value):
            pairs.append(f"{encode_component(key)}={encode_component(value)}")

    return "&".join(pairs)


def build_url(endpoint: str, params: QueryParams | None = None, base_url: str = BASE_URL) -> str:
    """Build a fully qualified API URL.

    Args:
        endpoint: API path starting with '/' (e.g. '/manga')
        params: Optional query parameters
        base_url: API root, defaults to the public catalogue

    Returns:
        URL with a query string appended when there is anything to encode
    """
    query = encode_params(params)
    return f"{base_url}{endpoint}{'?' + query if query else ''}"
