"""Shared constants for the MangaDex extension.

For environment-based configuration (base URL, cooldown, etc.), use the env module:
    from common.env import env
    base_url = env.mangadex_base_url()
"""

# Catalogue API
BASE_URL = "https://api.mangadex.org"

# Extension identity reported to the host application
EXTENSION_ID = "mangadex-extension"
EXTENSION_NAME = "Mangadex"
EXTENSION_VERSION = "1.0.0"

# Fixed cooldown applied after the API answers 429 Too Many Requests
DEFAULT_RATE_LIMIT_COOLDOWN_MS = 60 * 1000

DEFAULT_USER_AGENT = f"{EXTENSION_ID}/{EXTENSION_VERSION} (python-requests)"

# Relationship type that links a manga to its cover resource
COVER_ART = "cover_art"

# Content ratings allowed when mature content is disabled
SAFE_CONTENT_RATINGS: list[str] = ["safe", "suggestive"]

# Explorer category names
LATEST_MANGA = "Latest Manga"
MOST_FOLLOWED_MANGA = "Most Followed Manga"
