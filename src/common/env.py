"""Environment configuration interface for the MangaDex extension.

This module provides a clean interface for accessing environment variables,
centralizing all environment variable access in one place.
"""

import os

from dotenv import load_dotenv

from .constants import BASE_URL, DEFAULT_RATE_LIMIT_COOLDOWN_MS, DEFAULT_USER_AGENT

# Load environment variables from .env file if it exists
load_dotenv()


class Environment:
    """Interface for accessing environment configuration."""

    @staticmethod
    def mangadex_base_url() -> str:
        """Get the catalogue API base URL.

        Returns:
            Base URL without trailing slash, defaults to https://api.mangadex.org
        """
        return os.getenv("MANGADEX_BASE_URL", BASE_URL).rstrip("/")

    @staticmethod
    def rate_limit_cooldown_ms() -> int:
        """Get the cooldown applied after a 429 response.

        Returns:
            Cooldown in milliseconds, defaults to 60000
        """
        return int(os.getenv("MANGADEX_RATE_LIMIT_COOLDOWN", str(DEFAULT_RATE_LIMIT_COOLDOWN_MS)))

    @staticmethod
    def request_timeout() -> float | None:
        """Get the HTTP request timeout.

        Returns:
            Timeout in seconds, or None (no timeout) when unset or empty
        """
        value = os.getenv("MANGADEX_TIMEOUT", "")
        return float(value) if value else None

    @staticmethod
    def user_agent() -> str:
        """Get the User-Agent header sent with every request."""
        return os.getenv("MANGADEX_USER_AGENT", DEFAULT_USER_AGENT)

    @staticmethod
    def log_level() -> str:
        """Get the default logging level.

        Returns:
            Upper-cased level name, defaults to 'INFO'
        """
        return os.getenv("LOG_LEVEL", "INFO").upper()


# Singleton instance for convenient access
env = Environment()
