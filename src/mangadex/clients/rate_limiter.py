"""Client-side rate-limit cooldown for the catalogue API."""

import time
from collections.abc import Callable
from dataclasses import dataclass

from common.constants import DEFAULT_RATE_LIMIT_COOLDOWN_MS
from common.logger import get_logger

from .base import RateLimitError

logger = get_logger(__name__)

Clock = Callable[[], int]


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass
class RateLimitState:
    """Cooldown flag shared by every call made through one gateway."""

    limited: bool = False
    reset_at_ms: int = 0


class RateLimitGuard:
    """Blunt cooldown gate for API clients.

    Unlike a sliding-window limiter this never sleeps: once the API answers
    429 the guard refuses every call until the cooldown elapses.

    Example:
        >>> guard = RateLimitGuard(cooldown_ms=60_000)
        >>> guard.check()  # Raises RateLimitError while cooling down
        >>> guard.trip()   # Call when the API answers 429
    """

    def __init__(
        self,
        cooldown_ms: int = DEFAULT_RATE_LIMIT_COOLDOWN_MS,
        clock: Clock = now_ms,
        state: RateLimitState | None = None,
    ):
        """Initialize the guard.

        Args:
            cooldown_ms: How long calls are refused after a 429
            clock: Returns the current time in epoch milliseconds
            state: Shared state; a fresh one is created when omitted
        """
        self.cooldown_ms = cooldown_ms
        self.clock = clock
        self.state = state if state is not None else RateLimitState()

    def is_limited(self) -> bool:
        """Return the rate-limit flag. It stays set after the cooldown ends."""
        return self.state.limited

    def is_cooling_down(self) -> bool:
        """Return True while calls must be refused."""
        return self.state.limited and self.clock() < self.state.reset_at_ms

    def check(self) -> None:
        """Raise RateLimitError if a call must not be made right now."""
        if self.is_cooling_down():
            raise RateLimitError(self.state.reset_at_ms)

    def trip(self) -> None:
        """Start the cooldown after the API answered 429."""
        self.state.limited = True
        self.state.reset_at_ms = self.clock() + self.cooldown_ms
        logger.warning(f"Rate limited by the API, pausing requests for {self.cooldown_ms / 1000:g}s")

    def reset(self) -> None:
        """Clear the cooldown (useful for testing)."""
        self.state.limited = False
        self.state.reset_at_ms = 0
