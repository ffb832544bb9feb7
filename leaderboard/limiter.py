"""
Rate limiter configuration using SlowAPI.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from leaderboard.config import Settings


def build_limiter(settings: Settings) -> Limiter:
    """One limiter per application, with its own in-memory counters."""
    # Create a limiter instance that uses the client's IP address
    return Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)
