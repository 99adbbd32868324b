"""
Rate Limiting Configuration

This module sets up the slowapi Limiter shared by the route modules.
Counters live in RATE_LIMIT_STORAGE_URI: in-process memory by default,
Redis when several workers must share them.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from shortlist_api.config import settings

# key_func=get_remote_address: Uses the client's IP address as the unique identifier
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window"
)


def auth_rate_limit() -> str:
    """Limit for register/login, read per request so config changes apply."""
    return settings.AUTH_RATE_LIMIT
