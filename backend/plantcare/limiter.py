"""
Shared Rate Limiter Instance

Imported by main.py (to register the 429 handler) and by the routes that
throttle themselves, so it lives in its own module to avoid circular imports.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["1000/hour"],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    enabled=settings.RATE_LIMIT_ENABLED,
)
