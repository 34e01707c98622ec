"""Cache keys for screening responses."""

from django.conf import settings
from django.core.cache import cache


def screening_cache_key(screening_id: int) -> str:
    return f"screenings:{screening_id}"


def cache_ttl() -> int:
    return getattr(settings, "SCREENINGS", {}).get("CACHE_TTL", 60)


def invalidate_screening(screening_id: int) -> None:
    cache.delete(screening_cache_key(screening_id))
