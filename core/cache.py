from fastapi_cache import FastAPICache
from fastapi_cache.backends.inmemory import InMemoryBackend
from fastapi_cache.decorator import cache
from typing import Optional, Callable
import logging

from core.config import settings

logger = logging.getLogger(__name__)

SUMMARY_CACHE_NAMESPACE = "display_summary"

async def init_cache():
    """Initialize in-memory cache backend."""
    FastAPICache.init(
        backend=InMemoryBackend(),
        prefix=settings.cache["prefix"]
    )
    logger.info("Response cache initialized")

async def clear_cache(namespace: Optional[str] = None):
    """Drop cached responses, e.g. after the display was regenerated."""
    await FastAPICache.clear(namespace=namespace)

def route_key_builder(
    func: Callable,
    namespace: str = "",
    *,
    request=None,
    response=None,
    args=(),
    kwargs=None
) -> str:
    """One cache entry per route; the per-request objects are left out of the key."""
    return f"{namespace}:{func.__module__}:{func.__name__}"

def cached(
    namespace: str,
    expire: Optional[int] = None,
    key_builder: Callable = route_key_builder
):
    """Cache a route response under ``namespace`` unless caching is disabled.

    The lifetime defaults to the namespace TTL from settings.
    """
    def decorator(func):
        if not settings.cache["enabled"]:
            return func

        ttl = expire if expire is not None else settings.get_cache_ttl().get(namespace)
        return cache(expire=ttl, namespace=namespace, key_builder=key_builder)(func)

    return decorator
