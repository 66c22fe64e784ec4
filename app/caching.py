"""Redis caching setup using fastapi-cache2."""

import hashlib
import logging

from fastapi_cache import FastAPICache
from fastapi_cache.backends.inmemory import InMemoryBackend
from fastapi_cache.backends.redis import RedisBackend

from app.config import get_settings

logger = logging.getLogger(__name__)

CACHE_PREFIX = "standings"


def _cache_key_builder(func, namespace: str = "", *, request=None, response=None, args=None, kwargs=None):
    """Key from the endpoint, its path and its query string."""
    prefix = FastAPICache.get_prefix()
    parts = [prefix, namespace, func.__module__, func.__qualname__]

    if request:
        parts.append(request.url.path)
        # Include query string for cache variation
        query = str(request.query_params)
        if query:
            parts.append(hashlib.md5(query.encode()).hexdigest())

    return ":".join(parts)


def _init_disabled():
    # Decorated routes still need an initialised cache; enable=False makes them bypass it.
    FastAPICache.init(
        InMemoryBackend(),
        prefix=CACHE_PREFIX,
        key_builder=_cache_key_builder,
        enable=False,
    )


async def init_cache():
    """Initialize Redis cache. Call from app lifespan."""
    settings = get_settings()
    if not settings.cache_enabled:
        logger.info("Redis cache disabled via CACHE_ENABLED=false")
        _init_disabled()
        return
    try:
        from redis import asyncio as aioredis
        redis = aioredis.from_url(
            settings.redis_cache_url,
            encoding="utf-8",
            decode_responses=True,
        )
        await redis.ping()
        FastAPICache.init(
            RedisBackend(redis),
            prefix=CACHE_PREFIX,
            key_builder=_cache_key_builder,
        )
        logger.info("Redis cache initialized at %s", settings.redis_cache_url)
    except Exception as e:
        logger.warning("Redis cache init failed, caching disabled: %s", e)
        _init_disabled()
