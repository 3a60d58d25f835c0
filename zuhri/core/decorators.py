import functools
import inspect
import logging
from typing import Optional, Callable

from fastapi.encoders import jsonable_encoder

from zuhri.core.cache import cache
from zuhri.core.config import settings

logger = logging.getLogger(__name__)

SKIPPED_KWARGS = {"context", "db", "current_user", "request"}

def cache_endpoint(ttl: int = 300, key_prefix: Optional[str] = None):
    """Cache an async endpoint's JSON-encoded result.

    Keys are scoped to the calling user when a ``current_user`` kwarg is present,
    otherwise they land in the shared ``catalog:`` namespace so admin writes can
    drop them with ``cache.invalidate_catalog_cache()``.
    """
    def decorator(func: Callable) -> Callable:
        if not inspect.iscoroutinefunction(func):
            raise TypeError("cache_endpoint only supports async endpoints")

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            if not settings.CACHE_ENABLED:
                return await func(*args, **kwargs)

            cache_key = _generate_cache_key(key_prefix or func.__name__, kwargs)
            cached_value = await cache.get(cache_key)
            if cached_value is not None:
                _mark_request(kwargs, "HIT")
                logger.debug(f"Cache HIT for key: {cache_key}")
                return cached_value

            result = await func(*args, **kwargs)
            if result is not None:
                encoded = jsonable_encoder(result)
                await cache.set(cache_key, encoded, ttl=ttl)
                _mark_request(kwargs, "MISS")
                logger.debug(f"Cache MISS for key: {cache_key} (stored with TTL {ttl}s)")
                return encoded
            return result

        return wrapper
    return decorator


def _mark_request(kwargs: dict, status: str):
    request = kwargs.get("request")
    if request is not None:
        request.state.cache_status = status


def _generate_cache_key(name: str, kwargs: dict) -> str:
    current_user = kwargs.get("current_user")
    if current_user is not None and hasattr(current_user, "id"):
        key_parts = [f"user:{current_user.id}:{name}"]
    else:
        key_parts = [f"catalog:{name}"]

    for k, v in sorted(kwargs.items()):
        if k in SKIPPED_KWARGS or callable(v):
            continue
        key_parts.append(f"{k}={v}")

    return ":".join(key_parts)
