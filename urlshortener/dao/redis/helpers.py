import functools
from typing import TypeVar
from collections.abc import Awaitable, Callable

import redis

from urlshortener.dao.exceptions import DataStoreError


__all__ = []


F = TypeVar('F', bound=Callable[..., Awaitable])


def describe_connection(client) -> str:
    """Return '<host>:<port>/<db>' for a Redis client, for error messages."""
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def handle_redis_connection_error(method: F) -> F:
    """Wrap Redis-interacting DAO coroutines to handle connection errors

    Args:
        method (Callable[..., Awaitable]):
            DAO coroutine performing Redis operations which may raise
            redis.exceptions.ConnectionError or redis.exceptions.TimeoutError.

    Returns:
        Callable[..., Awaitable]:
            Wrapped coroutine which raises DataStoreError on connectivity issues with Redis.

    Example:
        >>> @handle_redis_connection_error
        ... async def count(self):
        ...     return await self.redis.get('count')
    """

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        try:
            return await method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise DataStoreError(f"Can't connect to Redis at {describe_connection(self.redis)}.") from e

    return wrapper
