"""Data Access Object (DAO) implementation for managing associations in Redis

This module provides a Redis-based implementation of AssociationBaseDAO using
the asyncio Redis client.

Responsibilities:
    - Insert associations atomically, refusing duplicates on either key;
    - Find associations by long URL or short URL;
    - Flip the active flag and increment query counters;
    - Maintain the global association counter;
    - Translate Redis failures into DAO exceptions.

Classes:
    AssociationRedisDAO:
        DAO for storing and retrieving AssociationModel in a Redis datastore.

Example:
    >>> from urlshortener.models import AssociationModel
    >>> from urlshortener.dao.redis import AssociationRedisDAO

    >>> dao = AssociationRedisDAO(redis_url='redis://localhost:6379/0', prefix='app:dev')

    >>> association = AssociationModel(long_url='example.com/page', short_url='short.ly/abc123')
    >>> await dao.insert(association)
    <AssociationRedisDAO>

    >>> (await dao.find('short.ly/abc123')).long_url
    'example.com/page'
    >>> await dao.increment_queries('short.ly/abc123')
    1
"""

import redis
from beartype import beartype

from urlshortener.models import AssociationModel
from urlshortener.dao.base import AssociationBaseDAO
from urlshortener.dao.redis.mixins import RedisClientMixin
from urlshortener.dao.redis.helpers import handle_redis_connection_error
from urlshortener.dao.exceptions import AssociationAlreadyExistsError, AssociationNotFoundError


class AssociationRedisDAO(RedisClientMixin, AssociationBaseDAO):
    """Redis-based Data Access Object (DAO) for managing associations

    This class implements the AssociationBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.asyncio.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (AssociationKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        find(key: str) -> AssociationModel | None:
            Resolve key through the short URL index, then read the association hash.

        insert(association: AssociationModel) -> AssociationRedisDAO:
            WATCH both keys, refuse existing ones, then write hash and index in MULTI.
            Raises AssociationAlreadyExistsError when either key exists or changes mid-transaction.

        set_active(key: str, active: bool) -> AssociationRedisDAO:
            Set the 'active' hash field.

        increment_queries(key: str) -> int:
            HINCRBY the 'queries' hash field.

        count(increment: bool = False) -> int:
            Retrieve (and optionally increment) the global association counter.

        clear() -> AssociationRedisDAO:
            Delete every key under the DAO's namespace.

    All methods raise DataStoreError on connectivity issues with Redis.
    """

    async def _resolve(self, key: str) -> str:
        """Return the long URL for key, which may be either a short URL or a long URL."""
        long_url = await self.redis.get(self.keys.short_url_key(key))
        return key if long_url is None else long_url

    async def _require(self, key: str) -> str:
        long_url = await self._resolve(key)
        if not await self.redis.exists(self.keys.long_url_key(long_url)):
            raise AssociationNotFoundError(f"Association for '{key}' not found.")
        return long_url

    @handle_redis_connection_error
    @beartype
    async def find(self, key: str) -> AssociationModel | None:
        """Find an association by long URL or short URL

        Example:
            >>> await dao.find('short.ly/abc123')
            AssociationModel(long_url='example.com/page', short_url='short.ly/abc123', active=True, queries=0)
        """
        long_url = await self._resolve(key)
        fields = await self.redis.hgetall(self.keys.long_url_key(long_url))
        if not fields:
            return None

        return AssociationModel(
            long_url=long_url,
            short_url=fields['short_url'],
            active=fields['active'] == '1',
            queries=int(fields['queries']),
        )

    @handle_redis_connection_error
    @beartype
    async def insert(self, association: AssociationModel) -> 'AssociationRedisDAO':
        """Insert an association into Redis

        The existence check and the writes run under WATCH so that two
        concurrent inserts of the same long URL (or token) cannot both succeed.

        Raises:
            AssociationAlreadyExistsError:
                If the long URL or short URL is already registered, or if
                either key was written by someone else during the transaction.
            DataStoreError:
                If a Redis connection issue occurs during the transaction.
        """
        long_url_key = self.keys.long_url_key(association.long_url)
        short_url_key = self.keys.short_url_key(association.short_url)
        already_exists = AssociationAlreadyExistsError(
            f"Association for '{association.long_url}' or '{association.short_url}' already exists."
        )

        # NOTE: find() accepts either URL, so both URLs must be unused in both key spaces.
        taken_keys = (
            long_url_key,
            short_url_key,
            self.keys.short_url_key(association.long_url),
            self.keys.long_url_key(association.short_url),
        )
        async with self.redis.pipeline(transaction=True) as pipe:
            try:
                await pipe.watch(long_url_key, short_url_key)
                if await pipe.exists(*taken_keys):
                    raise already_exists

                pipe.multi()
                # fmt: off
                pipe.hset(long_url_key, mapping={
                    'short_url': association.short_url,
                    'active': int(association.active),
                    'queries': association.queries,
                })
                # fmt: on
                pipe.set(short_url_key, association.long_url)
                await pipe.execute()
            except redis.exceptions.WatchError as e:
                raise already_exists from e
        return self

    @handle_redis_connection_error
    @beartype
    async def set_active(self, key: str, active: bool) -> 'AssociationRedisDAO':
        long_url = await self._require(key)
        await self.redis.hset(self.keys.long_url_key(long_url), 'active', int(active))
        return self

    @handle_redis_connection_error
    @beartype
    async def increment_queries(self, key: str) -> int:
        long_url = await self._require(key)
        return await self.redis.hincrby(self.keys.long_url_key(long_url), 'queries', 1)

    @handle_redis_connection_error
    async def count(self, increment: bool = False) -> int:
        """Retrieve global association counter

        Example:
            >>> await dao.count(increment=False)
            123
            >>> await dao.count(increment=True)
            124
        """
        if increment:
            return await self.redis.incr(self.keys.counter_key())

        value = await self.redis.get(self.keys.counter_key())
        return 0 if value is None else int(value)

    @handle_redis_connection_error
    async def clear(self) -> 'AssociationRedisDAO':
        keys = [key async for key in self.redis.scan_iter(match=self.keys.match_all())]
        if keys:
            await self.redis.delete(*keys)
        return self

    def __repr__(self) -> str:
        return '<AssociationRedisDAO>'
