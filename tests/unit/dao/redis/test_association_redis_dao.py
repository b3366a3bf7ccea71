"""Unit tests for the AssociationRedisDAO

Test coverage includes:

1. Lookups
   - find() resolves short URLs through the short URL index.
   - find() falls back to the key itself and returns None for missing hashes.

2. Insertion
   - insert() WATCHes both keys and writes hash and index inside MULTI.
   - Existing keys and WatchError raise AssociationAlreadyExistsError.
   - Invalid types raise BeartypeCallHintParamViolation.

3. Mutations
   - set_active() and increment_queries() update hash fields of existing associations.
   - Missing associations raise AssociationNotFoundError.

4. Counter and clear
   - count() reads or increments the global counter.
   - clear() deletes every key under the namespace.

5. Connectivity
   - Connection errors surface as DataStoreError.

6. Engine over the Redis DAO
   - Deactivate and re-add cycles keep the query counter.
"""

from unittest.mock import MagicMock

import pytest
import redis
from beartype.roar import BeartypeCallHintParamViolation

from urlshortener import ShortenerEngine
from urlshortener.models import AssociationModel, Result
from urlshortener.dao.redis import AssociationRedisDAO
from urlshortener.dao.exceptions import AssociationAlreadyExistsError, AssociationNotFoundError, DataStoreError


pytestmark = pytest.mark.asyncio


LONG_KEY = 'testapp:test:links:long:example.com/page'
SHORT_KEY = 'testapp:test:links:short:short.ly/abc'
COUNTER_KEY = 'testapp:test:links:counter'


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def dao(redis_client, app_prefix) -> AssociationRedisDAO:
    return AssociationRedisDAO(redis_client=redis_client, prefix=app_prefix)


@pytest.fixture
def association() -> AssociationModel:
    return AssociationModel(long_url='example.com/page', short_url='short.ly/abc')


async def async_iter(items):
    for item in items:
        yield item


# -------------------------------
# 1. Lookups
# -------------------------------


async def test_find_by_short_url(dao, redis_client):
    redis_client.get.return_value = 'example.com/page'
    redis_client.hgetall.return_value = {'short_url': 'short.ly/abc', 'active': '1', 'queries': '3'}

    found = await dao.find('short.ly/abc')

    assert found == AssociationModel(long_url='example.com/page', short_url='short.ly/abc', active=True, queries=3)
    redis_client.get.assert_awaited_once_with(SHORT_KEY)
    redis_client.hgetall.assert_awaited_once_with(LONG_KEY)


async def test_find_by_long_url(dao, redis_client):
    redis_client.get.return_value = None
    redis_client.hgetall.return_value = {'short_url': 'short.ly/abc', 'active': '0', 'queries': '0'}

    found = await dao.find('example.com/page')

    assert found.short_url == 'short.ly/abc'
    assert found.active is False
    redis_client.hgetall.assert_awaited_once_with(LONG_KEY)


async def test_find_missing_returns_none(dao, redis_client):
    assert await dao.find('example.com/missing') is None


# -------------------------------
# 2. Insertion
# -------------------------------


async def test_insert(dao, redis_client, pipeline, association):
    assert await dao.insert(association) is dao

    redis_client.pipeline.assert_called_once_with(transaction=True)
    pipeline.watch.assert_awaited_once_with(LONG_KEY, SHORT_KEY)
    pipeline.exists.assert_awaited_once_with(
        LONG_KEY,
        SHORT_KEY,
        'testapp:test:links:short:example.com/page',
        'testapp:test:links:long:short.ly/abc',
    )
    pipeline.multi.assert_called_once()
    pipeline.hset.assert_called_once_with(LONG_KEY, mapping={'short_url': 'short.ly/abc', 'active': 1, 'queries': 0})
    pipeline.set.assert_called_once_with(SHORT_KEY, 'example.com/page')
    pipeline.execute.assert_awaited_once()


async def test_insert_existing_keys_raises(dao, pipeline, association):
    pipeline.exists.return_value = 1

    with pytest.raises(AssociationAlreadyExistsError, match='already exists'):
        await dao.insert(association)

    pipeline.multi.assert_not_called()
    pipeline.execute.assert_not_awaited()


async def test_insert_watch_error_raises(dao, pipeline, association):
    """A concurrent write to a watched key aborts the transaction."""
    pipeline.execute.side_effect = redis.exceptions.WatchError('Watched variable changed.')

    with pytest.raises(AssociationAlreadyExistsError) as exc_info:
        await dao.insert(association)

    assert isinstance(exc_info.value.__cause__, redis.exceptions.WatchError)


async def test_insert_with_invalid_type(dao):
    with pytest.raises(BeartypeCallHintParamViolation):
        await dao.insert({'long_url': 'example.com/page'})


# -------------------------------
# 3. Mutations
# -------------------------------


async def test_set_active(dao, redis_client):
    redis_client.get.return_value = 'example.com/page'

    assert await dao.set_active('short.ly/abc', False) is dao

    redis_client.exists.assert_awaited_once_with(LONG_KEY)
    redis_client.hset.assert_awaited_once_with(LONG_KEY, 'active', 0)


async def test_increment_queries(dao, redis_client):
    redis_client.hincrby.return_value = 4

    assert await dao.increment_queries('example.com/page') == 4
    redis_client.hincrby.assert_awaited_once_with(LONG_KEY, 'queries', 1)


async def test_mutating_missing_association_raises(dao, redis_client):
    redis_client.exists.return_value = 0

    with pytest.raises(AssociationNotFoundError, match="'short.ly/zzz' not found"):
        await dao.set_active('short.ly/zzz', True)
    with pytest.raises(AssociationNotFoundError):
        await dao.increment_queries('short.ly/zzz')

    redis_client.hset.assert_not_awaited()
    redis_client.hincrby.assert_not_awaited()


# -------------------------------
# 4. Counter and clear
# -------------------------------


@pytest.mark.parametrize('stored, expected', [(None, 0), ('7', 7)])
async def test_count(dao, redis_client, stored, expected):
    redis_client.get.return_value = stored

    assert await dao.count() == expected
    redis_client.get.assert_awaited_once_with(COUNTER_KEY)
    redis_client.incr.assert_not_awaited()


async def test_count_increment(dao, redis_client):
    redis_client.incr.return_value = 8

    assert await dao.count(increment=True) == 8
    redis_client.incr.assert_awaited_once_with(COUNTER_KEY)


async def test_clear(dao, redis_client):
    redis_client.scan_iter = MagicMock(return_value=async_iter([LONG_KEY, SHORT_KEY, COUNTER_KEY]))

    assert await dao.clear() is dao

    redis_client.scan_iter.assert_called_once_with(match='testapp:test:links:*')
    redis_client.delete.assert_awaited_once_with(LONG_KEY, SHORT_KEY, COUNTER_KEY)


async def test_clear_empty_namespace(dao, redis_client):
    redis_client.scan_iter = MagicMock(return_value=async_iter([]))

    await dao.clear()
    redis_client.delete.assert_not_awaited()


# -------------------------------
# 5. Connectivity
# -------------------------------


async def test_connection_error_raises_data_store_error(dao, redis_client, connection_error):
    redis_client.get.side_effect = connection_error

    with pytest.raises(DataStoreError, match="Can't connect to Redis at redis.test:6379/0."):
        await dao.count()


async def test_insert_connection_error_raises_data_store_error(dao, pipeline, association, connection_error):
    pipeline.watch.side_effect = connection_error

    with pytest.raises(DataStoreError):
        await dao.insert(association)


def test_repr(dao):
    assert repr(dao) == '<AssociationRedisDAO>'


# -------------------------------
# 6. Engine over the Redis DAO
# -------------------------------


@pytest.fixture
def stored_hashes(redis_client) -> dict:
    """Back the mocked client's lookups and hash updates with an existing association."""
    hashes = {LONG_KEY: {'short_url': 'short.ly/abc', 'active': '1', 'queries': '0'}}
    index = {SHORT_KEY: 'example.com/page'}

    def hset(key, field, value):
        hashes[key][field] = str(value)
        return 0

    def hincrby(key, field, amount):
        hashes[key][field] = str(int(hashes[key][field]) + amount)
        return int(hashes[key][field])

    redis_client.get.side_effect = index.get
    redis_client.hgetall.side_effect = lambda key: dict(hashes.get(key, {}))
    redis_client.exists.side_effect = lambda *keys: sum(key in hashes for key in keys)
    redis_client.hset.side_effect = hset
    redis_client.hincrby.side_effect = hincrby
    return hashes


async def test_engine_reactivation_keeps_queries(dao, redis_client, stored_hashes):
    engine = ShortenerEngine(dao, 'short.ly')

    assert (await engine.query('http://short.ly/abc')).ok
    assert (await engine.deactivate('http://short.ly/abc')).ok
    assert await engine.add('http://example.com/page') == Result.success('http://short.ly/abc')
    assert (await engine.query('http://short.ly/abc')).ok

    assert await engine.count('http://example.com/page') == Result.success(2)
    assert stored_hashes[LONG_KEY] == {'short_url': 'short.ly/abc', 'active': '1', 'queries': '2'}
    assert [call.args for call in redis_client.hset.await_args_list] == [(LONG_KEY, 'active', 0), (LONG_KEY, 'active', 1)]
    redis_client.pipeline.assert_not_called()
