from unittest.mock import AsyncMock, MagicMock

import pytest
import redis
import redis.asyncio


@pytest.fixture
def app_prefix() -> str:
    return 'testapp:test'


@pytest.fixture
def pipeline() -> MagicMock:
    """Mock an asyncio Redis pipeline usable as `async with`."""
    pipe = MagicMock(spec=redis.asyncio.client.Pipeline)
    pipe.__aenter__.return_value = pipe
    pipe.__aexit__.return_value = None
    pipe.watch = AsyncMock(return_value=True)
    pipe.exists = AsyncMock(return_value=0)
    pipe.execute = AsyncMock(return_value=[3, True])
    return pipe


@pytest.fixture
def redis_client(pipeline) -> MagicMock:
    """Mock an asyncio Redis client with awaitable commands."""
    client = MagicMock(spec=redis.asyncio.Redis)
    client.connection_pool = MagicMock(
        spec=redis.asyncio.ConnectionPool,
        connection_kwargs={'host': 'redis.test', 'port': 6379, 'db': 0},
    )
    client.pipeline.return_value = pipeline
    for command in ('ping', 'get', 'hgetall', 'exists', 'hset', 'hincrby', 'incr', 'delete', 'aclose'):
        setattr(client, command, AsyncMock())
    client.get.return_value = None
    client.hgetall.return_value = {}
    client.exists.return_value = 1
    return client


@pytest.fixture
def connection_error() -> redis.exceptions.ConnectionError:
    return redis.exceptions.ConnectionError('Connection refused')
