from urlshortener.dao.redis.redis_key_schema import AssociationKeySchema
from urlshortener.dao.redis.association_redis_dao import AssociationRedisDAO
from urlshortener.dao.redis.mixins import RedisClientMixin


__all__ = [
    'AssociationKeySchema',
    'AssociationRedisDAO',
    'RedisClientMixin',
]
