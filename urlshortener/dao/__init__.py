from urlshortener.dao.base import AssociationBaseDAO
from urlshortener.dao.memory import AssociationMemoryDAO
from urlshortener.dao.redis import AssociationRedisDAO


__all__ = [
    'AssociationBaseDAO',
    'AssociationMemoryDAO',
    'AssociationRedisDAO',
]
