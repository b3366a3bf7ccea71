import functools
from collections.abc import Callable


__all__ = ['AssociationKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class AssociationKeySchema:
    """Provide standardized Redis keys for storing associations.

    An optional prefix can be provided to namespace all generated keys.
    It is highly encouraged to set a custom prefix for each app and environment,
    e.g. "urlshortener:prod" or "urlshortener:dev".

    Layout:
        <prefix>:links:long:<long url>   HASH   short_url, active, queries
        <prefix>:links:short:<short url> STRING long url
        <prefix>:links:counter           STRING global association counter
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def long_url_key(self, long_url: str) -> str:
        return f'links:long:{long_url}'

    @prefix_key
    def short_url_key(self, short_url: str) -> str:
        return f'links:short:{short_url}'

    @prefix_key
    def counter_key(self) -> str:
        return 'links:counter'

    @prefix_key
    def match_all(self) -> str:
        return 'links:*'
