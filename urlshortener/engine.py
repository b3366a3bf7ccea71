"""URL shortening engine

Orchestrates the association lifecycle over an AssociationBaseDAO:

    add(long_url)      -> Result('<scheme>://<short url>')
    query(short_url)   -> Result('<scheme>://<long url>')
    count(url)         -> Result(<queries>)
    deactivate(url)    -> Result()
    info(url)          -> Result({'long_url', 'short_url', 'count', 'is_active'})

Every operation is a single coroutine which suspends only on DAO calls and
never raises past the engine: failures are returned as Result.failure with one
of the codes URL_SYNTAX, DOMAIN, NOT_FOUND or DATA_STORE.

Associations are scheme-agnostic: the scheme of a returned URL is always the
scheme of the submitted URL.

Example:
    >>> engine = ShortenerEngine(AssociationMemoryDAO(), 'short.ly')
    >>> short = (await engine.add('http://example.com/page')).value
    >>> short.startswith('http://short.ly/')
    True
    >>> (await engine.query(short)).value
    'http://example.com/page'
    >>> (await engine.count('http://example.com/page')).value
    1
"""

import logging

from urlshortener.models import AssociationModel, ParsedUrlModel
from urlshortener.dao.base import AssociationBaseDAO
from urlshortener.dao.exceptions import AssociationAlreadyExistsError, DataStoreError
from urlshortener.exceptions import BadShortenerBaseError, DomainError, NotFoundError
from urlshortener.constants import Scheme, Token
from urlshortener.types import AssociationInfo
from urlshortener.utils import generate_token, parse_url, validate_base, structured_result


logger = logging.getLogger(__name__)


class ShortenerEngine:
    """Shorten long URLs and resolve short URLs

    Attributes:
        dao (AssociationBaseDAO):
            Store owning every association. The engine keeps no copies.
        shortener_base (str):
            host[:port] used on the short side, e.g. 'short.ly'.
        shortener_domain (str):
            Host part of shortener_base, compared against URL domains.
        salt (str):
            Salt for short token generation.
        max_insert_retries (int):
            Fresh tokens tried when an insert collides on the short URL.
    """

    def __init__(
        self,
        dao: AssociationBaseDAO,
        shortener_base: str,
        salt: str = Token.DEFAULT_SALT,
        max_insert_retries: int = Token.MAX_INSERT_RETRIES,
    ):
        shortener_base = shortener_base.lower()
        if not validate_base(shortener_base):
            raise BadShortenerBaseError(f'shortener base {shortener_base!r} is invalid')

        self.dao = dao
        self.shortener_base = shortener_base
        self.shortener_domain = shortener_base.partition(':')[0]
        self.salt = salt
        self.max_insert_retries = max_insert_retries

    @staticmethod
    def _parse(url: str) -> ParsedUrlModel:
        return parse_url(url, Scheme.SHORTENER)

    async def _require(self, parsed: ParsedUrlModel) -> AssociationModel:
        association = await self.dao.find(parsed.base_rest)
        if association is None:
            raise NotFoundError(f'{parsed.url} not found')
        return association

    async def _reactivate(self, association: AssociationModel) -> AssociationModel:
        if not association.active:
            await self.dao.set_active(association.long_url, True)
            logger.info('Reactivated association.', extra={'longUrl': association.long_url, 'shortUrl': association.short_url})
        return association

    async def _next_short_url(self) -> str:
        counter = await self.dao.count(increment=True)
        return f'{self.shortener_base}/{generate_token(counter, salt=self.salt)}'

    async def _create(self, long_url: str) -> AssociationModel:
        """Insert a new association for long_url, resolving DUPLICATE_KEY races

        A duplicate means either another add() inserted the same long URL
        since our lookup (return that record), or the token is taken (retry
        with the next token).

        Raises:
            DataStoreError:
                If every retry collided on the short URL.
        """
        for attempt in range(self.max_insert_retries + 1):
            association = AssociationModel(long_url=long_url, short_url=await self._next_short_url())
            try:
                await self.dao.insert(association)
            except AssociationAlreadyExistsError:
                existing = await self.dao.find(long_url)
                if existing is not None:
                    logger.info('Concurrent add detected; reusing association.', extra={'longUrl': long_url})
                    return await self._reactivate(existing)
                logger.warning(
                    'Short URL collision on insert; retrying with a fresh token.',
                    extra={'shortUrl': association.short_url, 'attempt': attempt},
                )
            else:
                logger.info('Created association.', extra={'longUrl': long_url, 'shortUrl': association.short_url})
                return association

        raise DataStoreError(f'no free short URL for {long_url} after {self.max_insert_retries + 1} attempts')

    @structured_result
    async def add(self, long_url: str) -> str:
        """Shorten long_url

        Re-adding a known long URL returns the same short URL and reactivates
        the association.

        Errors:
            URL_SYNTAX: long_url is malformed or not http(s).
            DOMAIN:     long_url's domain is the shortener domain.
        """
        parsed = self._parse(long_url)
        if parsed.domain == self.shortener_domain:
            raise DomainError(f'domain {parsed.domain} equal to {self.shortener_domain}')

        association = await self.dao.find(parsed.base_rest)
        if association is not None:
            association = await self._reactivate(association)
        else:
            association = await self._create(parsed.base_rest)

        return f'{parsed.scheme}://{association.short_url}'

    @structured_result
    async def query(self, short_url: str) -> str:
        """Resolve an active short URL to its long URL, counting the lookup

        Errors:
            URL_SYNTAX: short_url is malformed or not http(s).
            DOMAIN:     short_url's domain is not the shortener domain.
            NOT_FOUND:  short_url is unknown or deactivated.
        """
        parsed = self._parse(short_url)
        if parsed.domain != self.shortener_domain:
            raise DomainError(f'domain of url {parsed.domain} not equal to {self.shortener_domain}')

        association = await self.dao.find(parsed.base_rest)
        if association is None or not association.active:
            raise NotFoundError(f'{parsed.url} not found')

        await self.dao.increment_queries(association.long_url)
        return f'{parsed.scheme}://{association.long_url}'

    @structured_result
    async def count(self, url: str) -> int:
        """Return how many times the association of url (long or short) was queried

        Works for deactivated associations too.

        Errors:
            URL_SYNTAX: url is malformed or not http(s).
            NOT_FOUND:  url was never registered.
        """
        association = await self._require(self._parse(url))
        return association.queries

    @structured_result
    async def deactivate(self, url: str) -> None:
        """Hide the association of url (long or short) from query()

        Deactivating an inactive association is not an error.

        Errors:
            URL_SYNTAX: url is malformed or not http(s).
            NOT_FOUND:  url was never registered.
        """
        association = await self._require(self._parse(url))
        await self.dao.set_active(association.long_url, False)
        logger.info('Deactivated association.', extra={'longUrl': association.long_url, 'shortUrl': association.short_url})

    @structured_result
    async def info(self, url: str) -> AssociationInfo:
        """Describe the association of url (long or short), active or not

        Errors:
            URL_SYNTAX: url is malformed or not http(s).
            NOT_FOUND:  url was never registered.
        """
        parsed = self._parse(url)
        association = await self._require(parsed)
        return {
            'long_url': f'{parsed.scheme}://{association.long_url}',
            'short_url': f'{parsed.scheme}://{association.short_url}',
            'count': association.queries,
            'is_active': association.active,
        }

    @structured_result
    async def clear(self) -> None:
        """Remove every association from the store."""
        await self.dao.clear()
        logger.info('Cleared all associations.')

    async def close(self) -> None:
        """Release the store's resources."""
        await self.dao.close()
