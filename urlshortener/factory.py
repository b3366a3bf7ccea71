"""Shortener construction

Validates the store URL and the shortener base, builds the matching DAO and
returns a ready ShortenerEngine.

Store URLs:
    memory://<host>                          in-process AssociationMemoryDAO
    redis://[user:pass@]host[:port][/db]     AssociationRedisDAO
    rediss://...                             AssociationRedisDAO over TLS

Functions:
    make_shortener(store_url, shortener_base, **kwargs) -> Result
        Build an engine; failures are BAD_STORE_URL, BAD_SHORTENER_BASE or DATA_STORE.
    make_shortener_from_config(component='shortener', configure_logging=False) -> Result
        Same, with store_url and shortener_base read through load_config();
        additionally BAD_CONFIG or MISSING_ENVIRONMENT_VARIABLE.

Example:
    >>> result = await make_shortener('memory://localhost', 'short.ly')
    >>> engine = result.value
    >>> (await engine.add('https://example.com')).ok
    True
    >>> (await make_shortener('mongodb://localhost', 'short.ly')).error.code
    'BAD_STORE_URL'
"""

import logging

from urlshortener.constants import Scheme
from urlshortener.engine import ShortenerEngine
from urlshortener.dao import AssociationMemoryDAO, AssociationRedisDAO
from urlshortener.models import Result
from urlshortener.dao.exceptions import DAOError
from urlshortener.exceptions import BadConfigError, BadStoreUrlError, ShortenerError, UrlSyntaxError
from urlshortener.utils import parse_url, load_config, app_prefix, token_salt, structured_result, initialize_logging


logger = logging.getLogger(__name__)


REQUIRED_SETTINGS = ('store_url', 'shortener_base')


def _missing_settings(section) -> list[str]:
    """Return the REQUIRED_SETTINGS absent from section or not given as non-empty strings."""
    if not isinstance(section, dict):
        return list(REQUIRED_SETTINGS)
    return [key for key in REQUIRED_SETTINGS if not isinstance(section.get(key), str) or not section[key]]


def _strip_credentials(store_url: str) -> str:
    """Drop the "user:password@" part of a store URL so its base can be validated."""
    scheme, sep, rest = store_url.partition('://')
    netloc, slash, path = rest.partition('/')
    return f'{scheme}{sep}{netloc.rpartition("@")[2]}{slash}{path}'


@structured_result
async def make_shortener(store_url: str, shortener_base: str, **kwargs) -> ShortenerEngine:
    """Build a ShortenerEngine over the store designated by store_url

    Args:
        store_url (str):
            memory://, redis:// or rediss:// URL of the association store.
        shortener_base (str):
            host[:port] used for short URLs, e.g. 'short.ly'.
        **kwargs:
            Forwarded to ShortenerEngine (salt, max_insert_retries).

    Returns:
        ShortenerEngine (wrapped in a Result by structured_result).

    Errors:
        BAD_STORE_URL:      store_url is malformed or uses another scheme.
        BAD_SHORTENER_BASE: shortener_base is not a valid host[:port].
        DATA_STORE:         Redis did not answer the healthcheck.

    The store is closed again when the engine can't be built.
    """
    try:
        parsed = parse_url(_strip_credentials(store_url), Scheme.STORE)
    except UrlSyntaxError as e:
        raise BadStoreUrlError(f'store url is invalid: {e}') from e

    if parsed.scheme == 'memory':
        dao = AssociationMemoryDAO()
    else:
        dao = AssociationRedisDAO(redis_url=store_url, prefix=app_prefix())

    kwargs.setdefault('salt', token_salt())
    try:
        engine = ShortenerEngine(dao, shortener_base, **kwargs)
        if parsed.scheme != 'memory':
            await dao.healthcheck()
    except (ShortenerError, DAOError):
        await dao.close()
        raise

    logger.info('Shortener ready.', extra={'store': parsed.scheme, 'shortenerBase': engine.shortener_base})
    return engine


@structured_result
async def make_shortener_from_config(component: str = 'shortener', configure_logging: bool = False) -> Result:
    """Build a ShortenerEngine from the component's configuration section

    Args:
        component (str):
            Name of the configuration section, e.g. 'shortener'.
        configure_logging (bool):
            Call initialize_logging() first. Meant for process start-up.

    Errors:
        MISSING_ENVIRONMENT_VARIABLE: the configuration source is not set up.
        BAD_CONFIG: the configuration can't be fetched, or store_url or
                    shortener_base is missing from the section.
        Otherwise the same as make_shortener().
    """
    if configure_logging:
        initialize_logging()

    config = load_config(component)
    missing = _missing_settings(config)
    if missing:
        raise BadConfigError(f'{component!r} configuration lacks {", ".join(missing)}')

    return await make_shortener(config['store_url'], config['shortener_base'])
