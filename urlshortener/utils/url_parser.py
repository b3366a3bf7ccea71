"""URL parsing and validation

Splits a raw URL into the parts the shortener works with and validates the
host[:port] base. Parsing is pure: the same input always yields the same
ParsedUrlModel (or the same UrlSyntaxError).

Functions:
    parse_url(url: str, allowed_schemes: Iterable[str]) -> ParsedUrlModel
        Parse and validate a URL, raising UrlSyntaxError when malformed.
    validate_base(base: str) -> bool
        Check a host[:port] string.

Example:
    >>> from urlshortener.utils.url_parser import parse_url
    >>> parsed = parse_url('HTTPS://Example.com:8080/Some/Page', {'http', 'https'})
    >>> parsed.scheme, parsed.domain, parsed.base
    ('https', 'example.com', 'example.com:8080')
    >>> parsed.base_rest
    'example.com:8080/some/page'
    >>> parsed.path
    '/Some/Page'
"""

import re
from collections.abc import Iterable

from urlshortener.models import ParsedUrlModel
from urlshortener.exceptions import UrlSyntaxError
from urlshortener.constants import MAX_BASE_LENGTH, MAX_PORT


SCHEME_SEPARATOR = '://'
LABEL_PATTERN = re.compile(r'[a-zA-Z0-9.-]+')
PORT_PATTERN = re.compile(r'[0-9]+')


def validate_base(base: str) -> bool:
    """Validate a host[:port] base

    Rules:
        - every '.'-separated host label matches [a-zA-Z0-9.-]+ and neither
          starts nor ends with '-';
        - an optional port is all digits and within [1, 65535];
        - the whole base is shorter than 254 characters.

    Args:
        base (str): host with an optional ':<port>' suffix.

    Returns:
        bool: True if the base is well formed, False otherwise.

    Example:
        >>> validate_base('short.ly:8080')
        True
        >>> validate_base('-bad.com')
        False
        >>> validate_base('example.com:0')
        False
    """
    host, sep, port = base.partition(':')
    if sep:
        if not PORT_PATTERN.fullmatch(port) or not 1 <= int(port) <= MAX_PORT:
            return False

    for label in host.split('.'):
        if not LABEL_PATTERN.fullmatch(label) or label.startswith('-') or label.endswith('-'):
            return False

    return len(base) < MAX_BASE_LENGTH


def parse_url(url: str, allowed_schemes: Iterable[str]) -> ParsedUrlModel:
    """Parse a URL into scheme, domain, base, base_rest and path

    Args:
        url (str):
            Raw URL, e.g. 'http://example.com/page'.
        allowed_schemes (Iterable[str]):
            Lower-case schemes the URL may use, e.g. {'http', 'https'}.

    Returns:
        ParsedUrlModel: the parsed URL parts.

    Raises:
        UrlSyntaxError:
            If there is no '://' separator or no scheme before it, nothing
            follows the separator, the separator is followed by '/', the scheme
            is not allowed, or the base is invalid.
    """
    scheme, sep, rest = url.partition(SCHEME_SEPARATOR)
    if not sep or not scheme or not rest or rest.startswith('/'):
        raise UrlSyntaxError(f'bad url {url}')

    scheme = scheme.lower()
    if scheme not in allowed_schemes:
        raise UrlSyntaxError(f'bad url {url}: scheme {scheme!r} not one of {sorted(allowed_schemes)}')

    slash = rest.find('/')
    if slash == -1:
        base, path = rest, None
    else:
        base, path = rest[:slash], rest[slash:]

    base = base.lower()
    if not validate_base(base):
        raise UrlSyntaxError(f'bad url {url}: invalid base {base!r}')

    return ParsedUrlModel(
        scheme=scheme,
        domain=base.partition(':')[0],
        base=base,
        base_rest=rest.lower(),
        path=path,
    )
