"""Unit tests for URL parsing and base validation in url_parser.py

Test coverage includes:

1. Successful parsing
   - Scheme, domain, base, base_rest and path are extracted and normalized.

2. Syntax errors
   - Missing separator, empty scheme, empty rest, '/' after '://'.
   - Disallowed schemes.
   - Invalid bases.

3. Base validation
   - Label rules, port range, total length.

4. Purity
   - Same input yields equal output.
"""

import pytest

from urlshortener.constants import Scheme
from urlshortener.exceptions import UrlSyntaxError
from urlshortener.models import ParsedUrlModel
from urlshortener.utils.url_parser import parse_url, validate_base


# -------------------------------
# 1. Successful parsing
# -------------------------------


def test_parse_url_with_path():
    """Ensure all parts are extracted from a URL with a path."""
    parsed = parse_url('http://example.com/page', Scheme.SHORTENER)
    assert parsed == ParsedUrlModel(
        scheme='http',
        domain='example.com',
        base='example.com',
        base_rest='example.com/page',
        path='/page',
    )
    assert parsed.url == 'http://example.com/page'


def test_parse_url_without_path():
    """Ensure a URL without a path has no path and base_rest equals base."""
    parsed = parse_url('https://example.com', Scheme.SHORTENER)
    assert parsed.path is None
    assert parsed.base == 'example.com'
    assert parsed.base_rest == 'example.com'


def test_parse_url_with_port():
    """Ensure the port is part of base but not of domain."""
    parsed = parse_url('https://example.com:8080/a', Scheme.SHORTENER)
    assert parsed.domain == 'example.com'
    assert parsed.base == 'example.com:8080'
    assert parsed.base_rest == 'example.com:8080/a'


def test_parse_url_normalizes_case():
    """Ensure scheme, base and base_rest are lower-cased while path keeps its casing."""
    parsed = parse_url('HTTPS://Example.COM/Some/Page?Q=Value', Scheme.SHORTENER)
    assert parsed.scheme == 'https'
    assert parsed.domain == 'example.com'
    assert parsed.base_rest == 'example.com/some/page?q=value'
    assert parsed.path == '/Some/Page?Q=Value'


def test_parse_store_url():
    """Ensure store schemes are accepted with the store scheme set."""
    parsed = parse_url('redis://localhost:6379/0', Scheme.STORE)
    assert parsed.scheme == 'redis'
    assert parsed.base == 'localhost:6379'


# -------------------------------
# 2. Syntax errors
# -------------------------------


@pytest.mark.parametrize(
    'url',
    [
        'not-a-url',
        'example.com/page',
        '://example.com',
        'http://',
        'http:///example.com',
        'http://-example.com/',
        'http://example-.com/',
        'http://exa_mple.com/',
        'http://example..com/',
        'http://example.com:0/',
        'http://example.com:65536/',
        'http://example.com:80ab/',
        'http://example.com:/',
        'http://:80/',
        'http://user@example.com/',
    ],
)
def test_parse_url_rejects_bad_syntax(url):
    """Ensure malformed URLs raise UrlSyntaxError with the URL_SYNTAX code."""
    with pytest.raises(UrlSyntaxError) as exc_info:
        parse_url(url, Scheme.SHORTENER)
    assert exc_info.value.error_code == 'URL_SYNTAX'


@pytest.mark.parametrize(
    'url, schemes',
    [
        ('ftp://example.com/file', Scheme.SHORTENER),
        ('mongodb://localhost:27017', Scheme.STORE),
        ('http://localhost:6379', Scheme.STORE),
    ],
)
def test_parse_url_rejects_disallowed_scheme(url, schemes):
    """Ensure schemes outside the allowed set raise UrlSyntaxError."""
    with pytest.raises(UrlSyntaxError, match='scheme'):
        parse_url(url, schemes)


# -------------------------------
# 3. Base validation
# -------------------------------


@pytest.mark.parametrize(
    'base, expected',
    [
        ('example.com', True),
        ('localhost', True),
        ('127.0.0.1:8080', True),
        ('a-b.example.com', True),
        ('example.com:1', True),
        ('example.com:65535', True),
        ('-a.com', False),
        ('a-.com', False),
        ('a.-b.com', False),
        ('', False),
        ('a b.com', False),
        ('example.com:65536', False),
        ('example.com:-1', False),
        ('a' * 253, True),
        ('a' * 254, False),
    ],
)
def test_validate_base(base, expected):
    """Ensure validate_base() enforces label, port and length rules."""
    assert validate_base(base) is expected


# -------------------------------
# 4. Purity
# -------------------------------


def test_parse_url_is_deterministic():
    """Ensure parsing the same URL twice yields equal results."""
    url = 'https://Example.com:443/x/Y'
    assert parse_url(url, Scheme.SHORTENER) == parse_url(url, Scheme.SHORTENER)
