"""URL shortener: map long URLs to short aliases and back.

Example:
    >>> from urlshortener import make_shortener, TextTranslator
    >>> engine = (await make_shortener('memory://localhost', 'short.ly')).value
    >>> (await engine.add('http://short.ly/abc')).to_dict()
    {'error': {'code': 'DOMAIN', 'message': 'DOMAIN: domain short.ly equal to short.ly'}}
"""

from urlshortener.engine import ShortenerEngine
from urlshortener.translator import TextTranslator
from urlshortener.factory import make_shortener, make_shortener_from_config
from urlshortener.models import AssociationModel, Result


__all__ = [
    'ShortenerEngine',
    'TextTranslator',
    'make_shortener',
    'make_shortener_from_config',
    'AssociationModel',
    'Result',
]
