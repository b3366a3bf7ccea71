"""Free-text URL shortening

Replaces every http(s) URL embedded in a text with its short URL.

Example:
    >>> translator = TextTranslator(engine)
    >>> short = (await engine.add('http://example.com')).value
    >>> (await translator.translate('visit http://example.com now')).value == f'visit {short} now'
    True
    >>> (await translator.translate('see <http://example.com>', is_html=True)).value == f'see &lt;<a href="{short}">{short}</a>&gt;'
    True
"""

import re
import html
import logging

from urlshortener.engine import ShortenerEngine
from urlshortener.utils import structured_result


logger = logging.getLogger(__name__)


# http:// or https:// followed by the longest run of URL-safe characters
URL_PATTERN = re.compile(r'https?://[\w\-/.?=&%#@+~]+', re.IGNORECASE | re.ASCII)


def html_escape(text: str) -> str:
    """Escape &, <, > and " (single quotes are left alone)."""
    return html.escape(text, quote=False).replace('"', '&quot;')


def html_anchor(url: str) -> str:
    return f'<a href="{url}">{url}</a>'


class TextTranslator:
    """Shorten the URLs found in free text through a ShortenerEngine

    URLs the engine rejects (bad syntax, shortener's own domain) are left as
    they were. Matches are processed left to right and never overlap.
    """

    def __init__(self, engine: ShortenerEngine):
        self.engine = engine

    @structured_result
    async def translate(self, text: str, is_html: bool = False) -> str:
        escape = html_escape if is_html else str
        fragments = []
        last_end = 0

        for match in URL_PATTERN.finditer(text):
            fragments.append(escape(text[last_end : match.start()]))
            last_end = match.end()

            url = match.group()
            result = await self.engine.add(url)
            if not result.ok:
                logger.debug('Leaving URL untranslated.', extra={'url': url, 'errorCode': result.error.code})
                fragments.append(url)
            elif is_html:
                fragments.append(html_anchor(result.value))
            else:
                fragments.append(result.value)

        fragments.append(escape(text[last_end:]))
        return ''.join(fragments)
