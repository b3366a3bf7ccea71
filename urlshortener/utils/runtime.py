"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if the shortener runs in the local environment, False otherwise.

Example:
    >>> from urlshortener.utils.runtime import running_locally
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
    >>> os.environ['APP_ENV'] = 'dev'
    >>> running_locally()
    False
"""

import os

from urlshortener.constants import ENV


def running_locally() -> bool:
    """Return True if APP_ENV is unset or 'local', False otherwise."""
    return os.getenv(ENV.App.APP_ENV, 'local').lower() == 'local'
