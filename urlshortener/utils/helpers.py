"""Helper utilities for the shortener engine and its configuration.

Functions:
    structured_result(method) -> Callable
        Decorator: turn a coroutine's return value or error into a Result
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present

Example:
    Typical usage on an engine operation:

        >>> class Engine:
        ...     @structured_result
        ...     async def count(self, url):
        ...         raise NotFoundError(f'{url} not found')
        ...
        >>> (await Engine().count('http://short.ly/abc')).to_dict()
        {'error': {'code': 'NOT_FOUND', 'message': 'http://short.ly/abc not found'}}
"""

import os
import logging
import functools
from collections.abc import Awaitable, Callable

from urlshortener.models import Result
from urlshortener.exceptions import ShortenerError, MissingEnvironmentVariableError
from urlshortener.dao.exceptions import DAOError


logger = logging.getLogger(__name__)


def structured_result(method: Callable[..., Awaitable]) -> Callable[..., Awaitable[Result]]:
    """Decorator: never let a domain or data store error escape an operation

    Behavior:
        - A returned value is wrapped as Result.success(value), unless it
          already is a Result.
        - ShortenerError subclasses become Result.failure(<error_code>, <message>).
        - DAOError subclasses (data store outages, exhausted retries) become
          Result.failure(<error_code>, <message>), logged with the traceback.

    Anything else (programming errors) propagates.

    Args:
        method (Callable[..., Awaitable]):
            Engine coroutine raising ShortenerError / DAOError on failure.

    Returns:
        Callable[..., Awaitable[Result]]:
            Coroutine function always resolving to a Result.
    """

    @functools.wraps(method)
    async def wrapper(*args, **kwargs) -> Result:
        try:
            value = await method(*args, **kwargs)
        except ShortenerError as e:
            logger.info(
                'Operation %s failed with %s.',
                method.__name__,
                e.error_code,
                extra={'operation': method.__name__, 'errorCode': e.error_code, 'reason': str(e)},
            )
            return Result.failure(e.error_code, f'{e.error_code}: {e}')
        except DAOError as e:
            logger.exception(
                'Operation %s failed on the data store.',
                method.__name__,
                extra={'operation': method.__name__, 'errorCode': e.error_code},
            )
            return Result.failure(e.error_code, f'{e.error_code}: {e}')
        else:
            return value if isinstance(value, Result) else Result.success(value)

    return wrapper


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator
