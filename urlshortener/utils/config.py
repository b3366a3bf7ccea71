"""Utility functions for application configuration management.

This module provides a standardized interface to access configuration data
stored in **AWS AppConfig**. Each environment (`APP_ENV`) has a dedicated
AppConfig *Environment* within the shared AppConfig *Application* identified
by `APP_NAME`. Configuration data is stored as a JSON document under a
configuration profile and deployed to the corresponding environment.

The configuration JSON follows this structure:

    {
        "build": 12,
        "configs": {
            "shortener": {
                "shortener_base": "short.ly",
                "store_url": "redis://redis.internal:6379/0"
            }
        }
    }

Each component loads its own section (e.g., `"shortener"`) from this document.

When running locally (`APP_ENV` unset or `local`), AppConfig is bypassed and
the section is built from the `SHORTENER_BASE` and `STORE_URL` environment
variables instead.

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    token_salt() -> str
        Return the short token salt (`SHORTENER_SALT`).

    load_config(component: str) -> dict
        Load configuration for a given component from AWS AppConfig (or the
        local environment) and return it as a Python dictionary.

Example:
    >>> from urlshortener.utils.config import load_config
    >>> config = load_config('shortener')
    >>> config['shortener_base']
    'short.ly'
"""

import os
import json
import logging
import functools
from collections.abc import Callable

import boto3
import botocore.exceptions

from urlshortener.constants import ENV, Token
from urlshortener.types import AppConfig, ComponentConfig
from urlshortener.exceptions import BadConfigError
from urlshortener.utils.helpers import require_environment
from urlshortener.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'"""
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'urlshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'urlshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def token_salt() -> str:
    return os.environ.get(ENV.Shortener.SALT) or Token.DEFAULT_SALT


def _load_local_config(func: Callable[[str], ComponentConfig]) -> Callable[[str], ComponentConfig]:
    """Decorator: build the component config from environment variables when running locally

    Behavior:
        - If the application is running locally, return
          {'shortener_base': $SHORTENER_BASE, 'store_url': $STORE_URL}.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).
    """

    @functools.wraps(func)
    def wrapper(component: str, *args, **kwargs) -> ComponentConfig:
        if not running_locally():
            return func(component, *args, **kwargs)

        logger.debug('Loading config from local environment.', extra={'component': component})
        return _local_config()

    return wrapper


@require_environment(ENV.Shortener.BASE, ENV.Shortener.STORE_URL)
def _local_config() -> ComponentConfig:
    return {
        'shortener_base': os.environ[ENV.Shortener.BASE],
        'store_url': os.environ[ENV.Shortener.STORE_URL],
    }


@_load_local_config
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(component: str) -> ComponentConfig:
    """Load configuration for a given component from AWS AppConfig

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Args:
        component (str):
            Name of the config section (e.g., "shortener").

    Returns:
        dict: The component's config section as a Python dictionary.

    Raises:
        MissingEnvironmentVariableError:
            If a required environment variable is missing.
        BadConfigError:
            If AppConfig cannot be reached, the document is not valid JSON,
            or it has no section for the component.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'component': component})

    try:
        appconfig = boto3.client('appconfigdata')

        # Start an AppConfig data session
        session_token = appconfig.start_configuration_session(
            ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
            EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
            ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
        )['InitialConfigurationToken']

        # Fetch the configuration
        response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
        content = response['Configuration'].read()
    except (botocore.exceptions.BotoCoreError, botocore.exceptions.ClientError) as e:
        raise BadConfigError(f"Can't fetch AppConfig configuration: {e}") from e

    try:
        config: AppConfig = json.loads(content.decode('utf-8'))
        data = config['configs'][component]
    except (ValueError, KeyError, TypeError) as e:
        raise BadConfigError(f'AppConfig document has no valid {component!r} section.') from e

    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'component': component, 'build': config.get('build')})
    return data
