from enum import StrEnum


class Scheme:
    """Accepted URL schemes."""

    SHORTENER = frozenset({'http', 'https'})
    STORE = frozenset({'redis', 'rediss', 'memory'})


class Token:
    """Short token generation parameters."""

    # Tokens are permutations over [0, 2**32), rendered in base 36 (at most 7 chars)
    MODULO_SPACE = 2**32
    MULTIPLIER = 1315423911  # must be odd (coprime with MODULO_SPACE)
    DEFAULT_SALT = 'default_salt'
    MAX_INSERT_RETRIES = 3


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'

    class Shortener(StrEnum):
        BASE = 'SHORTENER_BASE'
        STORE_URL = 'STORE_URL'
        SALT = 'SHORTENER_SALT'  # noqa: S105


# Maximum length (exclusive) of a host[:port] base
MAX_BASE_LENGTH = 254

# Highest valid TCP port
MAX_PORT = 65_535
