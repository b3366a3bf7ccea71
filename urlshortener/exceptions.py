class ShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'SHORTENER_ERROR'


class UrlSyntaxError(ShortenerError):
    """Raised when a URL is malformed or uses a disallowed scheme."""

    error_code = 'URL_SYNTAX'


class DomainError(ShortenerError):
    """Raised when a URL's domain collides with (or differs from) the shortener domain."""

    error_code = 'DOMAIN'


class NotFoundError(ShortenerError):
    """Raised when no association is registered for a URL."""

    error_code = 'NOT_FOUND'


class ConfigurationError(ShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'CONFIGURATION_ERROR'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'MISSING_ENVIRONMENT_VARIABLE'


class BadStoreUrlError(ConfigurationError):
    """Raised when the association store URL is invalid."""

    error_code = 'BAD_STORE_URL'


class BadShortenerBaseError(ConfigurationError):
    """Raised when the shortener base (host[:port]) is invalid."""

    error_code = 'BAD_SHORTENER_BASE'


class BadConfigError(ConfigurationError):
    """Raised when the configuration document cannot be fetched or lacks required settings."""

    error_code = 'BAD_CONFIG'
