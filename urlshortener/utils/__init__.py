from urlshortener.utils.config import app_env, app_name, app_prefix, token_salt, load_config
from urlshortener.utils.helpers import require_environment, structured_result
from urlshortener.utils.shortener import generate_token, to_base36
from urlshortener.utils.url_parser import parse_url, validate_base
from urlshortener.utils.logging import initialize_logging


__all__ = [
    'generate_token',
    'to_base36',
    'parse_url',
    'validate_base',
    'app_env',
    'app_name',
    'app_prefix',
    'token_salt',
    'load_config',
    'require_environment',
    'structured_result',
    'initialize_logging',
]
