from snaplink.utils.config import app_env, app_name, app_prefix, load_config
from snaplink.utils.helpers import base_url, get_short_url, parse_datetime, require_environment, guarantee_500_response
from snaplink.utils.shortener import generate_shortcode
from snaplink.utils.validators import normalize_url, is_valid_url
from snaplink.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'normalize_url',
    'is_valid_url',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'base_url',
    'get_short_url',
    'parse_datetime',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
