import string
from enum import StrEnum


# Base62 alphabet: 26 lowercase + 26 uppercase + 10 digits
BASE62_ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits


class ShortcodeDefaults:
    """Default shortcode allocation parameters."""

    LENGTH = 6  # 62**6 ~ 56.8 billion codes
    ALPHABET = BASE62_ALPHABET
    MAX_ATTEMPTS = 10  # Random draws per shorten request before giving up


class Limits:
    """Request limits for listing endpoints."""

    RECENT_DEFAULT = 10
    RECENT_MAX = 100


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
