class SnapLinkError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:snaplink_error'


class ShortenerError(SnapLinkError):
    """Base exception for short URL allocation and resolution errors."""

    error_code = 'shortener:shortener_error'


class InvalidUrlError(ShortenerError):
    """Raised when a target URL fails syntactic validation."""

    error_code = 'shortener:invalid_url'


class CodeSpaceExhaustedError(ShortenerError):
    """Raised when no free shortcode was found within the retry bound.

    Implies either a (nearly) full shortcode namespace or a broken random source.
    """

    error_code = 'shortener:code_space_exhausted'


class ShortURLNotFoundError(ShortenerError):
    """Raised when a shortcode is unknown or its record has expired."""

    error_code = 'shortener:short_url_not_found'


class ConfigurationError(SnapLinkError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
