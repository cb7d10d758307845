"""URL validation utilities

Functions:
    normalize_url(url) -> str
        Strip the URL and prefix 'http://' when no http(s) scheme is given.
        Raises InvalidUrlError for other explicit schemes (ftp://, ...) and
        when the result isn't a well-formed URL.
    is_valid_url(url) -> bool
        Boolean flavour of normalize_url().

Example:
    >>> normalize_url('  example.com/path ')
    'http://example.com/path'
    >>> is_valid_url('not a url')
    False
"""

import re
import ipaddress
from urllib.parse import urlsplit

from snaplink.exceptions import InvalidUrlError


DEFAULT_SCHEME = 'http://'
ALLOWED_SCHEMES = ('http://', 'https://')

MAX_URL_LENGTH = 2048

# RFC 1123 hostname label: alphanumerics and inner hyphens, up to 63 characters
HOSTNAME_LABEL = re.compile(r'^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$')
WHITESPACE = re.compile(r'\s')
# Any explicit "<scheme>://" prefix (RFC 3986 scheme syntax)
EXPLICIT_SCHEME = re.compile(r'^[A-Za-z][A-Za-z0-9+.-]*://')


def _is_valid_host(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        pass
    else:
        return True

    labels = host.rstrip('.').split('.')
    return all(HOSTNAME_LABEL.match(label) for label in labels)


def normalize_url(url: str | None) -> str:
    """Validate a target URL and return its normalized (stored) form.

    Args:
        url (str | None): user supplied URL, scheme optional

    Returns:
        str: stripped URL with an explicit http(s) scheme

    Raises:
        InvalidUrlError: if the URL is missing, blank or malformed
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidUrlError('URL must be a non-empty string.')

    candidate = url.strip()
    if not candidate.lower().startswith(ALLOWED_SCHEMES):
        if EXPLICIT_SCHEME.match(candidate):
            raise InvalidUrlError(f'Only http and https URLs can be shortened: {url!r}')
        candidate = DEFAULT_SCHEME + candidate

    if len(candidate) > MAX_URL_LENGTH:
        raise InvalidUrlError(f'URL is too long (max {MAX_URL_LENGTH} characters).')
    if WHITESPACE.search(candidate):
        raise InvalidUrlError(f'URL must not contain whitespace: {url!r}')

    try:
        components = urlsplit(candidate)
        host = components.hostname
        components.port  # noqa: B018 raises ValueError on non-numeric/out of range ports
    except ValueError as e:
        raise InvalidUrlError(f'Malformed URL: {url!r}') from e

    if not components.netloc or not host or not _is_valid_host(host):
        raise InvalidUrlError(f'URL must have a valid host: {url!r}')
    if components.netloc.endswith(':'):
        raise InvalidUrlError(f'URL has an empty port: {url!r}')

    return candidate


def is_valid_url(url: str | None) -> bool:
    try:
        normalize_url(url)
    except InvalidUrlError:
        return False
    return True
