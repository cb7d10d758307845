import functools
from collections.abc import Callable

import xxhash


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for storing URL records.

    Records live under "links:code:<code>" and indexes under "links:idx:...", so no
    shortcode (user input on lookups) can ever address an index key.

    An optional prefix can be provided to namespace all generated keys.
    It is highly encouraged to set a custom prefix for each app and environment,
    e.g. "snaplink:prod" or "snaplink:dev".
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def link_key(self, code: str) -> str:
        return f'links:code:{code}'

    @prefix_key
    def url_index_key(self, url: str) -> str:
        # Target URLs can be kilobytes long; index them by a fixed-size digest.
        # NOTE: digests may collide, readers must compare the stored URL.
        return f'links:idx:by-url:{xxhash.xxh64_hexdigest(url)}'

    @prefix_key
    def expiry_index_key(self) -> str:
        return 'links:idx:expiring'

    @prefix_key
    def created_index_key(self) -> str:
        return 'links:idx:created'
