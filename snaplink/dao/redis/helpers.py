import functools
import redis
from datetime import datetime
from typing import TypeVar, Any
from collections.abc import Callable

from snaplink.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_redis_connection_error[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle connection errors

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.ConnectionError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on connectivity issues with Redis.

    Example:
        >>> @handle_redis_connection_error
        ... def exists(self, code):
        ...     return self.redis.exists(code)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise DataStoreError(f"Can't connect to Redis at {connection_label(self.redis)}.") from e

    return wrapper


def encode_datetime(value: datetime | None) -> str:
    """Serialize an optional datetime into a Redis hash field value ('' for None)."""
    return '' if value is None else value.isoformat()


def decode_datetime(value: str | None) -> datetime | None:
    """Deserialize a Redis hash field value written by encode_datetime()."""
    return datetime.fromisoformat(value) if value else None


def connection_label(client: redis.Redis) -> str:
    """Describe a client's endpoint as 'host:port/db' for error messages."""
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"
