"""Shared Redis client wiring for Redis-backed DAOs

RedisClientMixin turns the AppConfig `redis` section of a lambda (host, port,
db, credentials, TLS, socket timeout) into a client, fixes the key namespace
and fails fast when Redis is unreachable, so a misconfigured lambda errors at
construction time rather than on its first request.

Responses are always decoded to `str`: hash fields are parsed back into
models and Lua script arguments are compared as text.

Example:
    >>> class UrlRecordRedisDAO(RedisClientMixin, UrlRecordBaseDAO):
    ...     pass
    ...
    >>> dao = UrlRecordRedisDAO(redis_host='redis.internal', redis_ssl=True, prefix='snaplink:prod')
    >>> dao.keys.link_key('aB3xY9')
    'snaplink:prod:links:code:aB3xY9'
"""

import redis

from snaplink.dao.exceptions import DataStoreError
from snaplink.dao.redis.helpers import connection_label
from snaplink.dao.redis.redis_key_schema import RedisKeySchema


class RedisClientMixin:
    """Inject `self.redis` (client) and `self.keys` (RedisKeySchema) into a DAO.

    Args:
        redis_host, redis_port, redis_db:
            Redis endpoint. Ports and db indexes given as strings (e.g. from
            environment-driven config) are converted to int.
        redis_username, redis_password:
            ACL credentials, if any.
        redis_ssl (bool):
            Connect over TLS (ElastiCache in-transit encryption).
        redis_socket_timeout (float, optional):
            Seconds before a command times out; keeps lambdas from hanging on a
            stalled connection.
        redis_client (redis.Redis, optional):
            Ready-made client; connection arguments are ignored when given.
        prefix (str, optional):
            Key namespace, e.g. 'snaplink:prod'.

    Raises:
        DataStoreError: if Redis doesn't answer the initial PING.
    """

    def __init__(
        self,
        redis_host: str = 'localhost',
        redis_port: int | str = 6379,
        redis_db: int | str = 0,
        redis_username: str | None = None,
        redis_password: str | None = None,
        redis_ssl: bool = False,
        redis_socket_timeout: float | None = None,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ):
        self.keys = RedisKeySchema(prefix=prefix)
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                username=redis_username,
                password=redis_password,
                ssl=redis_ssl,
                socket_timeout=redis_socket_timeout,
                decode_responses=True,
            )
        self.redis = redis_client
        self._healthcheck()

    def _healthcheck(self) -> None:
        try:
            self.redis.ping()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise DataStoreError(
                f"Can't connect to Redis at {connection_label(self.redis)}. Check the lambda's 'redis' configuration."
            ) from e
