from unittest.mock import MagicMock, patch

import pytest
import redis

from snaplink.dao.exceptions import DataStoreError
from snaplink.dao.redis.mixins import RedisClientMixin


@pytest.fixture
def unreachable_client() -> MagicMock:
    client = MagicMock(spec=redis.Redis)
    client.connection_pool = MagicMock(connection_kwargs={'host': '203.0.113.1', 'port': 18000, 'db': 5})
    return client


def test_client_built_from_lambda_config():
    """AppConfig 'redis' sections arrive as redis_* keyword arguments, possibly stringly typed."""
    with patch('snaplink.dao.redis.mixins.redis.Redis', autospec=True) as redis_class:
        mixin = RedisClientMixin(
            redis_host='redis.internal',
            redis_port='6380',
            redis_db='2',
            redis_username='snaplink',
            redis_password='secret',
            redis_ssl=True,
            redis_socket_timeout=0.5,
            prefix='snaplink:prod',
        )

    redis_class.assert_called_once_with(
        host='redis.internal',
        port=6380,
        db=2,
        username='snaplink',
        password='secret',
        ssl=True,
        socket_timeout=0.5,
        decode_responses=True,
    )
    assert mixin.redis is redis_class.return_value
    mixin.redis.ping.assert_called_once()


def test_given_client_is_used_as_is(redis_client):
    with patch('snaplink.dao.redis.mixins.redis.Redis', autospec=True) as redis_class:
        mixin = RedisClientMixin(redis_host='ignored', redis_client=redis_client, prefix='snaplink:prod')

    redis_class.assert_not_called()
    assert mixin.redis is redis_client
    assert mixin.keys.link_key('aB3xY9') == 'snaplink:prod:links:code:aB3xY9'


@pytest.mark.parametrize(
    'error',
    [
        redis.exceptions.ConnectionError('Connection refused'),
        redis.exceptions.TimeoutError('Timeout reading from socket'),
    ],
)
def test_unreachable_redis_fails_construction(unreachable_client, error):
    unreachable_client.ping.side_effect = error

    with pytest.raises(DataStoreError, match="Can't connect to Redis at 203.0.113.1:18000/5. Check the lambda's 'redis' configuration.") as exc_info:
        RedisClientMixin(redis_client=unreachable_client)
    assert exc_info.value.__cause__ is error


def test_command_errors_propagate(unreachable_client):
    unreachable_client.ping.side_effect = redis.exceptions.ResponseError('ERR unknown command')

    with pytest.raises(redis.exceptions.ResponseError):
        RedisClientMixin(redis_client=unreachable_client)
