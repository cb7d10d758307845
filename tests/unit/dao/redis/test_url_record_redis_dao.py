"""Unit tests for the UrlRecordRedisDAO

Test coverage includes:

1. Initialization
   - Ensures Lua scripts are registered and Redis is health-checked.

2. Shortcode claims
   - Validates insert_if_absent() passes keys/args to the atomic claim script.
   - Confirms a taken shortcode yields False.

3. Lookups
   - Ensures find_by_code() / find_by_url() / recent() map Redis hashes to UrlRecordModel.
   - Ensures digest collisions and vanished records are filtered out.

4. Click counter
   - Ensures increment_click() goes through the guarded increment script.

5. Expired record sweeps
   - Ensures candidates come from the expiry index and deletions are counted.

6. Error handling
   - Confirms Redis connection errors raise DataStoreError.
   - Ensures invalid parameter types raise type errors.
"""

from datetime import datetime, timedelta, UTC
from unittest.mock import MagicMock, call

import pytest
import redis
import xxhash
from beartype.roar import BeartypeCallHintParamViolation

from snaplink.models import UrlRecordModel
from snaplink.dao.exceptions import DataStoreError
from snaplink.dao.redis import UrlRecordRedisDAO
from snaplink.dao.redis.url_record_redis_dao import INSERT_IF_ABSENT_LUA, INCREMENT_CLICK_LUA, DELETE_IF_EXPIRED_LUA


CREATED_AT = datetime(2026, 10, 19, 8, 30, tzinfo=UTC)
EXPIRES_AT = datetime(2026, 11, 19, 8, 30, tzinfo=UTC)


def url_index_key(url: str) -> str:
    return f'testapp:test:links:idx:by-url:{xxhash.xxh64_hexdigest(url)}'


def redis_row(url: str = 'https://example.com/test', expires_at: str = '', click_count: str = '0') -> dict[str, str]:
    return {
        'url': url,
        'created_at': CREATED_AT.isoformat(),
        'expires_at': expires_at,
        'click_count': click_count,
    }


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def dao(redis_client, app_prefix):
    """Create a UrlRecordRedisDAO with mocked Redis client and Lua scripts."""
    _dao = UrlRecordRedisDAO(redis_client=redis_client, prefix=app_prefix)
    _dao._insert_script = MagicMock(return_value=1)
    _dao._increment_script = MagicMock(return_value=1)
    _dao._delete_expired_script = MagicMock()
    return _dao


@pytest.fixture
def record():
    return UrlRecordModel(code='abc123', original_url='https://example.com/test', created_at=CREATED_AT)


# -------------------------------
# 1. Initialization
# -------------------------------


def test_init_registers_scripts_and_pings(redis_client, app_prefix):
    UrlRecordRedisDAO(redis_client=redis_client, prefix=app_prefix)

    redis_client.ping.assert_called_once()
    redis_client.register_script.assert_has_calls(
        [call(INSERT_IF_ABSENT_LUA), call(INCREMENT_CLICK_LUA), call(DELETE_IF_EXPIRED_LUA)],
        any_order=False,
    )


def test_init_with_unreachable_redis(redis_client, app_prefix):
    redis_client.ping.side_effect = redis.exceptions.ConnectionError('Connection refused')

    with pytest.raises(DataStoreError, match="Can't connect to Redis at 203.0.113.1:18000/5"):
        UrlRecordRedisDAO(redis_client=redis_client, prefix=app_prefix)


# -------------------------------
# 2. Shortcode claims
# -------------------------------


def test_exists(dao, redis_client):
    redis_client.exists.return_value = 1
    assert dao.exists('abc123') is True
    redis_client.exists.assert_called_once_with('testapp:test:links:code:abc123')


def test_exists_missing(dao, redis_client):
    redis_client.exists.return_value = 0
    assert dao.exists('abc123') is False


def test_insert_if_absent(dao, record):
    assert dao.insert_if_absent(record) is True

    dao._insert_script.assert_called_once_with(
        keys=[
            'testapp:test:links:code:abc123',
            url_index_key('https://example.com/test'),
            'testapp:test:links:idx:created',
            'testapp:test:links:idx:expiring',
        ],
        args=['abc123', 'https://example.com/test', CREATED_AT.isoformat(), '', 0, CREATED_AT.timestamp(), ''],
    )


def test_insert_if_absent_with_expiration(dao, record):
    record = UrlRecordModel(code='abc123', original_url='https://example.com/test', created_at=CREATED_AT, expires_at=EXPIRES_AT)

    dao.insert_if_absent(record)

    args = dao._insert_script.call_args.kwargs['args']
    assert args[3] == EXPIRES_AT.isoformat()
    assert args[6] == EXPIRES_AT.timestamp()


def test_insert_if_absent_taken_code(dao, record):
    dao._insert_script.return_value = 0
    assert dao.insert_if_absent(record) is False


# -------------------------------
# 3. Lookups
# -------------------------------


def test_find_by_code(dao, redis_client):
    redis_client.hgetall.return_value = redis_row(expires_at=EXPIRES_AT.isoformat(), click_count='12')

    record = dao.find_by_code('abc123')

    redis_client.hgetall.assert_called_once_with('testapp:test:links:code:abc123')
    assert record == UrlRecordModel(
        code='abc123',
        original_url='https://example.com/test',
        created_at=CREATED_AT,
        expires_at=EXPIRES_AT,
        click_count=12,
    )


def test_find_by_code_missing(dao, redis_client):
    redis_client.hgetall.return_value = {}
    assert dao.find_by_code('abc123') is None


def test_find_by_url(dao, redis_client):
    redis_client.smembers.return_value = {'def456', 'abc123', 'gone00', 'other1'}
    # Rows come back in sorted code order: abc123, def456, gone00, other1
    redis_client.execute.return_value = [
        redis_row(),
        {**redis_row(), 'created_at': (CREATED_AT - timedelta(days=1)).isoformat()},
        {},
        redis_row(url='https://digest-collision.example.com'),
    ]

    records = dao.find_by_url('https://example.com/test')

    redis_client.smembers.assert_called_once_with(url_index_key('https://example.com/test'))
    assert [record.code for record in records] == ['def456', 'abc123']
    redis_client.hgetall.assert_has_calls(
        [call(f'testapp:test:links:code:{code}') for code in ('abc123', 'def456', 'gone00', 'other1')],
        any_order=False,
    )


def test_find_by_url_without_records(dao, redis_client):
    redis_client.smembers.return_value = set()
    assert dao.find_by_url('https://example.com/test') == []
    redis_client.pipeline.assert_not_called()


def test_recent(dao, redis_client):
    redis_client.zrevrange.return_value = ['new001', 'old001']
    redis_client.execute.return_value = [redis_row(), redis_row(url='https://example.com/old')]

    records = dao.recent(5)

    redis_client.zrevrange.assert_called_once_with('testapp:test:links:idx:created', 0, 4)
    assert [(record.code, record.original_url) for record in records] == [
        ('new001', 'https://example.com/test'),
        ('old001', 'https://example.com/old'),
    ]


def test_recent_with_non_positive_limit(dao, redis_client):
    assert dao.recent(0) == []
    redis_client.zrevrange.assert_not_called()


# -------------------------------
# 4. Click counter
# -------------------------------


def test_increment_click(dao):
    assert dao.increment_click('abc123') is True
    dao._increment_script.assert_called_once_with(keys=['testapp:test:links:code:abc123'])


def test_increment_click_missing_record(dao):
    dao._increment_script.return_value = 0
    assert dao.increment_click('abc123') is False


# -------------------------------
# 5. Expired record sweeps
# -------------------------------


def test_delete_where_expired_before(dao, redis_client):
    now = datetime(2026, 10, 19, 12, tzinfo=UTC)
    redis_client.zrangebyscore.return_value = ['exp001', 'exp002']
    redis_client.execute.side_effect = [
        ['https://example.com/a', None],  # HGET url per candidate
        [1, 0],  # delete script per candidate (exp002 was swept concurrently)
    ]

    assert dao.delete_where_expired_before(now) == 1

    redis_client.zrangebyscore.assert_called_once_with('testapp:test:links:idx:expiring', '-inf', f'({now.timestamp()}')
    dao._delete_expired_script.assert_has_calls(
        [
            call(
                keys=['testapp:test:links:code:exp001', url_index_key('https://example.com/a'), 'testapp:test:links:idx:created', 'testapp:test:links:idx:expiring'],
                args=['exp001', now.timestamp()],
                client=redis_client,
            ),
            call(
                keys=['testapp:test:links:code:exp002', url_index_key(''), 'testapp:test:links:idx:created', 'testapp:test:links:idx:expiring'],
                args=['exp002', now.timestamp()],
                client=redis_client,
            ),
        ]
    )


def test_delete_where_expired_before_nothing_expired(dao, redis_client):
    redis_client.zrangebyscore.return_value = []

    assert dao.delete_where_expired_before(datetime.now(UTC)) == 0
    dao._delete_expired_script.assert_not_called()


# -------------------------------
# 6. Error handling
# -------------------------------


@pytest.mark.parametrize(
    'method, args, failing',
    [
        ('exists', ('abc123',), 'exists'),
        ('find_by_code', ('abc123',), 'hgetall'),
        ('find_by_url', ('https://example.com',), 'smembers'),
        ('recent', (10,), 'zrevrange'),
        ('delete_where_expired_before', (CREATED_AT,), 'zrangebyscore'),
    ],
)
def test_redis_connection_error(dao, redis_client, method, args, failing):
    getattr(redis_client, failing).side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError, match="Can't connect to Redis at 203.0.113.1:18000/5."):
        getattr(dao, method)(*args)


def test_script_connection_error(dao, record):
    dao._insert_script.side_effect = redis.exceptions.ConnectionError('Connection error')
    dao._increment_script.side_effect = redis.exceptions.TimeoutError('Timeout')

    with pytest.raises(DataStoreError):
        dao.insert_if_absent(record)
    with pytest.raises(DataStoreError):
        dao.increment_click('abc123')


@pytest.mark.parametrize('method', ['exists', 'find_by_code', 'increment_click', 'find_by_url'])
def test_invalid_code_type(dao, method):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        getattr(dao, method)(12345)


def test_insert_invalid_type(dao):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.insert_if_absent('https://example.com/notamodel')


def test_delete_invalid_type(dao):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.delete_where_expired_before('2026-10-19')
