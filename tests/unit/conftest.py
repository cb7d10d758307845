from datetime import datetime, timedelta, UTC
from unittest.mock import MagicMock

import pytest
import redis

from snaplink.models import UrlRecordModel
from snaplink.dao.memory import UrlRecordMemoryDAO
from snaplink.services import ShortenerService, ShortenerSettings


@pytest.fixture
def app_prefix() -> str:
    return 'testapp:test'


@pytest.fixture
def now() -> datetime:
    return datetime.now(UTC)


@pytest.fixture
def make_record(now):
    """Factory for UrlRecordModel instances with sensible defaults."""

    def _make_record(code: str = 'abc123', url: str = 'https://example.com/test', **overrides) -> UrlRecordModel:
        fields = {
            'code': code,
            'original_url': url,
            'created_at': now,
            'expires_at': None,
            'click_count': 0,
        }
        fields.update(overrides)
        return UrlRecordModel(**fields)

    return _make_record


@pytest.fixture
def expired(now) -> datetime:
    return now - timedelta(days=1)


@pytest.fixture
def memory_dao() -> UrlRecordMemoryDAO:
    return UrlRecordMemoryDAO()


@pytest.fixture
def service(memory_dao) -> ShortenerService:
    return ShortenerService(memory_dao, ShortenerSettings())


@pytest.fixture
def redis_client() -> redis.Redis:
    """Mock a Redis pipeline-compatible client."""
    client = MagicMock(spec=redis.client.Pipeline)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': '203.0.113.1', 'port': 18000, 'db': 5},
    )
    client.exists.return_value = 0
    client.pipeline.return_value = client
    client.__enter__.return_value = client
    client.__exit__.return_value = None
    return client
