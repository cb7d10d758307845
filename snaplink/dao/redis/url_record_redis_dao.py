"""Data Access Object (DAO) implementation for managing URL records in Redis

This module provides a Redis-based implementation of UrlRecordBaseDAO.

Data layout (all keys namespaced by RedisKeySchema prefix):
    <prefix>:links:code:<code>              HASH  url, created_at, expires_at, click_count
    <prefix>:links:idx:by-url:<xxh64(url)>  SET   codes pointing at the URL
    <prefix>:links:idx:created              ZSET  code -> created_at epoch
    <prefix>:links:idx:expiring             ZSET  code -> expires_at epoch (only expiring records)

Responsibilities:
    - Atomically claim shortcodes (Lua script: EXISTS check + HSET + index updates);
    - Atomically increment click counters of existing records (Lua script);
    - Sweep expired records without touching records re-created in the meantime;
    - Raise DataStoreError on Redis connectivity issues.

Classes:
    UrlRecordRedisDAO:
        DAO for storing and retrieving UrlRecordModel in a Redis datastore.

Example:
    >>> from datetime import datetime, UTC
    >>> from snaplink.models import UrlRecordModel
    >>> from snaplink.dao.redis import UrlRecordRedisDAO

    >>> dao = UrlRecordRedisDAO(prefix="snaplink:dev")
    >>> record = UrlRecordModel(code="abc123", original_url="https://example.com/page", created_at=datetime.now(UTC))
    >>> dao.insert_if_absent(record)
    True
    >>> dao.increment_click("abc123")
    True
    >>> dao.find_by_code("abc123").click_count
    1
"""

from datetime import datetime

from beartype import beartype

from snaplink.models import UrlRecordModel
from snaplink.dao.base import UrlRecordBaseDAO
from snaplink.dao.redis.mixins import RedisClientMixin
from snaplink.dao.redis.helpers import handle_redis_connection_error, encode_datetime, decode_datetime


# KEYS: link hash, url index, created index, expiry index
# ARGV: code, url, created_at, expires_at, click_count, created_at epoch, expires_at epoch ('' = never)
INSERT_IF_ABSENT_LUA = """
if redis.call('EXISTS', KEYS[1]) == 1 then
    return 0
end
redis.call('HSET', KEYS[1], 'url', ARGV[2], 'created_at', ARGV[3], 'expires_at', ARGV[4], 'click_count', ARGV[5])
redis.call('SADD', KEYS[2], ARGV[1])
redis.call('ZADD', KEYS[3], ARGV[6], ARGV[1])
if ARGV[7] ~= '' then
    redis.call('ZADD', KEYS[4], ARGV[7], ARGV[1])
end
return 1
"""

# KEYS: link hash
INCREMENT_CLICK_LUA = """
if redis.call('EXISTS', KEYS[1]) == 0 then
    return 0
end
redis.call('HINCRBY', KEYS[1], 'click_count', 1)
return 1
"""

# KEYS: link hash, url index, created index, expiry index
# ARGV: code, cutoff epoch
DELETE_IF_EXPIRED_LUA = """
local expires_at = redis.call('ZSCORE', KEYS[4], ARGV[1])
if not expires_at or tonumber(expires_at) >= tonumber(ARGV[2]) then
    return 0
end
redis.call('ZREM', KEYS[4], ARGV[1])
redis.call('ZREM', KEYS[3], ARGV[1])
redis.call('SREM', KEYS[2], ARGV[1])
return redis.call('DEL', KEYS[1])
"""


class UrlRecordRedisDAO(RedisClientMixin, UrlRecordBaseDAO):
    """Redis-based Data Access Object (DAO) for managing URL records

    This class implements the UrlRecordBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self._insert_script = self.redis.register_script(INSERT_IF_ABSENT_LUA)
        self._increment_script = self.redis.register_script(INCREMENT_CLICK_LUA)
        self._delete_expired_script = self.redis.register_script(DELETE_IF_EXPIRED_LUA)

    @handle_redis_connection_error
    @beartype
    def exists(self, code: str, **kwargs) -> bool:
        return bool(self.redis.exists(self.keys.link_key(code)))

    @handle_redis_connection_error
    @beartype
    def insert_if_absent(self, record: UrlRecordModel, **kwargs) -> bool:
        """Claim the record's shortcode and store the record

        The EXISTS check, the HSET and every index update run inside a single
        Lua script, so Redis executes them atomically. Two concurrent claims of
        the same shortcode therefore yield exactly one insert.

        Args:
            record (UrlRecordModel):
                The record to be inserted.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            bool: True if inserted, False if the shortcode is already taken.

        Raises:
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.insert_if_absent(record)
            True
        """
        # fmt: off
        keys = [
            self.keys.link_key(record.code),
            self.keys.url_index_key(record.original_url),
            self.keys.created_index_key(),
            self.keys.expiry_index_key(),
        ]
        args = [
            record.code,
            record.original_url,
            encode_datetime(record.created_at),
            encode_datetime(record.expires_at),
            record.click_count,
            record.created_at.timestamp(),
            '' if record.expires_at is None else record.expires_at.timestamp(),
        ]
        # fmt: on
        return bool(self._insert_script(keys=keys, args=args))

    @handle_redis_connection_error
    @beartype
    def find_by_code(self, code: str, **kwargs) -> UrlRecordModel | None:
        fields = self.redis.hgetall(self.keys.link_key(code))
        return self._to_model(code, fields)

    @handle_redis_connection_error
    @beartype
    def increment_click(self, code: str, **kwargs) -> bool:
        """Increment the click counter of an existing record

        NOTE: HINCRBY alone would create a stub hash for a missing (or just
              swept) shortcode, hence the EXISTS guard inside the Lua script:

              (request 1): find_by_code('abc123') -> live record
              (cleanup):   DEL <app>:links:code:abc123
              (request 1): HINCRBY <app>:links:code:abc123 click_count 1
                           => resurrects a record holding only a click_count

        Returns:
            bool: True if the record existed and was incremented.
        """
        return bool(self._increment_script(keys=[self.keys.link_key(code)]))

    @handle_redis_connection_error
    @beartype
    def find_by_url(self, url: str, **kwargs) -> list[UrlRecordModel]:
        codes = sorted(self.redis.smembers(self.keys.url_index_key(url)))
        records = self._load(codes)
        # The index is keyed by a digest, drop foreign URLs sharing the digest
        matching = [record for record in records if record.original_url == url]
        return sorted(matching, key=lambda record: record.created_at)

    @handle_redis_connection_error
    @beartype
    def delete_where_expired_before(self, now: datetime, **kwargs) -> int:
        """Sweep records which expired before `now`

        Candidates come from the expiry index. Each candidate is deleted by a
        Lua script which re-checks its expiry score first, so a sweep working
        from a stale candidate list never deletes a record re-created under
        the same shortcode, and concurrent sweeps count each deletion once.

        Returns:
            int: number of records deleted by this call.
        """
        cutoff = now.timestamp()
        codes = self.redis.zrangebyscore(self.keys.expiry_index_key(), '-inf', f'({cutoff}')
        if not codes:
            return 0

        with self.redis.pipeline(transaction=False) as pipe:
            for code in codes:
                pipe.hget(self.keys.link_key(code), 'url')
            urls = pipe.execute()

        with self.redis.pipeline(transaction=False) as pipe:
            for code, url in zip(codes, urls):
                # fmt: off
                keys = [
                    self.keys.link_key(code),
                    self.keys.url_index_key(url or ''),
                    self.keys.created_index_key(),
                    self.keys.expiry_index_key(),
                ]
                # fmt: on
                self._delete_expired_script(keys=keys, args=[code, cutoff], client=pipe)
            deleted = pipe.execute()

        return sum(int(count) for count in deleted)

    @handle_redis_connection_error
    @beartype
    def recent(self, limit: int, **kwargs) -> list[UrlRecordModel]:
        if limit < 1:
            return []
        codes = self.redis.zrevrange(self.keys.created_index_key(), 0, limit - 1)
        return self._load(codes)

    def _load(self, codes: list[str]) -> list[UrlRecordModel]:
        """Fetch many records in one round trip, skipping codes deleted in the meantime."""
        if not codes:
            return []

        with self.redis.pipeline(transaction=False) as pipe:
            for code in codes:
                pipe.hgetall(self.keys.link_key(code))
            rows = pipe.execute()

        records = (self._to_model(code, fields) for code, fields in zip(codes, rows))
        return [record for record in records if record is not None]

    @staticmethod
    def _to_model(code: str, fields: dict) -> UrlRecordModel | None:
        if not fields or 'url' not in fields:
            return None

        return UrlRecordModel(
            code=code,
            original_url=fields['url'],
            created_at=decode_datetime(fields['created_at']),
            expires_at=decode_datetime(fields.get('expires_at')),
            click_count=int(fields.get('click_count', 0)),
        )
