from snaplink.dao.redis.redis_key_schema import RedisKeySchema
from snaplink.dao.redis.mixins import RedisClientMixin
from snaplink.dao.redis.url_record_redis_dao import UrlRecordRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'UrlRecordRedisDAO',
]
