from snaplink.dao.base import UrlRecordBaseDAO
from snaplink.dao.memory import UrlRecordMemoryDAO
from snaplink.dao.redis import UrlRecordRedisDAO


__all__ = [
    'UrlRecordBaseDAO',
    'UrlRecordMemoryDAO',
    'UrlRecordRedisDAO',
]
