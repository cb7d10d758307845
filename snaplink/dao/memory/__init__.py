from snaplink.dao.memory.url_record_memory_dao import UrlRecordMemoryDAO


__all__ = ['UrlRecordMemoryDAO']
