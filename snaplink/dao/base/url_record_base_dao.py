"""Abstract base class for UrlRecord data access objects (DAOs).

This class establishes a consistent contract for all UrlRecord DAO implementations,
regardless of the underlying storage mechanism (e.g., Redis, in-memory, PostgreSQL).

Responsibilities:
    - Provide an interface for claiming shortcodes and retrieving UrlRecordModel objects.
    - Own the atomicity of shortcode claims and click counter increments.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from datetime import datetime, UTC
        >>> from snaplink.models import UrlRecordModel
        >>> from snaplink.dao import UrlRecordRedisDAO

        >>> dao = UrlRecordRedisDAO(...)

        >>> record = UrlRecordModel(
        ...     code='a1b2c3',
        ...     original_url='https://example.com/blog/article-123',
        ...     created_at=datetime.now(UTC),
        ... )
        >>> dao.insert_if_absent(record)
        True
        >>> dao.insert_if_absent(record)
        False

        >>> dao.increment_click('a1b2c3')
        True
        >>> dao.find_by_code('a1b2c3').click_count
        1
"""

from abc import ABC, abstractmethod
from datetime import datetime

from snaplink.models import UrlRecordModel


class UrlRecordBaseDAO(ABC):
    """Interface for UrlRecord data access objects (DAOs).

    Methods:
        exists(code: str) -> bool
        insert_if_absent(record: UrlRecordModel) -> bool
        find_by_code(code: str) -> UrlRecordModel | None
        increment_click(code: str) -> bool
        find_by_url(url: str) -> list[UrlRecordModel]
        delete_where_expired_before(now: datetime) -> int
        recent(limit: int) -> list[UrlRecordModel]

    All methods raise DataStoreError on connection, read or write failures.

    Subclassing:
        Datastore-specific implementations (e.g., UrlRecordRedisDAO) must extend
        this class and implement all abstract methods. `insert_if_absent` and
        `increment_click` MUST be atomic in the backing store, the shortener
        service does no locking of its own.
    """

    @abstractmethod
    def exists(self, code: str, **kwargs) -> bool:
        """Check whether a record with the given shortcode is stored.

        Expired-but-not-yet-cleaned records still count as existing.
        """
        pass

    @abstractmethod
    def insert_if_absent(self, record: UrlRecordModel, **kwargs) -> bool:
        """Atomically store a record unless its shortcode is already taken.

        Args:
            record (UrlRecordModel):
                The record to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            bool: True if the record was inserted, False if the shortcode already exists.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def find_by_code(self, code: str, **kwargs) -> UrlRecordModel | None:
        """Retrieve a record by its shortcode.

        Returns:
            UrlRecordModel | None: The stored record (expired or not), otherwise None.
        """
        pass

    @abstractmethod
    def increment_click(self, code: str, **kwargs) -> bool:
        """Atomically increment the click counter of a record by 1.

        Returns:
            bool: True if a record existed to increment, False otherwise.
        """
        pass

    @abstractmethod
    def find_by_url(self, url: str, **kwargs) -> list[UrlRecordModel]:
        """Retrieve all records pointing at the given URL, oldest first."""
        pass

    @abstractmethod
    def delete_where_expired_before(self, now: datetime, **kwargs) -> int:
        """Delete all records with `expires_at` strictly before `now`.

        Deleting records that are already gone is a no-op and isn't counted.

        Returns:
            int: Number of records removed by this call.
        """
        pass

    @abstractmethod
    def recent(self, limit: int, **kwargs) -> list[UrlRecordModel]:
        """Retrieve up to `limit` most recently created records, newest first."""
        pass
