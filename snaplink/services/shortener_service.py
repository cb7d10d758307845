"""Short URL allocation and resolution

The ShortenerService turns validated URLs into uniquely-coded records and
shortcodes back into redirect targets, on top of any UrlRecordBaseDAO.

Concurrency model:
    The service keeps no mutable state of its own, so one instance can serve
    any number of threads/requests. All atomicity lives in the data store:
    - UrlRecordBaseDAO.insert_if_absent() claims a shortcode (exactly one of
      two concurrent claims succeeds, the loser draws a new code);
    - UrlRecordBaseDAO.increment_click() is a storage-side increment, never a
      read-modify-write here.
    The "reuse an existing record for the same URL" lookup is deliberately
    NOT atomic: two concurrent shorten() calls for one URL may both create a
    record, leaving two codes for that URL.

Example:
    >>> from snaplink.dao import UrlRecordMemoryDAO
    >>> service = ShortenerService(UrlRecordMemoryDAO())
    >>> record = service.shorten('example.com/path')
    >>> record.original_url
    'http://example.com/path'
    >>> service.resolve(record.code)
    'http://example.com/path'
    >>> service.stats(record.code).click_count
    1
"""

import logging
import random
from datetime import datetime, UTC

from snaplink.models import UrlRecordModel
from snaplink.dao.base import UrlRecordBaseDAO
from snaplink.exceptions import CodeSpaceExhaustedError, ShortURLNotFoundError
from snaplink.services.settings import ShortenerSettings
from snaplink.services.constants import (
    SHORT_URL_CREATED,
    SHORT_URL_REUSED,
    SHORTCODE_COLLISION,
    SHORTCODE_CLAIM_LOST,
    CODE_SPACE_EXHAUSTED,
    SHORT_URL_NOT_FOUND,
    SHORT_URL_EXPIRED,
    SHORT_URL_RESOLVED,
    EXPIRED_CLEANUP,
)
from snaplink.utils.shortener import generate_shortcode
from snaplink.utils.validators import normalize_url


logger = logging.getLogger(__name__)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


class ShortenerService:
    """Allocate shortcodes for URLs and resolve them back.

    Args:
        dao (UrlRecordBaseDAO):
            Data store for URL records.
        settings (ShortenerSettings, optional):
            Shortcode length, alphabet and retry bound. Defaults to 6 base62 symbols, 10 attempts.
        rng (random.Random, optional):
            Random source for shortcode draws. Defaults to the OS entropy source.
    """

    def __init__(
        self,
        dao: UrlRecordBaseDAO,
        settings: ShortenerSettings | None = None,
        rng: random.Random | None = None,
    ):
        self.dao = dao
        self.settings = settings or ShortenerSettings()
        self.rng = rng

    def shorten(self, url: str, expires_at: datetime | None = None) -> UrlRecordModel:
        """Create (or reuse) a short URL record for `url`

        Procedure:
        - Step 1: Validate and normalize the URL (scheme 'http://' added if missing)
        - Step 2: Reuse the first live record already pointing at the URL, if any
        - Step 3: Draw random shortcodes until one is claimed in the data store,
                  at most `settings.max_attempts` draws

        `expires_at` is stored as given (naive values are taken as UTC); a
        timestamp in the past is accepted and yields an already-expired record.

        Returns:
            UrlRecordModel: the stored record.

        Raises:
            InvalidUrlError: if the URL is missing or malformed.
            CodeSpaceExhaustedError: if no shortcode could be claimed.
            DataStoreError: on data store failures.
        """
        original_url = normalize_url(url)
        expires_at = _as_utc(expires_at)

        # NOTE: find-then-insert is not atomic (see module docstring)
        now = datetime.now(UTC)
        for existing in self.dao.find_by_url(original_url):
            if not existing.is_expired(now):
                logger.debug('Reusing live short URL.', extra={'code': existing.code, 'event': SHORT_URL_REUSED})
                return existing

        for attempt in range(1, self.settings.max_attempts + 1):
            code = generate_shortcode(self.settings.code_length, self.settings.alphabet, self.rng)
            if self.dao.exists(code):
                logger.debug('Shortcode already taken, drawing again.', extra={'code': code, 'attempt': attempt, 'event': SHORTCODE_COLLISION})
                continue

            record = UrlRecordModel(
                code=code,
                original_url=original_url,
                created_at=datetime.now(UTC),
                expires_at=expires_at,
            )
            if self.dao.insert_if_absent(record):
                logger.info('Created short URL.', extra={'code': code, 'attempt': attempt, 'event': SHORT_URL_CREATED})
                return record

            # Another request claimed the code between exists() and insert_if_absent()
            logger.debug('Lost shortcode claim to a concurrent request, drawing again.', extra={'code': code, 'attempt': attempt, 'event': SHORTCODE_CLAIM_LOST})

        logger.error(
            'Could not allocate a free shortcode.',
            extra={
                'attempts': self.settings.max_attempts,
                'code_length': self.settings.code_length,
                'code_space': self.settings.code_space,
                'event': CODE_SPACE_EXHAUSTED,
            },
        )
        raise CodeSpaceExhaustedError(f'No free shortcode found after {self.settings.max_attempts} attempts.')

    def resolve(self, code: str) -> str:
        """Resolve a shortcode to its target URL and count the click

        Unknown, malformed and expired shortcodes are indistinguishable to the
        caller. Expired records are left in place for cleanup_expired().

        Returns:
            str: the original URL.

        Raises:
            ShortURLNotFoundError: if the shortcode is unknown or expired.
            DataStoreError: on data store failures.
        """
        record = self._live_record(code)

        if not self.dao.increment_click(record.code):
            # Swept by a concurrent cleanup between lookup and increment
            logger.info('Short URL vanished before its click was counted.', extra={'code': code, 'event': SHORT_URL_NOT_FOUND})
            raise ShortURLNotFoundError(f"Short URL with code '{code}' not found.")

        logger.debug('Resolved short URL.', extra={'code': code, 'event': SHORT_URL_RESOLVED})
        return record.original_url

    def stats(self, code: str) -> UrlRecordModel:
        """Look up a live record without counting a click

        Raises:
            ShortURLNotFoundError: if the shortcode is unknown or expired.
        """
        return self._live_record(code)

    def recent(self, limit: int = 10) -> list[UrlRecordModel]:
        """List up to `limit` most recently created live records, newest first."""
        now = datetime.now(UTC)
        return [record for record in self.dao.recent(limit) if not record.is_expired(now)]

    def cleanup_expired(self) -> int:
        """Delete records whose expiration lies in the past

        Returns:
            int: number of records removed.
        """
        removed = self.dao.delete_where_expired_before(datetime.now(UTC))
        logger.info('Removed expired short URLs.', extra={'removed': removed, 'event': EXPIRED_CLEANUP})
        return removed

    def _live_record(self, code: str) -> UrlRecordModel:
        if not isinstance(code, str) or not code.strip():
            logger.info('Blank shortcode requested.', extra={'event': SHORT_URL_NOT_FOUND})
            raise ShortURLNotFoundError('Short URL with a blank code not found.')

        record = self.dao.find_by_code(code.strip())
        if record is None:
            logger.info('Short URL not found.', extra={'code': code, 'event': SHORT_URL_NOT_FOUND})
            raise ShortURLNotFoundError(f"Short URL with code '{code}' not found.")
        if record.is_expired():
            logger.info('Short URL expired.', extra={'code': code, 'event': SHORT_URL_EXPIRED})
            raise ShortURLNotFoundError(f"Short URL with code '{code}' not found.")

        return record
