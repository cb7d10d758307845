from dataclasses import dataclass
from datetime import datetime, UTC

from snaplink.types import UrlRecordPayload


@dataclass(frozen=True)
class UrlRecordModel:
    """Represent a shortened URL record.

    Attributes:
        code (str):
            Fixed-length base62 shortcode, unique across live records.
        original_url (str):
            Normalized target URL the shortcode redirects to.
        created_at (datetime):
            Creation time (UTC).
        expires_at (datetime | None):
            Expiration time (UTC). None means the record never expires.
        click_count (int):
            Number of successful redirects through this shortcode.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> record = UrlRecordModel(
        ...     code='aB3xY9',
        ...     original_url='https://example.com/article/123',
        ...     created_at=datetime.now(UTC),
        ...     expires_at=datetime.now(UTC) + timedelta(days=30),
        ... )
        >>> record.click_count
        0
        >>> record.is_expired()
        False
    """

    # fmt: off
    code: str                           # Unique short identifier
    original_url: str                   # Original long URL
    created_at: datetime                # Creation timestamp (UTC)
    expires_at: datetime | None = None  # After this moment the record is no longer resolvable
    click_count: int = 0                # Successful redirects
    # fmt: on

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at < (now or datetime.now(UTC))

    def to_dict(self) -> UrlRecordPayload:
        return {
            'code': self.code,
            'url': self.original_url,
            'created_at': self.created_at.isoformat(),
            'expires_at': None if self.expires_at is None else self.expires_at.isoformat(),
            'click_count': self.click_count,
        }
