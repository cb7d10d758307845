from snaplink.services.settings import ShortenerSettings
from snaplink.services.shortener_service import ShortenerService


__all__ = [
    'ShortenerSettings',
    'ShortenerService',
]
