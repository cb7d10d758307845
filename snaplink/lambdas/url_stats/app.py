import logging

from snaplink.constants import Limits
from snaplink.types import LambdaEvent, LambdaContext, LambdaResponse
from snaplink.exceptions import ConfigurationError, ShortURLNotFoundError
from snaplink.utils import get_short_url, guarantee_500_response
from snaplink.lambdas.common import shortener_service, response_200, response_400, response_404, response_500
from snaplink.lambdas.constants import CONFIGURATION_ERROR, SHORT_URL_NOT_FOUND, INVALID_LIMIT


logger = logging.getLogger(__name__)


def _parse_limit(event: LambdaEvent) -> int:
    raw = (event.get('queryStringParameters') or {}).get('limit')
    if raw is None:
        return Limits.RECENT_DEFAULT
    limit = int(raw)
    if not 1 <= limit <= Limits.RECENT_MAX:
        raise ValueError(f'limit out of range: {limit}')
    return limit


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests for short URL statistics

    - GET /stats/{shortcode}: the record of one live short URL (no click counted)
    - GET /stats?limit=N:     the N most recently created live short URLs

    HTTP responses:
        200: record JSON, or {"urls": [record JSON, ...]}
        400: 'limit' is not an integer in [1, 100]
        404: shortcode doesn't exist or has expired
        500: Internal server error
    """
    shortcode = (event.get('pathParameters') or {}).get('shortcode')

    if shortcode is None:
        try:
            limit = _parse_limit(event)
        except ValueError:
            logger.info('Invalid limit. Responding with 400.', extra={'event': INVALID_LIMIT})
            return response_400(message=f"'limit' must be an integer between 1 and {Limits.RECENT_MAX}", error_code=INVALID_LIMIT)

    try:
        service = shortener_service('url_stats')
    except ConfigurationError:
        logger.exception('Failed to configure URL stats function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500()

    if shortcode is None:
        records = service.recent(limit)
        return response_200({'urls': [{**record.to_dict(), 'short_url': get_short_url(record.code, event)} for record in records]})

    try:
        record = service.stats(shortcode)
    except ShortURLNotFoundError:
        return response_404(message=f"short url {get_short_url(shortcode, event)} doesn't exist", error_code=SHORT_URL_NOT_FOUND)

    return response_200({**record.to_dict(), 'short_url': get_short_url(record.code, event)})
