import json
import logging

from snaplink.types import LambdaEvent, LambdaContext, LambdaResponse
from snaplink.exceptions import ConfigurationError, InvalidUrlError, CodeSpaceExhaustedError
from snaplink.utils import get_short_url, parse_datetime, guarantee_500_response
from snaplink.lambdas.common import shortener_service, response_200, response_400, response_500, response_503
from snaplink.lambdas.constants import (
    CONFIGURATION_ERROR,
    INVALID_JSON_BODY,
    MISSING_URL,
    INVALID_URL,
    INVALID_EXPIRES_AT,
    CODE_SPACE_EXHAUSTED,
    SHORT_URL_CREATED,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract target URL (and optional expiration) from request body
    - Step 2: Build the shortener service from the app's config
    - Step 3: Shorten the URL (reusing a live record for the same URL if any)
    - Step 4: Respond to user with 200 success

    HTTP responses:
        200: Successful URL shortening
            code, url, created_at, expires_at, click_count, short_url
        400: Bad client request
            message: invalid JSON, missing/invalid url, or invalid expires_at
        500: Internal server error
        503: No free shortcode could be allocated

    Example:
        >>> event = {'body': '{"url": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['code']
        'aB3xY9'
    """
    # 1- Extract target URL and expiration from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)
    if not isinstance(request_body, dict):
        return response_400(message='JSON body must be an object', error_code=INVALID_JSON_BODY)

    target_url = request_body.get('url')
    if not target_url:
        logger.info("Missing 'url' in JSON body. Responding with 400.", extra={'event': MISSING_URL})
        return response_400(message="missing 'url' in JSON body", error_code=MISSING_URL)

    try:
        expires_at = parse_datetime(request_body.get('expires_at'))
    except ValueError:
        logger.info('Invalid expires_at. Responding with 400.', extra={'event': INVALID_EXPIRES_AT})
        return response_400(message="'expires_at' must be an ISO-8601 timestamp", error_code=INVALID_EXPIRES_AT)

    # 2- Build the shortener service from the app's config
    try:
        service = shortener_service('shorten_url')
    except ConfigurationError:
        logger.exception('Failed to configure shorten URL function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500()

    # 3- Shorten the URL
    try:
        record = service.shorten(target_url, expires_at=expires_at)
    except InvalidUrlError as e:
        logger.info('Invalid target URL. Responding with 400.', extra={'event': INVALID_URL})
        return response_400(message=str(e), error_code=INVALID_URL)
    except CodeSpaceExhaustedError:
        # Already logged as an operational error by the service
        return response_503(message='could not allocate a short code, try again later', error_code=CODE_SPACE_EXHAUSTED)

    # 4- Return successful response to user
    short_url = get_short_url(record.code, event)
    logger.info('Short URL ready. Responding with 200.', extra={'code': record.code, 'event': SHORT_URL_CREATED})
    return response_200({**record.to_dict(), 'short_url': short_url})
