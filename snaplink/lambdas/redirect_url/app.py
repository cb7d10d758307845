import logging

from snaplink.types import LambdaEvent, LambdaContext, LambdaResponse
from snaplink.exceptions import ConfigurationError, ShortURLNotFoundError
from snaplink.utils import get_short_url, guarantee_500_response
from snaplink.lambdas.common import shortener_service, response_302, response_400, response_404, response_500
from snaplink.lambdas.constants import CONFIGURATION_ERROR, MISSING_SHORTCODE, SHORT_URL_NOT_FOUND, REDIRECT_SUCCESS


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Build the shortener service from the app's config
    - Step 3: Resolve the shortcode (counts the click)
    - Step 4: Redirect client to target URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            message: missing shortcode in path parameters
        404: Not found
            message: shortcode doesn't exist or has expired
        500: Internal server error

    Example:
        >>> event = {'pathParameters': {'shortcode': 'aB3xY9'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if shortcode is None:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)
    logger.debug('Client requested short URL %s.', get_short_url(shortcode, event))

    # 2- Build the shortener service from the app's config
    try:
        service = shortener_service('redirect_url')
    except ConfigurationError:
        logger.exception('Failed to configure redirect URL function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500()

    # 3- Resolve the shortcode and count the click
    try:
        target_url = service.resolve(shortcode)
    except ShortURLNotFoundError:
        return response_404(message=f"short url {get_short_url(shortcode, event)} doesn't exist", error_code=SHORT_URL_NOT_FOUND)

    # 4- Redirect client to target URL
    logger.info('Redirecting client to target URL. Responding with 302.', extra={'code': shortcode, 'event': REDIRECT_SUCCESS})
    return response_302(location=target_url)
