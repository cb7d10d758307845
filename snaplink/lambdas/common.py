"""Shared plumbing for the snaplink lambda handlers

Functions:
    shortener_service(lambda_name) -> ShortenerService
        Build a ShortenerService for a lambda from its AppConfig section.
    response_*(...) -> dict
        API Gateway Lambda Proxy responses with JSON bodies.
"""

import json
import logging
from typing import Any

from snaplink.dao.redis import UrlRecordRedisDAO
from snaplink.exceptions import BadConfigurationError
from snaplink.services import ShortenerService, ShortenerSettings
from snaplink.types import LambdaResponse
from snaplink.utils import load_config, app_prefix


logger = logging.getLogger(__name__)

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,GET',
}


def shortener_service(lambda_name: str) -> ShortenerService:
    """Load the lambda's AppConfig section and wire a Redis-backed ShortenerService.

    Raises:
        ConfigurationError: if configuration is missing or invalid.
        DataStoreError: if Redis is unreachable.
    """
    app_config = load_config(lambda_name)
    if 'redis' not in app_config:
        raise BadConfigurationError(f"Lambda '{lambda_name}' requires the 'redis' backend.")

    logger.debug('Assuming Redis as the backend database for short URLs')
    redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}
    dao = UrlRecordRedisDAO(**redis_config, prefix=app_prefix())
    settings = ShortenerSettings.from_config(app_config.get('shortener'))
    return ShortenerService(dao, settings)


def _json_response(status_code: int, body: dict[str, Any], headers: dict[str, str] | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def _error_body(base: str, message: str | None, error_code: str | None) -> dict[str, Any]:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['error_code'] = error_code
    return body


def response_200(body: dict[str, Any]) -> LambdaResponse:
    return _json_response(200, body)


def response_302(*, location: str) -> LambdaResponse:
    return _json_response(302, {}, headers={'Location': location})


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _json_response(400, _error_body('Bad Request', message, error_code))


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _json_response(404, _error_body('Not Found', message, error_code))


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _json_response(500, _error_body('Internal Server Error', message, error_code))


def response_503(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _json_response(503, _error_body('Service Unavailable', message, error_code))
