import logging

from snaplink.types import LambdaEvent, LambdaContext, LambdaResponse
from snaplink.lambdas.common import shortener_service
from snaplink.lambdas.constants import EXPIRED_CLEANUP


logger = logging.getLogger(__name__)


def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Sweep expired short URL records (EventBridge scheduled invocation)

    Errors are not converted into responses: a failed sweep must fail the
    invocation so the scheduler retries it and the error shows up in metrics.

    Returns:
        dict: {"removed": <number of deleted records>}
    """
    service = shortener_service('cleanup_expired')
    removed = service.cleanup_expired()
    logger.info('Expired short URL sweep finished.', extra={'removed': removed, 'event': EXPIRED_CLEANUP})
    return {'removed': removed}
