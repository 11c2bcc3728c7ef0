import logging

from bucketshortener.shortener import expand
from bucketshortener.dao import get_object_store
from bucketshortener.dao.exceptions import DataStoreError, ObjectNotFoundError
from bucketshortener.exceptions import BadRequestError, ConfigurationError
from bucketshortener.types import LambdaContext, LambdaEvent, LambdaResponse
from bucketshortener.utils import base_url, get_settings, guarantee_500_response
from bucketshortener.utils.responses import response_302, response_400, response_404, response_500
from bucketshortener.lambdas.constants import (
    MISSING_TOKEN,
    SHORT_URL_NOT_FOUND,
    STORAGE_UNAVAILABLE,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to GET /s/{token}

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract token from request path
    - Step 2: Read the long URL from the bucket
    - Step 3: Redirect client to the long URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: long URL destination
        400: Bad client request
            message: missing or malformed token in path parameters
        404: Not found
            message: no mapping exists for the token
        500: Internal server error
            message: server experienced an internal error

    Example:
        >>> event = {'pathParameters': {'token': 'q3x0hmb8w2fy5kz4c1v7n6tjr9pdg0se5a2ck7m'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 0- Get application's config and object store
    try:
        settings = get_settings()
        store = get_object_store()
    except (ConfigurationError, DataStoreError):
        logger.exception('Failed to set up the object store. Responding with 500.', extra={'event': STORAGE_UNAVAILABLE})
        return response_500()

    # 1- Extract token from request's path
    token = (event.get('pathParameters') or {}).get('token')
    if not token:
        logger.info('Missing "token" in path. Responding with 400.', extra={'event': MISSING_TOKEN})
        return response_400(message="missing 'token' in path", error_code=MISSING_TOKEN)
    logger.debug('Client requested short URL %s/s/%s.', base_url(event), token)

    # 2- Read the long URL
    try:
        long_url = expand(store, token, allowed_prefix=settings.shortener.allowed_url_prefix)
    except BadRequestError as e:
        logger.info('Rejected token. Responding with 400.', extra={'event': e.error_code, 'token': token})
        return response_400(message=str(e), error_code=e.error_code)
    except ObjectNotFoundError:
        logger.info('Short URL record not found. Responding with 404.', extra={'event': SHORT_URL_NOT_FOUND, 'token': token})
        return response_404(message=f"token {token} doesn't exist", error_code=SHORT_URL_NOT_FOUND)
    except DataStoreError:
        logger.exception('Failed to read short URL. Responding with 500.', extra={'event': STORAGE_UNAVAILABLE})
        return response_500(error_code=STORAGE_UNAVAILABLE)

    # 3- Redirect client to long URL
    logger.info('Redirecting client to long URL. Responding with 302.', extra={'event': REDIRECT_SUCCESS, 'token': token})
    return response_302(location=long_url)
