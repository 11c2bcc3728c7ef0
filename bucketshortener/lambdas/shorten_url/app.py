import logging

from bucketshortener.shortener import shorten
from bucketshortener.dao import get_object_store
from bucketshortener.dao.exceptions import DataStoreError
from bucketshortener.exceptions import BadRequestError, ConfigurationError
from bucketshortener.types import LambdaContext, LambdaEvent, LambdaResponse
from bucketshortener.utils import get_settings, guarantee_500_response, request_body
from bucketshortener.utils.responses import response_200, response_400, response_500
from bucketshortener.lambdas.constants import (
    INVALID_REQUEST_BODY,
    MISSING_LONG_URL,
    STORAGE_UNAVAILABLE,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract the long URL from the JSON request body
    - Step 2: Store a new token -> long URL mapping in the bucket
    - Step 3: Respond with the short URL

    HTTP responses:
        200: Successful URL shortening
            shortUrl: newly generated short url
        400: Bad client request
            message: invalid JSON, missing 'longUrl' or disallowed URL
        500: Internal server error
            message: configuration or storage failure

    Example:
        >>> event = {'body': '{"longUrl": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['shortUrl']
        'https://short.example.com/s/q3x0hmb8w2fy5kz4c1v7n6tjr9pdg0se5a2ck7m'
    """
    # 0- Get application's config and object store
    try:
        settings = get_settings()
        store = get_object_store()
    except (ConfigurationError, DataStoreError):
        logger.exception('Failed to set up the object store. Responding with 500.', extra={'event': STORAGE_UNAVAILABLE})
        return response_500()

    # 1- Extract long URL from request body
    try:
        body = request_body(event)
    except BadRequestError as e:
        logger.info('Invalid request body. Responding with 400.', extra={'event': INVALID_REQUEST_BODY})
        return response_400(message=str(e), error_code=e.error_code)

    long_url = body.get('longUrl')
    if not long_url or not isinstance(long_url, str):
        logger.info("Missing 'longUrl' in body. Responding with 400.", extra={'event': MISSING_LONG_URL})
        return response_400(message="The property 'longUrl' is missing.", error_code=MISSING_LONG_URL)

    # 2- Store the mapping
    try:
        short_url = shorten(
            store,
            long_url,
            origin=settings.shortener.origin,
            allowed_prefix=settings.shortener.allowed_url_prefix,
        )
    except BadRequestError as e:
        logger.info('Rejected long URL. Responding with 400.', extra={'event': e.error_code})
        return response_400(message=str(e), error_code=e.error_code)
    except DataStoreError:
        logger.exception('Failed to store short URL. Responding with 500.', extra={'event': STORAGE_UNAVAILABLE})
        return response_500(error_code=STORAGE_UNAVAILABLE)

    # 3- Respond with the short URL
    logger.info('Shortened URL. Responding with 200.', extra={'event': SHORTEN_SUCCESS})
    return response_200({'shortUrl': short_url})
