import logging

from bucketshortener.shortener import expand
from bucketshortener.dao import get_object_store
from bucketshortener.dao.exceptions import DataStoreError, ObjectNotFoundError
from bucketshortener.exceptions import BadRequestError, ConfigurationError
from bucketshortener.types import LambdaContext, LambdaEvent, LambdaResponse
from bucketshortener.utils import get_settings, guarantee_500_response, request_body
from bucketshortener.utils.responses import response_200, response_400, response_404, response_500
from bucketshortener.lambdas.constants import (
    INVALID_REQUEST_BODY,
    MISSING_SHORT_URL,
    SHORT_URL_NOT_FOUND,
    STORAGE_UNAVAILABLE,
    EXPAND_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to expand short URLs

    HTTP responses:
        200: Successful expansion
            longUrl: the original URL
        400: Bad client request
            message: invalid JSON, missing 'shortUrl', malformed token or disallowed URL
        404: Not found
            message: no mapping exists for the token
        500: Internal server error
            message: configuration or storage failure

    Example:
        >>> event = {'body': '{"shortUrl": "https://short.example.com/s/q3x0...2ck7m"}'}
        >>> json.loads(lambda_handler(event, None)['body'])['longUrl']
        'https://example.com'
    """
    # 0- Get application's config and object store
    try:
        settings = get_settings()
        store = get_object_store()
    except (ConfigurationError, DataStoreError):
        logger.exception('Failed to set up the object store. Responding with 500.', extra={'event': STORAGE_UNAVAILABLE})
        return response_500()

    # 1- Extract short URL from request body
    try:
        body = request_body(event)
    except BadRequestError as e:
        logger.info('Invalid request body. Responding with 400.', extra={'event': INVALID_REQUEST_BODY})
        return response_400(message=str(e), error_code=e.error_code)

    short_url = body.get('shortUrl')
    if not short_url or not isinstance(short_url, str):
        logger.info("Missing 'shortUrl' in body. Responding with 400.", extra={'event': MISSING_SHORT_URL})
        return response_400(message="The property 'shortUrl' is missing.", error_code=MISSING_SHORT_URL)

    # 2- Read the mapping
    try:
        long_url = expand(store, short_url, allowed_prefix=settings.shortener.allowed_url_prefix)
    except BadRequestError as e:
        logger.info('Rejected short URL. Responding with 400.', extra={'event': e.error_code, 'shortUrl': short_url})
        return response_400(message=str(e), error_code=e.error_code)
    except ObjectNotFoundError:
        logger.info('Short URL not found. Responding with 404.', extra={'event': SHORT_URL_NOT_FOUND, 'shortUrl': short_url})
        return response_404(message=f"short url {short_url} doesn't exist", error_code=SHORT_URL_NOT_FOUND)
    except DataStoreError:
        logger.exception('Failed to read short URL. Responding with 500.', extra={'event': STORAGE_UNAVAILABLE})
        return response_500(error_code=STORAGE_UNAVAILABLE)

    logger.info('Expanded URL. Responding with 200.', extra={'event': EXPAND_SUCCESS})
    return response_200({'longUrl': long_url})
