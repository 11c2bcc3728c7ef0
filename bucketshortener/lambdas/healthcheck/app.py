import logging

from bucketshortener.dao import get_object_store
from bucketshortener.dao.exceptions import DataStoreError
from bucketshortener.exceptions import ConfigurationError
from bucketshortener.types import LambdaContext, LambdaEvent, LambdaResponse
from bucketshortener.utils import guarantee_500_response
from bucketshortener.utils.responses import response_200, response_503
from bucketshortener.lambdas.constants import STORAGE_UNAVAILABLE


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Report whether the object store is reachable and configured

    HTTP responses:
        200: the bucket exists and answers
        503: configuration or storage failure
    """
    try:
        get_object_store().ping()
    except (ConfigurationError, DataStoreError) as e:
        logger.warning('Object store healthcheck failed. Responding with 503.', extra={'event': STORAGE_UNAVAILABLE, 'reason': str(e)})
        return response_503(message=str(e), error_code=STORAGE_UNAVAILABLE)

    return response_200({'status': 'ok'})
