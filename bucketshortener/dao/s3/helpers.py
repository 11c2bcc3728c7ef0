import functools
from typing import TypeVar, Any
from collections.abc import Callable

from botocore.exceptions import BotoCoreError, ClientError, ConnectTimeoutError, ReadTimeoutError

from bucketshortener.dao.exceptions import (
    DataStoreError,
    BucketNotFoundError,
    ObjectNotFoundError,
    StorageTimeoutError,
)


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])

MISSING_OBJECT_CODES = frozenset({'NoSuchKey', 'NotFound'})
MISSING_BUCKET_CODES = frozenset({'NoSuchBucket'})


def error_code(error: ClientError) -> str:
    return str(error.response.get('Error', {}).get('Code', ''))


def handle_s3_client_error[F](method: F) -> F:
    """Wrap S3-interacting DAO methods to translate botocore errors

    Args:
        method (Callable[..., Any]):
            DAO method performing S3 operations which may raise botocore exceptions.

    Returns:
        Callable[..., Any]:
            Wrapped method raising:
                - ObjectNotFoundError for missing keys;
                - BucketNotFoundError for a missing bucket;
                - StorageTimeoutError when S3 doesn't answer in time;
                - DataStoreError for every other S3 failure.

    Example:
        >>> @handle_s3_client_error
        ... def read_file(self, key):
        ...     return self.s3.get_object(Bucket=self.bucket, Key=key)['Body'].read()
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except ClientError as e:
            code = error_code(e)
            if code in MISSING_BUCKET_CODES:
                raise BucketNotFoundError(f"The bucket '{self.bucket}' doesn't exist.") from e
            if code in MISSING_OBJECT_CODES:
                key = args[0] if args else kwargs.get('key')
                raise ObjectNotFoundError(f"Object '{key}' not found in bucket '{self.bucket}'.") from e
            raise DataStoreError(f"S3 request to bucket '{self.bucket}' failed ({code or 'unknown error'}).") from e
        except (ConnectTimeoutError, ReadTimeoutError) as e:
            raise StorageTimeoutError(f"S3 request to bucket '{self.bucket}' timed out.") from e
        except BotoCoreError as e:
            raise DataStoreError(f"Can't reach S3 bucket '{self.bucket}'.") from e

    return wrapper
