"""S3 mixin providing shared client initialization and connectivity checks.

Responsibilities:
    - Initialize the S3 client bound to one bucket
    - Healthcheck the bucket

Classes:
    - S3ClientMixin: Base mixin to inject S3 client setup & healthcheck.

Example:
    Typical usage with a DAO implementation:

        >>> class ObjectStoreS3DAO(S3ClientMixin, ObjectStoreBaseDAO):
        ...     pass
        ...
        >>> dao = ObjectStoreS3DAO(bucket="bucketshortener-links-dev")
        >>> dao._healthcheck()
        True
"""

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from bucketshortener.types import S3Client
from bucketshortener.dao.exceptions import BucketNotFoundError
from bucketshortener.dao.s3.helpers import handle_s3_client_error, error_code


class S3ClientMixin:
    """Mixin S3 client setup and health check for S3-backed DAOs.

    Attributes:
        s3 (S3Client):
            Active boto3 S3 client instance used by subclasses.

        bucket (str):
            Name of the bucket every operation targets.

    Methods:
        _healthcheck() -> bool:
            HEAD the bucket to verify it exists and is reachable.
    """

    def __init__(
        self,
        bucket: str,
        s3_client: S3Client | None = None,
        session: boto3.Session | None = None,
        endpoint_url: str | None = None,
        connect_timeout: float = 5.0,
        read_timeout: float = 10.0,
        healthcheck: bool = True,
    ):
        """Initialize an S3-based DAO

        The option is given to either use an existing S3 client instance or
        create one from a boto3 session.

        Args:
            bucket (str):
                Name of the bucket holding the objects.

            s3_client (S3Client | None):
                Pre-initialized S3 client. If None, a new client is created.

            session (boto3.Session | None):
                Session carrying credentials. Defaults to boto3's default chain.

            endpoint_url (str | None):
                Custom endpoint, e.g. LocalStack's 'http://localhost:4566'.

            connect_timeout (float), read_timeout (float):
                Network timeouts in seconds.

            healthcheck (bool):
                If True, verify the bucket right away. Defaults to True.

        Raises:
            BucketNotFoundError:
                If the bucket doesn't exist.
            DataStoreError:
                If S3 can't be reached.
        """
        if s3_client is None:
            session = session or boto3.Session()
            # Retries stay with the caller: one attempt per operation
            config = Config(
                connect_timeout=connect_timeout,
                read_timeout=read_timeout,
                signature_version='s3v4',
                retries={'max_attempts': 1, 'mode': 'standard'},
            )
            s3_client = session.client('s3', endpoint_url=endpoint_url, config=config)

        self.s3 = s3_client
        self.bucket = bucket

        if healthcheck:
            self._healthcheck()

    @handle_s3_client_error
    def _healthcheck(self) -> bool:
        """HEAD the configured bucket

        Returns:
            bool: True if the bucket exists and is reachable.

        Raises:
            BucketNotFoundError:
                If the bucket doesn't exist.
            DataStoreError:
                If S3 can't be reached or denies access.
        """
        try:
            self.s3.head_bucket(Bucket=self.bucket)
        except ClientError as e:
            # HEAD responses carry no error body, only the status code
            if error_code(e) in {'404', 'NoSuchBucket'}:
                raise BucketNotFoundError(f"The bucket '{self.bucket}' doesn't exist.") from e
            raise
        return True
