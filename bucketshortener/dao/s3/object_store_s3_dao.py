"""Data Access Object (DAO) implementation for objects stored in Amazon S3

This module provides an S3-based implementation of ObjectStoreBaseDAO. Each
token -> URL mapping is a small text object.

Responsibilities:
    - Write objects with fixed content type and immutable cache metadata;
    - Read and delete objects;
    - Hand out presigned upload URLs;
    - Translate botocore failures into DAO exceptions.

Classes:
    ObjectStoreS3DAO:
        DAO for storing and retrieving objects in one S3 bucket.

Example:
    >>> from bucketshortener.dao.s3 import ObjectStoreS3DAO

    >>> dao = ObjectStoreS3DAO(bucket="bucketshortener-links-dev")
    >>> with dao.write_stream("abc.url") as sink:
    ...     sink.write(b"https://example.com/page")
    >>> dao.read_file("abc.url")
    b'https://example.com/page'
    >>> dao.delete_file("abc.url")
    True
"""

import logging
from contextlib import contextmanager
from collections.abc import Iterator

from beartype import beartype

from bucketshortener.constants import ObjectLayout, SignedUpload
from bucketshortener.dao.base import ObjectStoreBaseDAO
from bucketshortener.dao.sinks import BufferedSink
from bucketshortener.dao.s3.mixins import S3ClientMixin
from bucketshortener.dao.s3.helpers import handle_s3_client_error


logger = logging.getLogger(__name__)


class ObjectStoreS3DAO(S3ClientMixin, ObjectStoreBaseDAO):
    """S3-based Data Access Object (DAO) for token -> URL objects

    Attributes (see S3ClientMixin):
        s3 (S3Client):
            boto3 client used to communicate with S3.
        bucket (str):
            Bucket every operation targets.

    Methods:
        ping() -> bool:
            HEAD the bucket. Raises BucketNotFoundError if it doesn't exist.

        write_stream(key: str, precompressed: bool = False) -> ContextManager[BufferedSink]:
            Buffer writes and PUT the object when the block exits cleanly.

        post_upload_url(key: str, origin: str, content_type: str) -> str:
            Presigned PUT URL valid for 15 minutes.

        read_file(key: str) -> bytes:
            GET the object. Raises ObjectNotFoundError when the key doesn't exist.

        delete_file(key: str) -> bool:
            DELETE the object.
    """

    def ping(self) -> bool:
        return self._healthcheck()

    @contextmanager
    def write_stream(self, key: str, precompressed: bool = False) -> Iterator[BufferedSink]:
        """Open a write-once sink for one object

        Nothing reaches S3 until the `with` block exits. A block exiting with
        an exception discards the buffered bytes and leaves no object behind.

        Example:
            >>> with dao.write_stream('abc.url') as sink:
            ...     sink.write('https://example.com')
        """
        sink = BufferedSink()
        try:
            yield sink
        except BaseException:
            logger.debug('Discarding unfinished object write.', extra={'key': key, 'bucket': self.bucket})
            raise
        else:
            self._put_object(key, sink.getvalue(), precompressed)
        finally:
            sink.close()

    @handle_s3_client_error
    @beartype
    def _put_object(self, key: str, body: bytes, precompressed: bool) -> None:
        extra_args = {
            'ContentType': ObjectLayout.CONTENT_TYPE,
            'CacheControl': ObjectLayout.CACHE_CONTROL,
        }
        if precompressed:
            extra_args['ContentEncoding'] = ObjectLayout.GZIP_ENCODING

        self.s3.put_object(Bucket=self.bucket, Key=key, Body=body, **extra_args)
        logger.debug('Stored object.', extra={'key': key, 'bucket': self.bucket, 'size': len(body)})

    @handle_s3_client_error
    @beartype
    def post_upload_url(self, key: str, origin: str, content_type: str = SignedUpload.CONTENT_TYPE) -> str:
        """Create a presigned PUT URL for one object

        The signature covers the bucket, the key and the content type, so the
        client must send a matching `Content-Type` header.
        """
        url = self.s3.generate_presigned_url(
            ClientMethod='put_object',
            Params={'Bucket': self.bucket, 'Key': key, 'ContentType': content_type},
            ExpiresIn=SignedUpload.EXPIRES_IN,
            HttpMethod='PUT',
        )
        logger.debug('Created signed upload URL.', extra={'key': key, 'bucket': self.bucket, 'origin': origin})
        return url

    @handle_s3_client_error
    @beartype
    def read_file(self, key: str) -> bytes:
        response = self.s3.get_object(Bucket=self.bucket, Key=key)
        return response['Body'].read()

    @handle_s3_client_error
    @beartype
    def delete_file(self, key: str) -> bool:
        self.s3.delete_object(Bucket=self.bucket, Key=key)
        return True
