"""Abstract base class for object store data access objects (DAOs).

This class establishes a consistent contract for every object store holding
token -> URL mappings, regardless of the underlying service (S3, an offline
fake, ...). Each mapping is one small text object whose content is the
verbatim long URL.

Responsibilities:
    - Provide an interface for writing, reading and deleting objects by key.
    - Standardize error handling across object store implementations.
    - Enforce a consistent API for use by the shortener and Lambda functions.

Example:
    Typical usage with a service-specific implementation:

        >>> from bucketshortener.dao import create_object_store
        >>> from bucketshortener.utils import StorageConfig

        >>> store = create_object_store(StorageConfig(bucket='links'))

        >>> with store.write_stream('abc.url') as sink:
        ...     sink.write(b'https://example.com/blog/article-123')

        >>> store.read_file('abc.url')
        b'https://example.com/blog/article-123'
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from bucketshortener.constants import SignedUpload
from bucketshortener.dao.sinks import BufferedSink, DiscardingSink


class ObjectStoreBaseDAO(ABC):
    """Interface for object store data access objects (DAOs).

    Methods:
        ping() -> bool:
            Verify the backing bucket exists and is reachable.
            Raises BucketNotFoundError if the bucket doesn't exist.
            Raises DataStoreError on connection or permission failure.

        write_stream(key: str, precompressed: bool = False) -> ContextManager[sink]:
            Open a write-once destination for one object.
            The object is committed when the `with` block exits cleanly and
            discarded when it exits with an exception.
            Raises DataStoreError if the commit fails.

        post_upload_url(key: str, origin: str, content_type: str) -> str:
            Return a short-lived signed URL allowing a client to upload one object.

        read_file(key: str) -> bytes:
            Return the raw content of one object.
            Raises ObjectNotFoundError if the object doesn't exist.
            Raises DataStoreError on connection or read failure.

        delete_file(key: str) -> bool:
            Delete one object.
            Raises DataStoreError on connection or delete failure.

    Subclassing:
        Service-specific implementations (e.g., ObjectStoreS3DAO) must extend
        this class and implement all abstract methods.

    NOTE:
        - Objects are never updated in place. Writing an existing key
          replaces it (last write wins).
        - Expiry of objects is a bucket lifecycle concern, not a DAO one.
    """

    @abstractmethod
    def ping(self) -> bool:
        """Verify the object store is reachable and correctly configured.

        Returns:
            bool: True when the configured bucket exists.

        Raises:
            BucketNotFoundError:
                If the configured bucket doesn't exist.

            DataStoreError:
                If the object store can't be reached.
        """
        pass

    @abstractmethod
    def write_stream(self, key: str, precompressed: bool = False) -> AbstractContextManager[BufferedSink | DiscardingSink]:
        """Open a scoped write-once sink for the object identified by `key`.

        Content type is always plain text and the object is marked long-lived
        and immutable for caches. If `precompressed` is True, the object is
        tagged with a gzip content encoding. The sink never compresses.

        Args:
            key (str):
                Object key, e.g. '<token>.url'.

            precompressed (bool):
                True if the caller writes already gzipped bytes.

        Returns:
            Context manager yielding a sink with a `write(bytes | str)` method.

        Raises:
            DataStoreError:
                If the object can't be committed.
        """
        pass

    @abstractmethod
    def post_upload_url(self, key: str, origin: str, content_type: str = SignedUpload.CONTENT_TYPE) -> str:
        """Create a signed URL permitting a direct client upload of one object.

        The URL is valid for 15 minutes and restricted to `content_type`.

        Args:
            key (str):
                Object key the client may upload to.

            origin (str):
                Origin of the client requesting the upload.

            content_type (str):
                The only content type the upload may use.

        Returns:
            str: the signed URL.
        """
        pass

    @abstractmethod
    def read_file(self, key: str) -> bytes:
        """Read the raw content of one object.

        Raises:
            ObjectNotFoundError:
                If no object with the given key exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete_file(self, key: str) -> bool:
        """Delete one object.

        Returns:
            bool: True once the object is gone.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
