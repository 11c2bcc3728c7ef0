"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ObjectNotFoundError:
        Raised when an object (e.g. a token -> URL mapping) is not found in the bucket.

    DataStoreError:
        Raised when the object store fails (e.g., connection issues, auth, throttling, etc.).

    BucketNotFoundError:
        Raised when the configured bucket doesn't exist.

    StorageTimeoutError:
        Raised when the object store doesn't answer in time.

Example:
    >>> from bucketshortener.dao.exceptions import ObjectNotFoundError
    >>> raise ObjectNotFoundError("Object 'abc.url' not found.")
    Traceback (most recent call last):
        ...
    bucketshortener.dao.exceptions.ObjectNotFoundError: Object 'abc.url' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ObjectNotFoundError(DAOError):
    """Exception raised when an object is not found in the data store."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, credentials, permissions, etc.
    """

    pass


class BucketNotFoundError(DataStoreError):
    """Exception raised when the configured bucket doesn't exist."""

    pass


class StorageTimeoutError(DataStoreError):
    """Exception raised when a data store operation times out."""

    pass
