"""Offline stand-in for the S3 object store

Lets the rest of the application run without network access or credentials.
Writes are acknowledged and dropped, reads return empty content. A URL
shortened against this store therefore expands to an empty string.
"""

from contextlib import contextmanager
from collections.abc import Iterator

from beartype import beartype

from bucketshortener.constants import SignedUpload
from bucketshortener.dao.base import ObjectStoreBaseDAO
from bucketshortener.dao.sinks import DiscardingSink


class ObjectStoreMockDAO(ObjectStoreBaseDAO):
    """Object store that persists nothing."""

    def ping(self) -> bool:
        return True

    @contextmanager
    def write_stream(self, key: str, precompressed: bool = False) -> Iterator[DiscardingSink]:
        sink = DiscardingSink()
        try:
            yield sink
        finally:
            sink.close()

    def post_upload_url(self, key: str, origin: str, content_type: str = SignedUpload.CONTENT_TYPE) -> str:
        raise NotImplementedError('The mocked object store cannot sign upload URLs.')

    @beartype
    def read_file(self, key: str) -> bytes:
        return b''

    @beartype
    def delete_file(self, key: str) -> bool:
        return True
