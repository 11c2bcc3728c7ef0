from contextlib import contextmanager

import pytest

from bucketshortener.dao.base import ObjectStoreBaseDAO
from bucketshortener.dao.exceptions import ObjectNotFoundError
from bucketshortener.dao.sinks import BufferedSink


class InMemoryObjectStore(ObjectStoreBaseDAO):
    """Durable-looking object store keeping objects in a dict."""

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.reads: list[str] = []

    def ping(self) -> bool:
        return True

    @contextmanager
    def write_stream(self, key, precompressed=False):
        sink = BufferedSink()
        yield sink
        self.objects[key] = sink.getvalue()

    def post_upload_url(self, key, origin, content_type='application/json'):
        return f'https://uploads.test/{key}'

    def read_file(self, key):
        self.reads.append(key)
        try:
            return self.objects[key]
        except KeyError as e:
            raise ObjectNotFoundError(key) from e

    def delete_file(self, key):
        self.objects.pop(key, None)
        return True


@pytest.fixture
def memory_store() -> InMemoryObjectStore:
    return InMemoryObjectStore()
