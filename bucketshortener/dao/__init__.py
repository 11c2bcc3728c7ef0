from bucketshortener.dao.base import ObjectStoreBaseDAO
from bucketshortener.dao.factory import create_object_store, get_object_store


__all__ = [
    'ObjectStoreBaseDAO',
    'create_object_store',
    'get_object_store',
]
