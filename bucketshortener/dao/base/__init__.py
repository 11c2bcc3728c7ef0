from bucketshortener.dao.base.object_store_base_dao import ObjectStoreBaseDAO


__all__ = [
    'ObjectStoreBaseDAO',
]
