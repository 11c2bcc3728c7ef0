from bucketshortener.dao.mock.object_store_mock_dao import ObjectStoreMockDAO


__all__ = [
    'ObjectStoreMockDAO',
]
