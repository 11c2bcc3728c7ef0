from bucketshortener.dao.s3.mixins import S3ClientMixin
from bucketshortener.dao.s3.object_store_s3_dao import ObjectStoreS3DAO


__all__ = [
    'S3ClientMixin',
    'ObjectStoreS3DAO',
]
