"""Object store selection

Functions:
    create_object_store(config: StorageConfig) -> ObjectStoreBaseDAO:
        Build the object store described by `config`.

    get_object_store() -> ObjectStoreBaseDAO:
        Process-wide object store built from the environment configuration.

Selection policy:
    - credentials_path == 'MOCKED'   -> ObjectStoreMockDAO
    - otherwise a bucket is required -> ObjectStoreS3DAO
    - credentials_json (optionally 'base64:'-prefixed) wins over credentials_path
    - credentials_path points to an AWS shared credentials file
    - neither one: boto3's default credential chain (e.g. the Lambda role)

Example:
    >>> from bucketshortener.utils import StorageConfig
    >>> create_object_store(StorageConfig(credentials_path='MOCKED'))
    <bucketshortener.dao.mock.object_store_mock_dao.ObjectStoreMockDAO ...>
"""

import os
import logging
import functools

import boto3
import botocore.session

from bucketshortener.dao.base import ObjectStoreBaseDAO
from bucketshortener.dao.mock import ObjectStoreMockDAO
from bucketshortener.dao.s3 import ObjectStoreS3DAO
from bucketshortener.exceptions import BadConfigurationError
from bucketshortener.utils.config import StorageConfig, get_settings
from bucketshortener.utils.helpers import decode_credentials


logger = logging.getLogger(__name__)

SESSION_ARGUMENTS = frozenset({'aws_access_key_id', 'aws_secret_access_key', 'aws_session_token', 'region_name', 'profile_name'})


def _session_from_config(config: StorageConfig) -> boto3.Session:
    if config.credentials_json:
        credentials = decode_credentials(config.credentials_json)
        unknown = set(credentials) - SESSION_ARGUMENTS
        if unknown:
            raise BadConfigurationError(f'Unknown keys in inline storage credentials: {", ".join(sorted(unknown))}')
        logger.debug('Using inline storage credentials.')
        return boto3.Session(**credentials)

    if config.credentials_path:
        if not os.path.isfile(config.credentials_path):
            raise BadConfigurationError(f"Storage credentials file '{config.credentials_path}' doesn't exist")
        logger.debug('Using storage credentials file.', extra={'path': config.credentials_path})
        core_session = botocore.session.Session()
        core_session.set_config_variable('credentials_file', config.credentials_path)
        return boto3.Session(botocore_session=core_session)

    logger.debug('Using the default AWS credential chain.')
    return boto3.Session()


def create_object_store(config: StorageConfig, healthcheck: bool = True) -> ObjectStoreBaseDAO:
    """Build the object store selected by `config`

    Args:
        config (StorageConfig):
            Storage settings.
        healthcheck (bool):
            If True, the real object store verifies the bucket on construction.

    Returns:
        ObjectStoreBaseDAO: ObjectStoreMockDAO or ObjectStoreS3DAO.

    Raises:
        BadConfigurationError:
            If the bucket name is missing or the credentials are unusable.
        BucketNotFoundError, DataStoreError:
            If the healthcheck fails.
    """
    if config.mocked:
        logger.debug('Returning the mocked object store.')
        return ObjectStoreMockDAO()

    if not config.bucket:
        raise BadConfigurationError('The bucket name should not be empty')

    session = _session_from_config(config)
    logger.debug('Returning the S3 object store.', extra={'bucket': config.bucket})
    return ObjectStoreS3DAO(
        bucket=config.bucket,
        session=session,
        endpoint_url=config.endpoint_url,
        connect_timeout=config.connect_timeout,
        read_timeout=config.read_timeout,
        healthcheck=healthcheck,
    )


@functools.cache
def get_object_store() -> ObjectStoreBaseDAO:
    """Long-lived object store shared by every invocation of a warm Lambda."""
    return create_object_store(get_settings().storage)
