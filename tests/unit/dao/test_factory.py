"""Unit tests for object store selection in factory.py.

Test coverage includes:

1. 'MOCKED' sentinel selects ObjectStoreMockDAO without any bucket.
2. Real backend requires a bucket name.
3. Inline credentials (plain or base64) take precedence over a credentials file.
4. Credentials file path is validated and handed to botocore.
5. get_object_store() builds the store once per process.
"""

import json
import base64
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from bucketshortener.dao import factory
from bucketshortener.dao.mock import ObjectStoreMockDAO
from bucketshortener.dao.s3 import ObjectStoreS3DAO
from bucketshortener.exceptions import BadConfigurationError
from bucketshortener.utils.config import AppSettings, StorageConfig


CREDENTIALS = {'aws_access_key_id': 'AKIATEST', 'aws_secret_access_key': 'secret', 'region_name': 'eu-west-1'}


@pytest.fixture
def s3_dao(monkeypatch: MonkeyPatch) -> MagicMock:
    dao = MagicMock(spec=ObjectStoreS3DAO)
    monkeypatch.setattr(factory, 'ObjectStoreS3DAO', dao)
    return dao


# -------------------------------
# 1. Mocked backend
# -------------------------------


def test_mocked_sentinel_returns_mock_store(s3_dao):
    store = factory.create_object_store(StorageConfig(credentials_path='MOCKED'))
    assert isinstance(store, ObjectStoreMockDAO)
    s3_dao.assert_not_called()


# -------------------------------
# 2. Bucket name
# -------------------------------


def test_missing_bucket_is_a_configuration_error(s3_dao):
    with pytest.raises(BadConfigurationError, match='bucket name'):
        factory.create_object_store(StorageConfig(credentials_json=json.dumps(CREDENTIALS)))
    s3_dao.assert_not_called()


# -------------------------------
# 3. Inline credentials
# -------------------------------


@pytest.mark.parametrize(
    'raw',
    [
        json.dumps(CREDENTIALS),
        'base64:' + base64.b64encode(json.dumps(CREDENTIALS).encode()).decode(),
    ],
)
def test_inline_credentials_build_session(s3_dao, raw, tmp_path):
    config = StorageConfig(
        credentials_path=str(tmp_path / 'ignored.ini'),
        credentials_json=raw,
        bucket='links-test',
        endpoint_url='http://localstack:4566',
        connect_timeout=1.0,
        read_timeout=2.0,
    )

    factory.create_object_store(config)

    kwargs = s3_dao.call_args.kwargs
    session = kwargs['session']
    assert session.region_name == 'eu-west-1'
    assert session.get_credentials().access_key == 'AKIATEST'
    assert kwargs['bucket'] == 'links-test'
    assert kwargs['endpoint_url'] == 'http://localstack:4566'
    assert kwargs['connect_timeout'] == 1.0
    assert kwargs['read_timeout'] == 2.0
    assert kwargs['healthcheck'] is True


def test_inline_credentials_reject_unknown_keys(s3_dao):
    config = StorageConfig(credentials_json='{"type": "service_account"}', bucket='links-test')
    with pytest.raises(BadConfigurationError, match='type'):
        factory.create_object_store(config)


def test_inline_credentials_reject_bad_json(s3_dao):
    with pytest.raises(BadConfigurationError):
        factory.create_object_store(StorageConfig(credentials_json='base64:%%%', bucket='links-test'))


# -------------------------------
# 4. Credentials file
# -------------------------------


def test_credentials_file_is_used(s3_dao, tmp_path):
    credentials_file = tmp_path / 'credentials'
    credentials_file.write_text('[default]\naws_access_key_id = AKIAFILE\naws_secret_access_key = secret\n')

    factory.create_object_store(StorageConfig(credentials_path=str(credentials_file), bucket='links-test'))

    session = s3_dao.call_args.kwargs['session']
    assert session._session.get_config_variable('credentials_file') == str(credentials_file)


def test_missing_credentials_file(s3_dao, tmp_path):
    config = StorageConfig(credentials_path=str(tmp_path / 'nope'), bucket='links-test')
    with pytest.raises(BadConfigurationError, match="doesn't exist"):
        factory.create_object_store(config)


# -------------------------------
# 5. Process-wide store
# -------------------------------


def test_get_object_store_is_built_once(monkeypatch: MonkeyPatch):
    settings = AppSettings(storage=StorageConfig(credentials_path='MOCKED'))
    monkeypatch.setattr(factory, 'get_settings', lambda: settings)
    factory.get_object_store.cache_clear()

    try:
        first = factory.get_object_store()
        assert factory.get_object_store() is first
        assert isinstance(first, ObjectStoreMockDAO)
    finally:
        factory.get_object_store.cache_clear()
