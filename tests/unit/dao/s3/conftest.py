from unittest.mock import MagicMock

import boto3
import pytest
from botocore.exceptions import ClientError

from bucketshortener.types import S3Client


@pytest.fixture
def client_error():
    """Build botocore ClientErrors the way S3 returns them."""

    def _client_error(code: str, operation: str, status: int = 400) -> ClientError:
        response = {'Error': {'Code': code, 'Message': code}, 'ResponseMetadata': {'HTTPStatusCode': status}}
        return ClientError(response, operation)

    return _client_error


@pytest.fixture
def bucket() -> str:
    return 'links-test'


@pytest.fixture
def s3_client() -> S3Client:
    """Mock a boto3 S3 client."""
    client = MagicMock()
    client.head_bucket.return_value = {}
    client.put_object.return_value = {'ETag': '"etag"'}
    client.delete_object.return_value = {}
    return client


@pytest.fixture
def session() -> boto3.Session:
    return boto3.Session(aws_access_key_id='testing', aws_secret_access_key='testing', region_name='us-east-1')
