"""Unit tests for the expand_url AWS Lambda handler.

Test coverage includes:

1. Successful expansion (HTTP 200).
2. Bad request bodies and malformed tokens (HTTP 400).
3. Unknown tokens (HTTP 404).
4. Storage errors (HTTP 500).
"""

import json
from typing import cast

import pytest
from pytest import MonkeyPatch

from bucketshortener.types import LambdaEvent
from bucketshortener.lambdas.expand_url import app
from bucketshortener.dao.exceptions import DataStoreError
from bucketshortener.utils.config import AppSettings, ShortenerConfig, StorageConfig


TOKEN = 'q3x0hmb8w2fy5kz4c1v7n6tjr9pdg0se5a2ck7m'


def event_with_body(body: str | None) -> LambdaEvent:
    return cast(LambdaEvent, {
        'body': body,
        'resource': '/expand',
        'httpMethod': 'POST',
        'path': '/expand',
        'requestContext': {'resourcePath': '/expand', 'httpMethod': 'POST', 'domainName': 'testhost:1000', 'stage': 'test'},
    })


class TestExpandUrlHandler:

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, settings, memory_store) -> None:
        memory_store.objects[f'{TOKEN}.url'] = b'https://example.com/report/123'
        monkeypatch.setattr(app, 'get_settings', lambda: settings)
        monkeypatch.setattr(app, 'get_object_store', lambda: memory_store)

    # -------------------------------
    # 1. Successful expansion
    # -------------------------------

    def test_lambda_handler(self, context):
        event = event_with_body(json.dumps({'shortUrl': f'https://short.example.com/s/{TOKEN}'}))
        response = app.lambda_handler(event, context)

        assert response['statusCode'] == 200
        assert json.loads(response['body']) == {'longUrl': 'https://example.com/report/123'}

    def test_query_string_is_ignored(self, context):
        event = event_with_body(json.dumps({'shortUrl': f'https://short.example.com/s/{TOKEN}?utm_source=mail'}))
        response = app.lambda_handler(event, context)

        assert response['statusCode'] == 200

    # -------------------------------
    # 2. Bad requests
    # -------------------------------

    def test_invalid_json_body(self, context, memory_store):
        response = app.lambda_handler(event_with_body('{"shortUrl": '), context)

        assert response['statusCode'] == 400
        assert memory_store.reads == []

    @pytest.mark.parametrize('body', [{}, {'shortUrl': ''}, {'shortUrl': None}])
    def test_missing_short_url(self, context, body):
        response = app.lambda_handler(event_with_body(json.dumps(body)), context)
        payload = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert payload['error_code'] == 'MISSING_SHORT_URL'

    def test_malformed_token(self, context, memory_store):
        event = event_with_body(json.dumps({'shortUrl': 'https://short.example.com/s/abc123'}))
        response = app.lambda_handler(event, context)

        assert response['statusCode'] == 400
        assert json.loads(response['body'])['error_code'] == 'client:invalid_token_error'
        assert memory_store.reads == []

    def test_disallowed_long_url(self, monkeypatch: MonkeyPatch, context):
        restricted = AppSettings(
            storage=StorageConfig(bucket='links-test'),
            shortener=ShortenerConfig(origin='https://short.example.com', allowed_url_prefix='https://profiler.firefox.com/'),
        )
        monkeypatch.setattr(app, 'get_settings', lambda: restricted)

        event = event_with_body(json.dumps({'shortUrl': f'https://short.example.com/s/{TOKEN}'}))
        response = app.lambda_handler(event, context)

        assert response['statusCode'] == 400
        assert json.loads(response['body'])['error_code'] == 'client:disallowed_url_error'

    # -------------------------------
    # 3. Not found
    # -------------------------------

    def test_unknown_token(self, context, memory_store):
        unknown = 'z' * 39
        event = event_with_body(json.dumps({'shortUrl': f'https://short.example.com/s/{unknown}'}))
        response = app.lambda_handler(event, context)

        assert response['statusCode'] == 404
        assert json.loads(response['body'])['error_code'] == 'SHORT_URL_NOT_FOUND'
        assert memory_store.reads == [f'{unknown}.url']

    # -------------------------------
    # 4. Storage errors
    # -------------------------------

    def test_storage_read_failure(self, monkeypatch: MonkeyPatch, context, memory_store):
        def failing_read(key):
            raise DataStoreError('timeout')

        monkeypatch.setattr(memory_store, 'read_file', failing_read)

        event = event_with_body(json.dumps({'shortUrl': f'https://short.example.com/s/{TOKEN}'}))
        response = app.lambda_handler(event, context)

        assert response['statusCode'] == 500
        assert json.loads(response['body'])['error_code'] == 'STORAGE_UNAVAILABLE'
