"""Unit tests for the redirect_url AWS Lambda handler.

Test coverage includes:

1. Successful redirect (HTTP 302).
2. Missing or malformed token (HTTP 400).
3. Unknown token (HTTP 404).
4. Configuration and storage errors (HTTP 500).
"""

import json
from typing import cast

import pytest
from pytest import MonkeyPatch

from bucketshortener.types import LambdaEvent
from bucketshortener.lambdas.redirect_url import app
from bucketshortener.dao.exceptions import StorageTimeoutError
from bucketshortener.exceptions import MissingEnvironmentVariableError


TOKEN = 'q3x0hmb8w2fy5kz4c1v7n6tjr9pdg0se5a2ck7m'


def event_with_token(token: str | None) -> LambdaEvent:
    return cast(LambdaEvent, {
        'resource': '/s/{token}',
        'path': f'/s/{token}',
        'httpMethod': 'GET',
        'pathParameters': {'token': token} if token is not None else None,
        'requestContext': {'resourcePath': '/s/{token}', 'httpMethod': 'GET', 'domainName': 'short.example.com', 'stage': 'Prod'},
    })


class TestRedirectUrlHandler:

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, settings, memory_store) -> None:
        memory_store.objects[f'{TOKEN}.url'] = 'https://example.com/é'.encode('utf-8')
        monkeypatch.setattr(app, 'get_settings', lambda: settings)
        monkeypatch.setattr(app, 'get_object_store', lambda: memory_store)

    # -------------------------------
    # 1. Successful redirect
    # -------------------------------

    def test_lambda_handler(self, context):
        response = app.lambda_handler(event_with_token(TOKEN), context)

        assert response['statusCode'] == 302
        assert response['headers']['Location'] == 'https://example.com/é'

    # -------------------------------
    # 2. Bad requests
    # -------------------------------

    @pytest.mark.parametrize('token', [None, ''])
    def test_missing_token(self, context, token, memory_store):
        response = app.lambda_handler(event_with_token(token), context)

        assert response['statusCode'] == 400
        assert json.loads(response['body'])['error_code'] == 'MISSING_TOKEN'
        assert memory_store.reads == []

    def test_malformed_token(self, context, memory_store):
        response = app.lambda_handler(event_with_token(TOKEN[:-1]), context)

        assert response['statusCode'] == 400
        assert json.loads(response['body'])['error_code'] == 'client:invalid_token_error'
        assert memory_store.reads == []

    # -------------------------------
    # 3. Not found
    # -------------------------------

    def test_unknown_token(self, context):
        response = app.lambda_handler(event_with_token('0' * 39), context)

        assert response['statusCode'] == 404
        assert 'Location' not in response['headers']

    # -------------------------------
    # 4. Configuration and storage errors
    # -------------------------------

    def test_missing_configuration(self, monkeypatch: MonkeyPatch, context):
        def broken_settings():
            raise MissingEnvironmentVariableError("Missing required environment variables: 'APPCONFIG_APP_ID'")

        monkeypatch.setattr(app, 'get_settings', broken_settings)

        response = app.lambda_handler(event_with_token(TOKEN), context)
        assert response['statusCode'] == 500

    def test_storage_timeout(self, monkeypatch: MonkeyPatch, context, memory_store):
        def slow_read(key):
            raise StorageTimeoutError('read timed out')

        monkeypatch.setattr(memory_store, 'read_file', slow_read)

        response = app.lambda_handler(event_with_token(TOKEN), context)

        assert response['statusCode'] == 500
        assert json.loads(response['body'])['error_code'] == 'STORAGE_UNAVAILABLE'

    def test_unexpected_failure_reraised_locally(self, monkeypatch: MonkeyPatch, context, memory_store):
        monkeypatch.setenv('APP_ENV', 'local')

        def exploding_read(key):
            raise RuntimeError('boom')

        monkeypatch.setattr(memory_store, 'read_file', exploding_read)

        with pytest.raises(RuntimeError, match='boom'):
            app.lambda_handler(event_with_token(TOKEN), context)
