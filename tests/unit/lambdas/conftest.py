from typing import cast

import pytest

from bucketshortener.types import LambdaContext
from bucketshortener.utils.config import AppSettings, ShortenerConfig, StorageConfig


@pytest.fixture
def context() -> LambdaContext:
    class _Context:
        function_name = 'bucketshortener'

    return cast(LambdaContext, _Context())


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        storage=StorageConfig(bucket='links-test'),
        shortener=ShortenerConfig(origin='https://short.example.com'),
    )


@pytest.fixture(autouse=True)
def _deployed(monkeypatch) -> None:
    # Handlers answer with 500 instead of re-raising outside of local runs
    monkeypatch.setenv('APP_ENV', 'test')
    monkeypatch.delenv('AWS_SAM_LOCAL', raising=False)
