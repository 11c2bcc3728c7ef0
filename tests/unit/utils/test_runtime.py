"""Unit tests for runtime utilities in runtime.py."""

import pytest

from bucketshortener.constants import ENV
from bucketshortener.utils.runtime import app_env, app_name, running_locally


@pytest.mark.parametrize(
    'env, sam_flag, expected',
    [
        ('local', None, True),
        ('dev', None, False),
        ('dev', 'true', True),
        ('PROD', None, False),
    ],
)
def test_running_locally(monkeypatch, env, sam_flag, expected):
    monkeypatch.setenv(ENV.App.APP_ENV, env)

    if sam_flag is None:
        monkeypatch.delenv(ENV.App.AWS_SAM_LOCAL, raising=False)
    else:
        monkeypatch.setenv(ENV.App.AWS_SAM_LOCAL, sam_flag)

    assert running_locally() is expected


def test_app_env_defaults_to_local(monkeypatch):
    monkeypatch.delenv(ENV.App.APP_ENV, raising=False)
    assert app_env() == 'local'


def test_app_name(monkeypatch):
    monkeypatch.setenv(ENV.App.APP_NAME, 'bucketshortener')
    assert app_name() == 'bucketshortener'
