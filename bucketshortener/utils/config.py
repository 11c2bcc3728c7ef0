"""Utility functions for application configuration management.

Configuration is resolved once per process into frozen dataclasses which are
then passed explicitly to the object store factory and the shortener. Nothing
in the core reads ambient global state.

Two sources are layered:
    1. Environment variables (always read).
    2. The `storage` and `shortener` sections of the AWS AppConfig document
       deployed for the current environment, when the AppConfig identifiers
       are present in the environment. Values from AppConfig win.

The AppConfig JSON follows this structure:

    {
        "storage": {
            "bucket": "bucketshortener-links-dev",
            "credentials_path": "",
            "credentials_json": "",
            "connect_timeout": 5,
            "read_timeout": 10
        },
        "shortener": {
            "origin": "https://short.example.com",
            "allowed_url_prefix": null
        }
    }

Environment variables:
    STORAGE_CREDENTIALS_PATH  : shared credentials file path, or 'MOCKED'
    STORAGE_CREDENTIALS_JSON  : inline JSON credentials, optionally 'base64:'-prefixed
    STORAGE_BUCKET            : S3 bucket holding the token -> URL objects
    STORAGE_CONNECT_TIMEOUT   : seconds, defaults to 5
    STORAGE_READ_TIMEOUT      : seconds, defaults to 10
    LOCALSTACK_ENDPOINT       : endpoint URL for local development
    SHORT_URL_ORIGIN          : public origin of short URLs
    ALLOWED_URL_PREFIX        : optional origin prefix policy for long URLs

Example:
    >>> from bucketshortener.utils.config import load_config
    >>> config = load_config()
    >>> config.storage.bucket
    'bucketshortener-links-dev'
    >>> config.storage.mocked
    False
"""

import os
import json
import functools
import logging
from dataclasses import dataclass, field

import boto3

from bucketshortener.types import AppConfig, AppConfigDataClient
from bucketshortener.constants import ENV, MOCKED, DEFAULT_SHORT_URL_ORIGIN
from bucketshortener.exceptions import BadConfigurationError
from bucketshortener.utils.helpers import require_environment


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageConfig:
    """Object store settings.

    Attributes:
        credentials_path (str):
            Path to an AWS shared credentials file. The 'MOCKED' sentinel
            selects the offline object store.
        credentials_json (str):
            Inline credentials JSON (boto3.Session keyword arguments),
            optionally prefixed with 'base64:'. Takes precedence over
            credentials_path.
        bucket (str):
            Name of the bucket holding short URL objects.
        endpoint_url (str | None):
            Custom S3 endpoint (e.g. LocalStack).
        connect_timeout (float), read_timeout (float):
            Network timeouts in seconds.
    """

    credentials_path: str = ''
    credentials_json: str = field(default='', repr=False)
    bucket: str = ''
    endpoint_url: str | None = None
    connect_timeout: float = 5.0
    read_timeout: float = 10.0

    @property
    def mocked(self) -> bool:
        return self.credentials_path == MOCKED


@dataclass(frozen=True)
class ShortenerConfig:
    origin: str = DEFAULT_SHORT_URL_ORIGIN
    allowed_url_prefix: str | None = None


@dataclass(frozen=True)
class AppSettings:
    storage: StorageConfig = field(default_factory=StorageConfig)
    shortener: ShortenerConfig = field(default_factory=ShortenerConfig)


def _float_setting(name: str, value: str | float | int | None, default: float) -> float:
    if value is None or value == '':
        return default
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise BadConfigurationError(f'Invalid value for {name}: {value!r}') from e


@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_appconfig_document(appconfig: AppConfigDataClient | None = None) -> AppConfig:
    """Fetch the deployed AppConfig JSON document

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Raises:
        MissingEnvironmentVariableError:
            If any of the AppConfig identifiers is missing.
        BadConfigurationError:
            If the deployed document isn't valid JSON.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.')

    appconfig = appconfig or boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    try:
        document = json.loads(content.decode('utf-8'))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise BadConfigurationError('AppConfig document is not valid JSON') from e

    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'build': document.get('build')})
    return document


def _appconfig_enabled() -> bool:
    return all(os.environ.get(name) for name in ENV.AppConfig)


def load_config(appconfig: AppConfigDataClient | None = None) -> AppSettings:
    """Resolve application settings from the environment and AppConfig

    Args:
        appconfig (AppConfigDataClient | None):
            Optional pre-built 'appconfigdata' client.

    Returns:
        AppSettings: storage and shortener settings.

    Raises:
        BadConfigurationError:
            If a numeric setting can't be parsed or AppConfig is malformed.
    """
    document = load_appconfig_document(appconfig) if _appconfig_enabled() else {}
    storage_doc = document.get('storage', {})
    shortener_doc = document.get('shortener', {})

    def setting(section: dict, key: str, env_name: str, default=None):
        if key in section:
            return section[key]
        return os.environ.get(env_name, default)

    storage = StorageConfig(
        credentials_path=setting(storage_doc, 'credentials_path', ENV.Storage.CREDENTIALS_PATH, '') or '',
        credentials_json=setting(storage_doc, 'credentials_json', ENV.Storage.CREDENTIALS_JSON, '') or '',
        bucket=setting(storage_doc, 'bucket', ENV.Storage.BUCKET, '') or '',
        endpoint_url=storage_doc.get('endpoint_url', os.environ.get(ENV.LocalStack.ENDPOINT)),
        connect_timeout=_float_setting(
            ENV.Storage.CONNECT_TIMEOUT,
            setting(storage_doc, 'connect_timeout', ENV.Storage.CONNECT_TIMEOUT),
            StorageConfig.connect_timeout,
        ),
        read_timeout=_float_setting(
            ENV.Storage.READ_TIMEOUT,
            setting(storage_doc, 'read_timeout', ENV.Storage.READ_TIMEOUT),
            StorageConfig.read_timeout,
        ),
    )
    shortener = ShortenerConfig(
        origin=setting(shortener_doc, 'origin', ENV.Shortener.ORIGIN, DEFAULT_SHORT_URL_ORIGIN) or DEFAULT_SHORT_URL_ORIGIN,
        allowed_url_prefix=setting(shortener_doc, 'allowed_url_prefix', ENV.Shortener.ALLOWED_URL_PREFIX) or None,
    )
    return AppSettings(storage=storage, shortener=shortener)


@functools.cache
def get_settings() -> AppSettings:
    """Settings resolved once per process (i.e. per Lambda container)."""
    return load_config()
