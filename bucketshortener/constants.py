from enum import StrEnum


class TokenSpec:
    """Token generation parameters."""

    RAW_BYTES = 24  # 192 bits of entropy
    BITS_PER_CHAR = 5  # base32


class ObjectLayout:
    """Layout of the objects holding token -> URL mappings."""

    SUFFIX = '.url'
    CONTENT_TYPE = 'text/plain'
    # Tokens are never reused and objects are never rewritten
    CACHE_CONTROL = 'max-age=365000000, immutable'
    GZIP_ENCODING = 'gzip'


class SignedUpload:
    """Parameters of presigned upload URLs."""

    EXPIRES_IN = 900  # 15 minutes
    CONTENT_TYPE = 'application/vnd.firefox-profiler+json'


# Credentials path sentinel selecting the offline object store
MOCKED = 'MOCKED'

# Prefix marking base64 encoded inline credentials
BASE64_PREFIX = 'base64:'

# Public origin and path prefix of short URLs
DEFAULT_SHORT_URL_ORIGIN = 'https://profiler-dot-unity-eng-arch-dev.uw.r.appspot.com'
SHORT_URL_PATH = '/s/'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'

    class Storage(StrEnum):
        CREDENTIALS_PATH = 'STORAGE_CREDENTIALS_PATH'
        CREDENTIALS_JSON = 'STORAGE_CREDENTIALS_JSON'
        BUCKET = 'STORAGE_BUCKET'
        CONNECT_TIMEOUT = 'STORAGE_CONNECT_TIMEOUT'
        READ_TIMEOUT = 'STORAGE_READ_TIMEOUT'

    class Shortener(StrEnum):
        ORIGIN = 'SHORT_URL_ORIGIN'
        ALLOWED_URL_PREFIX = 'ALLOWED_URL_PREFIX'

    class LocalStack(StrEnum):
        ENDPOINT = 'LOCALSTACK_ENDPOINT'  # usually http://localstack:4566


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
