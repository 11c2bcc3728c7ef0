from bucketshortener.utils.config import StorageConfig, ShortenerConfig, AppSettings, load_config, get_settings
from bucketshortener.utils.helpers import base_url, require_environment, guarantee_500_response, decode_credentials, request_body
from bucketshortener.utils.tokens import generate_token, is_well_formed_token, TOKEN_LENGTH
from bucketshortener.utils.logging import initialize_logging


__all__ = [
    'StorageConfig',
    'ShortenerConfig',
    'AppSettings',
    'load_config',
    'get_settings',
    'base_url',
    'require_environment',
    'guarantee_500_response',
    'decode_credentials',
    'request_body',
    'generate_token',
    'is_well_formed_token',
    'TOKEN_LENGTH',
    'initialize_logging',
]
