class BucketShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:bucketshortener_error'


class ConfigurationError(BucketShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class BadRequestError(BucketShortenerError):
    """Base exception for errors caused by client input."""

    error_code = 'client:bad_request_error'


class InvalidTokenError(BadRequestError):
    """Raised when a short URL doesn't end with a well-formed token."""

    error_code = 'client:invalid_token_error'


class DisallowedURLError(BadRequestError):
    """Raised when a URL falls outside the accepted origin prefix."""

    error_code = 'client:disallowed_url_error'
