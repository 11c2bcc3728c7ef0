"""Helper utilities for AWS lambda functions.

Functions:
    base_url() -> str
        Extract correct public base URL from API Gateway event
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(func) -> Callable
        Decorator: Turn unexpected lambda handler failures into a 500 response
    decode_credentials(raw: str) -> dict
        Parse inline JSON credentials, optionally base64 encoded
    request_body(event: dict) -> dict
        Parse the JSON body of an API Gateway event

Example:
    >>> from bucketshortener.utils.helpers import base_url
    >>> event = {
    ...     "requestContext": {
    ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
    ...         "stage": "Prod"
    ...     }
    ... }
    >>> base_url(event)
    'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'
"""

import os
import json
import base64
import binascii
import functools
import logging
from typing import Any
from collections.abc import Callable

from bucketshortener.types import Credentials
from bucketshortener.constants import BASE64_PREFIX, UNKNOWN_INTERNAL_SERVER_ERROR
from bucketshortener.exceptions import BadConfigurationError, BadRequestError, MissingEnvironmentVariableError
from bucketshortener.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def base_url(event: dict[str, Any]) -> str:
    """Extract public base URL from API Gateway event

    If a custom domain is configured, the stage name is omitted.
    If using the default AWS execute-api domain, the stage name is included.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: Base URL, e.g.:
             - "https://short.example.com"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
    """
    request_context = event.get('requestContext', {})
    domain = request_context.get('domainName', '')
    stage = request_context.get('stage', '')

    if domain and 'execute-api' not in domain:
        # If the domain is a custom domain (no execute-api), skip stage
        return f'https://{domain}'
    elif domain:
        # Otherwise include the stage (for AWS default domains)
        return f'https://{domain}/{stage}'
    else:
        # Fallback: local invocation (SAM CLI, tests, etc.)
        return 'http://localhost:3000'


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('STORAGE_BUCKET')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'STORAGE_BUCKET'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(func: Callable) -> Callable:
    """Decorator: respond with 500 when a lambda handler raises unexpectedly

    When running locally, the original exception is re-raised to ease debugging.
    """

    @functools.wraps(func)
    def wrapper(event: dict, context: Any) -> dict:
        try:
            return func(event, context)
        except Exception:
            if running_locally():
                raise
            logger.exception('Unhandled exception in lambda handler. Responding with 500.')
            return {
                'statusCode': 500,
                'body': json.dumps(
                    {
                        'message': 'Internal Server Error',
                        'error_code': UNKNOWN_INTERNAL_SERVER_ERROR,
                    }
                ),
            }

    return wrapper


def decode_credentials(raw: str) -> Credentials:
    """Parse inline credentials JSON

    The JSON document may be base64 encoded, in which case it must carry the
    literal 'base64:' prefix.

    Raises:
        BadConfigurationError:
            If the payload is not valid base64 or JSON, or isn't a JSON object.

    Example:
        >>> decode_credentials('{"aws_access_key_id": "AKIA..."}')
        {'aws_access_key_id': 'AKIA...'}
        >>> decode_credentials('base64:eyJyZWdpb25fbmFtZSI6ICJldS13ZXN0LTEifQ==')
        {'region_name': 'eu-west-1'}
    """
    try:
        if raw.startswith(BASE64_PREFIX):
            # Wrapped output of `base64` and `base64.encodebytes` carries newlines
            encoded = ''.join(raw.removeprefix(BASE64_PREFIX).split())
            raw = base64.b64decode(encoded, validate=True).decode('utf-8')
        payload = json.loads(raw)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise BadConfigurationError('Inline storage credentials are not valid (base64) JSON') from e

    if not isinstance(payload, dict):
        raise BadConfigurationError('Inline storage credentials must be a JSON object')
    return payload


def request_body(event: dict[str, Any]) -> dict[str, Any]:
    """Parse the JSON body of an API Gateway event

    Raises:
        BadRequestError:
            If the body is missing, isn't valid JSON or isn't a JSON object.

    Example:
        >>> request_body({'body': '{"longUrl": "https://example.com"}'})
        {'longUrl': 'https://example.com'}
    """
    raw = event.get('body')
    if not raw:
        raise BadRequestError("The body couldn't be parsed as JSON.")

    try:
        if event.get('isBase64Encoded'):
            raw = base64.b64decode(raw).decode('utf-8')
        body = json.loads(raw)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise BadRequestError("The body couldn't be parsed as JSON.") from e

    if not isinstance(body, dict):
        raise BadRequestError("The body couldn't be parsed as a JSON object.")
    return body
