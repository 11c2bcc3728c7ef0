"""Shorten and expand URLs against an object store

Both operations are stateless. The object store is injected by the caller and
is the only resource they touch.

Functions:
    shorten(store, long_url, *, origin, allowed_prefix=None) -> str:
        Persist a new token -> URL mapping and return the short URL.

    expand(store, short_url, *, allowed_prefix=None) -> str:
        Resolve a short URL (or bare token) back to its long URL.

    extract_token(short_url) -> str:
        Return the final path segment of a short URL.

Example:
    >>> from bucketshortener.dao import create_object_store
    >>> from bucketshortener.utils import StorageConfig
    >>> store = create_object_store(StorageConfig(bucket='links'))
    >>> short_url = shorten(store, 'https://example.com/report/123', origin='https://short.example.com')
    >>> short_url  # doctest: +SKIP
    'https://short.example.com/s/q3x0hmb8w2fy5kz4c1v7n6tjr9pdg0se5a2ck7m'
    >>> expand(store, short_url)
    'https://example.com/report/123'
"""

import logging

from bucketshortener.models import ShortURLModel, object_key
from bucketshortener.constants import DEFAULT_SHORT_URL_ORIGIN
from bucketshortener.dao.base import ObjectStoreBaseDAO
from bucketshortener.dao.exceptions import DataStoreError
from bucketshortener.exceptions import BadRequestError, DisallowedURLError, InvalidTokenError
from bucketshortener.utils.tokens import TOKEN_LENGTH, generate_token, is_well_formed_token


logger = logging.getLogger(__name__)


def check_allowed(url: str, allowed_prefix: str | None) -> None:
    """Enforce the optional origin prefix policy

    Raises:
        DisallowedURLError:
            If a prefix is configured and `url` doesn't start with it.
    """
    if allowed_prefix and not url.startswith(allowed_prefix):
        raise DisallowedURLError(f'Only URLs starting with {allowed_prefix} are allowed by this service.')


def extract_token(short_url: str) -> str:
    # Query strings and fragments are not part of the token
    path = short_url.split('#', 1)[0].split('?', 1)[0]
    return path.rsplit('/', 1)[-1]


def shorten(
    store: ObjectStoreBaseDAO,
    long_url: str,
    *,
    origin: str = DEFAULT_SHORT_URL_ORIGIN,
    allowed_prefix: str | None = None,
) -> str:
    """Shorten `long_url`

    Steps:
        - Step 1: Generate a random token
        - Step 2: Write the long URL to '<token>.url' (the write completes
                  before this function returns)
        - Step 3: Return '<origin>/s/<token>'

    Raises:
        BadRequestError:
            If `long_url` is empty.
        DisallowedURLError:
            If the origin prefix policy rejects `long_url`.
        DataStoreError:
            If the object can't be written.
    """
    if not long_url:
        raise BadRequestError('A long URL is required.')
    check_allowed(long_url, allowed_prefix)
    logger.info('Shortening URL.', extra={'longUrl': long_url})

    short_url = ShortURLModel(target=long_url, token=generate_token())
    with store.write_stream(short_url.key, precompressed=False) as sink:
        sink.write(short_url.target.encode('utf-8'))

    result = short_url.short_url(origin)
    logger.info('Shortened URL.', extra={'longUrl': long_url, 'shortUrl': result})
    return result


def expand(store: ObjectStoreBaseDAO, short_url: str, *, allowed_prefix: str | None = None) -> str:
    """Expand a short URL or bare token

    Steps:
        - Step 1: Take the final path segment as token
        - Step 2: Reject tokens of the wrong length without touching the store
        - Step 3: Read '<token>.url'
        - Step 4: Apply the origin prefix policy to the stored URL

    Raises:
        InvalidTokenError:
            If the token isn't TOKEN_LENGTH characters long.
        ObjectNotFoundError:
            If no mapping exists for the token.
        DisallowedURLError:
            If the origin prefix policy rejects the stored URL.
        DataStoreError:
            If the object can't be read or isn't valid UTF-8.
    """
    token = extract_token(short_url or '')
    if not is_well_formed_token(token):
        raise InvalidTokenError(f'Invalid token "{token}" ({len(token)} characters, expected {TOKEN_LENGTH}).')

    key = object_key(token)
    try:
        long_url = store.read_file(key).decode('utf-8')
    except UnicodeDecodeError as e:
        raise DataStoreError(f"Object '{key}' doesn't hold a UTF-8 URL.") from e
    check_allowed(long_url, allowed_prefix)

    logger.info('Expanded URL.', extra={'shortUrl': short_url, 'longUrl': long_url})
    return long_url
