"""Token generation utility

This module generates the random tokens embedded in short URLs. Tokens double as
the stem of the object key holding the token -> URL mapping.

Tokens are 24 random bytes (192 bits) drawn from the OS CSPRNG and encoded in
base32 without padding, using the lowercase Crockford alphabet. The result is a
39-character string that can be placed in a URL path segment as is.

Functions:
    generate_token() -> str:
        Generate a new random token.

    is_well_formed_token(token) -> bool:
        Check that a string has the shape of a generated token.

Example:
    >>> from bucketshortener.utils import generate_token
    >>> token = generate_token()
    >>> len(token)
    39
    >>> token  # doctest: +SKIP
    'q3x0hmb8w2fy5kz4c1v7n6tjr9pdg0se5a2ck7m'

NOTE:
    - 192 bits make collisions and exhaustive crawling of the token space
      impractical. 256 bits are often recommended against crawlers, but stored
      links may expire and most target URLs are already sanitized.
    - No existence check is made against the bucket before writing.
"""

import math
import base64
import secrets

from bucketshortener.constants import TokenSpec


RFC4648_ALPHABET = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ234567'
ALPHABET = '0123456789abcdefghjkmnpqrstvwxyz'  # Crockford base32, lowercase
TOKEN_LENGTH = math.ceil(TokenSpec.RAW_BYTES * 8 / TokenSpec.BITS_PER_CHAR)

_TO_ALPHABET = str.maketrans(RFC4648_ALPHABET, ALPHABET)


def generate_token() -> str:
    """Generate a random, URL-safe token.

    Returns:
        str: TOKEN_LENGTH characters from ALPHABET.

    Raises:
        Whatever the OS random source raises. Such failures are not retried.
    """
    raw = secrets.token_bytes(TokenSpec.RAW_BYTES)
    return base64.b32encode(raw).decode('ascii').rstrip('=').translate(_TO_ALPHABET)


def is_well_formed_token(token: str | None) -> bool:
    return token is not None and len(token) == TOKEN_LENGTH
