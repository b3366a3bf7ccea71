"""Short token generation utility

This module turns the store's monotonically increasing association counter
into a short, non-sequential base36 token.

Functions:
    generate_token(counter, salt='default_salt', mult=1315423911) -> str:
        Generate a base36 token suitable for use as a short URL path.
    to_base36(number) -> str:
        Render a non-negative integer in base36 (0-9a-z).

Example:
    >>> from urlshortener.utils import generate_token
    >>> token = generate_token(1, salt='my_secret')
    >>> len(token) <= 7 and token.isalnum()
    True
"""

import math
import string

import xxhash

from urlshortener.constants import Token


ALPHABET = string.digits + string.ascii_lowercase
BASE = len(ALPHABET)


def to_base36(number: int) -> str:
    """Render a non-negative integer in base36 without padding

    Example:
        >>> to_base36(0)
        '0'
        >>> to_base36(35)
        'z'
        >>> to_base36(36)
        '10'
    """
    if number < 0:
        raise ValueError(f'Number must be a non-negative integer (given value: {number}).')

    digits = []
    while True:
        number, remainder = divmod(number, BASE)
        digits.append(ALPHABET[remainder])
        if number == 0:
            break
    return ''.join(reversed(digits))


def generate_token(counter: int, salt: str = Token.DEFAULT_SALT, mult: int = Token.MULTIPLIER) -> str:
    """Generate a short, deterministic, non-sequential token from a counter and salt.

    The counter is scrambled with an affine permutation over [0, 2**32) and
    rendered in base36, so tokens are at most 7 lowercase alphanumerics.

    The permutation guarantees:
    - 1:1 mapping while counter < 2**32 (no collisions)
    - Deterministic output
    - No visible sequential patterns

    Args:
        counter (int):
            Unique non-negative integer identifying the association.

        salt (str, optional):
            Secret string used to shift the output space.
            Highly recommended to set a custom salt (SHORTENER_SALT).

        mult (int, optional):
            Multiplicative factor for the permutation.
            Must be coprime with 2**32 (i.e. odd).

    Returns:
        str: base36 token.

    NOTE:
        - Collisions only occur after the counter wraps around 2**32. The
          engine still retries insertion on a duplicate short URL.
        - This is obfuscation, not encryption.
    """
    if not isinstance(counter, int):
        raise TypeError(f'Counter must be of type integer (given type: {type(counter)}).')
    if counter < 0:
        raise ValueError(f'Counter must be a non-negative integer (given value: {counter}).')
    if not isinstance(salt, str):
        raise TypeError(f'Salt must be of type string (given type: {type(salt)}).')
    if not salt:
        raise ValueError(f'Salt must be a non-empty string (given value: {salt}).')
    if math.gcd(mult, Token.MODULO_SPACE) != 1:
        raise ValueError(f'Multiplicative factor must be coprime with mod ({Token.MODULO_SPACE}) (given value: mult={mult}).')

    modulo_space = Token.MODULO_SPACE
    salt_hash = xxhash.xxh64_intdigest(salt) % modulo_space
    permuted = (counter * mult + salt_hash) % modulo_space
    return to_base36(permuted)
