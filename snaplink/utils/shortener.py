"""Shortcode generation utility

This module provides a helper function for drawing random, fixed-length
shortcodes over a configurable alphabet (base62 by default).

Functions:
    generate_shortcode(length=6, alphabet=BASE62_ALPHABET, rng=None):
        Draw a random shortcode suitable for use as a URL slug.

Example:
    >>> from snaplink.utils import generate_shortcode
    >>> generate_shortcode()
    'q7FemO'
    >>> generate_shortcode(length=4, alphabet='ab')
    'abba'
"""

import random

from snaplink.constants import ShortcodeDefaults


# Module-wide OS entropy source, safe for concurrent use
_system_random = random.SystemRandom()


def generate_shortcode(
    length: int = ShortcodeDefaults.LENGTH,
    alphabet: str = ShortcodeDefaults.ALPHABET,
    rng: random.Random | None = None,
) -> str:
    """Draw a random shortcode of `length` symbols from `alphabet`.

    Codes are NOT guaranteed to be unique: callers are expected to claim the
    returned code atomically in the data store and draw again on collision.

    Args:
        length (int, optional):
            Number of symbols in the shortcode. Defaults to 6.

        alphabet (str, optional):
            Symbols to draw from. Defaults to base62 [a-zA-Z0-9].

        rng (random.Random, optional):
            Random source. Defaults to the OS entropy source (random.SystemRandom).
            Pass a seeded random.Random for reproducible draws.

    Returns:
        str: A random shortcode.

    Raises:
        TypeError: if length isn't an integer or alphabet isn't a string.
        ValueError: if length < 1 or alphabet is empty.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length < 1:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')
    if not isinstance(alphabet, str):
        raise TypeError(f'Alphabet must be of type string (given type: {type(alphabet)}).')
    if not alphabet:
        raise ValueError('Alphabet must be a non-empty string.')

    rng = rng or _system_random
    return ''.join(rng.choices(alphabet, k=length))
