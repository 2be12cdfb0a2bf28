"""Named alphabets for nanoid generation.

Every alphabet is an immutable ``bytes`` object, so it can be passed straight
to the generator functions in :mod:`nanoid_server.nanoid`.
"""

from nanoid_server.errors import UnknownAlphabetError

NUMBERS = b"0123456789"
HEXADECIMAL_LOWERCASE = b"0123456789abcdef"
HEXADECIMAL_UPPERCASE = b"0123456789ABCDEF"
LOWERCASE = b"abcdefghijklmnopqrstuvwxyz"
UPPERCASE = b"ABCDEFGHIJKLMNOPQRSTUVWXYZ"
ALPHANUMERIC = NUMBERS + UPPERCASE + LOWERCASE

# Drops 1, l, I, 0, O, o, u, v, 5, S, s, 2, Z.
NO_LOOKALIKES = b"346789ABCDEFGHJKLMNPQRTUVWXYabcdefghijkmnpqrtwxyz"
# Also drops vowels and similar-sounding symbols so no words can be spelled.
NO_LOOKALIKES_SAFE = b"6789BCDFGHJKLMNPQRTWbcdfghjkmnpqrtwz"

# URL friendly characters used by the default generator.
URL_SAFE = b"_-" + NUMBERS + LOWERCASE + UPPERCASE

DEFAULT_ALPHABET_NAME = "url_safe"

ALPHABETS: dict[str, bytes] = {
    "numbers": NUMBERS,
    "hexadecimal_lowercase": HEXADECIMAL_LOWERCASE,
    "hexadecimal_uppercase": HEXADECIMAL_UPPERCASE,
    "lowercase": LOWERCASE,
    "uppercase": UPPERCASE,
    "alphanumeric": ALPHANUMERIC,
    "no_lookalikes": NO_LOOKALIKES,
    "no_lookalikes_safe": NO_LOOKALIKES_SAFE,
    DEFAULT_ALPHABET_NAME: URL_SAFE,
}


def get_alphabet(name: str) -> bytes:
    """Return the alphabet registered under ``name``."""
    try:
        return ALPHABETS[name]
    except KeyError:
        raise UnknownAlphabetError(name) from None


__all__ = [
    "ALPHABETS",
    "ALPHANUMERIC",
    "DEFAULT_ALPHABET_NAME",
    "HEXADECIMAL_LOWERCASE",
    "HEXADECIMAL_UPPERCASE",
    "LOWERCASE",
    "NO_LOOKALIKES",
    "NO_LOOKALIKES_SAFE",
    "NUMBERS",
    "UPPERCASE",
    "URL_SAFE",
    "get_alphabet",
]
