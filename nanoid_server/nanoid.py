"""Nanoid generation by masked rejection sampling over random bytes.

The ``*_unsafe`` functions form the hot path: they trust their input and only
check preconditions with ``assert`` (stripped under ``python -O``). The other
``generate*`` functions validate alphabet and size first and raise
:class:`~nanoid_server.errors.NanoidError` subclasses before any random byte
is drawn.
"""

from __future__ import annotations

import math

from nanoid_server.alphabets import URL_SAFE
from nanoid_server.errors import InvalidAlphabetSizeError, InvalidResultBufferSizeError
from nanoid_server.random_source import RandomBitsSource, RandomBytesSource

# URL friendly characters used by the default generator.
DEFAULT_ALPHABET = URL_SAFE

# 21 symbols of a 64 symbol alphabet carry 126 bits, comparable to UUID v4.
DEFAULT_ID_LEN = 21

# Maximum alphabet length, since one random byte picks one symbol.
MAX_ALPHABET_LEN = 255

# Extra random bytes per step to make up for rejected ones. 1.6 peaks at
# performance according to the benchmarks of the reference nanoid.
STEP_AMPLIFICATION = 1.6


def compute_mask(alphabet_len: int) -> int:
    """Return the smallest ``2**k - 1`` that can index ``alphabet_len`` symbols."""
    assert alphabet_len > 0, "alphabet length must be positive"

    # Highest bit of alphabet_len - 1, with 0 treated as 1.
    return (1 << ((alphabet_len - 1) | 1).bit_length()) - 1


def compute_step_buffer_length(id_len: int, alphabet_len: int) -> int:
    """Number of random bytes to draw per step for an id of ``id_len`` symbols."""
    assert alphabet_len > 0, "alphabet length must be positive"

    mask = compute_mask(alphabet_len)
    return math.ceil(STEP_AMPLIFICATION * mask * id_len / alphabet_len)


def compute_sufficient_step_buffer_length(id_len: int) -> int:
    """Step buffer length large enough for ``id_len`` and any valid alphabet."""
    return max(
        compute_step_buffer_length(id_len, alphabet_len)
        for alphabet_len in range(1, MAX_ALPHABET_LEN + 1)
    )


DEFAULT_MASK = compute_mask(len(DEFAULT_ALPHABET))
DEFAULT_STEP_BUFFER_LEN = compute_step_buffer_length(
    DEFAULT_ID_LEN, len(DEFAULT_ALPHABET)
)
SUFFICIENT_STEP_BUFFER_LEN = compute_sufficient_step_buffer_length(DEFAULT_ID_LEN)


def generate_unsafe(
    rng: RandomBytesSource,
    alphabet: bytes,
    result_buffer: bytearray,
    step_buffer: bytearray,
) -> bytearray:
    """Fill ``result_buffer`` with symbols of ``alphabet`` and return it.

    Args:
        rng: Source of random bytes. Use a secure one (``random.SystemRandom``,
            :class:`~nanoid_server.random_source.BufferedRandom`) for ids that
            must not be guessable.
        alphabet: Symbols to pick from, ``1 <= len(alphabet) <= 255``.
        result_buffer: Writable buffer, filled completely. Pass a
            ``memoryview`` slice to fill only part of a larger buffer.
        step_buffer: Writable staging buffer, refilled with
            ``rng.randbytes(len(step_buffer))`` on every step. Must hold at
            least ``compute_step_buffer_length(len(result_buffer),
            len(alphabet))`` bytes; when only the maximum id length is known,
            ``compute_sufficient_step_buffer_length`` covers every alphabet.

    Random bytes left in the staging buffer once the id is complete are
    discarded. A source that never yields an accepted byte keeps this loop
    running forever.
    """
    result_len = len(result_buffer)
    alphabet_len = len(alphabet)
    assert result_len > 0, "result buffer must not be empty"
    assert 0 < alphabet_len <= MAX_ALPHABET_LEN, "alphabet length out of range"

    mask = compute_mask(alphabet_len)
    step_len = len(step_buffer)
    assert step_len >= compute_step_buffer_length(
        result_len, alphabet_len
    ), "step buffer too small"

    position = 0
    while True:
        step_buffer[:] = rng.randbytes(step_len)

        for byte in step_buffer:
            index = byte & mask
            if index >= alphabet_len:
                continue

            result_buffer[position] = alphabet[index]
            position += 1
            if position == result_len:
                return result_buffer


def generate_iterative_unsafe(
    rng: RandomBitsSource, alphabet: bytes, result_buffer: bytearray
) -> bytearray:
    """Like :func:`generate_unsafe`, but draws one random byte at a time.

    Needs no staging buffer, at the cost of one ``rng.getrandbits(8)`` call
    per byte. Worth it when single draws are cheap, e.g. with
    :class:`~nanoid_server.random_source.BufferedRandom`.
    """
    result_len = len(result_buffer)
    alphabet_len = len(alphabet)
    assert result_len > 0, "result buffer must not be empty"
    assert 0 < alphabet_len <= MAX_ALPHABET_LEN, "alphabet length out of range"

    mask = compute_mask(alphabet_len)

    position = 0
    while True:
        index = rng.getrandbits(8) & mask
        if index >= alphabet_len:
            continue

        result_buffer[position] = alphabet[index]
        position += 1
        if position == result_len:
            return result_buffer


def _check_alphabet(alphabet: bytes) -> None:
    if not 0 < len(alphabet) <= MAX_ALPHABET_LEN:
        raise InvalidAlphabetSizeError(len(alphabet), MAX_ALPHABET_LEN)


def _check_size(size: int, max_size: int | None = None) -> None:
    if size <= 0 or (max_size is not None and size > max_size):
        raise InvalidResultBufferSizeError(size, max_size)


def generate_with_alphabet_to_buffer(
    rng: RandomBytesSource, alphabet: bytes, result_buffer: bytearray
) -> bytearray:
    """Fill ``result_buffer`` (1 to ``DEFAULT_ID_LEN`` bytes) from ``alphabet``."""
    _check_alphabet(alphabet)
    _check_size(len(result_buffer), DEFAULT_ID_LEN)

    step_buffer = bytearray(SUFFICIENT_STEP_BUFFER_LEN)
    return generate_unsafe(rng, alphabet, result_buffer, step_buffer)


def generate_with_alphabet(rng: RandomBytesSource, alphabet: bytes) -> bytearray:
    """Return a new ``DEFAULT_ID_LEN`` byte id drawn from ``alphabet``."""
    _check_alphabet(alphabet)

    step_buffer = bytearray(SUFFICIENT_STEP_BUFFER_LEN)
    result_buffer = bytearray(DEFAULT_ID_LEN)
    return generate_unsafe(rng, alphabet, result_buffer, step_buffer)


def generate_default_to_buffer(
    rng: RandomBytesSource, result_buffer: bytearray
) -> bytearray:
    """Fill ``result_buffer`` (1 to ``DEFAULT_ID_LEN`` bytes) from the default alphabet."""
    _check_size(len(result_buffer), DEFAULT_ID_LEN)

    step_buffer = bytearray(DEFAULT_STEP_BUFFER_LEN)
    return generate_unsafe(rng, DEFAULT_ALPHABET, result_buffer, step_buffer)


def generate_default(rng: RandomBytesSource) -> bytearray:
    """Return a new default id: 21 symbols of the URL safe alphabet."""
    step_buffer = bytearray(DEFAULT_STEP_BUFFER_LEN)
    result_buffer = bytearray(DEFAULT_ID_LEN)
    return generate_unsafe(rng, DEFAULT_ALPHABET, result_buffer, step_buffer)


def generate(
    rng: RandomBytesSource,
    alphabet: bytes = DEFAULT_ALPHABET,
    size: int = DEFAULT_ID_LEN,
) -> bytearray:
    """Return a new id of any positive ``size`` using the batched strategy."""
    _check_alphabet(alphabet)
    _check_size(size)

    step_buffer = bytearray(compute_step_buffer_length(size, len(alphabet)))
    result_buffer = bytearray(size)
    return generate_unsafe(rng, alphabet, result_buffer, step_buffer)


def generate_iterative(
    rng: RandomBitsSource,
    alphabet: bytes = DEFAULT_ALPHABET,
    size: int = DEFAULT_ID_LEN,
) -> bytearray:
    """Return a new id of any positive ``size`` using the iterative strategy."""
    _check_alphabet(alphabet)
    _check_size(size)

    return generate_iterative_unsafe(rng, alphabet, bytearray(size))


__all__ = [
    "DEFAULT_ALPHABET",
    "DEFAULT_ID_LEN",
    "DEFAULT_MASK",
    "DEFAULT_STEP_BUFFER_LEN",
    "MAX_ALPHABET_LEN",
    "SUFFICIENT_STEP_BUFFER_LEN",
    "compute_mask",
    "compute_step_buffer_length",
    "compute_sufficient_step_buffer_length",
    "generate",
    "generate_default",
    "generate_default_to_buffer",
    "generate_iterative",
    "generate_iterative_unsafe",
    "generate_unsafe",
    "generate_with_alphabet",
    "generate_with_alphabet_to_buffer",
]
