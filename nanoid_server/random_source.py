"""Random sources accepted by the nanoid generators.

The generators never create randomness themselves. The batched strategy needs
something with ``randbytes(n)``, the iterative strategy needs something with
``getrandbits(k)``. ``random.Random`` and ``random.SystemRandom`` provide both.
"""

import os
import random
import threading
from io import BytesIO
from typing import Protocol, runtime_checkable

BUFFER_SIZE = 64 * 1024  # 64 KB


@runtime_checkable
class RandomBytesSource(Protocol):
    """Produces ``n`` random bytes per call."""

    def randbytes(self, n: int) -> bytes: ...


@runtime_checkable
class RandomBitsSource(Protocol):
    """Produces a non-negative integer with ``k`` random bits per call."""

    def getrandbits(self, k: int) -> int: ...


def get_secure_random() -> random.SystemRandom:
    """Process-wide OS-backed random source, safe to share between threads."""
    if not hasattr(get_secure_random, "_instance"):
        get_secure_random._instance = random.SystemRandom()
    return get_secure_random._instance


class BufferedRandom:
    """Secure random source that reads ``os.urandom`` in large chunks.

    Small draws (single bytes in particular) are served from the chunk, which
    makes it a good fit for the iterative generator.
    """

    def __init__(self, buffer_size: int = BUFFER_SIZE):
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self.buffer_size = buffer_size
        self._buffer = BytesIO()
        self._lock = threading.Lock()

    def randbytes(self, n: int) -> bytes:
        with self._lock:
            result = self._buffer.read(n)
            remaining = n - len(result)

            while remaining > 0:
                self._buffer = BytesIO(os.urandom(self.buffer_size))
                chunk = self._buffer.read(remaining)
                result += chunk
                remaining -= len(chunk)

            return result

    def getrandbits(self, k: int) -> int:
        if k < 0:
            raise ValueError("number of bits must be non-negative")
        n = (k + 7) // 8
        value = int.from_bytes(self.randbytes(n), "little")
        return value >> (n * 8 - k)


class CountingRandom:
    """Wraps a random source and counts how many bytes were drawn from it."""

    def __init__(self, source):
        self.source = source
        self.bytes_drawn = 0
        self.calls = 0

    def randbytes(self, n: int) -> bytes:
        self.calls += 1
        self.bytes_drawn += n
        return self.source.randbytes(n)

    def getrandbits(self, k: int) -> int:
        self.calls += 1
        self.bytes_drawn += (k + 7) // 8
        return self.source.getrandbits(k)
