"""Random sources for reel draws."""
import random
import secrets
from abc import ABC, abstractmethod

UINT32_RANGE = 2**32


class RandomSource(ABC):
    """Abstract source of uniformly random 32-bit integers."""

    @abstractmethod
    def next_uint32(self) -> int:
        """Return random int in [0, 2**32)."""
        pass


class SecureRandomSource(RandomSource):
    """
    Production source.

    Uses the cryptographically secure source, no fixed seed.
    """

    def next_uint32(self) -> int:
        return secrets.randbits(32)


class SeededRandomSource(RandomSource):
    """
    Test/simulation source.

    Deterministic, fully controlled by seed.
    """

    def __init__(self, seed: int):
        self._rng = random.Random(seed)
        self.seed = seed

    def next_uint32(self) -> int:
        return self._rng.getrandbits(32)


def draw_index(source: RandomSource, size: int, strict: bool = False) -> int:
    """
    Draw an index in [0, size).

    The default reduces one 32-bit value modulo size. The bias is below
    size / 2**32 per index, negligible for small catalogs. With strict=True
    values from the incomplete top block are rejected and redrawn, which
    makes every index exactly equally likely.
    """
    if size <= 0:
        raise ValueError(f"size must be positive, got {size}")

    if not strict:
        return source.next_uint32() % size

    limit = UINT32_RANGE - (UINT32_RANGE % size)
    while True:
        value = source.next_uint32()
        if value < limit:
            return value % size
