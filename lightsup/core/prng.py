"""Seeded pseudo-random generator used for puzzle generation."""

from __future__ import annotations

import random
import string
from dataclasses import dataclass, field

UINT32_MASK = 0xFFFFFFFF
UINT32_SCALE = float(UINT32_MASK) + 1.0
SEED_ALPHABET = string.digits + string.ascii_uppercase


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply."""
    return (a * b) & UINT32_MASK


def hash_seed(seed: str) -> int:
    """Fold a seed string into a 32-bit starting state (xmur3 mixing)."""
    h = 1779033703 ^ len(seed)
    for ch in seed:
        h = _imul(h ^ ord(ch), 3432918353)
        h = ((h << 13) | (h >> 19)) & UINT32_MASK
    h = _imul(h ^ (h >> 16), 2246822507)
    h = _imul(h ^ (h >> 13), 3266489909)
    return (h ^ (h >> 16)) & UINT32_MASK


@dataclass
class SeededPRNG:
    """Mulberry32 generator with a ``random.random``-like interface.

    Two instances created from the same seed string yield the same sequence
    forever. The only way to restart a sequence is to create a new instance.
    """

    seed: str
    _state: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._state = hash_seed(self.seed)

    def random(self) -> float:
        """Return the next float in [0, 1)."""
        self._state = (self._state + 0x6D2B79F5) & UINT32_MASK
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & UINT32_MASK
        return ((t ^ (t >> 14)) & UINT32_MASK) / UINT32_SCALE

    def randrange(self, n: int) -> int:
        """Return an integer in [0, n)."""
        if n <= 0:
            raise ValueError("Upper bound must be positive")
        return int(self.random() * n)


def create_prng(seed: str) -> SeededPRNG:
    return SeededPRNG(seed)


def generate_seed(length: int = 8) -> str:
    """Fresh uppercase base-36 seed for sessions without a user seed."""
    return "".join(random.choice(SEED_ALPHABET) for _ in range(length))


def normalize_seed(seed: str | None) -> str:
    """Trim and uppercase a user-entered seed; ``None`` becomes empty."""
    if not seed:
        return ""
    return seed.strip().upper()
